"""Matching engine for the BTC matcher."""

import logging
from typing import Iterable, List, Optional

from .order import Order, Side
from .pool import SellPool
from .trade import Trade, execute_trade

logger = logging.getLogger(__name__)


class MatchingEngine:
    """
    Matching engine that processes orders against the resting sell pool.

    - Sell orders rest in the pool, cheapest first
    - Buy orders match immediately against the cheapest sells
    - Any part of a buy that cannot be filled is dropped, buys never rest
    """

    def __init__(self, pool: Optional[SellPool] = None):
        """
        Initialize the matching engine.

        Args:
            pool: The resting sell pool to own, a fresh one if omitted
        """
        self.pool = pool if pool is not None else SellPool()
        self.orders_processed = 0
        self.trade_count = 0

    def submit(self, order: Order) -> List[Trade]:
        """
        Process an incoming order.

        The whole pass runs under the pool's write lock, so concurrent
        submissions are serialized.

        Args:
            order: The order to process

        Returns:
            Trades generated, in execution order (may be empty)
        """
        with self.pool.write_lock():
            if order.side is Side.SELL:
                trades = self._rest_sell(order)
            else:
                trades = self._match_buy(order)
            self.orders_processed += 1
            self.trade_count += len(trades)
        return trades

    def submit_many(self, orders: Iterable[Order]) -> List[Trade]:
        """Submit orders one after another and collect every trade."""
        trades: List[Trade] = []
        for order in orders:
            trades.extend(self.submit(order))
        return trades

    def _rest_sell(self, order: Order) -> List[Trade]:
        if order.is_filled:
            logger.debug("Discarding sell order %s with zero quantity", order.order_id)
            return []
        self.pool._unlocked_insert(order)
        logger.debug("Resting sell order %s: %s BTC @ %s", order.order_id, order.quantity, order.price)
        return []

    def _match_buy(self, order: Order) -> List[Trade]:
        """
        Core matching logic.

        Args:
            order: The buy order to fill

        Returns:
            List of trades generated
        """
        trades: List[Trade] = []

        while not order.is_filled:
            resting = self.pool._unlocked_take_cheapest()

            # No more liquidity
            if resting is None:
                break

            trades.append(execute_trade(order, resting))

            # Partially filled sells go back with their original priority
            if not resting.is_filled:
                self.pool._unlocked_insert(resting)

        if not order.is_filled:
            logger.info(
                "Dropping unfilled remainder of buy order %s: %s BTC",
                order.order_id,
                order.quantity,
            )
        return trades
