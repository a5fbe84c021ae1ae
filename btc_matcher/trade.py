"""Trade record and the function that executes one match."""

import logging
from dataclasses import dataclass

from .order import Order, Side

logger = logging.getLogger(__name__)


class TradeExecutionError(AssertionError):
    """Raised when execute_trade is handed orders it must never see."""


@dataclass(frozen=True)
class Trade:
    """
    Represents an executed trade between a buy and a sell order.

    Attributes:
        buy_id: ID of the buy order
        sell_id: ID of the sell order
        price: Execution price, the lower of the two limit prices
        quantity: Number of BTC traded
    """
    buy_id: int
    sell_id: int
    price: int
    quantity: int

    def report(self) -> str:
        """Human readable one-line trade report."""
        return (
            f"Trade: {self.quantity} BTC @ {self.price} USD "
            f"between {self.buy_id} and {self.sell_id}"
        )

    def __str__(self) -> str:
        return self.report()


def execute_trade(buy: Order, sell: Order) -> Trade:
    """
    Match a buy order against a sell order.

    Both orders are filled by the smaller of their remaining quantities and
    the trade is priced at the lower of the two limit prices.

    Args:
        buy: The buy side, mutated in place
        sell: The sell side, mutated in place

    Returns:
        The resulting trade

    Raises:
        TradeExecutionError: If the sides are wrong or either order is already filled
    """
    if buy.side is not Side.BUY:
        raise TradeExecutionError(f"Expected a buy order, got {buy.side} order {buy.order_id}")
    if sell.side is not Side.SELL:
        raise TradeExecutionError(f"Expected a sell order, got {sell.side} order {sell.order_id}")
    if buy.is_filled or sell.is_filled:
        raise TradeExecutionError(
            f"Cannot trade filled orders (buy {buy.order_id}: {buy.quantity}, "
            f"sell {sell.order_id}: {sell.quantity})"
        )

    matched_quantity = min(buy.quantity, sell.quantity)
    execution_price = min(buy.price, sell.price)

    buy.fill(matched_quantity)
    sell.fill(matched_quantity)

    trade = Trade(
        buy_id=buy.order_id,
        sell_id=sell.order_id,
        price=execution_price,
        quantity=matched_quantity,
    )
    logger.info("%s", trade.report())
    return trade
