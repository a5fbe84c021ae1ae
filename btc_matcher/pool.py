"""Resting sell pool, cheapest price first."""

import itertools
from contextlib import contextmanager
from typing import List, Optional, Tuple

from sortedcontainers import SortedList

from .order import Order, Side
from .rwlock import RWLock


def _priority(order: Order) -> Tuple[int, int]:
    return order.price, order.sequence


class SellPool:
    """
    Resting sell orders awaiting a buyer.

    Orders are kept sorted by ascending price. Orders at the same price
    leave in arrival order: the pool stamps each order with a sequence
    number the first time it is inserted and keeps that stamp when a
    partially filled order is put back, so it does not lose its place.

    Thread-safe via read-write locking. Callers that need several
    operations to be atomic hold ``write_lock()`` and use the
    ``_unlocked_*`` methods.
    """

    def __init__(self):
        self._orders: SortedList = SortedList(key=_priority)
        self._sequence = itertools.count()
        self._rwlock = RWLock()

    @contextmanager
    def read_lock(self):
        """Acquire read lock for external use."""
        with self._rwlock.read():
            yield

    @contextmanager
    def write_lock(self):
        """Acquire write lock for external use."""
        with self._rwlock.write():
            yield

    def insert(self, order: Order) -> None:
        """
        Add a sell order to the pool (thread-safe).

        Args:
            order: A SELL order with quantity left

        Raises:
            ValueError: If the order is not a sell, has nothing left to trade
                or is already resting
        """
        with self._rwlock.write():
            self._unlocked_insert(order)

    def _unlocked_insert(self, order: Order) -> None:
        """Insert without acquiring lock (caller must hold write lock)."""
        if order.side is not Side.SELL:
            raise ValueError(f"Only sell orders can rest, got {order.side} order {order.order_id}")
        if order.quantity <= 0:
            raise ValueError(f"Order {order.order_id} has no quantity left to rest")
        if order.resting:
            raise ValueError(f"Order {order.order_id} is already resting")

        if order.sequence is None:
            order.sequence = next(self._sequence)
        order.resting = True
        self._orders.add(order)

    def take_cheapest(self) -> Optional[Order]:
        """Remove and return the lowest priced order, or None if empty (thread-safe)."""
        with self._rwlock.write():
            return self._unlocked_take_cheapest()

    def _unlocked_take_cheapest(self) -> Optional[Order]:
        """Pop the cheapest order without acquiring lock (caller must hold write lock)."""
        if not self._orders:
            return None
        order = self._orders.pop(0)
        order.resting = False
        return order

    def peek_cheapest(self) -> Optional[Order]:
        """Return the lowest priced order without removing it (thread-safe)."""
        with self._rwlock.read():
            return self._orders[0] if self._orders else None

    def best_price(self) -> Optional[int]:
        """Lowest resting ask price (thread-safe)."""
        with self._rwlock.read():
            return self._unlocked_best_price()

    def _unlocked_best_price(self) -> Optional[int]:
        return self._orders[0].price if self._orders else None

    def orders(self) -> List[Order]:
        """Snapshot of resting orders in matching priority order (thread-safe)."""
        with self._rwlock.read():
            return list(self._orders)

    def total_quantity(self) -> int:
        """Total BTC available to buyers (thread-safe)."""
        with self._rwlock.read():
            return self._unlocked_total_quantity()

    def _unlocked_total_quantity(self) -> int:
        return sum(o.quantity for o in self._orders)

    def depth(self, levels: int = 5) -> List[Tuple[int, int]]:
        """
        Get aggregated depth (thread-safe).

        Args:
            levels: Number of price levels to return

        Returns:
            List of (price, total_quantity), cheapest first
        """
        with self._rwlock.read():
            return self._unlocked_depth(levels)

    def _unlocked_depth(self, levels: int) -> List[Tuple[int, int]]:
        result: List[Tuple[int, int]] = []
        for order in self._orders:
            if result and result[-1][0] == order.price:
                price, qty = result[-1]
                result[-1] = (price, qty + order.quantity)
                continue
            if len(result) >= levels:
                break
            result.append((order.price, order.quantity))
        return result

    def reset(self) -> None:
        """Drop every resting order (thread-safe)."""
        with self._rwlock.write():
            for order in self._orders:
                order.resting = False
            self._orders.clear()

    def __len__(self) -> int:
        """Return number of resting orders (thread-safe)."""
        with self._rwlock.read():
            return self._unlocked_len()

    def _unlocked_len(self) -> int:
        return len(self._orders)

    def __bool__(self) -> bool:
        return len(self) > 0

    def __repr__(self) -> str:
        with self._rwlock.read():
            asks = self._unlocked_depth(3)
        ask_str = ", ".join(f"{qty}@{price}" for price, qty in asks) or "empty"
        return f"SellPool(asks=[{ask_str}])"
