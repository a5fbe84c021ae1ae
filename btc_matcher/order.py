"""Order data model for the matcher."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class Side(Enum):
    """Order side: buy or sell."""
    BUY = "Buy"
    SELL = "Sell"

    @classmethod
    def from_token(cls, token: str) -> "Side":
        """
        Parse a side token.

        Only the exact tokens ``Buy`` and ``Sell`` are accepted.

        Raises:
            ValueError: If the token is anything else
        """
        for side in cls:
            if side.value == token:
                return side
        raise ValueError(f"Unknown order side {token!r}")

    def __str__(self) -> str:
        return self.value


def _check_non_negative(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer, got {value!r}")
    if value < 0:
        raise ValueError(f"{name} must be non-negative")


_FIXED_FIELDS = frozenset({"order_id", "side", "price"})


@dataclass
class Order:
    """
    Represents a single buy or sell instruction.

    Attributes:
        order_id: Caller supplied identifier (not required to be unique)
        side: BUY or SELL
        price: Limit price in USD
        quantity: Remaining BTC quantity, only ever decreases

    order_id, side and price are fixed once the order is built.
    """
    order_id: int
    side: Side
    price: int
    quantity: int
    # Arrival stamp assigned by SellPool on first insertion
    sequence: Optional[int] = field(default=None, compare=False, repr=False)
    # True while the order sits in a SellPool
    resting: bool = field(default=False, init=False, compare=False, repr=False)

    def __post_init__(self):
        if not isinstance(self.side, Side):
            raise ValueError(f"side must be a Side, got {self.side!r}")
        _check_non_negative("Order id", self.order_id)
        _check_non_negative("Price", self.price)
        _check_non_negative("Quantity", self.quantity)

    def __setattr__(self, name, value):
        if name in _FIXED_FIELDS and name in self.__dict__:
            raise AttributeError(f"Order {name} cannot be changed after construction")
        if name == "quantity" and name in self.__dict__ and value > self.quantity:
            raise ValueError(f"Quantity cannot increase from {self.quantity} to {value}")
        super().__setattr__(name, value)

    @property
    def is_filled(self) -> bool:
        """Check if the order has no quantity left."""
        return self.quantity == 0

    def fill(self, quantity: int) -> None:
        """
        Fill part or all of the order.

        Args:
            quantity: Amount to fill

        Raises:
            ValueError: If the amount is not positive or exceeds the remaining quantity
        """
        if quantity <= 0:
            raise ValueError(f"Fill quantity must be positive, got {quantity}")
        if quantity > self.quantity:
            raise ValueError(
                f"Cannot fill {quantity}, only {self.quantity} remaining"
            )
        self.quantity -= quantity

    def __str__(self) -> str:
        return f"{self.order_id}: {self.side} {self.quantity} BTC @ {self.price} USD"
