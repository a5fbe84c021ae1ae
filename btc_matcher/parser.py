"""
Text front end for orders.

One order per line, in the form::

    <id>[.:] <Buy|Sell> <quantity> BTC @ <price> [USD]

The id may carry a trailing ``.`` or ``:``. Quantity is read from the
third token and price from the sixth; anything shorter than seven tokens
is rejected.
"""

import logging
from typing import List, Optional

from .order import Order, Side

logger = logging.getLogger(__name__)

ORDER_FORMAT = "{id}: {Buy|Sell} {quantity} BTC @ {price} USD"
END_COMMANDS = frozenset({"end", "break", "stop", ""})

_MIN_TOKENS = 7
_ID, _SIDE, _QUANTITY, _PRICE = 0, 1, 2, 5


class OrderParseError(ValueError):
    """Raised when a line cannot be turned into an order."""


def _parse_int(token: str, name: str) -> int:
    if not (token.isascii() and token.isdigit()):
        raise OrderParseError(f"Couldn't parse {token!r} to {name}")
    return int(token)


def parse_order(line: str) -> Order:
    """
    Parse one text line into an order.

    Args:
        line: e.g. ``"1: Sell 100 BTC @ 5000 USD"``

    Returns:
        The parsed order

    Raises:
        OrderParseError: If the line does not follow the order format
    """
    tokens = line.split()
    if len(tokens) < _MIN_TOKENS:
        raise OrderParseError(
            f"Expected at least {_MIN_TOKENS} tokens, got {len(tokens)} in {line.strip()!r}"
        )

    order_id = _parse_int(tokens[_ID].strip(".:"), "id")
    try:
        side = Side.from_token(tokens[_SIDE])
    except ValueError:
        raise OrderParseError(f"Couldn't parse {tokens[_SIDE]!r} to order side") from None
    quantity = _parse_int(tokens[_QUANTITY], "quantity")
    price = _parse_int(tokens[_PRICE], "price")

    return Order(order_id=order_id, side=side, price=price, quantity=quantity)


def try_parse_order(line: str) -> Optional[Order]:
    """Parse a line, logging a warning and returning None if it is malformed."""
    try:
        return parse_order(line)
    except OrderParseError as e:
        logger.warning("Couldn't make %r into an order: %s", line.strip(), e)
        return None


def parse_orders(text: str) -> List[Order]:
    """Parse a block of lines, skipping blank and malformed ones."""
    orders = []
    for line in text.splitlines():
        if not line.strip():
            continue
        order = try_parse_order(line)
        if order is not None:
            orders.append(order)
    return orders


def is_end_command(line: str) -> bool:
    """True for ``end``, ``break``, ``stop`` (any case) or an empty line."""
    return line.strip().lower() in END_COMMANDS
