"""Single asset BTC/USD continuous matching engine"""

from .order import Order, Side
from .trade import Trade, TradeExecutionError, execute_trade
from .pool import SellPool
from .matching_engine import MatchingEngine
from .parser import OrderParseError, parse_order, try_parse_order, parse_orders, is_end_command
from .rwlock import RWLock

__all__ = [
    "Order",
    "Side",
    "Trade",
    "TradeExecutionError",
    "execute_trade",
    "SellPool",
    "MatchingEngine",
    "OrderParseError",
    "parse_order",
    "try_parse_order",
    "parse_orders",
    "is_end_command",
    "RWLock",
]
