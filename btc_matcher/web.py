"""FastAPI web application for the matcher."""

import logging
import threading
from typing import List, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field, model_validator

from .config import get_settings
from .matching_engine import MatchingEngine
from .order import Order, Side
from .parser import parse_order
from .sample_data import create_sample_engine
from .trade import Trade

logger = logging.getLogger(__name__)


class OrderRequest(BaseModel):
    """Either a raw order line or the structured fields."""

    line: Optional[str] = Field(None, description="Order text, e.g. '1: Sell 100 BTC @ 5000 USD'")
    order_id: Optional[int] = Field(None, ge=0)
    side: Optional[str] = Field(None, pattern=r"^(Buy|Sell)$")
    quantity: Optional[int] = Field(None, ge=0)
    price: Optional[int] = Field(None, ge=0)

    @model_validator(mode="after")
    def check_complete(self) -> "OrderRequest":
        fields = (self.order_id, self.side, self.quantity, self.price)
        if self.line is not None and any(f is not None for f in fields):
            raise ValueError("Send either 'line' or the structured fields, not both")
        if self.line is None and any(f is None for f in fields):
            raise ValueError("Provide 'line' or all of order_id, side, quantity and price")
        return self

    def to_order(self) -> Order:
        if self.line is not None:
            return parse_order(self.line)
        return Order(
            order_id=self.order_id,
            side=Side.from_token(self.side),
            price=self.price,
            quantity=self.quantity,
        )


class TradeResponse(BaseModel):
    buy_id: int
    sell_id: int
    price: int
    quantity: int
    report: str

    @classmethod
    def from_trade(cls, trade: Trade) -> "TradeResponse":
        return cls(
            buy_id=trade.buy_id,
            sell_id=trade.sell_id,
            price=trade.price,
            quantity=trade.quantity,
            report=trade.report(),
        )


class OrderResponse(BaseModel):
    order_id: int
    side: str
    remaining_quantity: int = Field(..., description="Quantity left unmatched (dropped for buys)")
    trades: List[TradeResponse] = Field(default_factory=list)


class BookResponse(BaseModel):
    asks: List[List[int]] = Field(..., description="Resting sell levels [[price, quantity], ...]")
    best_ask: Optional[int] = None
    resting_orders: int
    total_quantity: int


class HealthResponse(BaseModel):
    status: str
    orders_processed: int
    trade_count: int


def _new_engine() -> MatchingEngine:
    if get_settings().seed_sample_data:
        return create_sample_engine()
    return MatchingEngine()


app = FastAPI(title="BTC Matcher")

# Lock for replacing the global engine (reset endpoint)
_state_lock = threading.Lock()
engine: MatchingEngine = _new_engine()


def _book() -> BookResponse:
    """Snapshot the pool under a single read lock."""
    pool = engine.pool
    levels = get_settings().book_depth
    with pool.read_lock():
        asks = pool._unlocked_depth(levels)
        best_ask = pool._unlocked_best_price()
        resting_orders = pool._unlocked_len()
        total_quantity = pool._unlocked_total_quantity()
    return BookResponse(
        asks=[[price, qty] for price, qty in asks],
        best_ask=best_ask,
        resting_orders=resting_orders,
        total_quantity=total_quantity,
    )


@app.get("/health", response_model=HealthResponse)
def health():
    return HealthResponse(
        status="healthy",
        orders_processed=engine.orders_processed,
        trade_count=engine.trade_count,
    )


@app.get("/book", response_model=BookResponse)
def get_book():
    """Return aggregated resting sell depth."""
    return _book()


@app.post("/orders", response_model=OrderResponse)
def submit_order(request: OrderRequest):
    """Submit a new order and return the trades it produced."""
    try:
        order = request.to_order()
    except ValueError as e:  # includes OrderParseError
        logger.warning("Rejected order request: %s", e)
        raise HTTPException(status_code=422, detail=str(e))

    trades = engine.submit(order)
    return OrderResponse(
        order_id=order.order_id,
        side=str(order.side),
        remaining_quantity=order.quantity,
        trades=[TradeResponse.from_trade(t) for t in trades],
    )


@app.post("/reset", response_model=BookResponse)
def reset_book():
    """Replace the engine with a fresh one (thread-safe)."""
    global engine

    with _state_lock:
        engine = _new_engine()
    logger.info("Engine reset, %d sells resting", len(engine.pool))
    return _book()


def run():
    """Run the web server."""
    import uvicorn

    from .logging_config import setup_logging

    settings = get_settings()
    setup_logging()
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
