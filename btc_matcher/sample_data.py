"""Sample data for trying out the matcher."""

from .matching_engine import MatchingEngine
from .parser import parse_orders
from .pool import SellPool

SAMPLE_ORDERS = """\
1: Sell 100 BTC @ 5000 USD
2: Sell 150 BTC @ 5000 USD
3: Sell 200 BTC @ 5010 USD
4: Sell 75 BTC @ 5025 USD
5: Sell 300 BTC @ 5050 USD
6: Sell 50 BTC @ 5100 USD
"""


def create_sample_engine() -> MatchingEngine:
    """
    Create an engine whose pool holds the sample sell orders.

    Returns:
        MatchingEngine with a pre-populated SellPool
    """
    engine = MatchingEngine(SellPool())
    engine.submit_many(parse_orders(SAMPLE_ORDERS))
    return engine


def print_full_book(pool: SellPool) -> None:
    """Print every resting price level with cumulative quantity."""
    asks = pool.depth(len(pool) or 1)

    print("\n" + "=" * 40)
    print("RESTING SELLS - FULL DEPTH")
    print("=" * 40)
    print(f"{'Price':>10} | {'Quantity':>10} | {'Cumulative':>10}")
    print("-" * 38)
    cumulative = 0
    for price, qty in asks:
        cumulative += qty
        print(f"{price:>10} | {qty:>10} | {cumulative:>10}")
    print("=" * 40)


if __name__ == "__main__":
    engine = create_sample_engine()
    print_full_book(engine.pool)

    print("\n> 7: Buy 300 BTC @ 5050 USD")
    for trade in engine.submit(parse_orders("7: Buy 300 BTC @ 5050 USD")[0]):
        print(f"  {trade}")

    print_full_book(engine.pool)
