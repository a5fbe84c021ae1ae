"""Line based CLI session for the matcher."""

import logging
from typing import Callable, Iterable, Iterator, Optional

from .config import get_settings
from .logging_config import setup_logging
from .matching_engine import MatchingEngine
from .parser import ORDER_FORMAT, OrderParseError, is_end_command, parse_order
from .pool import SellPool

logger = logging.getLogger(__name__)

Printer = Callable[[str], None]


def print_book(pool: SellPool, levels: int = 5, out: Printer = print) -> None:
    """Print the resting sell orders, cheapest at the bottom."""
    asks = pool.depth(levels)

    out("=" * 40)
    out("RESTING SELLS")
    out("=" * 40)
    if asks:
        for price, qty in reversed(asks):
            out(f"  {qty:>8} BTC @ {price} USD")
    else:
        out("  (empty)")
    out("=" * 40)


def print_welcome(out: Printer = print) -> None:
    out("Welcome to the bitcoin trading bot!")
    out("Please enter an order with the form")
    out(ORDER_FORMAT)
    out("Type 'end', 'break', 'stop' or just enter to end the program.")
    out("")


def run_session(
    lines: Iterable[str],
    engine: Optional[MatchingEngine] = None,
    out: Printer = print,
) -> MatchingEngine:
    """
    Feed text lines to the engine until an end command or the input runs out.

    Malformed lines are reported and skipped. Each executed trade is
    reported on its own line.

    Args:
        lines: Input lines, one order each
        engine: Engine to submit to, a fresh one if omitted
        out: Where reports go

    Returns:
        The engine, holding whatever sells are still resting
    """
    if engine is None:
        engine = MatchingEngine()

    for line in lines:
        if is_end_command(line):
            out("Ending ...")
            break

        try:
            order = parse_order(line)
        except OrderParseError as e:
            logger.warning("Rejected input %r: %s", line.strip(), e)
            out(f"ERR: Couldn't parse input {{{line.strip()}}}: {e}")
            out("Please try again with the format")
            out(ORDER_FORMAT)
            continue

        for trade in engine.submit(order):
            out(trade.report())

    logger.info(
        "Session finished: %d orders, %d trades, %d sells resting",
        engine.orders_processed,
        engine.trade_count,
        len(engine.pool),
    )
    return engine


def prompt_lines(prompt: str = "Your input:", out: Printer = print) -> Iterator[str]:
    """
    Yield lines typed by the user.

    EOF yields one empty line, which ends the session like an ``end``
    command. Ctrl-C stops quietly. A failing input stream ends the
    session after logging the error.
    """
    while True:
        out(prompt)
        try:
            line = input()
        except EOFError:
            yield ""
            return
        except KeyboardInterrupt:
            out("")
            return
        except OSError as e:
            logger.error("Reading input failed: %s", e)
            out(f"error {e}")
            return
        yield line


def run_demo() -> MatchingEngine:
    """Run the interactive session."""
    print_welcome()
    engine = run_session(prompt_lines())
    print_book(engine.pool, get_settings().book_depth)
    return engine


def main() -> None:
    """Console entry point."""
    setup_logging()
    run_demo()


if __name__ == "__main__":
    main()
