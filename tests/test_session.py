"""Tests for the line based session."""

import builtins
import logging

import pytest

from btc_matcher import main as cli
from btc_matcher.matching_engine import MatchingEngine
from btc_matcher.order import Order, Side
from btc_matcher.pool import SellPool
from btc_matcher.sample_data import SAMPLE_ORDERS, create_sample_engine


class TestRunSession:
    def setup_method(self):
        self.output = []

    def run(self, lines, engine=None):
        return cli.run_session(lines, engine=engine, out=self.output.append)

    def test_reports_trades(self):
        engine = self.run([
            "1: Sell 100 BTC @ 5000 USD",
            "2: Buy 100 BTC @ 5000 USD",
        ])

        assert self.output == ["Trade: 100 BTC @ 5000 USD between 2 and 1"]
        assert len(engine.pool) == 0

    def test_parse_failure_continues(self):
        engine = self.run([
            "gibberish",
            "1: Sell 10 BTC @ 5 USD",
        ])

        assert self.output[0].startswith("ERR: Couldn't parse input {gibberish}")
        assert len(engine.pool) == 1

    def test_end_command_stops(self):
        engine = self.run([
            "1: Sell 10 BTC @ 5 USD",
            "STOP",
            "2: Sell 10 BTC @ 5 USD",
        ])

        assert self.output == ["Ending ..."]
        assert len(engine.pool) == 1

    def test_empty_line_stops(self):
        engine = self.run(["", "1: Sell 10 BTC @ 5 USD"])
        assert len(engine.pool) == 0

    def test_uses_given_engine(self):
        engine = MatchingEngine()
        engine.submit(Order(order_id=1, side=Side.SELL, price=7, quantity=3))

        assert self.run(["2: Buy 5 BTC @ 9 USD"], engine=engine) is engine
        assert self.output == ["Trade: 3 BTC @ 7 USD between 2 and 1"]

    def test_warning_logged_for_bad_line(self, caplog):
        with caplog.at_level(logging.WARNING, logger="btc_matcher.main"):
            self.run(["1: Hold 10 BTC @ 5 USD"])
        assert "order side" in caplog.text


class TestPromptLines:
    def test_eof_ends_input(self, monkeypatch):
        inputs = iter(["1: Sell 1 BTC @ 1 USD"])

        def fake_input():
            try:
                return next(inputs)
            except StopIteration:
                raise EOFError

        monkeypatch.setattr(builtins, "input", fake_input)
        assert list(cli.prompt_lines(out=lambda _: None)) == ["1: Sell 1 BTC @ 1 USD", ""]

    def test_eof_prints_ending(self, monkeypatch):
        inputs = iter(["1: Sell 10 BTC @ 5 USD", "2: Buy 4 BTC @ 5 USD"])

        def fake_input():
            try:
                return next(inputs)
            except StopIteration:
                raise EOFError

        monkeypatch.setattr(builtins, "input", fake_input)
        output = []
        engine = cli.run_session(cli.prompt_lines(out=lambda _: None), out=output.append)

        assert output == ["Trade: 4 BTC @ 5 USD between 2 and 1", "Ending ..."]
        assert engine.pool.total_quantity() == 6

    def test_ctrl_c_stops_quietly(self, monkeypatch):
        def interrupted():
            raise KeyboardInterrupt

        monkeypatch.setattr(builtins, "input", interrupted)
        assert list(cli.prompt_lines(out=lambda _: None)) == []

    def test_stream_error_is_fatal(self, monkeypatch, caplog):
        def broken_input():
            raise OSError("stream closed")

        monkeypatch.setattr(builtins, "input", broken_input)
        with caplog.at_level(logging.ERROR, logger="btc_matcher.main"):
            assert list(cli.prompt_lines(out=lambda _: None)) == []
        assert "stream closed" in caplog.text

    def test_run_demo(self, monkeypatch, capsys):
        inputs = iter(["1: Sell 100 BTC @ 5000 USD", "2: Buy 40 BTC @ 5000 USD", "end"])
        monkeypatch.setattr(builtins, "input", lambda: next(inputs))

        engine = cli.run_demo()

        printed = capsys.readouterr().out
        assert "Welcome to the bitcoin trading bot!" in printed
        assert "Trade: 40 BTC @ 5000 USD between 2 and 1" in printed
        assert "60 BTC @ 5000 USD" in printed
        assert engine.pool.total_quantity() == 60


class TestPrintBook:
    def test_empty(self):
        output = []
        cli.print_book(SellPool(), out=output.append)
        assert "  (empty)" in output

    def test_cheapest_last(self):
        pool = SellPool()
        pool.insert(Order(order_id=1, side=Side.SELL, price=10, quantity=5))
        pool.insert(Order(order_id=2, side=Side.SELL, price=12, quantity=7))
        output = []
        cli.print_book(pool, out=output.append)
        levels = [line for line in output if "BTC" in line]
        assert levels == ["         7 BTC @ 12 USD", "         5 BTC @ 10 USD"]


class TestSampleData:
    def test_sample_engine(self):
        engine = create_sample_engine()
        assert len(engine.pool) == len(SAMPLE_ORDERS.splitlines())
        assert engine.pool.best_price() == 5000
        assert engine.trade_count == 0
