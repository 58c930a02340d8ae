"""
Tests for shared numeric helpers and CSV export.
"""
from datetime import date
from decimal import Decimal

import pytest

from src.core.use_cases.csv_export import (
    REALIZED_HEADERS,
    UNREALIZED_HEADERS,
    export_filename,
    realized_gains_to_csv,
    unrealized_gains_to_csv,
)
from src.core.use_cases.numeric import mean, round_money, safe_percent
from src.core.use_cases.realized_gains import RealizedGainsCalculator
from src.core.use_cases.unrealized_gains import UnrealizedGainsCalculator
from tests.factories import at, make_holding, make_trade


def test_mean_is_unweighted():
    assert mean([Decimal("100"), Decimal("110")]) == Decimal("105")


def test_mean_of_nothing_raises():
    with pytest.raises(ValueError):
        mean([])


def test_safe_percent_guards_zero_denominator():
    assert safe_percent(Decimal("5"), Decimal("0")) == Decimal("0")
    assert safe_percent(Decimal("5"), Decimal("20")) == Decimal("25")


def test_round_money_half_up():
    assert round_money(Decimal("1.005")) == Decimal("1.01")
    assert round_money(Decimal("-2.345")) == Decimal("-2.35")
    assert str(round_money(Decimal("7"))) == "7.00"


def test_realized_csv():
    report = RealizedGainsCalculator.compute([
        make_trade("BUY", "AAPL", 1, 100, at(1)),
        make_trade("BUY", "AAPL", 1, 100, at(2)),
        make_trade("BUY", "AAPL", 1, 101, at(3)),
        make_trade("SELL", "AAPL", 3, 110, at(4)),
    ])
    lines = realized_gains_to_csv(report).splitlines()

    assert lines[0] == ",".join(REALIZED_HEADERS)
    assert lines[1] == (
        "AAPL,2024-01-02T10:30:00,2024-01-02T13:30:00,3,100.33,110.00,29.00,9.63"
    )


def test_realized_csv_blank_dates():
    report = RealizedGainsCalculator.compute([
        make_trade("BUY", "AAPL", 1, 100, None),
        make_trade("SELL", "AAPL", 1, 100, at(1)),
    ])
    assert realized_gains_to_csv(report).splitlines()[1].startswith("AAPL,,2024-01-02T10:30:00,")


def test_unrealized_csv():
    report = UnrealizedGainsCalculator.compute([make_holding("X", 10, 20, 25, 250)])
    lines = unrealized_gains_to_csv(report).splitlines()

    assert lines[0] == ",".join(UNREALIZED_HEADERS)
    assert lines[1] == "X,10,20.00,25.00,200.00,250.00,50.00,25.00"


def test_empty_report_is_header_only():
    report = UnrealizedGainsCalculator.compute([])
    assert unrealized_gains_to_csv(report) == ",".join(UNREALIZED_HEADERS) + "\n"


def test_export_filename():
    assert export_filename("realized", date(2024, 3, 1)) == "realized-gains-2024-03-01.csv"
