"""
CSV rendering of gain reports, one row per record, money rounded to cents.
"""
import csv
import io
from datetime import date, datetime
from typing import Iterable, List, Optional

from src.core.entities.gains import RealizedGainsResponse, UnrealizedGainsResponse
from src.core.use_cases.numeric import round_money

REALIZED_HEADERS = [
    "Symbol", "Buy Date", "Sell Date", "Quantity",
    "Buy Price", "Sell Price", "Gain/Loss", "Gain/Loss %",
]

UNREALIZED_HEADERS = [
    "Symbol", "Quantity", "Avg Buy Price", "Current Price",
    "Total Cost", "Current Value", "Unrealized Gain/Loss", "Gain/Loss %",
]


def _timestamp(value: Optional[datetime]) -> str:
    return value.isoformat() if value is not None else ""


def _render(headers: List[str], rows: Iterable[list]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(headers)
    writer.writerows(rows)
    return buffer.getvalue()


def realized_gains_to_csv(report: RealizedGainsResponse) -> str:
    rows = (
        [
            r.symbol,
            _timestamp(r.buy_trade.trade_time),
            _timestamp(r.sell_trade.trade_time),
            r.quantity,
            round_money(r.buy_price),
            round_money(r.sell_price),
            round_money(r.gain_loss),
            round_money(r.gain_loss_percent),
        ]
        for r in report.records
    )
    return _render(REALIZED_HEADERS, rows)


def unrealized_gains_to_csv(report: UnrealizedGainsResponse) -> str:
    rows = (
        [
            r.symbol,
            r.quantity,
            round_money(r.average_price),
            round_money(r.current_price),
            round_money(r.total_cost),
            round_money(r.current_value),
            round_money(r.unrealized_gain_loss),
            round_money(r.unrealized_gain_loss_percent),
        ]
        for r in report.records
    )
    return _render(UNREALIZED_HEADERS, rows)


def export_filename(kind: str, on: Optional[date] = None) -> str:
    """e.g. realized-gains-2024-03-01.csv"""
    on = on or date.today()
    return f"{kind}-gains-{on.isoformat()}.csv"
