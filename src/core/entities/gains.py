"""
Gains Entities

Derived P/L records. Rebuilt on every request, never persisted.
"""
from decimal import Decimal
from typing import List

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from src.core.entities.trade import Trade


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class RealizedGainRecord(_CamelModel):
    """
    One reconciled sell. `buy_price` is the average price of every
    qualifying earlier buy; `buy_trade` is the first of those buys.
    """
    symbol: str
    buy_trade: Trade
    sell_trade: Trade
    quantity: int
    buy_price: Decimal
    sell_price: Decimal
    gain_loss: Decimal
    gain_loss_percent: Decimal


class RealizedGainsResponse(_CamelModel):
    records: List[RealizedGainRecord]
    total_gains: Decimal
    total_losses: Decimal  # Kept negative
    net_gain_loss: Decimal

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "records": [],
                "totalGains": "200",
                "totalLosses": "-50",
                "netGainLoss": "150",
            }
        }
    )


class UnrealizedGainRecord(_CamelModel):
    symbol: str
    quantity: int
    average_price: Decimal
    current_price: Decimal
    total_cost: Decimal
    current_value: Decimal
    unrealized_gain_loss: Decimal
    unrealized_gain_loss_percent: Decimal


class UnrealizedGainsResponse(_CamelModel):
    records: List[UnrealizedGainRecord]
    total_cost: Decimal
    total_current_value: Decimal
    total_unrealized_gain_loss: Decimal
    total_unrealized_gain_loss_percent: Decimal


class GainsSummaryResponse(_CamelModel):
    """
    Realized and unrealized P/L for one client side by side.
    """
    client_id: int
    realized: RealizedGainsResponse
    unrealized: UnrealizedGainsResponse
