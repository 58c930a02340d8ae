from typing import List, Sequence

from src.core.entities.gains import UnrealizedGainRecord, UnrealizedGainsResponse
from src.core.entities.holding import Holding
from src.core.use_cases.numeric import ZERO, safe_percent


class UnrealizedGainsCalculator:
    @staticmethod
    def compute(holdings: Sequence[Holding]) -> UnrealizedGainsResponse:
        # Output order follows input order
        records: List[UnrealizedGainRecord] = [
            UnrealizedGainsCalculator._value(h) for h in holdings
        ]

        total_cost = sum((r.total_cost for r in records), ZERO)
        total_current_value = sum((r.current_value for r in records), ZERO)
        total_gain_loss = sum((r.unrealized_gain_loss for r in records), ZERO)

        return UnrealizedGainsResponse(
            records=records,
            total_cost=total_cost,
            total_current_value=total_current_value,
            total_unrealized_gain_loss=total_gain_loss,
            total_unrealized_gain_loss_percent=safe_percent(total_gain_loss, total_cost),
        )

    @staticmethod
    def _value(holding: Holding) -> UnrealizedGainRecord:
        total_cost = holding.average_price * holding.quantity
        current_value = holding.market_value
        gain_loss = current_value - total_cost
        return UnrealizedGainRecord(
            symbol=holding.symbol,
            quantity=holding.quantity,
            average_price=holding.average_price,
            current_price=holding.current_price,
            total_cost=total_cost,
            current_value=current_value,
            unrealized_gain_loss=gain_loss,
            unrealized_gain_loss_percent=safe_percent(gain_loss, total_cost),
        )
