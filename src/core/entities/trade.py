from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class TradeSide(str, Enum):
    BUY = "BUY"
    SELL = "SELL"


class TradeStatus(str, Enum):
    PENDING = "PENDING"
    VALIDATED = "VALIDATED"
    EXECUTED = "EXECUTED"
    REJECTED = "REJECTED"
    CANCELLED = "CANCELLED"
    FAILED = "FAILED"
    EXPIRED = "EXPIRED"


class OrderType(str, Enum):
    MARKET = "MARKET"
    LIMIT = "LIMIT"


class Trade(BaseModel):
    """
    A single entry of a client's trade ledger, as served by the brokerage API.
    Frozen so the calculators can never mutate the snapshot they are given.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: Optional[int] = None
    client_id: Optional[int] = None
    symbol: str = Field(min_length=1)
    quantity: int = Field(gt=0)
    price: Decimal = Field(ge=0)
    # The brokerage API calls the side "type"
    side: TradeSide = Field(validation_alias=AliasChoices("side", "type"))
    status: TradeStatus
    order_type: Optional[OrderType] = None
    trade_time: Optional[datetime] = None

    @property
    def is_executed(self) -> bool:
        return self.status == TradeStatus.EXECUTED

    @property
    def sort_time(self) -> datetime:
        """Ordering key: absent timestamps count as epoch zero, naive ones as UTC."""
        if self.trade_time is None:
            return EPOCH
        if self.trade_time.tzinfo is None:
            return self.trade_time.replace(tzinfo=timezone.utc)
        return self.trade_time
