from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Holding(BaseModel):
    """
    Current state of an open position.
    `totalValue` is priced by the portfolio service (quantity * currentPrice).
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: Optional[int] = None
    symbol: str = Field(min_length=1)
    quantity: int = Field(ge=0)
    average_price: Decimal = Field(ge=0)
    current_price: Decimal = Field(ge=0)
    total_value: Optional[Decimal] = None

    @property
    def market_value(self) -> Decimal:
        if self.total_value is not None:
            return self.total_value
        return self.current_price * self.quantity
