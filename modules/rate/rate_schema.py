from typing import Optional

from pydantic import BaseModel

# schema
from modules.orders.order_schema import OrderRequestModel


class RateResponseModel(BaseModel):
    cost: Optional[str] = None
    dollar_cost: Optional[str] = None
    billable_weight: int
    zone: Optional[int] = None
    use_dim_weight: bool


class RateQuoteResponseModel(OrderRequestModel):
    rate: RateResponseModel
