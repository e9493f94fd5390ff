from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class AddressModel(BaseModel):
    model_config = ConfigDict(extra="allow")

    zip: str = Field(pattern=r"^\d{5}(-\d{4})?$")
    name: Optional[str] = None
    street1: Optional[str] = None
    street2: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    business: bool = False


class ParcelModel(BaseModel):
    model_config = ConfigDict(extra="allow")

    # ounces and inches; numeric strings are accepted
    weight: float
    length: float
    width: float
    height: float


class OrderRequestModel(BaseModel):
    model_config = ConfigDict(extra="allow")

    to_address: AddressModel
    from_address: AddressModel
    parcel: ParcelModel
    controlled_substance: Optional[str] = None


class OrderResponseModel(BaseModel):
    carrier: str
    tracking_number: str
    zipcode: str
    carrier_response: Any = None
    rate: Optional[Dict[str, Any]] = None
