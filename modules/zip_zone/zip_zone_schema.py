from enum import Enum
from typing import Any, Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class TobaccoRequirement(str, Enum):
    # target carries no tobacco information
    NOT_APPLICABLE = "not_applicable"
    # only tobacco enabled rules may match
    REQUIRED = "required"
    # shipment is known not to be tobacco
    FORBIDDEN = "forbidden"

    @classmethod
    def from_flag(cls, tobacco: Optional[bool]):
        if tobacco is None:
            return cls.NOT_APPLICABLE
        return cls.REQUIRED if tobacco else cls.FORBIDDEN


class EligibilityTarget(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    zipcode: str
    weight: float
    shipper_id: Optional[int] = Field(default=None, alias="shipperId")
    tobacco: TobaccoRequirement = TobaccoRequirement.NOT_APPLICABLE


class ZipZoneModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    uuid: Optional[UUID] = None
    carrier: str
    zipcode: str
    max_weight: float
    tobacco: Optional[bool] = None
    shipper_id: Optional[int] = None
    sortcode: Optional[str] = None
    service: Optional[str] = None
    options: Dict[str, Any] = {}


class ZipZoneListParamsModel(BaseModel):
    count: int = Field(default=100, ge=1, le=1000)
    start: int = Field(default=0, ge=0)
    search_word: str = ""
    carrier: List[str] = []


class ZipZoneListResponseModel(BaseModel):
    zipzones: List[ZipZoneModel]
    has_more: bool


class TerminalProviderModel(BaseModel):
    id: str
    count: int
