from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, field_validator


class OrganizationSettings(BaseModel):
    # the shipper may ship tobacco
    tobacco: bool = False
    tobacco_ship_to_business: bool = False


class OrganizationModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: Optional[int] = None
    uuid: Optional[UUID] = None
    name: Optional[str] = None
    shipper_seq_num: int
    settings: OrganizationSettings = OrganizationSettings()
    terminal_provider_order: List[str] = []

    @field_validator("settings", mode="before")
    @classmethod
    def default_settings(cls, value):
        return value or {}

    @field_validator("terminal_provider_order", mode="before")
    @classmethod
    def default_priority_list(cls, value):
        return value or []
