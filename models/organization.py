from sqlalchemy import Column, String, Integer, JSON
from database import DBBaseClass, DBBase


class Organization(DBBase, DBBaseClass):
    __tablename__ = "organization"

    name = Column(String(255), nullable=False)

    # stable shipper identity, referenced by zip zones and rate cards
    shipper_seq_num = Column(Integer, nullable=False, unique=True, index=True)

    api_key = Column(String(255), nullable=True, unique=True, index=True)

    # {"tobacco": bool, "tobacco_ship_to_business": bool}
    settings = Column(JSON, nullable=False, default=dict)

    # carrier identifiers, highest priority first
    terminal_provider_order = Column(JSON, nullable=False, default=list)

    def to_model(self):
        from modules.organization.organization_schema import OrganizationModel

        return OrganizationModel.model_validate(self)
