from sqlalchemy import Column, String, Integer, Numeric, Boolean, JSON, Index
from database import DBBaseClass, DBBase


class Zip_Zone(DBBase, DBBaseClass):
    __tablename__ = "zip_zone"
    __table_args__ = (
        Index("ix_zip_zone_zipcode_shipper_id", "zipcode", "shipper_id"),
        Index("ix_zip_zone_lookup", "carrier", "zipcode", "max_weight"),
    )

    carrier = Column(String(64), nullable=False, index=True)
    zipcode = Column(String(10), nullable=False)

    # heaviest parcel (ounces) this rule may be used for
    max_weight = Column(Numeric(10, 2), nullable=False)

    # NULL: no tobacco restriction recorded
    tobacco = Column(Boolean, nullable=True, default=None)

    # NULL: default rule for every shipper without an override
    shipper_id = Column(Integer, nullable=True, index=True)

    sortcode = Column(String(64), nullable=True)
    service = Column(String(64), nullable=True)

    # freeform carrier specific options (injection point, account number, ...)
    options = Column(JSON, nullable=False, default=dict)

    def to_model(self):
        from modules.zip_zone.zip_zone_schema import ZipZoneModel

        return ZipZoneModel.model_validate(self)
