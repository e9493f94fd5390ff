from sqlalchemy import Column, Integer, Numeric, TIMESTAMP, Index
from database import DBBaseClass, DBBase, time_now


class Rate_Card(DBBase, DBBaseClass):
    __tablename__ = "rate_card"
    __table_args__ = (
        Index("ix_rate_card_shipper_effective", "shipper_id", "effective_at"),
        Index("ix_rate_card_lookup", "shipper_id", "zone", "weight"),
    )

    # NULL: default rate card
    shipper_id = Column(Integer, nullable=True)

    zone = Column(Integer, nullable=False)

    # ounces
    weight = Column(Integer, nullable=False)

    cost = Column(Numeric(10, 2), nullable=False)

    effective_at = Column(TIMESTAMP(timezone=True), nullable=False, default=time_now)
    expires_at = Column(TIMESTAMP(timezone=True), nullable=True)
