from sqlalchemy import Column, String, Integer
from sqlalchemy.orm import Session

from database import DBBaseClass, DBBase
from utils.exceptions import SequenceError


class Sequence(DBBase, DBBaseClass):
    __tablename__ = "sequence"

    name = Column(String(64), nullable=False, unique=True, index=True)

    # next value to hand out
    seq = Column(Integer, nullable=False, default=0)

    # one above the last valid value
    max = Column(Integer, nullable=False)

    description = Column(String(255), nullable=True)

    @classmethod
    def new_seq(cls, db: Session, name: str, start: int, end: int, description=None):
        sequence = cls(name=name, seq=start, max=end, description=description)
        db.add(sequence)
        db.flush()
        return sequence

    @classmethod
    def ensure_seq(cls, db: Session, name: str, start: int, end: int, description=None):
        """Create the counter unless it exists; an existing counter keeps its position."""
        sequence = db.query(cls).filter(cls.name == name).first()
        if sequence is None:
            sequence = cls.new_seq(db, name, start, end, description=description)
        return sequence

    @classmethod
    def next_seq(cls, db: Session, name: str) -> int:
        """Hand out the current value of the counter and advance it."""
        sequence = (
            db.query(cls)
            .filter(cls.name == name, cls.is_deleted.is_(False))
            .with_for_update()
            .first()
        )

        if sequence is None:
            raise SequenceError(f"Unknown counter {name}")

        if sequence.seq >= sequence.max:
            raise SequenceError(f"{name} counter overflow")

        value = sequence.seq
        sequence.seq = value + 1
        db.flush()

        return value


def seed_sequences(db: Session):
    from data.shipping_constants import (
        TRACKING_NUMBER_SEQUENCE,
        TRACKING_NUMBER_SEQUENCE_END,
    )

    Sequence.ensure_seq(
        db,
        TRACKING_NUMBER_SEQUENCE,
        0,
        TRACKING_NUMBER_SEQUENCE_END,
        description="tracking number serial",
    )
