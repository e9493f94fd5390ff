from data.shipping_constants import TRACKING_NUMBER_SEQUENCE, TRACKING_NUMBER_SEQUENCE_END
from database.db import init_models
from models import Sequence


class TestInitModels:
    def test_seeds_tracking_number_counter(self, db):
        init_models()

        sequence = db.query(Sequence).filter(Sequence.name == TRACKING_NUMBER_SEQUENCE).one()
        assert sequence.seq == 0
        assert sequence.max == TRACKING_NUMBER_SEQUENCE_END == 32**5

    def test_rerun_keeps_counter_position(self, db):
        init_models()
        assert Sequence.next_seq(db, TRACKING_NUMBER_SEQUENCE) == 0
        assert Sequence.next_seq(db, TRACKING_NUMBER_SEQUENCE) == 1
        db.commit()

        init_models()

        db.expire_all()
        assert db.query(Sequence).filter(Sequence.name == TRACKING_NUMBER_SEQUENCE).count() == 1
        assert Sequence.next_seq(db, TRACKING_NUMBER_SEQUENCE) == 2


class TestEnsureSeq:
    def test_creates_missing_counter(self, db):
        sequence = Sequence.ensure_seq(db, "labels", 5, 10)
        db.commit()

        assert sequence.seq == 5
        assert Sequence.next_seq(db, "labels") == 5

    def test_existing_counter_is_returned_unchanged(self, db):
        Sequence.new_seq(db, "labels", 7, 10)
        db.commit()

        sequence = Sequence.ensure_seq(db, "labels", 0, 99)

        assert sequence.seq == 7
        assert sequence.max == 10
