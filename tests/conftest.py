"""
Pytest configuration and fixtures for the parcel broker tests.

The whole suite runs against one in-memory SQLite database.
"""
import os
import tempfile
from datetime import timedelta
from typing import Generator

import pytest

# Set test environment before importing app modules
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["FORCE_TOBACCO_SHIPMENTS"] = "true"
os.environ["INTERNAL_API_KEY"] = "test-internal-key"
os.environ["CARRIER_API_URLS"] = "{}"
os.environ["LOG_LEVEL"] = "INFO"
os.environ["LOG_FILE"] = os.path.join(tempfile.gettempdir(), "parcel-broker-tests.log")

from sqlalchemy.orm import Session  # noqa: E402

from context_manager.context import (  # noqa: E402
    context_db_session,
    context_org_data,
    context_set_db_session_rollback,
)
from database.db import DBBase, SessionLocal, db_engine, time_now  # noqa: E402
from models import (  # noqa: E402
    Organization,
    Rate_Card,
    Sequence,
    Zip_Zone,
    Zone_Matrix,
)
from modules.organization import OrganizationModel  # noqa: E402
from modules.orders.order_schema import OrderRequestModel  # noqa: E402
from schema.base import GenericResponseModel  # noqa: E402
from shipping_partner import CarrierInterface  # noqa: E402

DBBase.metadata.create_all(bind=db_engine)

TEST_API_KEY = "test-api-key"


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Session bound into the request context, tables emptied afterwards."""
    session = SessionLocal()
    session_token = context_db_session.set(session)
    org_token = context_org_data.set(None)
    rollback_token = context_set_db_session_rollback.set(False)

    yield session

    context_set_db_session_rollback.reset(rollback_token)
    context_org_data.reset(org_token)
    context_db_session.reset(session_token)

    session.rollback()
    for table in reversed(DBBase.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture
def make_organization(db):
    def _make(
        shipper_seq_num=101,
        terminal_provider_order=None,
        tobacco=False,
        tobacco_ship_to_business=False,
        api_key=TEST_API_KEY,
    ) -> OrganizationModel:
        organization = Organization(
            name=f"Shipper {shipper_seq_num}",
            shipper_seq_num=shipper_seq_num,
            api_key=api_key,
            settings={
                "tobacco": tobacco,
                "tobacco_ship_to_business": tobacco_ship_to_business,
            },
            terminal_provider_order=terminal_provider_order or [],
        )
        db.add(organization)
        db.commit()
        return organization.to_model()

    return _make


@pytest.fixture
def make_zip_zone(db):
    def _make(
        carrier="OnTrac",
        zipcode="90210",
        max_weight=100,
        tobacco=None,
        shipper_id=None,
        **kwargs,
    ) -> Zip_Zone:
        zip_zone = Zip_Zone(
            carrier=carrier,
            zipcode=zipcode,
            max_weight=max_weight,
            tobacco=tobacco,
            shipper_id=shipper_id,
            options=kwargs.pop("options", {}),
            **kwargs,
        )
        db.add(zip_zone)
        db.commit()
        return zip_zone

    return _make


@pytest.fixture
def make_zone_matrix(db):
    def _make(prefix="100", matrix=None) -> Zone_Matrix:
        zone_matrix = Zone_Matrix(prefix=prefix, matrix=matrix if matrix is not None else ["8"] * 999)
        db.add(zone_matrix)
        db.commit()
        return zone_matrix

    return _make


@pytest.fixture
def make_rate_card(db):
    def _make(
        zone=7,
        weight=16,
        cost=12.5,
        shipper_id=None,
        effective_at=None,
        expires_at=None,
    ) -> Rate_Card:
        rate_card = Rate_Card(
            zone=zone,
            weight=weight,
            cost=cost,
            shipper_id=shipper_id,
            effective_at=effective_at or time_now() - timedelta(days=1),
            expires_at=expires_at,
        )
        db.add(rate_card)
        db.commit()
        return rate_card

    return _make


@pytest.fixture
def tracking_sequence(db) -> Sequence:
    sequence = Sequence.ensure_seq(db, "tracking_number", 0, 32**5)
    db.commit()
    return sequence


def build_order(
    to_zip="90210",
    from_zip="10001",
    weight=1,
    length=10,
    width=10,
    height=10,
    controlled_substance=None,
    business=False,
) -> OrderRequestModel:
    return OrderRequestModel(
        to_address={"zip": to_zip, "name": "Jane Roe", "business": business},
        from_address={"zip": from_zip, "name": "Warehouse"},
        parcel={"weight": weight, "length": length, "width": width, "height": height},
        controlled_substance=controlled_substance,
    )


@pytest.fixture
def order_factory():
    return build_order


class FakeCarrierInterface(CarrierInterface):
    """Records every booking and answers with a canned carrier result."""

    def __init__(self, carrier, response=None):
        super().__init__(carrier)
        self.calls = []
        self.response = response or GenericResponseModel(
            status_code=201,
            status=True,
            data={"label": "https://labels.example.com/1.pdf"},
            message="Order created at carrier",
        )

    def create_order(self, zip_zone, params, organization):
        self.calls.append((zip_zone, params, organization))
        return self.response


@pytest.fixture
def fake_carrier():
    return FakeCarrierInterface
