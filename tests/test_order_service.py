import http

import pytest

from context_manager.context import context_set_db_session_rollback
from data.carrier_constants import CarrierName
from database.db import init_models
from modules.carrier_selection import CarrierSelectionEngine
from modules.orders.order_service import OrderService, normalize_order
from modules.tracking import TrackingNumber
from schema.base import GenericResponseModel
from shipping_partner import CarrierInterfaceRegistry


@pytest.fixture
def ontrac(fake_carrier):
    return fake_carrier(CarrierName.ONTRAC)


@pytest.fixture
def engine(ontrac):
    registry = CarrierInterfaceRegistry({CarrierName.ONTRAC: ontrac})
    return CarrierSelectionEngine(registry, force_tobacco_shipments=True)


@pytest.fixture
def routable(make_zip_zone, make_zone_matrix, make_rate_card, tracking_sequence):
    matrix = ["8"] * 999
    matrix[99] = "5"
    make_zone_matrix(prefix="902", matrix=matrix)
    make_rate_card(zone=5, weight=16, cost=7.25)
    return make_zip_zone(carrier="OnTrac", zipcode="90210", sortcode="LAX")


class TestNormalizeOrder:
    def test_forced_tobacco_shipper(self, db, make_organization, order_factory):
        organization = make_organization(tobacco=True)
        order = normalize_order(organization, order_factory(), True)
        assert order.controlled_substance == "tobacco"

    def test_declared_substance_is_kept(self, db, make_organization, order_factory):
        organization = make_organization(tobacco=True)
        order = normalize_order(organization, order_factory(controlled_substance="none"), True)
        assert order.controlled_substance == "none"

    def test_policy_off(self, db, make_organization, order_factory):
        organization = make_organization(tobacco=True)
        assert normalize_order(organization, order_factory(), False).controlled_substance is None


class TestCreateOrder:
    def test_creates_order_at_selected_carrier(
        self, db, make_organization, routable, engine, ontrac, order_factory
    ):
        organization = make_organization(terminal_provider_order=["OnTrac"])

        response = OrderService.create_order(organization, order_factory(), engine)

        assert response.status_code == http.HTTPStatus.CREATED
        assert response.status is True
        assert response.data.carrier == "OnTrac"
        assert response.data.zipcode == "90210"
        assert response.data.carrier_response == {"label": "https://labels.example.com/1.pdf"}
        assert response.data.rate["dollar_cost"] == "$7.25"
        assert response.data.rate["zone"] == 5

        zip_zone, params, called_with = ontrac.calls[0]
        assert zip_zone.sortcode == "LAX"
        assert params["tn"] == response.data.tracking_number
        assert params["to_address"]["zip"] == "90210"
        assert called_with.shipper_seq_num == organization.shipper_seq_num

        tracking_number = TrackingNumber.from_string(response.data.tracking_number)
        assert tracking_number.shipper == organization.shipper_seq_num
        assert tracking_number.seqnum == 0

    def test_counter_seeded_by_init_models(
        self,
        db,
        make_organization,
        make_zip_zone,
        make_zone_matrix,
        make_rate_card,
        engine,
        order_factory,
    ):
        init_models()
        matrix = ["8"] * 999
        matrix[99] = "5"
        make_zone_matrix(prefix="902", matrix=matrix)
        make_rate_card(zone=5, weight=16, cost=7.25)
        make_zip_zone(carrier="OnTrac", zipcode="90210", sortcode="LAX")
        organization = make_organization(terminal_provider_order=["OnTrac"])

        response = OrderService.create_order(organization, order_factory(), engine)

        assert response.status_code == http.HTTPStatus.CREATED
        assert TrackingNumber.from_string(response.data.tracking_number).seqnum == 0

    def test_unroutable_zip(self, db, make_organization, tracking_sequence, engine, order_factory):
        organization = make_organization(terminal_provider_order=["OnTrac"])

        response = OrderService.create_order(
            organization, order_factory(to_zip="73301"), engine
        )

        assert response.status_code == http.HTTPStatus.UNPROCESSABLE_ENTITY
        assert response.message == "Zipcode 73301 is not eligible"

    def test_tobacco_to_business_rejected(
        self, db, make_organization, routable, engine, ontrac, order_factory
    ):
        organization = make_organization(terminal_provider_order=["OnTrac"])

        response = OrderService.create_order(
            organization,
            order_factory(controlled_substance="tobacco", business=True),
            engine,
        )

        assert response.status_code == http.HTTPStatus.UNPROCESSABLE_ENTITY
        assert ontrac.calls == []

    def test_tobacco_to_business_allowed_by_setting(
        self, db, make_organization, make_zip_zone, routable, engine, order_factory
    ):
        make_zip_zone(carrier="OnTrac", zipcode="90210", tobacco=True, sortcode="TOB")
        organization = make_organization(
            tobacco=True,
            tobacco_ship_to_business=True,
            terminal_provider_order=["OnTrac"],
        )

        response = OrderService.create_order(
            organization, order_factory(business=True), engine
        )

        assert response.status_code == http.HTTPStatus.CREATED

    def test_forced_tobacco_without_tobacco_rule_is_not_eligible(
        self, db, make_organization, routable, engine, order_factory
    ):
        organization = make_organization(tobacco=True, terminal_provider_order=["OnTrac"])

        response = OrderService.create_order(organization, order_factory(), engine)

        assert response.status_code == http.HTTPStatus.UNPROCESSABLE_ENTITY

    def test_carrier_without_interface(
        self, db, make_organization, routable, order_factory
    ):
        engine = CarrierSelectionEngine(CarrierInterfaceRegistry())
        organization = make_organization(terminal_provider_order=["OnTrac"])

        response = OrderService.create_order(organization, order_factory(), engine)

        assert response.status_code == http.HTTPStatus.INTERNAL_SERVER_ERROR
        assert context_set_db_session_rollback.get() is True

    def test_carrier_rejection_is_passed_through(
        self, db, make_organization, routable, fake_carrier, order_factory
    ):
        rejecting = fake_carrier(
            CarrierName.ONTRAC,
            response=GenericResponseModel(
                status_code=http.HTTPStatus.UNPROCESSABLE_ENTITY,
                data={"error": "address not serviceable"},
                message="The carrier rejected the order",
            ),
        )
        engine = CarrierSelectionEngine(
            CarrierInterfaceRegistry({CarrierName.ONTRAC: rejecting})
        )
        organization = make_organization(terminal_provider_order=["OnTrac"])

        response = OrderService.create_order(organization, order_factory(), engine)

        assert response.status_code == http.HTTPStatus.UNPROCESSABLE_ENTITY
        assert response.status is False
        assert response.data == {"error": "address not serviceable"}
        assert context_set_db_session_rollback.get() is True

    def test_missing_tracking_sequence(
        self, db, make_organization, make_zip_zone, engine, order_factory
    ):
        make_zip_zone(carrier="OnTrac", zipcode="90210")
        organization = make_organization(terminal_provider_order=["OnTrac"])

        response = OrderService.create_order(organization, order_factory(), engine)

        assert response.status_code == http.HTTPStatus.INTERNAL_SERVER_ERROR
        assert response.message == "Unable to generate a tracking number."
