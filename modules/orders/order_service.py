import http
from typing import Any, Dict

from sqlalchemy.exc import DatabaseError

from context_manager.context import (
    context_org_data,
    context_set_db_session_rollback,
    get_db_session,
)
from logger import logger

# schema
from schema.base import GenericResponseModel
from modules.organization.organization_schema import OrganizationModel
from modules.orders.order_schema import OrderRequestModel, OrderResponseModel

# service
from modules.carrier_selection import CarrierSelectionEngine
from modules.rate import RateService
from modules.tracking import TrackingNumber

# data
from data.shipping_constants import TOBACCO

# utils
from utils.exceptions import CarrierInterfaceError, SequenceError, ZoneMatrixError
from config import FORCE_TOBACCO_SHIPMENTS


def normalize_order(
    organization: OrganizationModel,
    order: OrderRequestModel,
    force_tobacco_shipments: bool = FORCE_TOBACCO_SHIPMENTS,
) -> OrderRequestModel:
    """Orders from forced tobacco shippers are tobacco unless declared otherwise."""
    if (
        order.controlled_substance is None
        and force_tobacco_shipments
        and organization.settings.tobacco
    ):
        return order.model_copy(update={"controlled_substance": TOBACCO})
    return order


def build_carrier_params(order: OrderRequestModel, tracking_number) -> Dict[str, Any]:
    params = order.model_dump(mode="json")
    params["tn"] = str(tracking_number)
    return params


class OrderService:
    @staticmethod
    def create_order(
        organization: OrganizationModel,
        order: OrderRequestModel,
        selection_engine: CarrierSelectionEngine,
    ) -> GenericResponseModel:
        try:
            order = normalize_order(
                organization, order, selection_engine.force_tobacco_shipments
            )
            zipcode = order.to_address.zip

            if (
                order.controlled_substance == TOBACCO
                and order.to_address.business
                and not organization.settings.tobacco_ship_to_business
            ):
                return GenericResponseModel(
                    status_code=http.HTTPStatus.UNPROCESSABLE_ENTITY,
                    message="Tobacco shipments to business addresses are not allowed",
                )

            zip_zone = selection_engine.select_zip_zone(organization, order)
            if zip_zone is None:
                logger.info(
                    extra=context_org_data.get(),
                    msg=f"no carrier can deliver to {zipcode}",
                )
                return GenericResponseModel(
                    status_code=http.HTTPStatus.UNPROCESSABLE_ENTITY,
                    message=f"Zipcode {zipcode} is not eligible",
                )

            interface = selection_engine.interface_for(zip_zone.carrier)

            rate = RateService.compute_rate(organization, order)

            db = get_db_session()
            tracking_number = TrackingNumber.generate(
                db, organization.shipper_seq_num
            )

            carrier_response: GenericResponseModel = interface.create_order(
                zip_zone, build_carrier_params(order, tracking_number), organization
            )

            if not carrier_response.status:
                context_set_db_session_rollback.set(True)
                logger.error(
                    extra=context_org_data.get(),
                    msg="{} did not create the order: {}".format(
                        zip_zone.carrier, carrier_response.message
                    ),
                )
                return GenericResponseModel(
                    status_code=carrier_response.status_code,
                    data=carrier_response.data,
                    message=carrier_response.message,
                )

            return GenericResponseModel(
                status_code=http.HTTPStatus.CREATED,
                status=True,
                data=OrderResponseModel(
                    carrier=zip_zone.carrier,
                    tracking_number=str(tracking_number),
                    zipcode=zipcode,
                    carrier_response=carrier_response.data,
                    rate=rate.model_dump(),
                ),
                message="Order created Successfully",
            )

        except CarrierInterfaceError as e:
            context_set_db_session_rollback.set(True)
            logger.error(
                extra=context_org_data.get(),
                msg="Carrier interface error: {}".format(str(e)),
            )
            return GenericResponseModel(
                status_code=http.HTTPStatus.INTERNAL_SERVER_ERROR,
                message="The selected carrier is not available.",
            )

        except ZoneMatrixError as e:
            context_set_db_session_rollback.set(True)
            logger.error(
                extra=context_org_data.get(),
                msg="Zone matrix integrity error: {}".format(str(e)),
            )
            return GenericResponseModel(
                status_code=http.HTTPStatus.INTERNAL_SERVER_ERROR,
                message="The zone matrix could not be read for this shipment.",
            )

        except SequenceError as e:
            context_set_db_session_rollback.set(True)
            logger.error(
                extra=context_org_data.get(),
                msg="Tracking number sequence error: {}".format(str(e)),
            )
            return GenericResponseModel(
                status_code=http.HTTPStatus.INTERNAL_SERVER_ERROR,
                message="Unable to generate a tracking number.",
            )

        except DatabaseError as e:
            context_set_db_session_rollback.set(True)
            logger.error(
                extra=context_org_data.get(),
                msg="Error creating order: {}".format(str(e)),
            )
            return GenericResponseModel(
                status_code=http.HTTPStatus.INTERNAL_SERVER_ERROR,
                message="An error occurred while creating the order.",
            )
