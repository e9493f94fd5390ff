import http
import math
from typing import Optional

from sqlalchemy.exc import DatabaseError

from context_manager.context import context_org_data
from logger import logger

# schema
from schema.base import GenericResponseModel
from modules.organization.organization_schema import OrganizationModel
from modules.orders.order_schema import OrderRequestModel
from modules.rate.rate_schema import RateResponseModel, RateQuoteResponseModel

# services
from modules.rate_card import RateCardService
from modules.zone_matrix import ZoneMatrixLookup

# data
from data.shipping_constants import DIM_DIVISOR

# utils
from utils.exceptions import ZoneMatrixError


def get_dim_weight(length, width, height) -> float:
    return (float(length) * float(width) * float(height)) / DIM_DIVISOR


def decorate_cost(cost):
    if cost is None:
        return {"cost": None, "dollar_cost": None}

    formatted = "{:.2f}".format(float(cost))
    return {"cost": formatted, "dollar_cost": "$" + formatted}


class RateService:
    @staticmethod
    def compute_rate(
        organization: OrganizationModel,
        order: OrderRequestModel,
        zone_lookup: Optional[ZoneMatrixLookup] = None,
    ) -> RateResponseModel:
        zone_lookup = zone_lookup or ZoneMatrixLookup()

        # the matrix row is picked by the destination prefix
        zone = zone_lookup.resolve_zone(order.to_address.zip, order.from_address.zip)

        parcel = order.parcel
        weight = float(parcel.weight)
        dim_weight = get_dim_weight(parcel.length, parcel.width, parcel.height)

        # ties are billed on the declared weight
        use_dim_weight = dim_weight > weight
        billable_weight = math.ceil(dim_weight if use_dim_weight else weight)

        cost = RateCardService.get_cost(
            organization.shipper_seq_num, billable_weight, zone
        )

        return RateResponseModel(
            **decorate_cost(cost),
            billable_weight=billable_weight,
            zone=zone,
            use_dim_weight=use_dim_weight,
        )

    @staticmethod
    def get_rate(
        organization: OrganizationModel, order: OrderRequestModel
    ) -> GenericResponseModel:
        try:
            rate = RateService.compute_rate(organization, order)

            logger.info(
                extra=context_org_data.get(),
                msg="rate computed: {}".format(rate.model_dump()),
            )

            return GenericResponseModel(
                status_code=http.HTTPStatus.OK,
                status=True,
                data=RateQuoteResponseModel(**order.model_dump(), rate=rate),
                message="Rate fetched successfully",
            )

        except ZoneMatrixError as e:
            logger.error(
                extra=context_org_data.get(),
                msg="Zone matrix integrity error: {}".format(str(e)),
            )
            return GenericResponseModel(
                status_code=http.HTTPStatus.INTERNAL_SERVER_ERROR,
                message="The zone matrix could not be read for this shipment.",
            )

        except DatabaseError as e:
            logger.error(
                extra=context_org_data.get(),
                msg="Error computing rate: {}".format(str(e)),
            )
            return GenericResponseModel(
                status_code=http.HTTPStatus.INTERNAL_SERVER_ERROR,
                message="An error occurred while fetching the rate.",
            )
