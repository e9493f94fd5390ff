import http
from fastapi import APIRouter, Request

# schema
from schema.base import GenericResponseModel
from modules.orders.order_schema import OrderRequestModel

# utils
from utils.response_handler import build_api_response
from context_manager.context import get_org_data
from limiter import limiter
from config import RATE_LIMIT

# services
from .rate_service import RateService


rate_router = APIRouter(tags=["rate"])


@rate_router.post(
    "/rate",
    status_code=http.HTTPStatus.OK,
    response_model=GenericResponseModel,
)
@limiter.limit(RATE_LIMIT)
async def get_rate(request: Request, order: OrderRequestModel):
    try:
        response: GenericResponseModel = RateService.get_rate(
            organization=get_org_data(), order=order
        )
        return build_api_response(response)

    except Exception as e:
        return build_api_response(
            GenericResponseModel(
                status_code=http.HTTPStatus.INTERNAL_SERVER_ERROR,
                data=str(e),
                message="An error occurred while calculating the rate.",
            )
        )
