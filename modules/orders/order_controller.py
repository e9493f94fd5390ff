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
from .order_service import OrderService


# Creating the router for orders
order_router = APIRouter(tags=["orders"])


# create a new order
@order_router.post(
    "/order",
    status_code=http.HTTPStatus.CREATED,
    response_model=GenericResponseModel,
)
@limiter.limit(RATE_LIMIT)
async def create_order(request: Request, order: OrderRequestModel):
    try:
        response: GenericResponseModel = OrderService.create_order(
            organization=get_org_data(),
            order=order,
            selection_engine=request.app.state.selection_engine,
        )
        return build_api_response(response)

    except Exception as e:
        return build_api_response(
            GenericResponseModel(
                status_code=http.HTTPStatus.INTERNAL_SERVER_ERROR,
                data=str(e),
                message="An error occurred while creating the order.",
            )
        )
