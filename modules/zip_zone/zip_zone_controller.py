import http
from typing import List

from fastapi import APIRouter, Query

# schema
from schema.base import GenericResponseModel
from modules.zip_zone.zip_zone_schema import ZipZoneListParamsModel

# utils
from utils.response_handler import build_api_response
from context_manager.context import get_org_data

# services
from .zip_zone_service import ZipZoneService


zipcode_router = APIRouter(tags=["zipcodes"])

# internal console routes, mounted behind the internal api key
zip_zone_admin_router = APIRouter(prefix="/admin", tags=["admin_zip_zones"])


# zip codes the calling shipper has its own routing rules for
@zipcode_router.get(
    "/zipcodes",
    status_code=http.HTTPStatus.OK,
    response_model=GenericResponseModel,
)
async def get_zip_codes():
    try:
        organization = get_org_data()
        response: GenericResponseModel = ZipZoneService.get_zip_codes(
            shipper_id=organization.shipper_seq_num
        )
        return build_api_response(response)

    except Exception as e:
        return build_api_response(
            GenericResponseModel(
                status_code=http.HTTPStatus.INTERNAL_SERVER_ERROR,
                data=str(e),
                message="An error occurred while getting the zip codes.",
            )
        )


@zip_zone_admin_router.get(
    "/zip-zones",
    status_code=http.HTTPStatus.OK,
    response_model=GenericResponseModel,
)
async def get_zip_zones(
    count: int = Query(default=100, ge=1, le=1000),
    start: int = Query(default=0, ge=0),
    search_word: str = "",
    carrier: List[str] = Query(default=[]),
):
    try:
        response: GenericResponseModel = ZipZoneService.get_zip_zones(
            ZipZoneListParamsModel(
                count=count, start=start, search_word=search_word, carrier=carrier
            )
        )
        return build_api_response(response)

    except Exception as e:
        return build_api_response(
            GenericResponseModel(
                status_code=http.HTTPStatus.INTERNAL_SERVER_ERROR,
                data=str(e),
                message="An error occurred while getting the zip zones.",
            )
        )


@zip_zone_admin_router.get(
    "/zip-zones/{zip_zone_id}",
    status_code=http.HTTPStatus.OK,
    response_model=GenericResponseModel,
)
async def get_zip_zone(zip_zone_id: int):
    try:
        response: GenericResponseModel = ZipZoneService.get_zip_zone(zip_zone_id)
        return build_api_response(response)

    except Exception as e:
        return build_api_response(
            GenericResponseModel(
                status_code=http.HTTPStatus.INTERNAL_SERVER_ERROR,
                data=str(e),
                message="An error occurred while getting the zip zone.",
            )
        )


@zip_zone_admin_router.get(
    "/terminal-providers",
    status_code=http.HTTPStatus.OK,
    response_model=GenericResponseModel,
)
async def get_terminal_providers():
    try:
        response: GenericResponseModel = ZipZoneService.get_terminal_providers()
        return build_api_response(response)

    except Exception as e:
        return build_api_response(
            GenericResponseModel(
                status_code=http.HTTPStatus.INTERNAL_SERVER_ERROR,
                data=str(e),
                message="An error occurred while getting the terminal providers.",
            )
        )
