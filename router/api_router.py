import hmac

from fastapi import APIRouter, Depends, HTTPException
from fastapi.security import APIKeyHeader

from context_manager.context import build_request_context, context_org_data
from logger import logger

# services
from modules.organization import OrganizationService

# routers
from modules.rate import rate_router
from modules.orders.order_controller import order_router
from modules.zip_zone import zipcode_router, zip_zone_admin_router

from config import INTERNAL_API_KEY

api_key_header = APIKeyHeader(name="X-API-Key", auto_error=False)
internal_api_key_header = APIKeyHeader(name="X-Internal-Api-Key", auto_error=False)


async def get_current_organization(api_key: str = Depends(api_key_header)):
    """
    Resolve the calling shipper from its api key and store it in the
    request context for the services.
    """
    if not api_key:
        raise HTTPException(
            status_code=401,
            detail={"message": "Missing api key", "status": False},
        )

    organization = OrganizationService.get_by_api_key(api_key)

    if organization is None:
        logger.warning(msg="Rejected request with an unknown api key")
        raise HTTPException(
            status_code=401,
            detail={"message": "Invalid api key", "status": False},
        )

    context_org_data.set(organization)
    return organization


async def verify_internal_api_key(api_key: str = Depends(internal_api_key_header)):
    # an unset key keeps the admin routes closed
    if not INTERNAL_API_KEY or not api_key:
        raise HTTPException(
            status_code=401,
            detail={"message": "Missing internal api key", "status": False},
        )

    if not hmac.compare_digest(api_key, INTERNAL_API_KEY):
        logger.warning(msg="Rejected admin request with a wrong internal api key")
        raise HTTPException(
            status_code=403,
            detail={"message": "Invalid internal api key", "status": False},
        )


# create a comming master router for all the routes in the service
CommonRouter = APIRouter(
    prefix="/api/v1",
    dependencies=[Depends(build_request_context), Depends(get_current_organization)],
)

# internal console routes
AdminRouter = APIRouter(
    prefix="/api/v1",
    dependencies=[Depends(build_request_context), Depends(verify_internal_api_key)],
)


# add all the routes to the master router
CommonRouter.include_router(rate_router)
CommonRouter.include_router(order_router)
CommonRouter.include_router(zipcode_router)

AdminRouter.include_router(zip_zone_admin_router)
