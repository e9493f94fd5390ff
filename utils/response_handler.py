from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from schema.base import GenericResponseModel

from context_manager.context import get_org_data

from logger import logger


def _shipper_context():
    organization = get_org_data()
    return {"shipper": organization.shipper_seq_num} if organization else None


# build a proper api response from the Generic response sent to it
def build_api_response(generic_response: GenericResponseModel) -> JSONResponse:
    try:
        # the status code travels as the http status, not in the body
        response_json = jsonable_encoder(generic_response, exclude={"status_code"})

        res = JSONResponse(
            status_code=generic_response.status_code, content=response_json
        )

        logger.info(
            extra=_shipper_context(),
            msg="build_api_response: Generated Response with status_code:"
            + f"{generic_response.status_code}",
        )
        return res

    except Exception as e:
        logger.error(
            extra=_shipper_context(),
            msg=f"Exception in build_api_response error : {e}",
        )

        return JSONResponse(
            status_code=generic_response.status_code,
            content={"message": str(e), "status": False},
        )
