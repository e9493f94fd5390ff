import http
from fastapi import APIRouter
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import DatabaseError

from database.db import db_engine, get_pool_status
from logger import logger

StatusRouter = APIRouter(tags=["health_checks"])


# liveness
@StatusRouter.get("/status", status_code=http.HTTPStatus.OK)
async def status_check():
    return JSONResponse(status_code=http.HTTPStatus.OK, content={"status": "OK"})


# readiness, needs the reference data store
@StatusRouter.get("/deepstatus", status_code=http.HTTPStatus.OK)
async def deep_status_check():
    try:
        with db_engine.connect() as connection:
            result = connection.execute(text("SELECT 'true'")).fetchone()
            is_db_ok = result[0] == "true"

    except DatabaseError as e:
        logger.error(msg="deepstatus: database check failed: {}".format(str(e)))
        is_db_ok = False

    if not is_db_ok:
        return JSONResponse(
            status_code=http.HTTPStatus.INTERNAL_SERVER_ERROR,
            content={"error": "db not connected"},
        )

    return JSONResponse(
        status_code=http.HTTPStatus.OK,
        content={"db": is_db_ok, "pool": get_pool_status()},
    )
