from contextvars import ContextVar
from fastapi import Depends
from sqlalchemy.orm import Session
from logger import logger

# models
from database.db import get_db

# defining the context variables to store different types of required data

context_db_session: ContextVar[Session] = ContextVar("db_session", default=None)
context_org_data: ContextVar[object] = ContextVar("org_data", default=None)
context_set_db_session_rollback: ContextVar[bool] = ContextVar(
    "set_db_session_rollback", default=False
)


# whenever an api is hit, define the context variables for it
async def build_request_context(db: Session = Depends(get_db)):
    context_db_session.set(db)
    logger.info(msg="REQUEST_INITIATED")


# get the same session everywhere
# the db session is stored in context at the time of the building request context
def get_db_session() -> Session:
    session = context_db_session.get()

    return session


def get_org_data():
    """
    The organization resolved for the current request, or None outside of an
    authenticated request.
    """
    org_data = context_org_data.get()
    if org_data is None or not hasattr(org_data, "shipper_seq_num"):
        return None
    return org_data
