import uvicorn
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from slowapi.errors import RateLimitExceeded

from logger import logger
from utils.exception_handler import (
    handle_validation_error,
    handle_request_validation_error,
    custom_http_exception_handler,
)
from limiter import limiter, rate_limit_handler

from router import CommonRouter, AdminRouter, DefaultRouter, StatusRouter

from database.db import init_models
from modules.carrier_selection import CarrierSelectionEngine
from shipping_partner import build_carrier_registry

app = FastAPI(title="Parcel Broker")

# Routers
app.include_router(CommonRouter)
app.include_router(AdminRouter)
app.include_router(StatusRouter)
app.include_router(DefaultRouter)

# Exception handlers
app.add_exception_handler(ValidationError, handle_validation_error)
app.add_exception_handler(RequestValidationError, handle_request_validation_error)
app.add_exception_handler(HTTPException, custom_http_exception_handler)
app.add_exception_handler(RateLimitExceeded, rate_limit_handler)

# Rate limiting
app.state.limiter = limiter

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# -------------------------------
# Startup event
# -------------------------------
@app.on_event("startup")
def startup_event():
    init_models()

    app.state.carrier_interfaces = build_carrier_registry()
    app.state.selection_engine = CarrierSelectionEngine(app.state.carrier_interfaces)
    logger.info("Carrier selection engine ready")


if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
