from .settings import (
    DATABASE_URL,
    LOG_LEVEL,
    LOG_FILE,
    FORCE_TOBACCO_SHIPMENTS,
    RATE_LIMIT,
    RATE_LIMIT_ENABLED,
    INTERNAL_API_KEY,
    CARRIER_API_URLS,
    CARRIER_API_TOKEN,
    CARRIER_API_TIMEOUT,
)
