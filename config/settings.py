"""
Service configuration.

Values are read from the environment (a local .env file is loaded first).
"""

import os
import json
from typing import Dict
from urllib.parse import quote_plus

from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() == "true"


# Database
# DATABASE_URL wins over the individual postgres settings
DATABASE_URL = os.getenv("DATABASE_URL") or "postgresql://%s:%s@%s:%s/%s" % (
    os.getenv("db_user"),
    quote_plus(os.getenv("db_password", "")),
    os.getenv("db_host"),
    os.getenv("db_port"),
    os.getenv("db_name"),
)

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG").upper()
LOG_FILE = os.getenv("LOG_FILE", "./logger/log.log")

# Application
# when enabled, every shipment of a tobacco-enabled shipper is routed as tobacco
FORCE_TOBACCO_SHIPMENTS = _env_flag("FORCE_TOBACCO_SHIPMENTS", "true")

# Public rate quote limit, slowapi syntax
RATE_LIMIT = os.getenv("RATE_LIMIT", "200/1second")
RATE_LIMIT_ENABLED = _env_flag("RATE_LIMIT_ENABLED", "true")

# shared secret for the internal admin endpoints
INTERNAL_API_KEY = os.getenv("INTERNAL_API_KEY", "")

# Carrier integrations
CARRIER_API_URLS: Dict[str, str] = json.loads(os.getenv("CARRIER_API_URLS") or "{}")
CARRIER_API_TOKEN = os.getenv("CARRIER_API_TOKEN", "")
CARRIER_API_TIMEOUT = float(os.getenv("CARRIER_API_TIMEOUT", "30"))
