from .rate_service import RateService
from .rate_controller import rate_router
