from .api_router import CommonRouter, AdminRouter
from .default_router import DefaultRouter
from .status_router import StatusRouter
