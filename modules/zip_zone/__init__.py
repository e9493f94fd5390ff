from .zip_zone_service import ZipZoneService
from .zip_zone_controller import zipcode_router, zip_zone_admin_router
