from .organization_schema import OrganizationModel, OrganizationSettings
from .organization_service import OrganizationService
