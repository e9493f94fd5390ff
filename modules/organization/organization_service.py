from typing import Optional

from context_manager.context import get_db_session
from logger import logger

# models
from models import Organization

# schema
from modules.organization.organization_schema import OrganizationModel


class OrganizationService:
    @staticmethod
    def get_by_api_key(api_key: str) -> Optional[OrganizationModel]:
        if not api_key:
            return None

        db = get_db_session()
        organization = (
            db.query(Organization)
            .filter(
                Organization.api_key == api_key,
                Organization.is_deleted.is_(False),
            )
            .first()
        )

        if organization is None:
            logger.info(msg="No organization found for the supplied api key")
            return None

        return organization.to_model()
