import math
from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import or_

from context_manager.context import get_db_session
from database import time_now
from logger import logger

# models
from models import Rate_Card


# weights are stored as whole ounces; never round in the shipper's favour
def normalize_weight(weight) -> int:
    return math.ceil(float(weight))


class RateCardService:
    @staticmethod
    def get_cost(
        shipper_id: Optional[int],
        weight,
        zone: Optional[int],
        now: Optional[datetime] = None,
    ) -> Optional[Decimal]:
        """
        Price a (shipper, weight, zone) triple.

        Uses the currently effective card row with the smallest weight at or
        above the normalized weight. A shipper without a matching row falls
        back to the default card. None means the cost is unknown.
        """
        if zone is None:
            return None

        weight = normalize_weight(weight)
        now = now or time_now()

        shipper_filter = (
            Rate_Card.shipper_id.is_(None)
            if shipper_id is None
            else Rate_Card.shipper_id == shipper_id
        )

        db = get_db_session()
        rate_card = (
            db.query(Rate_Card)
            .filter(
                shipper_filter,
                Rate_Card.zone == zone,
                Rate_Card.weight >= weight,
                Rate_Card.effective_at <= now,
                or_(Rate_Card.expires_at.is_(None), Rate_Card.expires_at >= now),
                Rate_Card.is_deleted.is_(False),
            )
            .order_by(Rate_Card.weight.asc(), Rate_Card.effective_at.desc())
            .first()
        )

        if rate_card is not None:
            logger.debug(
                msg=f"Rate card found for shipper {shipper_id}: {rate_card.cost}"
            )
            return rate_card.cost

        if shipper_id is not None:
            logger.debug(msg=f"No rate cards for shipper {shipper_id}, trying default")
            return RateCardService.get_cost(None, weight, zone, now=now)

        logger.warning(msg=f"No default rate for weight {weight} zone {zone}")
        return None
