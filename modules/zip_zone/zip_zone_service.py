import http
from typing import List, Optional

from pydantic import ValidationError
from sqlalchemy import func
from sqlalchemy.exc import DatabaseError

from context_manager.context import context_org_data, get_db_session
from logger import logger

# models
from models import Zip_Zone

# schema
from schema.base import GenericResponseModel
from modules.zip_zone.zip_zone_schema import (
    EligibilityTarget,
    TobaccoRequirement,
    ZipZoneModel,
    ZipZoneListParamsModel,
    ZipZoneListResponseModel,
    TerminalProviderModel,
)

# data
from data.carrier_constants import CarrierName

# utils
from utils.exceptions import InvalidCarrierError


def coerce_target(target) -> Optional[EligibilityTarget]:
    if isinstance(target, EligibilityTarget):
        return target

    if not isinstance(target, dict):
        return None

    target = dict(target)
    # plain records carry tobacco as an optional flag
    tobacco = target.get("tobacco")
    if tobacco is None or isinstance(tobacco, bool):
        target["tobacco"] = TobaccoRequirement.from_flag(tobacco)

    try:
        return EligibilityTarget(**target)
    except ValidationError as e:
        logger.debug(msg="invalid eligibility target: {}".format(str(e)))
        return None


def tobacco_filter(requirement: TobaccoRequirement):
    if requirement == TobaccoRequirement.REQUIRED:
        return Zip_Zone.tobacco.is_(True)
    return Zip_Zone.tobacco.is_(None)


class ZipZoneService:
    @staticmethod
    def check_eligibility(carrier, target) -> Optional[ZipZoneModel]:
        """
        Find the rule that lets carrier deliver to the target.

        The shipper's own rules are tried before the default rules
        (shipper_id NULL); within each, the tightest max_weight that still
        fits the parcel wins.

        Raises InvalidCarrierError for an unknown carrier. A missing or
        unstructured target is not routable yet and yields None.
        """
        carrier_name = CarrierName.parse(carrier)
        if carrier_name is None:
            raise InvalidCarrierError(carrier)

        target = coerce_target(target)
        if target is None:
            logger.debug(msg=f"checkEligibility {carrier_name.value}: invalid target")
            return None

        db = get_db_session()

        def find(shipper_filter):
            return (
                db.query(Zip_Zone)
                .filter(
                    shipper_filter,
                    Zip_Zone.carrier == carrier_name.value,
                    Zip_Zone.zipcode == target.zipcode,
                    Zip_Zone.max_weight >= target.weight,
                    tobacco_filter(target.tobacco),
                    Zip_Zone.is_deleted.is_(False),
                )
                .order_by(Zip_Zone.max_weight.asc(), Zip_Zone.id.asc())
                .first()
            )

        zip_zone = None
        if target.shipper_id is not None:
            zip_zone = find(Zip_Zone.shipper_id == target.shipper_id)

        if zip_zone is None:
            zip_zone = find(Zip_Zone.shipper_id.is_(None))

        logger.debug(
            msg=f"zipZone determined for {carrier_name.value} {target.zipcode}: "
            + (str(zip_zone.id) if zip_zone else "none")
        )

        return zip_zone.to_model() if zip_zone else None

    @staticmethod
    def get_zip_codes_by_shipper(shipper_id: Optional[int]) -> List[str]:
        if shipper_id is None:
            return []

        db = get_db_session()
        rows = (
            db.query(Zip_Zone.zipcode)
            .filter(
                Zip_Zone.shipper_id == shipper_id,
                Zip_Zone.is_deleted.is_(False),
            )
            .distinct()
            .order_by(Zip_Zone.zipcode.asc())
            .all()
        )
        return [row.zipcode for row in rows]

    @staticmethod
    def get_zip_codes(shipper_id: Optional[int]) -> GenericResponseModel:
        try:
            zipcodes = ZipZoneService.get_zip_codes_by_shipper(shipper_id)
            return GenericResponseModel(
                status_code=http.HTTPStatus.OK,
                status=True,
                data={"zipcodes": zipcodes},
                message="Zip codes fetched successfully",
            )

        except DatabaseError as e:
            logger.error(
                extra=context_org_data.get(),
                msg="Error fetching zip codes: {}".format(str(e)),
            )
            return GenericResponseModel(
                status_code=http.HTTPStatus.INTERNAL_SERVER_ERROR,
                message="An error occurred while fetching the zip codes.",
            )

    @staticmethod
    def get_zip_zones(params: ZipZoneListParamsModel) -> GenericResponseModel:
        try:
            db = get_db_session()

            query = db.query(Zip_Zone).filter(
                Zip_Zone.carrier.in_(params.carrier),
                Zip_Zone.is_deleted.is_(False),
            )
            if params.search_word:
                query = query.filter(
                    Zip_Zone.zipcode.icontains(params.search_word, autoescape=True)
                )

            # one extra row tells whether another page exists
            zip_zones = (
                query.order_by(Zip_Zone.id.asc())
                .offset(params.start)
                .limit(params.count + 1)
                .all()
            )

            return GenericResponseModel(
                status_code=http.HTTPStatus.OK,
                status=True,
                data=ZipZoneListResponseModel(
                    zipzones=[item.to_model() for item in zip_zones[: params.count]],
                    has_more=len(zip_zones) > params.count,
                ),
                message="Zip zones fetched successfully",
            )

        except DatabaseError as e:
            logger.error(msg="Error fetching zip zones: {}".format(str(e)))
            return GenericResponseModel(
                status_code=http.HTTPStatus.INTERNAL_SERVER_ERROR,
                message="An error occurred while fetching the zip zones.",
            )

    @staticmethod
    def get_zip_zone(zip_zone_id: int) -> GenericResponseModel:
        try:
            zip_zone = Zip_Zone.get_by_id(zip_zone_id)

            if zip_zone is None:
                return GenericResponseModel(
                    status_code=http.HTTPStatus.NOT_FOUND,
                    message="Zip zone not found",
                )

            return GenericResponseModel(
                status_code=http.HTTPStatus.OK,
                status=True,
                data=zip_zone.to_model(),
                message="Zip zone fetched successfully",
            )

        except DatabaseError as e:
            logger.error(msg="Error fetching zip zone: {}".format(str(e)))
            return GenericResponseModel(
                status_code=http.HTTPStatus.INTERNAL_SERVER_ERROR,
                message="An error occurred while fetching the zip zone.",
            )

    @staticmethod
    def get_terminal_providers() -> GenericResponseModel:
        """Carriers with at least two rules, busiest first."""
        try:
            db = get_db_session()
            rule_count = func.count(Zip_Zone.id).label("count")
            rows = (
                db.query(Zip_Zone.carrier, rule_count)
                .filter(Zip_Zone.is_deleted.is_(False))
                .group_by(Zip_Zone.carrier)
                .having(func.count(Zip_Zone.id) >= 2)
                .order_by(rule_count.desc(), Zip_Zone.carrier.asc())
                .limit(100)
                .all()
            )

            return GenericResponseModel(
                status_code=http.HTTPStatus.OK,
                status=True,
                data=[
                    TerminalProviderModel(id=row.carrier, count=row.count)
                    for row in rows
                ],
                message="Terminal providers fetched successfully",
            )

        except DatabaseError as e:
            logger.error(msg="Error fetching terminal providers: {}".format(str(e)))
            return GenericResponseModel(
                status_code=http.HTTPStatus.INTERNAL_SERVER_ERROR,
                message="An error occurred while fetching the terminal providers.",
            )
