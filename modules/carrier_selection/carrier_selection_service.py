from typing import Callable, Iterable, Optional

from context_manager.context import context_org_data
from logger import logger

# schema
from modules.organization.organization_schema import OrganizationModel
from modules.orders.order_schema import OrderRequestModel
from modules.zip_zone.zip_zone_schema import (
    EligibilityTarget,
    TobaccoRequirement,
    ZipZoneModel,
)
from modules.carrier_selection.carrier_selection_schema import FactSet

# service
from modules.zip_zone import ZipZoneService

# data
from data.carrier_constants import ACTIVE_CARRIERS, CarrierName
from data.shipping_constants import TOBACCO

# utils
from config import FORCE_TOBACCO_SHIPMENTS


def resolve_tobacco(
    organization: OrganizationModel,
    order: OrderRequestModel,
    force_tobacco_shipments: bool = FORCE_TOBACCO_SHIPMENTS,
) -> TobaccoRequirement:
    if order.controlled_substance == TOBACCO:
        return TobaccoRequirement.REQUIRED

    if force_tobacco_shipments and organization.settings.tobacco:
        return TobaccoRequirement.REQUIRED

    return TobaccoRequirement.FORBIDDEN


class CarrierSelectionEngine:
    """
    Chooses the carrier for an order.

    Every active carrier is asked whether it can deliver the parcel, then the
    organization's terminal provider order is walked and the first carrier
    with a matching zip zone wins.
    """

    def __init__(
        self,
        carrier_interfaces,
        check_eligibility: Callable = ZipZoneService.check_eligibility,
        force_tobacco_shipments: bool = FORCE_TOBACCO_SHIPMENTS,
        carriers: Iterable[CarrierName] = ACTIVE_CARRIERS,
    ):
        self.carrier_interfaces = carrier_interfaces
        self.check_eligibility = check_eligibility
        self.force_tobacco_shipments = force_tobacco_shipments
        self.carriers = tuple(carriers)

    def build_target(
        self, organization: OrganizationModel, order: OrderRequestModel
    ) -> EligibilityTarget:
        return EligibilityTarget(
            zipcode=order.to_address.zip,
            weight=order.parcel.weight,
            shipper_id=organization.shipper_seq_num,
            tobacco=resolve_tobacco(
                organization, order, self.force_tobacco_shipments
            ),
        )

    def build_fact_set(self, target: EligibilityTarget) -> FactSet:
        # every carrier is evaluated, the priority walk happens afterwards
        return {
            carrier: self.check_eligibility(carrier, target)
            for carrier in self.carriers
        }

    @staticmethod
    def check_carriers(ordered_carriers, facts: FactSet) -> Optional[ZipZoneModel]:
        for carrier in ordered_carriers:
            carrier_name = CarrierName.parse(carrier)
            if carrier_name is None:
                logger.warning(
                    extra=context_org_data.get(),
                    msg=f"Unknown carrier {carrier} in terminal provider order",
                )
                continue

            zip_zone = facts.get(carrier_name)
            if zip_zone is not None:
                return zip_zone

        return None

    def select_zip_zone(
        self, organization: OrganizationModel, order: OrderRequestModel
    ) -> Optional[ZipZoneModel]:
        if not organization.terminal_provider_order:
            return None

        target = self.build_target(organization, order)
        facts = self.build_fact_set(target)

        zip_zone = self.check_carriers(organization.terminal_provider_order, facts)

        logger.info(
            extra=context_org_data.get(),
            msg="carrier selected for {}: {}".format(
                target.zipcode, zip_zone.carrier if zip_zone else "none"
            ),
        )
        return zip_zone

    def select_carrier(
        self, organization: OrganizationModel, order: OrderRequestModel
    ) -> Optional[str]:
        zip_zone = self.select_zip_zone(organization, order)
        return zip_zone.carrier if zip_zone else None

    def interface_for(self, carrier):
        return self.carrier_interfaces.get_interface(carrier)
