from enum import Enum


class CarrierName(str, Enum):
    AXLEHIRE = "Axlehire"
    CAPITAL_EXPRESS = "CAPE"
    CS_LOGISTICS = "CSL"
    DELIVER_IT = "DI"
    DHL_ECOMMERCE = "DHLeCommerce"
    EXPEDITED_DELIVERY = "EXP-01"
    HACKBARTH = "HKB"
    JET = "JTL"
    JST = "JST"
    LASERSHIP = "LaserShip"
    LSO = "LSO"
    MERCURY = "MERC"
    MICHAELS_MESSENGER_SERVICE = "MMES"
    NEXT_DAY_EXPRESS = "NXDY"
    ONTRAC = "OnTrac"
    PARCEL_PREP = "ParcelPrep"
    PILLOW_LOGISTICS = "PIL"
    PROMED = "PRMD"
    QUICK_COURIER = "QUICK"
    SONIC = "SONIC"
    UDS = "UDS"
    VETERANS = "VET"
    ZIP_EXPRESS = "ZIP"
    STAT = "STAT"

    @classmethod
    def parse(cls, value):
        """Return the member for value, or None when it is not a known carrier."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return None


# registered but not routed to
DISABLED_CARRIERS = frozenset({CarrierName.DHL_ECOMMERCE})

# evaluation order of the eligibility fan-out
ACTIVE_CARRIERS = tuple(
    carrier for carrier in CarrierName if carrier not in DISABLED_CARRIERS
)
