from typing import Dict, Iterator, Mapping, Optional

from logger import logger

# data
from data.carrier_constants import CarrierName

# utils
from utils.exceptions import CarrierInterfaceError
from config import CARRIER_API_URLS, CARRIER_API_TOKEN, CARRIER_API_TIMEOUT

from .carrier_interface import CarrierInterface, HttpCarrierInterface


class CarrierInterfaceRegistry(Mapping):
    """Carrier -> interface map, built once at startup and passed around."""

    def __init__(self, interfaces: Optional[Dict[CarrierName, CarrierInterface]] = None):
        self._interfaces: Dict[CarrierName, CarrierInterface] = {}
        for carrier, interface in (interfaces or {}).items():
            self.register(carrier, interface)

    def register(self, carrier, interface: CarrierInterface):
        carrier_name = CarrierName.parse(carrier)
        if carrier_name is None:
            raise CarrierInterfaceError(carrier, "not a known carrier")
        self._interfaces[carrier_name] = interface

    def get_interface(self, carrier) -> CarrierInterface:
        try:
            return self[carrier]
        except KeyError:
            raise CarrierInterfaceError(carrier, "no carrier interface registered")

    def __getitem__(self, carrier) -> CarrierInterface:
        return self._interfaces[CarrierName.parse(carrier)]

    def __iter__(self) -> Iterator[CarrierName]:
        return iter(self._interfaces)

    def __len__(self) -> int:
        return len(self._interfaces)


def build_carrier_registry(
    api_urls: Dict[str, str] = CARRIER_API_URLS,
    token: str = CARRIER_API_TOKEN,
    timeout: float = CARRIER_API_TIMEOUT,
) -> CarrierInterfaceRegistry:
    registry = CarrierInterfaceRegistry()

    for carrier, base_url in api_urls.items():
        carrier_name = CarrierName.parse(carrier)
        if carrier_name is None:
            logger.warning(msg=f"Ignoring endpoint for unknown carrier {carrier}")
            continue
        registry.register(
            carrier_name,
            HttpCarrierInterface(carrier_name, base_url, token, timeout),
        )

    logger.info(
        msg="Carrier interfaces registered: {}".format(
            ", ".join(carrier.value for carrier in registry)
        )
    )
    return registry
