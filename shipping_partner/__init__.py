from .carrier_interface import CarrierInterface, HttpCarrierInterface
from .registry import CarrierInterfaceRegistry, build_carrier_registry
