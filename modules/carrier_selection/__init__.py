from .carrier_selection_service import CarrierSelectionEngine, resolve_tobacco
