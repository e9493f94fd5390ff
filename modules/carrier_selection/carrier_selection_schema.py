from typing import Dict, Optional

from data.carrier_constants import CarrierName
from modules.zip_zone.zip_zone_schema import ZipZoneModel

# one eligibility answer per active carrier, None when it cannot deliver
FactSet = Dict[CarrierName, Optional[ZipZoneModel]]
