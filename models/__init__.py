from .organization import Organization

# reference data read by the eligibility and rate engines
from .zip_zone import Zip_Zone
from .zone_matrix import Zone_Matrix
from .rate_card import Rate_Card

# tracking number counters
from .sequence import Sequence
