from .zone_matrix_service import ZoneMatrixLookup, parse_zone, zip_to_index, zip_to_prefix
