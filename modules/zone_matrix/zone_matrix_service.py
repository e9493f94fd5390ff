import re
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from context_manager.context import get_db_session
from logger import logger

# models
from models import Zone_Matrix

# utils
from utils.exceptions import ZoneMatrixError, ZoneMatrixIndexError


ZONE_PATTERN = re.compile(r"\s*(\d)")


def zip_to_prefix(zipcode: str) -> str:
    return str(zipcode).strip()[:3]


# the matrix is stored zero based: index 0 belongs to prefix 001
def zip_to_index(zipcode: str) -> int:
    return int(zip_to_prefix(zipcode)) - 1


def parse_zone(entry) -> int:
    """
    Zone codes carry USPS routing markers after the zone digit ("5*", "1a"),
    only the leading digit is the zone.
    """
    match = ZONE_PATTERN.match(str(entry))
    if match is None:
        raise ZoneMatrixError(f"Malformed zone code {entry!r}")
    return int(match.group(1))


class ZoneMatrixLookup:
    """
    Resolves the shipping zone between two zip codes.

    Meant to live for a single request: matrix rows are memoized per prefix
    so repeated lookups from the same prefix hit the database once.
    """

    def __init__(self, db: Optional[Session] = None):
        self._db = db
        self._rows: Dict[str, Optional[List[str]]] = {}

    @property
    def db(self) -> Session:
        return self._db or get_db_session()

    def get_row(self, prefix: str) -> Optional[List[str]]:
        if prefix not in self._rows:
            zone_matrix = (
                self.db.query(Zone_Matrix)
                .filter(
                    Zone_Matrix.prefix == prefix,
                    Zone_Matrix.is_deleted.is_(False),
                )
                .first()
            )
            self._rows[prefix] = zone_matrix.matrix if zone_matrix else None
        return self._rows[prefix]

    def resolve_zone(self, from_zip: str, to_zip: str) -> Optional[int]:
        """
        Look up the row of from_zip's prefix and read the entry for to_zip's
        prefix. Returns None when there is no row for the prefix.

        Raises ZoneMatrixIndexError when the row has no entry for to_zip.
        """
        from_prefix = zip_to_prefix(from_zip)
        zone_index = zip_to_index(to_zip)

        matrix = self.get_row(from_prefix)
        if matrix is None:
            logger.info(msg=f"No zone matrix row for prefix {from_prefix}")
            return None

        if zone_index < 0 or zone_index >= len(matrix):
            raise ZoneMatrixIndexError(from_prefix, zone_index, len(matrix))

        zone = parse_zone(matrix[zone_index])
        logger.debug(msg=f"zone resolved {from_prefix} -> {to_zip}: {zone}")
        return zone
