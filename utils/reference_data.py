"""
Loaders for the reference data the rate engine and the carrier selection
read: zone matrices and rate cards.
"""

import os
from typing import Dict, List, Optional

import pandas as pd
from sqlalchemy.orm import Session

from database.db import SessionLocal, time_now
from logger import logger

# models
from models import Rate_Card, Zone_Matrix

# characters that close a zone code
ZONE_CODE_TERMINATORS = ("*", "a", "e", "b", " ", "1")

# zones a flat rate card is copied to
FLAT_RATE_ZONES = range(1, 9)

OUNCES_PER_POUND = 16


def parse_matrix(matrix: str) -> List[str]:
    """
    Split a packed zone matrix line into zone codes.

    A zone code is a digit, optionally followed by one terminator character
    ('*', 'a', 'e', 'b', '1'); blanks only separate codes.

        parse_matrix("1*2a 34") == ["1*", "2a", "3", "4"]
    """
    result = []
    current = ""

    for char in matrix:
        if current and char not in ZONE_CODE_TERMINATORS:
            result.append(current)
            result.append(char)
            current = ""
        elif current:
            if char != " ":
                current += char
            result.append(current)
            current = ""
        elif char != " ":
            current = char

    if current:
        result.append(current)

    return result


def read_zone_matrix_file(file_path: str) -> Dict[str, List[str]]:
    """prefix -> zone codes, later lines win on duplicate prefixes"""
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"Zone matrix file not found: {file_path}")

    matrices = {}
    with open(file_path, "r") as matrix_file:
        for line in matrix_file:
            line = line.rstrip("\r\n")
            if not line.strip():
                continue
            matrices[line[:3]] = parse_matrix(line[3:])

    return matrices


def upload_zone_matrix(file_path: str, db: Optional[Session] = None) -> Dict:
    matrices = read_zone_matrix_file(file_path)

    owns_session = db is None
    db = db or SessionLocal()

    try:
        inserted_count = 0
        updated_count = 0

        logger.info(f"Starting zone matrix upload. Prefixes to process: {len(matrices)}")

        for prefix, matrix in matrices.items():
            existing = (
                db.query(Zone_Matrix).filter(Zone_Matrix.prefix == prefix).first()
            )

            if existing:
                existing.matrix = matrix
                existing.updated_at = time_now()
                updated_count += 1
            else:
                db.add(Zone_Matrix(prefix=prefix, matrix=matrix))
                inserted_count += 1

        if owns_session:
            db.commit()
        else:
            db.flush()

        logger.info(
            f"Zone matrix upload completed. Inserted: {inserted_count}, "
            f"Updated: {updated_count}"
        )

        return {
            "total_prefixes_in_file": len(matrices),
            "inserted": inserted_count,
            "updated": updated_count,
        }

    except Exception:
        db.rollback()
        raise

    finally:
        if owns_session:
            db.close()


def _parse_number(value: str, parser):
    try:
        number = parser(value)
    except (TypeError, ValueError):
        return None
    return None if pd.isna(number) else number


def _parse_timestamp(value: str, default):
    if not value:
        return default

    try:
        timestamp = pd.to_datetime(value, utc=True)
    except (TypeError, ValueError):
        raise ValueError(
            f'effectiveAt and expiresAt ("{value}") must be ISO compliant strings'
        )

    if pd.isna(timestamp):
        raise ValueError(
            f'effectiveAt and expiresAt ("{value}") must be ISO compliant strings'
        )

    return timestamp.to_pydatetime()


def build_rate_cards(
    df: pd.DataFrame, shipper_id: Optional[int] = None, flat: bool = False
) -> List[Dict]:
    """
    Turn rate card CSV rows into rate_card records.

    Weights are given in pounds and stored in ounces. A flat card is copied
    to every zone; a zoned card needs a zone on each row. Any bad row aborts
    the whole upload.
    """
    df.columns = df.columns.str.strip()

    missing_columns = [col for col in ("weight", "cost") if col not in df.columns]
    if missing_columns:
        raise ValueError(
            f"Missing required columns: {missing_columns}. "
            f"Found columns: {list(df.columns)}"
        )

    records = []
    for index, row in df.iterrows():
        raw_weight = str(row.get("weight", "")).strip()
        raw_cost = str(row.get("cost", "")).strip()

        pounds = _parse_number(raw_weight, lambda v: int(float(v)))
        cost = _parse_number(raw_cost, float)

        if not pounds or not cost:
            raise ValueError(
                f'row {index + 1}: weight ("{raw_weight}") and cost ("{raw_cost}") '
                "are required on each row"
            )

        card = {
            "shipper_id": shipper_id,
            "weight": pounds * OUNCES_PER_POUND,
            "cost": cost,
            "effective_at": _parse_timestamp(
                str(row.get("effectiveAt", "")).strip(), time_now()
            ),
            "expires_at": _parse_timestamp(str(row.get("expiresAt", "")).strip(), None),
        }

        if flat:
            records.extend({**card, "zone": zone} for zone in FLAT_RATE_ZONES)
            continue

        zone = _parse_number(str(row.get("zone", "")).strip(), lambda v: int(float(v)))
        if not zone:
            raise ValueError(
                f"row {index + 1}: zone is required on each row for zoned rates"
            )

        records.append({**card, "zone": zone})

    return records


def upload_rate_cards(
    csv_file_path: str,
    shipper_id: Optional[int] = None,
    flat: bool = False,
    db: Optional[Session] = None,
) -> Dict:
    if not os.path.exists(csv_file_path):
        raise FileNotFoundError(f"CSV file not found: {csv_file_path}")

    df = pd.read_csv(csv_file_path, dtype=str, keep_default_na=False)
    records = build_rate_cards(df, shipper_id=shipper_id, flat=flat)

    owns_session = db is None
    db = db or SessionLocal()

    try:
        db.add_all([Rate_Card(**record) for record in records])

        if owns_session:
            db.commit()
        else:
            db.flush()

        logger.info(
            f"Done uploading rate cards. Rows in file: {len(df)}, "
            f"Inserted: {len(records)}"
        )

        return {"total_rows_in_file": len(df), "inserted": len(records)}

    except Exception:
        db.rollback()
        raise

    finally:
        if owns_session:
            db.close()
