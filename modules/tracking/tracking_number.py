"""
Internal tracking numbers.

A tracking number is 17 Crockford base-32 characters:

    HHH SSS LL DDD NNNNN C

header, shipper, lane, days since TRACKING_NUMBER_ORIGIN_DATE, sequence
number and a Luhn mod 32 check character over everything before it.
"""

from datetime import date, datetime
from typing import Optional

from sqlalchemy.orm import Session

from database.db import time_now
from logger import logger

# models
from models import Sequence

# data
from data.shipping_constants import (
    TRACKING_NUMBER_HEADER,
    TRACKING_NUMBER_ORIGIN_DATE,
    TRACKING_NUMBER_SEQUENCE,
)

TRACKING_NUMBER_LENGTH = 17

CB32_ALPHABET = "0123456789ABCDEFGHJKMNPQRSTVWXYZ"

# characters accepted on input but never produced
CB32_ALIASES = {"O": "0", "I": "1", "L": "1"}

# field name -> (start, end) inside the tracking number
FIELDS = {
    "header": (0, 3),
    "shipper": (3, 6),
    "lane": (6, 8),
    "date": (8, 11),
    "seqnum": (11, 16),
}


def char_to_cb32(char: str) -> int:
    upper = char.upper()
    upper = CB32_ALIASES.get(upper, upper)
    if len(upper) != 1 or upper not in CB32_ALPHABET:
        raise ValueError(f"Invalid encoded B32 value: {char}")
    return CB32_ALPHABET.index(upper)


def cb32_to_char(value: int) -> str:
    if value < 0 or value >= len(CB32_ALPHABET):
        raise ValueError(f"Out of range: {value}")
    return CB32_ALPHABET[value]


def int_to_cb32(number: int, length: int) -> str:
    """Encode number in exactly length characters, zero padded."""
    if number < 0:
        raise ValueError(f"Out of range: {number}")

    chars = []
    remaining = number
    for _ in range(length):
        chars.append(cb32_to_char(remaining % 32))
        remaining //= 32

    if remaining > 0:
        raise ValueError(f"Out of range: {number}")

    return "".join(reversed(chars))


def cb32_to_int(text: str) -> int:
    number = 0
    for char in text:
        number = number * 32 + char_to_cb32(char)
    return number


def luhn_cb32(text: str) -> str:
    total = 0
    for position, char in enumerate(text):
        value = char_to_cb32(char)
        if position % 2 == 0:
            value *= 2
            if value > 31:
                value -= 31
        total += value
    return CB32_ALPHABET[(total * 31) % 32]


def set_check_digit(text: str) -> str:
    return text + luhn_cb32(text)


def check_cb32(text: str) -> bool:
    if len(text) < 2:
        return False
    try:
        return char_to_cb32(luhn_cb32(text[:-1])) == char_to_cb32(text[-1])
    except ValueError:
        return False


def days_since_origin(now: Optional[datetime] = None) -> int:
    now = now or time_now()
    return (now.date() - date.fromisoformat(TRACKING_NUMBER_ORIGIN_DATE)).days


class TrackingNumber:
    def __init__(self, header: str, shipper: int, lane: int, date: int, seqnum: int):
        self.header = header
        self.shipper = shipper
        self.lane = lane
        self.date = date
        self.seqnum = seqnum
        self.value = self.compose(header, shipper, lane, date, seqnum)

    def __str__(self):
        return self.value

    def __repr__(self):
        return f"TrackingNumber({self.value!r})"

    def __eq__(self, other):
        if isinstance(other, TrackingNumber):
            return self.value == other.value
        return NotImplemented

    def __hash__(self):
        return hash(self.value)

    @staticmethod
    def compose(header: str, shipper: int, lane: int, date: int, seqnum: int) -> str:
        if len(header) != 3 or not all(c in CB32_ALPHABET for c in header):
            raise ValueError(f"Invalid tracking number header: {header}")

        return set_check_digit(
            header
            + int_to_cb32(shipper, 3)
            + int_to_cb32(lane, 2)
            + int_to_cb32(date, 3)
            + int_to_cb32(seqnum, 5)
        )

    @staticmethod
    def decompose(value: str) -> dict:
        if not (
            isinstance(value, str)
            and len(value) == TRACKING_NUMBER_LENGTH
            and check_cb32(value)
        ):
            raise ValueError(f"Invalid tracking number: {value}")

        parts = {
            name: cb32_to_int(value[start:end])
            for name, (start, end) in FIELDS.items()
            if name != "header"
        }
        start, end = FIELDS["header"]
        parts["header"] = "".join(
            cb32_to_char(char_to_cb32(c)) for c in value[start:end]
        )
        return parts

    @classmethod
    def from_string(cls, value: str) -> "TrackingNumber":
        return cls(**cls.decompose(value))

    @classmethod
    def generate(
        cls,
        db: Session,
        shipper: int,
        lane: int = 0,
        header: str = TRACKING_NUMBER_HEADER,
        sequence_id: str = TRACKING_NUMBER_SEQUENCE,
        now: Optional[datetime] = None,
    ) -> "TrackingNumber":
        seqnum = Sequence.next_seq(db, sequence_id)
        tracking_number = cls(header, shipper, lane, days_since_origin(now), seqnum)

        logger.debug(msg=f"tracking number generated: {tracking_number}")
        return tracking_number
