"""
Lokasi API - Location Identifiers
===================================

What:  Generation and parsing of location identifiers.
How:   Identifiers follow the document-store object-id layout: 12 bytes
       rendered as 24 lowercase hex characters: a 4-byte big-endian Unix
       timestamp, a 5-byte random value fixed per process, and a 3-byte
       counter. Records exported from the original document store therefore
       keep their ids unchanged.

    ┌──────────────┬────────────────────┬────────────┐
    │ 4B timestamp │ 5B process token   │ 3B counter │
    └──────────────┴────────────────────┴────────────┘
      65a4f1c2       9b1e0d44a7           c3f812

Ids minted by one process sort in creation order, including ids minted
within the same second, except where the 3-byte counter wraps around.
Across processes only the second-level timestamp orders them.
"""

import itertools
import re
import secrets
import time
from typing import Optional

from lokasi.exceptions import InvalidIdentifierError

ID_LENGTH = 24

_ID_PATTERN = re.compile(r"[0-9a-fA-F]{24}")

_COUNTER_MASK = 0xFFFFFF
_process_token = secrets.token_hex(5)
_counter = itertools.count(secrets.randbelow(_COUNTER_MASK + 1))


def new_location_id() -> str:
    """Generate a fresh 24-char hex identifier (timestamp, process token, counter)."""
    timestamp = int(time.time()) & 0xFFFFFFFF
    count = next(_counter) & _COUNTER_MASK
    return f"{timestamp:08x}{_process_token}{count:06x}"


def is_valid_location_id(value: Optional[str]) -> bool:
    """True when `value` is a 24-char hex string (case-insensitive)."""
    return bool(value) and _ID_PATTERN.fullmatch(value) is not None


def parse_location_id(value: Optional[str]) -> str:
    """
    Validate a client-supplied identifier and return its canonical form.

    Raises:
        InvalidIdentifierError: `value` is missing, empty, or not 24 hex chars.
    """
    if not is_valid_location_id(value):
        raise InvalidIdentifierError(raw_id=value)
    return value.lower()
