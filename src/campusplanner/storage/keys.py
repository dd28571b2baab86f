"""Composite schedule keys.

Schedule documents are addressed as ``"YYYY-MM-DD_<groupId>"``. The core
works with CellKey tuples; this module is the only place that converts
between the two.
"""

import re
from datetime import date

from campusplanner.domain.models import CellKey
from campusplanner.errors import InvalidKeyError

_KEY_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})_(.+)$")


def encode_key(key: CellKey) -> str:
    """Storage key for a cell."""
    return f"{key.day.isoformat()}_{key.group_id}"


def decode_key(raw: str) -> CellKey:
    """Parse a storage key.

    Everything after the first underscore is the group id.

    Raises:
        InvalidKeyError: If the key has no date part, no group id or an
            impossible date.
    """
    match = _KEY_RE.match(raw or "")
    if match is None:
        raise InvalidKeyError(raw, "expected YYYY-MM-DD_<groupId>")

    year, month, day, group_id = match.groups()
    try:
        return CellKey(date(int(year), int(month), int(day)), group_id)
    except ValueError as exc:
        raise InvalidKeyError(raw, str(exc)) from exc
