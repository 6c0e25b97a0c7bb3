"""
Validation of forest fire record payloads.

These functions are pure: they never touch the store and never mutate
their input.  ``validate_record`` is applied to every body intended
for create or update and returns the normalised record (community
lowercased, year as ``int``) or raises ``MissingFieldError`` /
``InvalidTypeError``.
"""

import math
from typing import Any, Dict, Mapping, Optional, Union

from forest_fires_api.app.core.db import RECORD_FIELDS, fits_int64
from forest_fires_api.app.core.errors import BadRequestError, InvalidTypeError, MissingFieldError

Number = Union[int, float]


def is_number(value: Any) -> bool:
    """Return True for finite ints and floats (booleans excluded).

    Ints outside the signed 64-bit range cannot be stored and are not
    accepted either.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    if isinstance(value, int):
        return fits_int64(value)
    return math.isfinite(value)


def parse_number(text: Optional[str]) -> Optional[Number]:
    """Interpret a path or query string as a number.

    Returns an ``int`` when the text is integral and fits in 64 bits, a
    ``float`` for other finite numbers and ``None`` when the text is not
    numeric.
    """
    if text is None:
        return None
    text = text.strip()
    if not text:
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    if value.is_integer() and fits_int64(int(value)):
        return int(value)
    return value


def parse_year(text: Optional[str]) -> Optional[Number]:
    """Like ``parse_number`` but drops any fractional part.

    ``"2024.5"`` is year 2024.  Values too large for an integer stay
    ``float``.
    """
    value = parse_number(text)
    if isinstance(value, float) and fits_int64(int(value)):
        return int(value)
    return value


def check_required(payload: Mapping[str, Any]) -> None:
    for name in RECORD_FIELDS:
        if payload.get(name) is None:
            raise MissingFieldError(name)


def normalize_key(year: Any, autonomous_community: Any) -> Dict[str, Any]:
    """Validate and normalise the two key fields."""
    if not isinstance(autonomous_community, str):
        raise InvalidTypeError("autonomous_community", "a string")
    if not is_number(year) or not float(year).is_integer() or not fits_int64(int(year)):
        raise InvalidTypeError("year", "an integer number")
    return {"year": int(year), "autonomous_community": autonomous_community.lower()}


def validate_record(payload: Any) -> Dict[str, Any]:
    """Check a record payload and return its normalised form.

    Raises
    ------
    BadRequestError
        If the payload is not a JSON object.
    MissingFieldError
        If any of the four record fields is absent or null.
    InvalidTypeError
        If the community is not a string or a numeric field is not a
        finite number (``year`` must also be integral).
    """
    if not isinstance(payload, Mapping):
        raise BadRequestError("Request body must be a JSON object")
    check_required(payload)
    record = normalize_key(payload["year"], payload["autonomous_community"])
    for name in ("number_of_accidents", "percentage_of_large_fires"):
        if not is_number(payload[name]):
            raise InvalidTypeError(name, "a number")
        record[name] = payload[name]
    return record
