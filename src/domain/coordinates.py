"""
Coordinate parsing
==================

Turns a human-entered location string into a ``Coordinate``.  Accepted
shapes, tried in this order (first match wins):

1. Two DMS tokens, e.g. ``6°11'37.0"N 1°11'02.5"E``.  The ``N``/``S``
   token is the latitude and the ``E``/``W`` token the longitude, in
   either order.
2. A decimal pair ``lat,lng`` (spaces around the comma allowed).
3. A map URL query parameter ``q=lat,lng`` or ``ll=lat,lng``.
4. A map URL path segment ``@lat,lng,<zoom>``.

Values are not range-checked here; callers decide what to do with a
latitude of 123.
"""

from __future__ import annotations

import re
from typing import Optional

from .entities import Coordinate

SUPPORTED_FORMATS = (
    "- Google Maps URL: https://www.google.com/maps?q=6.193611,1.184028 "
    "(or ll=6.193611,1.184028)\n"
    "- Google Maps URL: https://www.google.com/maps/@6.193611,1.184028,15z\n"
    "- DMS format: 6°11'37.0\"N 1°11'02.5\"E\n"
    "- Decimal: 6.193611, 1.184028"
)

_DMS_TOKEN = r"\d+°\d+'[\d.]+\"[NSEW]"
_DMS_PAIR_RE = re.compile(rf"({_DMS_TOKEN})\s+({_DMS_TOKEN})", re.IGNORECASE)
_DMS_PARTS_RE = re.compile(r"(\d+)°(\d+)'([\d.]+)\"([NSEW])", re.IGNORECASE)

_LEADING_NUMBER = r"-?(?:\d+(?:\.\d+)?|\.\d+)"
_TRAILING_NUMBER = r"-?\d*\.?\d+"

_DECIMAL_PAIR_RE = re.compile(rf"({_LEADING_NUMBER})\s*,\s*({_TRAILING_NUMBER})")

_URL_PATTERNS = (
    # https://www.google.com/maps?q=lat,lng
    re.compile(rf"[?&]q=({_LEADING_NUMBER}),({_TRAILING_NUMBER})"),
    # https://maps.google.com/maps?ll=lat,lng
    re.compile(rf"[?&]ll=({_LEADING_NUMBER}),({_TRAILING_NUMBER})"),
    # https://www.google.com/maps/@lat,lng,zoom
    re.compile(rf"@({_LEADING_NUMBER}),({_LEADING_NUMBER}),"),
)


def dms_to_decimal(token: str) -> Optional[float]:
    """Convert one ``D°M'S"H`` token to signed decimal degrees."""
    match = _DMS_PARTS_RE.search(token)
    if not match:
        return None
    degrees, minutes, seconds, hemisphere = match.groups()
    try:
        decimal = float(degrees) + float(minutes) / 60 + float(seconds) / 3600
    except ValueError:
        # e.g. seconds written as "3.7.1"
        return None
    if hemisphere.upper() in ("S", "W"):
        decimal = -decimal
    return decimal


def _is_latitude(token: str) -> bool:
    return token[-1].upper() in ("N", "S")


def _parse_dms_pair(text: str) -> Optional[Coordinate]:
    match = _DMS_PAIR_RE.search(text)
    if not match:
        return None
    first, second = match.groups()
    first_value, second_value = dms_to_decimal(first), dms_to_decimal(second)
    if first_value is None or second_value is None:
        return None

    first_is_lat, second_is_lat = _is_latitude(first), _is_latitude(second)
    if first_is_lat == second_is_lat:
        # both tokens on the same axis
        return None
    lat, lng = (first_value, second_value) if first_is_lat else (second_value, first_value)
    try:
        return Coordinate(lat=lat, lng=lng)
    except ValueError:
        return None


def _pair_from(match: Optional[re.Match]) -> Optional[Coordinate]:
    if not match:
        return None
    try:
        return Coordinate(lat=float(match.group(1)), lng=float(match.group(2)))
    except ValueError:
        return None


def parse_coordinates(text: Optional[str]) -> Optional[Coordinate]:
    """Return the coordinate encoded in *text*, or ``None`` if there is none."""
    if not text:
        return None
    candidate = text.strip()
    if not candidate:
        return None

    if _DMS_PAIR_RE.search(candidate):
        # A DMS pair decides the outcome on its own, even when ambiguous.
        return _parse_dms_pair(candidate)

    coordinate = _pair_from(_DECIMAL_PAIR_RE.search(candidate))
    if coordinate is not None:
        return coordinate

    # Only reached when the first decimal-looking pair is unusable (e.g. it
    # overflows to inf) while a later q=/ll=/@ pair in the same text is fine.
    for pattern in _URL_PATTERNS:
        coordinate = _pair_from(pattern.search(candidate))
        if coordinate is not None:
            return coordinate
    return None


def extract_coordinates_from_url(url: Optional[str]) -> Optional[Coordinate]:
    """Alias kept for callers that only ever pass map URLs."""
    return parse_coordinates(url)
