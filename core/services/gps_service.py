"""GPS coordinate reconstruction from EXIF degree/minute/second tags.

EXIF stores each coordinate as three rationals (degrees, minutes, seconds)
plus a hemisphere reference tag. Reconstruction is all-or-nothing: a bag with
only one usable coordinate yields None rather than a partial position.
"""

from __future__ import annotations

import math
from numbers import Real
from typing import Any

from loguru import logger

from core.models import DisplayItem, GPSCoordinate, MetadataBag
from core.services.tag_resolver import (
    get_tag,
    is_primitive,
    resolve,
    tag_description,
    tag_is_present,
    tag_sequence,
)

MAPS_SEARCH_URL = "https://www.google.com/maps/search/?api=1&query={lat},{lng}"

_NEGATIVE_REFS = frozenset({"S", "W"})


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def parse_rational(value: Any) -> float:
    """Parse one DMS component: a [num, den] pair, a number, or 0 otherwise."""
    if (
        isinstance(value, (list, tuple))
        and len(value) == 2
        and _is_number(value[0])
        and _is_number(value[1])
    ):
        if value[1] == 0:
            return 0.0
        return float(value[0]) / float(value[1])
    if _is_number(value):
        number = float(value)
        return number if math.isfinite(number) else 0.0
    if isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return 0.0
        return number if math.isfinite(number) else 0.0
    return 0.0


def dms_to_decimal(degrees: float, minutes: float, seconds: float, ref: str) -> float:
    """Convert DMS to signed decimal degrees; `S`/`W` references are negative."""
    dd = degrees + minutes / 60 + seconds / 3600
    return -dd if ref in _NEGATIVE_REFS else dd


def decimal_to_dms(dd: float) -> tuple[int, int, float]:
    """Split absolute decimal degrees back into (degrees, minutes, seconds)."""
    value = abs(dd)
    degrees = math.floor(value)
    minutes_full = (value - degrees) * 60
    minutes = math.floor(minutes_full)
    seconds = (minutes_full - minutes) * 60
    return degrees, minutes, seconds


def _reference(tag: Any, allowed: str, default: str) -> str:
    """Pick the hemisphere letter from a reference tag.

    The first element of the raw value wins, then the description. Decoder
    descriptions such as "South latitude" are reduced to their first letter.
    """
    candidate: Any = None
    values = tag_sequence(tag)
    if values:
        candidate = values[0]
    if not candidate:
        candidate = tag_description(tag)
    if not candidate or not is_primitive(candidate):
        return default
    letter = str(candidate).strip()[:1].upper()
    return letter if letter and letter in allowed else default


def _dms(tag: Any) -> tuple[float, float, float] | None:
    values = tag_sequence(tag)
    if values is None or len(values) != 3:
        return None
    degrees, minutes, seconds = (parse_rational(v) for v in values)
    return degrees, minutes, seconds


def reconstruct_gps(bag: MetadataBag | None) -> GPSCoordinate | None:
    """Build a `GPSCoordinate` from the bag's GPS tags, or None."""
    lat_tag = get_tag(bag, "GPSLatitude")
    lng_tag = get_tag(bag, "GPSLongitude")
    if not tag_is_present(lat_tag) or not tag_is_present(lng_tag):
        return None

    try:
        lat_ref = _reference(get_tag(bag, "GPSLatitudeRef"), "NS", "N")
        lng_ref = _reference(get_tag(bag, "GPSLongitudeRef"), "EW", "E")

        lat_dms = _dms(lat_tag)
        lng_dms = _dms(lng_tag)
        if lat_dms is None or lng_dms is None:
            return None

        return GPSCoordinate(
            lat=dms_to_decimal(*lat_dms, lat_ref),
            lng=dms_to_decimal(*lng_dms, lng_ref),
            lat_ref=lat_ref,
            lng_ref=lng_ref,
        )
    except (TypeError, ValueError, AttributeError, ArithmeticError) as ex:
        logger.debug("GPS reconstruction failed: {}", ex)
        return None


def maps_url(gps: GPSCoordinate) -> str:
    """Map search URL for the coordinate (never fetched by this package)."""
    return MAPS_SEARCH_URL.format(lat=gps.lat, lng=gps.lng)


def _altitude(bag: MetadataBag | None) -> str | None:
    tag = get_tag(bag, "GPSAltitude")
    if not tag_is_present(tag):
        return None
    values = tag_sequence(tag)
    if values and len(values) == 2:
        meters = parse_rational(values)
    else:
        # descriptions look like "12.3 m"
        meters = parse_rational((resolve(tag) or "0").rstrip("m "))
    return f"{math.floor(meters + 0.5)}m"


def gps_display_items(gps: GPSCoordinate | None, bag: MetadataBag | None) -> list[DisplayItem]:
    """Location rows: latitude, longitude and altitude when recorded."""
    if gps is None:
        return []
    items = [
        DisplayItem("Latitude", f"{gps.lat:.6f}° {gps.lat_ref}", "navigation"),
        DisplayItem("Longitude", f"{gps.lng:.6f}° {gps.lng_ref}", "navigation"),
    ]
    altitude = _altitude(bag)
    if altitude is not None:
        items.append(DisplayItem("Altitude", altitude, "mountain"))
    return items
