"""Geo Distance — great-circle distance between two coordinate pairs.

Invariants:
    - All functions are PURE: no IO, no async, no DB
    - Latitude in [-90, 90], longitude in [-180, 180]; anything else (NaN included) raises
    - Distances are kilometers on a 6371 km mean Earth radius, rounded to 2 decimals
      half away from zero
    - Any pair of valid coordinates yields a distance, antipodal points included

Design Decisions:
    - Decimal quantize for the final rounding: float round() is banker's rounding
    - Missing coordinates are NOT handled here — callers resolve absence first
"""

import math
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP

from homekitchen.core.domain_types import Kilometers
from homekitchen.core.errors import InvalidCoordinateError

EARTH_RADIUS_KM = 6371.0


@dataclass(frozen=True)
class Coordinates:
    """A latitude/longitude pair in decimal degrees."""
    latitude: float
    longitude: float


def round_half_away(value: float, places: int = 0) -> Decimal:
    """Round half away from zero to `places` decimals."""
    exponent = Decimal(1).scaleb(-places)
    return Decimal(repr(value)).quantize(exponent, rounding=ROUND_HALF_UP)


def validate_coordinates(point: Coordinates) -> None:
    """Raise InvalidCoordinateError if either component is out of range."""
    if not (math.isfinite(point.latitude) and -90.0 <= point.latitude <= 90.0):
        raise InvalidCoordinateError("latitude", point.latitude)
    if not (math.isfinite(point.longitude) and -180.0 <= point.longitude <= 180.0):
        raise InvalidCoordinateError("longitude", point.longitude)


def is_valid_coordinates(latitude: float | None, longitude: float | None) -> bool:
    """True when both components are present and within range."""
    if latitude is None or longitude is None:
        return False
    try:
        validate_coordinates(Coordinates(latitude, longitude))
    except InvalidCoordinateError:
        return False
    return True


def haversine_km(origin: Coordinates, destination: Coordinates) -> Kilometers:
    """Great-circle distance in km, rounded to 2 decimal places."""
    validate_coordinates(origin)
    validate_coordinates(destination)

    d_lat = math.radians(destination.latitude - origin.latitude)
    d_lng = math.radians(destination.longitude - origin.longitude)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(origin.latitude))
        * math.cos(math.radians(destination.latitude))
        * math.sin(d_lng / 2) ** 2
    )
    a = min(1.0, max(0.0, a))  # float error can push near-antipodal pairs past 1
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return Kilometers(float(round_half_away(EARTH_RADIUS_KM * c, 2)))


def format_distance(distance_km: float) -> str:
    """Human-readable distance: meters below 1 km, one decimal above."""
    if distance_km < 1:
        return f"{int(round_half_away(distance_km * 1000))} m"
    return f"{round_half_away(distance_km, 1)} km"
