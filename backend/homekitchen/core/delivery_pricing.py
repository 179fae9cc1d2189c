"""Delivery Pricing — tiered, piecewise-linear fee schedule over geodesic distance.

Invariants:
    - All functions are PURE: identical coordinates always produce identical quotes
    - Tiers are half-open on the left and closed on the right: d <= 1, 1 < d <= 2,
      2 < d <= 4, 4 < d <= 7; anything beyond 7 km is unavailable
    - The schedule is continuous at 2 km (15) and 4 km (35); 7 km yields 60
    - Missing coordinates never raise — they produce an unavailable quote with a reason
    - Out-of-range coordinates raise InvalidCoordinateError (from geo_distance)

Design Decisions:
    - Fee arithmetic in Decimal on the already-rounded distance: the 2-decimal distance
      is exact in Decimal, so half-way fees (e.g. 2.05 km -> 15.5) round away from zero
      instead of drifting on float representation error
    - Quote as frozen dataclass: ephemeral value, never persisted
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP

from homekitchen.core.domain_types import Kilometers, QuoteUnavailableReason, Taka
from homekitchen.core.geo_distance import Coordinates, haversine_km

MAX_DELIVERY_DISTANCE_KM = Decimal("7")

BASE_FEE = 10
SHORT_HOP_FEE = 15
MID_RANGE_RATE = Decimal("10")        # per km beyond 2 km
LONG_RANGE_BASE = Decimal("35")
LONG_RANGE_RATE = Decimal("8.33")     # per km beyond 4 km


@dataclass(frozen=True)
class DeliveryQuote:
    """Result of pricing one kitchen -> buyer delivery."""
    distance_km: Kilometers | None
    fee: Taka | None
    available: bool
    reason: QuoteUnavailableReason | None = None
    message: str | None = None

    def to_dict(self) -> dict:
        return {
            "distance_km": self.distance_km,
            "fee": self.fee,
            "available": self.available,
            "reason": self.reason.value if self.reason else None,
            "message": self.message,
        }


def _round_fee(amount: Decimal) -> Taka:
    return Taka(int(amount.quantize(Decimal(1), rounding=ROUND_HALF_UP)))


def calculate_delivery_fee(distance_km: float) -> Taka | None:
    """Fee in whole currency units, or None beyond the serviceable radius."""
    d = Decimal(repr(distance_km))
    if d <= 1:
        return Taka(BASE_FEE)
    if d <= 2:
        return Taka(SHORT_HOP_FEE)
    if d <= 4:
        return _round_fee(SHORT_HOP_FEE + (d - 2) * MID_RANGE_RATE)
    if not is_delivery_available(distance_km):
        return None
    return _round_fee(LONG_RANGE_BASE + (d - 4) * LONG_RANGE_RATE)


def is_delivery_available(distance_km: float) -> bool:
    return Decimal(repr(distance_km)) <= MAX_DELIVERY_DISTANCE_KM


def quote_delivery(
    origin_lat: float | None,
    origin_lng: float | None,
    dest_lat: float | None,
    dest_lng: float | None,
) -> DeliveryQuote:
    """Price a delivery from kitchen (origin) to buyer (destination)."""
    if None in (origin_lat, origin_lng, dest_lat, dest_lng):
        return DeliveryQuote(
            distance_km=None, fee=None, available=False,
            reason=QuoteUnavailableReason.MISSING_COORDINATES,
            message=(
                "Address coordinates are missing. "
                "Please update your address with location."
            ),
        )

    distance = haversine_km(
        Coordinates(origin_lat, origin_lng), Coordinates(dest_lat, dest_lng),
    )
    fee = calculate_delivery_fee(distance)
    if fee is None:
        return DeliveryQuote(
            distance_km=distance, fee=None, available=False,
            reason=QuoteUnavailableReason.OUT_OF_RANGE,
            message=(
                f"Delivery is not available for distances greater than "
                f"{MAX_DELIVERY_DISTANCE_KM} km. Your distance is {distance:.2f} km."
            ),
        )
    return DeliveryQuote(distance_km=distance, fee=fee, available=True)
