"""Delivery Pricing — tests for the tiered fee schedule and quote assembly.

Tests cover:
    - Tier anchors: 1 km -> 10, 2 km -> 15, 4 km -> 35, 7 km -> 60
    - Interior points of each tier, including half-unit fees rounding up
    - Anything beyond 7 km is unavailable with no fee
    - Missing coordinates produce an unavailable quote, never an exception
    - Quotes are deterministic
"""

import pytest

from homekitchen.core.delivery_pricing import (
    calculate_delivery_fee, is_delivery_available, quote_delivery,
)
from homekitchen.core.domain_types import QuoteUnavailableReason
from homekitchen.core.errors import InvalidCoordinateError


# ─── calculate_delivery_fee ──────────────────────────────────────

@pytest.mark.parametrize("distance,fee", [
    (0.0, 10),
    (0.5, 10),
    (1.0, 10),
    (1.01, 15),
    (1.5, 15),
    (2.0, 15),
    (2.05, 16),
    (3.0, 25),
    (4.0, 35),
    (5.0, 43),
    (6.5, 56),
    (7.0, 60),
])
def test_fee_schedule(distance, fee):
    assert calculate_delivery_fee(distance) == fee


def test_fee_is_continuous_at_tier_boundaries():
    assert calculate_delivery_fee(2.0) == calculate_delivery_fee(2.01) == 15
    assert calculate_delivery_fee(4.0) == calculate_delivery_fee(4.01) == 35


def test_beyond_seven_km_has_no_fee():
    assert calculate_delivery_fee(7.01) is None
    assert calculate_delivery_fee(12.0) is None


def test_is_delivery_available_boundary():
    assert is_delivery_available(7.0)
    assert not is_delivery_available(7.01)


# ─── quote_delivery ──────────────────────────────────────────────

def test_same_coordinates_quote_base_fee():
    quote = quote_delivery(23.8103, 90.4125, 23.8103, 90.4125)
    assert quote.available is True
    assert quote.distance_km == 0.0
    assert quote.fee == 10
    assert quote.reason is None


def test_dhaka_scenario_is_out_of_range():
    quote = quote_delivery(23.8103, 90.4125, 23.7465, 90.3765)
    assert quote.available is False
    assert quote.fee is None
    assert quote.distance_km > 7
    assert quote.reason == QuoteUnavailableReason.OUT_OF_RANGE
    assert "7 km" in quote.message


def test_nearby_buyer_is_available():
    quote = quote_delivery(23.8103, 90.4125, 23.7937, 90.4066)
    assert quote.available is True
    assert 1 < quote.distance_km < 3
    assert quote.fee == calculate_delivery_fee(quote.distance_km)


@pytest.mark.parametrize("coords", [
    (None, 90.4125, 23.7465, 90.3765),
    (23.8103, None, 23.7465, 90.3765),
    (23.8103, 90.4125, None, 90.3765),
    (23.8103, 90.4125, 23.7465, None),
])
def test_missing_coordinates_make_quote_unavailable(coords):
    quote = quote_delivery(*coords)
    assert quote.available is False
    assert quote.distance_km is None
    assert quote.fee is None
    assert quote.reason == QuoteUnavailableReason.MISSING_COORDINATES
    assert "missing" in quote.message


def test_opposite_side_of_earth_is_out_of_range():
    quote = quote_delivery(2.5, 0.0, -2.5, -180.0)
    assert quote.available is False
    assert quote.reason == QuoteUnavailableReason.OUT_OF_RANGE
    assert quote.distance_km > 20000


def test_invalid_coordinates_raise():
    with pytest.raises(InvalidCoordinateError):
        quote_delivery(23.8103, 90.4125, 95.0, 90.3765)


def test_quote_is_deterministic():
    first = quote_delivery(23.8103, 90.4125, 23.78, 90.40)
    second = quote_delivery(23.8103, 90.4125, 23.78, 90.40)
    assert first == second


def test_quote_to_dict_serializes_reason():
    quote = quote_delivery(None, None, None, None)
    data = quote.to_dict()
    assert data["reason"] == "MISSING_COORDINATES"
    assert data["available"] is False
