"""Delivery Quote Service — coordinate resolution and pricing.

Tests cover:
    - Explicit lat/lng wins over stored addresses
    - address_id must belong to the buyer
    - Default address used when nothing else is given; none means MISSING_COORDINATES
    - Kitchen without coordinates is unavailable, unknown kitchen is NotFound
"""

from uuid import uuid4

import pytest

from homekitchen.core.domain_types import QuoteUnavailableReason
from homekitchen.core.errors import NotFoundError
from homekitchen.models.kitchen import Kitchen
from homekitchen.services.delivery_quotes import DeliveryQuoteService

KITCHEN_LAT, KITCHEN_LNG = 23.8103, 90.4125


@pytest.fixture
def quotes(test_db):
    return DeliveryQuoteService(test_db)


async def test_explicit_coordinates_same_point(quotes, kitchen, buyer_id):
    quote = await quotes.quote(
        kitchen.id, buyer_id, latitude=KITCHEN_LAT, longitude=KITCHEN_LNG,
    )
    assert quote.available is True
    assert quote.distance_km == 0.0
    assert quote.fee == 10


async def test_explicit_coordinates_override_default_address(
    quotes, kitchen, buyer_id, make_address,
):
    await make_address(23.7465, 90.3765, is_default=True)

    quote = await quotes.quote(
        kitchen.id, buyer_id, latitude=KITCHEN_LAT, longitude=KITCHEN_LNG,
    )
    assert quote.available is True


async def test_address_out_of_range(quotes, kitchen, buyer_id, make_address):
    address = await make_address(23.7465, 90.3765)

    quote = await quotes.quote(kitchen.id, buyer_id, address_id=address.id)

    assert quote.available is False
    assert quote.reason == QuoteUnavailableReason.OUT_OF_RANGE
    assert quote.distance_km > 7


async def test_address_of_another_buyer_is_not_found(
    quotes, kitchen, buyer_id, make_address,
):
    address = await make_address(23.80, 90.41, user_id=uuid4())
    with pytest.raises(NotFoundError):
        await quotes.quote(kitchen.id, buyer_id, address_id=address.id)


async def test_default_address_used(quotes, kitchen, buyer_id, make_address):
    await make_address(23.7465, 90.3765, is_default=False)
    await make_address(KITCHEN_LAT, KITCHEN_LNG, is_default=True)

    quote = await quotes.quote(kitchen.id, buyer_id)

    assert quote.available is True
    assert quote.fee == 10


async def test_no_default_address_is_missing_coordinates(quotes, kitchen, buyer_id):
    quote = await quotes.quote(kitchen.id, buyer_id)
    assert quote.available is False
    assert quote.reason == QuoteUnavailableReason.MISSING_COORDINATES


async def test_address_without_coordinates(quotes, kitchen, buyer_id, make_address):
    address = await make_address(None, None)
    quote = await quotes.quote(kitchen.id, buyer_id, address_id=address.id)
    assert quote.reason == QuoteUnavailableReason.MISSING_COORDINATES


async def test_kitchen_without_coordinates(quotes, test_db, buyer_id):
    kitchen = Kitchen(seller_id=uuid4(), name="Pop-up")
    test_db.add(kitchen)
    await test_db.commit()

    quote = await quotes.quote(
        kitchen.id, buyer_id, latitude=KITCHEN_LAT, longitude=KITCHEN_LNG,
    )
    assert quote.reason == QuoteUnavailableReason.MISSING_COORDINATES


async def test_stored_out_of_range_coordinates_count_as_missing(quotes, test_db, buyer_id):
    kitchen = Kitchen(seller_id=uuid4(), name="Typo Kitchen", latitude=238.1, longitude=90.4)
    test_db.add(kitchen)
    await test_db.commit()

    quote = await quotes.quote(
        kitchen.id, buyer_id, latitude=KITCHEN_LAT, longitude=KITCHEN_LNG,
    )
    assert quote.reason == QuoteUnavailableReason.MISSING_COORDINATES


async def test_unknown_kitchen_is_not_found(quotes, buyer_id):
    with pytest.raises(NotFoundError):
        await quotes.quote(uuid4(), buyer_id, latitude=23.8, longitude=90.4)
