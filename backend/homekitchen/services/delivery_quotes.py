"""Delivery Quotes — resolves kitchen and buyer coordinates, then prices the delivery.

Invariants:
    - Unknown kitchen, or an address not owned by the buyer, is NotFound
    - Missing coordinates are reported as None, never raised; pricing turns them into
      an unavailable quote with reason MISSING_COORDINATES
    - Stored pairs that are incomplete or out of range are treated as missing;
      caller-supplied lat/lng are passed through and validated by the core
    - Pricing itself is the pure quote_delivery() — this module only does lookups

Design Decisions:
    - Buyer location precedence: explicit lat/lng, then the given address, then the
      buyer's default address
"""

import logging
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from homekitchen.core.delivery_pricing import DeliveryQuote, quote_delivery
from homekitchen.core.errors import NotFoundError
from homekitchen.core.geo_distance import is_valid_coordinates
from homekitchen.models.address import Address
from homekitchen.models.kitchen import Kitchen

logger = logging.getLogger(__name__)

LatLng = tuple[float | None, float | None]


def _stored_pair(latitude: float | None, longitude: float | None) -> LatLng:
    if is_valid_coordinates(latitude, longitude):
        return latitude, longitude
    if latitude is not None or longitude is not None:
        logger.warning(f"Ignoring unusable stored coordinates ({latitude}, {longitude})")
    return None, None


class CoordinateResolver:
    """Reads stored coordinates for kitchens and buyer addresses."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def kitchen_coordinates(self, kitchen_id: UUID) -> LatLng:
        result = await self.db.execute(
            select(Kitchen.latitude, Kitchen.longitude).where(Kitchen.id == kitchen_id),
        )
        row = result.one_or_none()
        if row is None:
            raise NotFoundError("Kitchen", str(kitchen_id))
        return _stored_pair(row.latitude, row.longitude)

    async def address_coordinates(self, address_id: UUID, buyer_id: UUID) -> LatLng:
        result = await self.db.execute(
            select(Address.latitude, Address.longitude).where(
                Address.id == address_id, Address.user_id == buyer_id,
            ),
        )
        row = result.one_or_none()
        if row is None:
            raise NotFoundError("Address", str(address_id))
        return _stored_pair(row.latitude, row.longitude)

    async def default_address_coordinates(self, buyer_id: UUID) -> LatLng:
        result = await self.db.execute(
            select(Address.latitude, Address.longitude)
            .where(Address.user_id == buyer_id, Address.is_default.is_(True))
            .limit(1),
        )
        row = result.one_or_none()
        if row is None:
            return None, None
        return _stored_pair(row.latitude, row.longitude)


class DeliveryQuoteService:
    """Kitchen -> buyer delivery fee for the checkout and kitchen pages."""

    def __init__(self, db: AsyncSession):
        self.resolver = CoordinateResolver(db)

    async def quote(
        self,
        kitchen_id: UUID,
        buyer_id: UUID,
        address_id: UUID | None = None,
        latitude: float | None = None,
        longitude: float | None = None,
    ) -> DeliveryQuote:
        kitchen_lat, kitchen_lng = await self.resolver.kitchen_coordinates(kitchen_id)

        if latitude is not None and longitude is not None:
            buyer_lat, buyer_lng = latitude, longitude
        elif address_id is not None:
            buyer_lat, buyer_lng = await self.resolver.address_coordinates(
                address_id, buyer_id,
            )
        else:
            buyer_lat, buyer_lng = await self.resolver.default_address_coordinates(
                buyer_id,
            )

        quote = quote_delivery(kitchen_lat, kitchen_lng, buyer_lat, buyer_lng)
        if not quote.available:
            logger.info(
                f"Delivery unavailable: {quote.reason.value}",
                extra={"kitchen_id": kitchen_id, "user_id": buyer_id},
            )
        return quote
