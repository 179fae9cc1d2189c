"""Delivery Schemas — query model and response for the delivery quote endpoint.

Invariants:
    - kitchen_id always required; buyer location is lat+lng together, or address_id, or
      neither (falls back to the default address) — never lat without lng
    - Unknown query parameters rejected
    - Coordinate range is NOT checked here: out-of-range values reach the core and
      surface as INVALID_COORDINATE
"""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, model_validator

from homekitchen.core.delivery_pricing import DeliveryQuote
from homekitchen.core.geo_distance import format_distance


class DeliveryQuoteQuery(BaseModel):
    """Query string for GET /delivery/quote."""
    model_config = ConfigDict(extra="forbid")

    kitchen_id: UUID
    address_id: UUID | None = None
    lat: float | None = None
    lng: float | None = None

    @model_validator(mode="after")
    def validate_location_source(self):
        if (self.lat is None) != (self.lng is None):
            raise ValueError("lat and lng must be provided together")
        if self.address_id is not None and self.lat is not None:
            raise ValueError("provide either address_id or lat/lng, not both")
        return self


class DeliveryQuoteResponse(BaseModel):
    """Delivery quote — fee is null whenever available is false."""
    distance_km: float | None
    distance_formatted: str | None
    fee: int | None
    available: bool
    reason: str | None = None
    message: str | None = None

    @classmethod
    def from_quote(cls, quote: DeliveryQuote) -> "DeliveryQuoteResponse":
        return cls(
            **quote.to_dict(),
            distance_formatted=(
                format_distance(quote.distance_km)
                if quote.distance_km is not None else None
            ),
        )
