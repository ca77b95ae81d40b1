from __future__ import annotations

import base64
import binascii
from typing import Any, List, Literal, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

QuotationLayout = Literal["flight-only", "hotel-only", "package"]


class _Document(BaseModel):
    # Keys arrive camelCased from the model; a null is treated as a missing key
    # or, inside a list, as a missing item.
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {
                key: [item for item in value if item is not None] if isinstance(value, list) else value
                for key, value in data.items()
                if value is not None
            }
        return data


class Flight(_Document):
    airline: str = ""
    flight_number: str = ""
    departure_time: str = ""
    departure_airport: str = ""
    arrival_time: str = ""
    arrival_airport: str = ""
    date: str = ""
    duration: Optional[str] = None
    stops: Optional[str] = None


class Hotel(_Document):
    name: str = ""
    location: str = ""
    check_in: str = ""
    check_out: str = ""
    amenities: List[str] = Field(default_factory=list)
    room_type: str = ""
    image: str = ""
    rating: Optional[str] = None
    review_count: Optional[str] = None
    recent_review: Optional[str] = None


class Restaurant(_Document):
    name: str = ""
    cuisine: str = ""
    description: str = ""
    image: str = ""


class Activity(_Document):
    time: str = ""
    description: str = ""
    location: Optional[str] = None


class ItineraryDay(_Document):
    day: int = Field(ge=1)
    date: str = ""
    title: str = ""
    activities: List[Activity] = Field(default_factory=list)
    image: str = ""


class Quotation(_Document):
    customer_name: str = ""
    trip_title: str = ""
    destination: str = ""
    start_date: str = ""
    end_date: str = ""
    total_price: str = ""
    currency: str = ""
    summary: str = ""
    hero_image: str = ""
    flights: List[Flight] = Field(default_factory=list)
    hotels: List[Hotel] = Field(default_factory=list)
    itinerary: List[ItineraryDay] = Field(default_factory=list)
    restaurants: List[Restaurant] = Field(default_factory=list)
    inclusions: List[str] = Field(default_factory=list)
    exclusions: List[str] = Field(default_factory=list)
    travel_tips: List[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_day_sequence(self) -> "Quotation":
        for expected, day in enumerate(self.itinerary, start=1):
            if day.day != expected:
                raise ValueError(
                    f"itinerary day {day.day} found where day {expected} was expected"
                )
        return self

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


def quotation_layout(quotation: Quotation) -> QuotationLayout:
    """Pick the presentation template from which sections are populated."""
    if quotation.flights and not quotation.hotels and not quotation.itinerary:
        return "flight-only"
    if quotation.hotels and not quotation.flights and not quotation.itinerary:
        return "hotel-only"
    return "package"


class Attachment(BaseModel):
    """An uploaded image or PDF, base64 encoded, optionally as a data URL."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = ""
    mime_type: str = Field(alias="mimeType")
    data: str = Field(validation_alias=AliasChoices("base64Data", "data"))

    def payload(self) -> bytes:
        encoded = self.data.strip()
        if encoded.startswith("data:"):
            _, _, encoded = encoded.partition(",")
        if not encoded:
            raise ValueError(f"attachment {self.name or self.mime_type!r} is empty")
        try:
            return base64.b64decode(encoded, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise ValueError(f"attachment {self.name or self.mime_type!r} is not valid base64") from exc
