import json
from typing import Callable, List, Optional, Union

import pytest

from quotation_api.config import Settings


class FakeAPIError(Exception):
    """Looks like google.genai.errors.APIError as far as classification goes."""

    def __init__(self, code: int, status: str = "", message: str = "") -> None:
        super().__init__(f"{code} {status}. {message}")
        self.code = code
        self.status = status
        self.message = message


Outcome = Union[str, BaseException]


class FakeGateway:
    def __init__(
        self,
        completions: Optional[List[Outcome]] = None,
        image: Optional[Callable[[str], str]] = None,
    ) -> None:
        self.completions = list(completions or [])
        self.text_calls: List[dict] = []
        self.image_prompts: List[str] = []
        self._image = image or (lambda prompt: "data:image/jpeg;base64,AAAA")

    async def complete_text(self, text, files, use_tools):
        self.text_calls.append({"text": text, "files": list(files), "use_tools": use_tools})
        outcome = self.completions.pop(0)
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome

    async def synthesize_image(self, prompt):
        self.image_prompts.append(prompt)
        return self._image(prompt)


@pytest.fixture
def settings():
    return Settings(api_key="test-key", retry_base_delay=0, request_timeout=5, image_concurrency=4)


@pytest.fixture
def quotation_data():
    return {
        "customerName": "Jane Doe",
        "tripTitle": "Lisbon Escape",
        "destination": "Lisbon, Portugal",
        "startDate": "2025-05-01",
        "endDate": "2025-05-04",
        "totalPrice": "2,450",
        "currency": "EUR",
        "summary": "Three sunny days of tiles, trams and pastel de nata.",
        "flights": [
            {
                "airline": "TAP",
                "flightNumber": "TP1351",
                "departureTime": "07:10",
                "departureAirport": "LHR",
                "arrivalTime": "09:45",
                "arrivalAirport": "LIS",
                "date": "2025-05-01",
                "duration": "2h 35m",
                "stops": "Non-stop",
            }
        ],
        "hotels": [
            {
                "name": "Hotel Avenida",
                "location": "Lisbon",
                "checkIn": "2025-05-01",
                "checkOut": "2025-05-04",
                "amenities": ["Pool", "Spa"],
                "roomType": "Deluxe King",
                "image": "https://example.com/hotels/avenida",
                "rating": 4.6,
                "reviewCount": "1,204",
                "recentReview": "Spotless rooms and a lovely rooftop.",
            }
        ],
        "restaurants": [
            {
                "name": "Cervejaria Ramiro",
                "cuisine": "Seafood",
                "description": "Legendary garlic prawns.",
                "image": "https://cdn.example.com/ramiro.JPG?w=800",
            }
        ],
        "itinerary": [
            {
                "day": 1,
                "date": "2025-05-01",
                "title": "Alfama stroll",
                "image": None,
                "activities": [{"time": "Morning", "description": "Tram 28", "location": "Alfama"}],
            },
            {
                "day": 2,
                "date": "2025-05-02",
                "title": "Sintra day trip",
                "activities": [{"time": "09:00", "description": "Pena Palace"}],
            },
        ],
        "inclusions": ["Breakfast"],
        "exclusions": ["Travel insurance"],
        "travelTips": ["Wear comfortable shoes"],
    }


@pytest.fixture
def quotation_json(quotation_data):
    return json.dumps(quotation_data)
