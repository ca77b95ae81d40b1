import textwrap

from .models import Hotel, ItineraryDay, Restaurant

# The normalizer's truncation repair relies on the last three keys being arrays.
# Keep inclusions/exclusions/travelTips at the end of this shape.
SYSTEM_INSTRUCTION = textwrap.dedent(
    """\
    You are an expert travel consultant. Extract a structured travel quotation
    from the user's notes and the attached documents.

    Rules:
    1. Extract the customer name, pricing, flights, hotels and the daily itinerary.
    2. Real world data:
       - Look up the hotels that are mentioned and report their real star rating
         (e.g. 4.5) and approximate number of reviews.
       - Quote a short excerpt from a recent positive guest review for each hotel.
       - Only fill an "image" field with a DIRECT image URL (ending in .jpg, .png,
         .webp). If you only find a web page, leave the image field empty.
    3. Keep activity times as specific as the notes allow ("09:00", "14:30").
       When no time is given, infer a sensible one ("Morning", "Evening").
    4. List any restaurants or dining experiences under "restaurants".
    5. Include flight duration (e.g. "8h 30m") and stops (e.g. "Non-stop", "1 Stop").
    6. Write a short, inspiring summary of the trip.
    7. Use an ISO currency code for "currency" (e.g. "USD", "EUR").
    8. Number itinerary days from 1 without gaps.

    Output ONLY valid JSON. No markdown, no backticks, no commentary.
    The JSON must have exactly this shape:
    {
      "customerName": "string",
      "tripTitle": "string",
      "destination": "string",
      "startDate": "string",
      "endDate": "string",
      "totalPrice": "string",
      "currency": "string",
      "summary": "string",
      "flights": [{"airline": "string", "flightNumber": "string", "departureTime": "string", "departureAirport": "string", "arrivalTime": "string", "arrivalAirport": "string", "date": "string", "duration": "string", "stops": "string"}],
      "hotels": [{"name": "string", "location": "string", "checkIn": "string", "checkOut": "string", "amenities": ["string"], "roomType": "string", "image": "string", "rating": "string", "reviewCount": "string", "recentReview": "string"}],
      "restaurants": [{"name": "string", "cuisine": "string", "description": "string", "image": "string"}],
      "itinerary": [{"day": 1, "date": "string", "title": "string", "image": "string", "activities": [{"time": "string", "description": "string", "location": "string"}]}],
      "inclusions": ["string"],
      "exclusions": ["string"],
      "travelTips": ["string"]
    }
    """
)


def user_notes(text: str) -> str:
    return f"User Notes: {text}"


def hero_prompt(destination: str) -> str:
    return (
        f"Cinematic 8k wide shot of {destination}, golden hour, "
        "travel photography, breathtaking view"
    )


def hotel_prompt(hotel: Hotel) -> str:
    return (
        f"Luxury hotel exterior of {hotel.name} in {hotel.location}, "
        "architectural photography, 4k"
    )


def restaurant_prompt(restaurant: Restaurant) -> str:
    return (
        f"Delicious plated food at {restaurant.name}, {restaurant.cuisine} cuisine, "
        "fine dining atmosphere, food photography"
    )


def day_prompt(day: ItineraryDay, destination: str) -> str:
    return (
        f"Travel photography of {day.title} in {destination}, "
        "scenic view, 4k, tourist attraction"
    )
