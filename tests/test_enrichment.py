import asyncio

from conftest import FakeAPIError, FakeGateway
from quotation_api.enrichment import enrich_quotation, plan_image_tasks
from quotation_api.models import Hotel, ItineraryDay, Quotation, Restaurant


def _three_hotels():
    return Quotation(
        destination="Kyoto",
        hotels=[
            Hotel(name="Hotel One", location="Gion"),
            Hotel(name="Hotel Two", location="Arashiyama"),
            Hotel(name="Hotel Three", location="Higashiyama"),
        ],
    )


def test_one_failing_hotel_does_not_affect_the_others(settings):
    def image(prompt):
        if "Hotel Two" in prompt:
            raise FakeAPIError(500, "INTERNAL")
        return f"data:image/jpeg;base64,{len(prompt)}"

    quotation = _three_hotels()
    gateway = FakeGateway(image=image)
    result = asyncio.run(enrich_quotation(quotation, gateway, settings))

    assert result is quotation
    assert result.hotels[0].image.startswith("data:image/jpeg")
    assert result.hotels[1].image == ""
    assert result.hotels[2].image.startswith("data:image/jpeg")
    assert result.hero_image.startswith("data:image/jpeg")


def test_quota_error_on_image_is_absorbed(settings):
    def image(prompt):
        raise FakeAPIError(429, "RESOURCE_EXHAUSTED")

    quotation = _three_hotels()
    asyncio.run(enrich_quotation(quotation, FakeGateway(image=image), settings))
    assert quotation.hero_image == ""
    assert [hotel.image for hotel in quotation.hotels] == ["", "", ""]


def test_results_land_on_their_own_slot(settings):
    quotation = Quotation(
        destination="Rome",
        restaurants=[Restaurant(name="Roscioli", cuisine="Roman")],
        itinerary=[ItineraryDay(day=1, title="Colosseum"), ItineraryDay(day=2, title="Vatican")],
    )
    gateway = FakeGateway(image=lambda prompt: f"data:{prompt}")
    asyncio.run(enrich_quotation(quotation, gateway, settings))

    assert "Roscioli" in quotation.restaurants[0].image
    assert "Colosseum in Rome" in quotation.itinerary[0].image
    assert "Vatican in Rome" in quotation.itinerary[1].image
    assert "Cinematic" in quotation.hero_image


def test_usable_images_are_kept_and_others_cleared():
    quotation = Quotation(
        destination="Paris",
        hero_image="https://example.com/hero.jpg",
        hotels=[
            Hotel(name="Kept", image="https://example.com/kept.png?w=1"),
            Hotel(name="Page", image="https://example.com/hotel-page"),
        ],
        restaurants=[Restaurant(name="Inline", image="data:image/png;base64,AAAA")],
    )
    tasks = plan_image_tasks(quotation)

    assert [task.label for task in tasks] == ["hero", "hotel 'Page'"]
    assert quotation.hero_image == ""
    assert quotation.hotels[0].image == "https://example.com/kept.png?w=1"
    assert quotation.hotels[1].image == ""
    assert quotation.restaurants[0].image == "data:image/png;base64,AAAA"


def test_empty_image_result_leaves_slot_empty(settings):
    quotation = _three_hotels()
    asyncio.run(enrich_quotation(quotation, FakeGateway(image=lambda prompt: ""), settings))
    assert quotation.hero_image == ""
    assert all(hotel.image == "" for hotel in quotation.hotels)


def test_concurrency_is_capped(settings):
    settings.image_concurrency = 2
    state = {"active": 0, "peak": 0}

    class SlowGateway:
        async def synthesize_image(self, prompt):
            state["active"] += 1
            state["peak"] = max(state["peak"], state["active"])
            await asyncio.sleep(0.01)
            state["active"] -= 1
            return "data:image/jpeg;base64,AAAA"

    quotation = Quotation(
        destination="Oslo",
        hotels=[Hotel(name=f"Hotel {n}") for n in range(5)],
    )
    asyncio.run(enrich_quotation(quotation, SlowGateway(), settings))

    assert state["peak"] == 2
    assert all(hotel.image for hotel in quotation.hotels)
