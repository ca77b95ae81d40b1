"""Fill the quotation's image slots with freshly synthesized pictures.

Each slot is an independent task; one failing (quota included) never affects
the others or the quotation itself, the slot is simply left empty.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, List

from .config import Settings
from .images import is_direct_image
from .models import Quotation
from .prompts import day_prompt, hero_prompt, hotel_prompt, restaurant_prompt

logger = logging.getLogger(__name__)


@dataclass
class ImageTask:
    label: str
    target: Any
    attr: str
    prompt: str


def plan_image_tasks(quotation: Quotation) -> List[ImageTask]:
    """Clear every unusable image reference and return the slots to synthesize."""
    # The hero shot is always regenerated, whatever the model supplied.
    quotation.hero_image = ""
    tasks = [ImageTask("hero", quotation, "hero_image", hero_prompt(quotation.destination))]

    for hotel in quotation.hotels:
        if not is_direct_image(hotel.image):
            hotel.image = ""
            tasks.append(ImageTask(f"hotel {hotel.name!r}", hotel, "image", hotel_prompt(hotel)))

    for restaurant in quotation.restaurants:
        if not is_direct_image(restaurant.image):
            restaurant.image = ""
            tasks.append(
                ImageTask(f"restaurant {restaurant.name!r}", restaurant, "image", restaurant_prompt(restaurant))
            )

    for day in quotation.itinerary:
        if not is_direct_image(day.image):
            day.image = ""
            tasks.append(ImageTask(f"day {day.day}", day, "image", day_prompt(day, quotation.destination)))

    return tasks


async def _run_task(gateway, task: ImageTask, limiter: asyncio.Semaphore) -> bool:
    async with limiter:
        url = await gateway.synthesize_image(task.prompt)
    if not url:
        return False
    setattr(task.target, task.attr, url)
    return True


async def enrich_quotation(quotation: Quotation, gateway, settings: Settings) -> Quotation:
    tasks = plan_image_tasks(quotation)
    if not tasks:
        return quotation

    limiter = asyncio.Semaphore(settings.image_concurrency)
    results = await asyncio.gather(
        *(_run_task(gateway, task, limiter) for task in tasks),
        return_exceptions=True,
    )

    generated = 0
    for task, result in zip(tasks, results):
        if isinstance(result, BaseException):
            logger.warning("Image generation failed for %s: %s", task.label, result)
        elif result:
            generated += 1
        else:
            logger.info("No image produced for %s", task.label)
    logger.info("Visual enrichment: %d/%d images generated", generated, len(tasks))
    return quotation
