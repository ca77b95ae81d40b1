import logging
from typing import Any, List, Mapping, Optional, Sequence, Union

from .config import Settings
from .enrichment import enrich_quotation
from .errors import PreconditionError
from .gateway import GeminiGateway, InlineFile
from .models import Attachment, Quotation
from .normalizer import parse_quotation
from .resilience import complete_with_fallback

logger = logging.getLogger(__name__)

AttachmentInput = Union[Attachment, Mapping[str, Any]]


def decode_attachments(attachments: Sequence[AttachmentInput]) -> List[InlineFile]:
    files: List[InlineFile] = []
    for item in attachments:
        try:
            attachment = item if isinstance(item, Attachment) else Attachment.model_validate(item)
            files.append((attachment.mime_type, attachment.payload()))
        except ValueError as exc:
            raise PreconditionError(f"Could not read uploaded file: {exc}") from exc
    return files


async def generate_quotation(
    free_text: str,
    attachments: Sequence[AttachmentInput] = (),
    *,
    gateway: Optional[GeminiGateway] = None,
    settings: Optional[Settings] = None,
) -> Quotation:
    """Build an illustrated quotation from travel notes and uploaded documents.

    Raises PreconditionError, QuotaExceededError, InvalidOutputError or
    GenerationError. Image failures never surface; those slots stay empty.
    """
    text = (free_text or "").strip()
    if not text and not attachments:
        raise PreconditionError()

    settings = settings or (gateway.settings if gateway is not None else Settings.from_env())
    gateway = gateway or GeminiGateway(settings)
    files = decode_attachments(attachments)

    raw_text = await complete_with_fallback(gateway, text, files, settings)
    quotation = parse_quotation(raw_text)
    logger.info(
        "Parsed quotation %r: %d flight(s), %d hotel(s), %d day(s), %d restaurant(s)",
        quotation.trip_title, len(quotation.flights), len(quotation.hotels),
        len(quotation.itinerary), len(quotation.restaurants),
    )

    if settings.enable_images:
        await enrich_quotation(quotation, gateway, settings)
    return quotation
