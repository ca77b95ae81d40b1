"""Turn the model's raw completion text into a validated :class:`Quotation`."""

import json
import logging
import re

from pydantic import ValidationError

from .errors import InvalidOutputError
from .models import Quotation

logger = logging.getLogger(__name__)

_FENCE_OPEN = re.compile(r"^```(?:json)?\s*", re.IGNORECASE)
_FENCE_CLOSE = re.compile(r"\s*```$")
_CLOSED_ARRAY_TAIL = re.compile(r"\]\s*\}$")


def strip_code_fence(text: str) -> str:
    # Either fence may be missing when the output was cut off.
    text = _FENCE_OPEN.sub("", text.strip())
    return _FENCE_CLOSE.sub("", text).strip()


def repair_truncated_array(text: str) -> str:
    """Close a final array whose ``]`` was dropped before the closing brace.

    Assumes the last property of the object is an array (``travelTips`` in the
    output contract). If a scalar key is ever added after it, this will corrupt
    valid output. Any other malformation is left for the JSON parser to reject.
    """
    if text.endswith("}") and not _CLOSED_ARRAY_TAIL.search(text):
        return text[:-1] + "] }"
    return text


def clean_model_text(raw_text: str) -> str:
    return repair_truncated_array(strip_code_fence(raw_text))


def parse_quotation(raw_text: str) -> Quotation:
    cleaned = clean_model_text(raw_text)
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        logger.error("Failed to parse JSON response: %s (%s)", cleaned[:500], exc)
        raise InvalidOutputError() from exc
    if not isinstance(data, dict):
        logger.error("Model returned %s instead of a JSON object", type(data).__name__)
        raise InvalidOutputError()
    try:
        return Quotation.model_validate(data)
    except ValidationError as exc:
        logger.error("Quotation failed validation: %s", exc)
        raise InvalidOutputError() from exc
