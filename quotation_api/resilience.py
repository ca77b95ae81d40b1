"""Retry and fallback policy around the quotation text completion.

Attempts 1 and 2 use search grounding, the last attempt drops it since
grounding is a suspected trigger of backend INTERNAL errors. Quota errors and
non-transient errors end the request immediately, as does a reply with no text.
"""

import asyncio
import enum
import logging
from typing import Optional, Sequence

from .config import Settings
from .errors import GenerationError, QuotaExceededError, QuotationError

logger = logging.getLogger(__name__)

# Grounding flag per attempt, in order.
ATTEMPT_PLAN = (True, True, False)

QUOTA_CODES = (429,)
TRANSIENT_CODES = (500, 503)
QUOTA_MARKERS = ("resource_exhausted", "quota")
TRANSIENT_MARKERS = ("internal", "unavailable")


class ErrorKind(enum.Enum):
    QUOTA = "quota"
    TRANSIENT = "transient"
    FATAL = "fatal"


class EmptyResponseError(RuntimeError):
    """Raised when a completion came back without any text."""


def _error_code(exc: BaseException) -> Optional[int]:
    for attr in ("code", "status_code"):
        value = getattr(exc, attr, None)
        if isinstance(value, int):
            return value
    return None


def _error_text(exc: BaseException) -> str:
    pieces = [str(exc)]
    for attr in ("status", "message"):
        value = getattr(exc, attr, None)
        if isinstance(value, str):
            pieces.append(value)
    return " ".join(pieces).lower()


def classify_error(exc: BaseException) -> ErrorKind:
    if isinstance(exc, (asyncio.TimeoutError, TimeoutError)):
        return ErrorKind.TRANSIENT
    code = _error_code(exc)
    text = _error_text(exc)
    if code in QUOTA_CODES or any(marker in text for marker in QUOTA_MARKERS):
        return ErrorKind.QUOTA
    if code in TRANSIENT_CODES or any(marker in text for marker in TRANSIENT_MARKERS):
        return ErrorKind.TRANSIENT
    return ErrorKind.FATAL


async def complete_with_fallback(gateway, text: str, files: Sequence, settings: Settings) -> str:
    """Return the raw completion text, or raise a classified error."""
    last_error: Optional[BaseException] = None
    total = len(ATTEMPT_PLAN)
    for attempt, use_tools in enumerate(ATTEMPT_PLAN, start=1):
        if attempt > 1:
            await asyncio.sleep((attempt - 1) * settings.retry_base_delay)
        try:
            raw_text = await gateway.complete_text(text, files, use_tools=use_tools)
            if not raw_text or not raw_text.strip():
                empty = EmptyResponseError("No response from AI")
                logger.warning("Quotation attempt %d/%d (grounding=%s) returned no text", attempt, total, use_tools)
                raise GenerationError(
                    f"Failed to generate quotation after multiple attempts: {empty}",
                    cause=empty,
                ) from empty
            if attempt > 1:
                logger.info("Quotation completion succeeded on attempt %d/%d", attempt, total)
            return raw_text
        except QuotationError:
            raise
        except Exception as exc:
            kind = classify_error(exc)
            logger.warning(
                "Quotation attempt %d/%d (grounding=%s) failed [%s]: %s",
                attempt, total, use_tools, kind.value, exc,
            )
            if kind is ErrorKind.QUOTA:
                raise QuotaExceededError() from exc
            if kind is ErrorKind.FATAL:
                raise GenerationError(f"Quotation generation failed: {exc}", cause=exc) from exc
            last_error = exc

    raise GenerationError(
        f"Failed to generate quotation after multiple attempts: {last_error}",
        cause=last_error,
    ) from last_error
