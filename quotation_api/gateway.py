import asyncio
import base64
import logging
from io import BytesIO
from typing import Any, List, Optional, Sequence, Tuple

import google.genai as genai
from google.genai import types
from PIL import Image

from .config import Settings
from .errors import ConfigurationError
from .prompts import SYSTEM_INSTRUCTION, user_notes

logger = logging.getLogger(__name__)

MAX_IMAGE_EDGE = 1024

# (mime type, raw bytes)
InlineFile = Tuple[str, bytes]


def build_client(settings: Settings) -> genai.Client:
    if settings.use_vertexai:
        if not settings.project_id:
            raise ConfigurationError("GCP_PROJECT_ID is required when GOOGLE_GENAI_USE_VERTEXAI is set.")
        return genai.Client(vertexai=True, project=settings.project_id, location=settings.location)
    if not settings.api_key:
        raise ConfigurationError("API Key is missing. Set GEMINI_API_KEY.")
    return genai.Client(api_key=settings.api_key)


def build_parts(text: str, files: Sequence[InlineFile]) -> List[types.Part]:
    parts: List[types.Part] = []
    if text:
        parts.append(types.Part.from_text(text=user_notes(text)))
    for mime_type, data in files:
        parts.append(types.Part.from_bytes(data=data, mime_type=mime_type))
    return parts


def _response_text(response: Any) -> str:
    raw_text = getattr(response, "text", None)
    if not raw_text and getattr(response, "candidates", None):
        raw_chunks = []
        for candidate in response.candidates:
            content = getattr(candidate, "content", None)
            for part in getattr(content, "parts", None) or []:
                if getattr(part, "text", None):
                    raw_chunks.append(part.text)
        raw_text = "".join(raw_chunks)
    return raw_text or ""


def _first_image(response: Any) -> Optional[bytes]:
    for candidate in getattr(response, "candidates", None) or []:
        content = getattr(candidate, "content", None)
        for part in getattr(content, "parts", None) or []:
            inline = getattr(part, "inline_data", None)
            if inline and getattr(inline, "data", None):
                data = inline.data
                if isinstance(data, str):
                    data = base64.b64decode(data)
                return data
    return None


def to_jpeg_data_url(image_bytes: bytes) -> str:
    img = Image.open(BytesIO(image_bytes))
    img = img.convert("RGB")
    if max(img.size) > MAX_IMAGE_EDGE:
        img.thumbnail((MAX_IMAGE_EDGE, MAX_IMAGE_EDGE))
    buf = BytesIO()
    img.save(buf, format="JPEG", quality=85)
    b64 = base64.b64encode(buf.getvalue()).decode("utf-8")
    return f"data:image/jpeg;base64,{b64}"


class GeminiGateway:
    """Issues the two kinds of Gemini calls the quotation pipeline needs.

    Errors raised by the SDK (``google.genai.errors.APIError`` and friends) and
    timeouts are propagated untouched; classifying them is the caller's job.
    """

    def __init__(self, settings: Settings, client: Optional[genai.Client] = None) -> None:
        self.settings = settings
        self._client = client

    @property
    def client(self) -> genai.Client:
        if self._client is None:
            self._client = build_client(self.settings)
        return self._client

    async def complete_text(self, text: str, files: Sequence[InlineFile], use_tools: bool) -> str:
        if use_tools:
            # Search grounding cannot be combined with a JSON response mime type,
            # so the shape is enforced by the system instruction alone.
            config = types.GenerateContentConfig(
                system_instruction=SYSTEM_INSTRUCTION,
                tools=[types.Tool(google_search=types.GoogleSearch())],
                temperature=0.4,
            )
        else:
            config = types.GenerateContentConfig(
                system_instruction=SYSTEM_INSTRUCTION,
                response_mime_type="application/json",
                temperature=0.4,
            )
        logger.info(
            "Requesting quotation from %s (grounding=%s, %d file(s))",
            self.settings.text_model, use_tools, len(files),
        )
        response = await asyncio.wait_for(
            self.client.aio.models.generate_content(
                model=self.settings.text_model,
                contents=[types.Content(role="user", parts=build_parts(text, files))],
                config=config,
            ),
            timeout=self.settings.request_timeout,
        )
        return _response_text(response)

    async def synthesize_image(self, prompt: str) -> str:
        response = await asyncio.wait_for(
            self.client.aio.models.generate_content(
                model=self.settings.image_model,
                contents=[types.Content(role="user", parts=[types.Part.from_text(text=prompt)])],
                config=types.GenerateContentConfig(response_modalities=["TEXT", "IMAGE"]),
            ),
            timeout=self.settings.request_timeout,
        )
        img_bytes = _first_image(response)
        if not img_bytes:
            logger.info("Image model returned no image for prompt %r", prompt[:60])
            return ""
        return await asyncio.to_thread(to_jpeg_data_url, img_bytes)
