import os
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

DEFAULT_TEXT_MODEL = "gemini-2.5-flash"
DEFAULT_IMAGE_MODEL = "gemini-2.5-flash-image"


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Settings(BaseModel):
    """Runtime configuration, read from the environment once at startup."""

    api_key: Optional[str] = None
    use_vertexai: bool = False
    project_id: Optional[str] = None
    location: str = "global"
    text_model: str = DEFAULT_TEXT_MODEL
    image_model: str = DEFAULT_IMAGE_MODEL
    request_timeout: float = Field(default=45.0, gt=0)
    retry_base_delay: float = Field(default=1.0, ge=0)
    image_concurrency: int = Field(default=4, ge=1)
    enable_images: bool = True
    cors_origins: List[str] = Field(default_factory=lambda: ["http://localhost:5173"])

    @classmethod
    def from_env(cls) -> "Settings":
        load_dotenv()
        origins = os.getenv("CORS_ALLOW_ORIGINS", "http://localhost:5173").split(",")
        return cls(
            api_key=(
                os.getenv("GEMINI_API_KEY")
                or os.getenv("GOOGLE_API_KEY")
                or os.getenv("API_KEY")
                or None
            ),
            use_vertexai=_env_flag("GOOGLE_GENAI_USE_VERTEXAI", False),
            project_id=os.getenv("GCP_PROJECT_ID") or None,
            location=os.getenv("GCP_GLOBAL_LOCATION") or os.getenv("GCP_LOCATION") or "global",
            text_model=os.getenv("GEMINI_MODEL", DEFAULT_TEXT_MODEL),
            image_model=os.getenv("IMAGE_MODEL", DEFAULT_IMAGE_MODEL),
            request_timeout=float(os.getenv("GEMINI_TIMEOUT_SECONDS", "45")),
            retry_base_delay=float(os.getenv("GEMINI_RETRY_BASE_DELAY", "1.0")),
            image_concurrency=int(os.getenv("IMAGE_CONCURRENCY", "4")),
            enable_images=_env_flag("ENABLE_IMAGE_GENERATION", True),
            cors_origins=[origin.strip() for origin in origins if origin.strip()],
        )
