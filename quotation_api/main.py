import logging
from typing import Any, Dict, List, Optional

from fastapi import Body, Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from .config import Settings
from .errors import QuotationError
from .gateway import GeminiGateway
from .models import Attachment, quotation_layout
from .service import generate_quotation

API_PREFIX = "/api/v1"

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_gateway(request: Request) -> GeminiGateway:
    return request.app.state.gateway


class QuotationRequest(BaseModel):
    text: str = ""
    attachments: List[Attachment] = Field(default_factory=list)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings.from_env()
    app = FastAPI(title="Quotation API", version="0.1.0")
    app.state.settings = settings
    app.state.gateway = GeminiGateway(settings)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(QuotationError)
    async def _quotation_error(request: Request, exc: QuotationError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("Quotation request failed: %s", exc, exc_info=exc)
        else:
            logger.warning("Quotation request rejected: %s", exc)
        return JSONResponse({"error": exc.user_message}, status_code=exc.status_code)

    @app.get(f"{API_PREFIX}/health")
    def healthcheck() -> Dict[str, str]:
        return {"status": "ok"}

    @app.post(f"{API_PREFIX}/quotations")
    async def create_quotation(
        request: QuotationRequest = Body(...),
        gateway: GeminiGateway = Depends(get_gateway),
        app_settings: Settings = Depends(get_settings),
    ) -> Dict[str, Any]:
        quotation = await generate_quotation(
            request.text,
            request.attachments,
            gateway=gateway,
            settings=app_settings,
        )
        return {"quotation": quotation.to_payload(), "layout": quotation_layout(quotation)}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("quotation_api.main:app", host="0.0.0.0", port=8000, log_level="info")
