from .config import Settings
from .errors import (
    ConfigurationError,
    GenerationError,
    InvalidOutputError,
    PreconditionError,
    QuotaExceededError,
    QuotationError,
)
from .models import Attachment, Quotation, quotation_layout
from .service import generate_quotation

__all__ = [
    "Attachment",
    "ConfigurationError",
    "GenerationError",
    "InvalidOutputError",
    "PreconditionError",
    "Quotation",
    "QuotaExceededError",
    "QuotationError",
    "Settings",
    "generate_quotation",
    "quotation_layout",
]
