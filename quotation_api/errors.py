from typing import Optional


class QuotationError(RuntimeError):
    """Base error for quotation generation failures."""

    status_code = 500
    user_message = "Quotation generation failed."

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message or self.user_message)
        if message:
            self.user_message = message


class ConfigurationError(QuotationError):
    """Raised when the Gemini client cannot be built from settings."""


class PreconditionError(QuotationError):
    """Raised when the caller supplied nothing to quote from."""

    status_code = 400
    user_message = "Please provide text details or upload a file."


class QuotaExceededError(QuotationError):
    """Raised when the backend signals rate limiting or quota exhaustion."""

    status_code = 429
    user_message = "AI quota exceeded. Please try again later."


class InvalidOutputError(QuotationError):
    """Raised when the model's text cannot be parsed into a quotation."""

    status_code = 502
    user_message = "AI generated an invalid format. Please try again."


class GenerationError(QuotationError):
    """Raised when the text completion fails for good."""

    status_code = 502
    user_message = "Failed to generate quotation after multiple attempts."

    def __init__(self, message: Optional[str] = None, cause: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.cause = cause
