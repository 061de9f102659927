"""
Centralized error handling for the application.
"""

import json
from typing import Optional, Dict, Any

from app.config import config
from app.utils.logger import logging


class NotesError(Exception):
    """Base class for errors that terminate a notes request."""

    error_code: Optional[str] = None
    default_message = "Failed to generate notes"

    def __init__(self, message: Optional[str] = None, debug: Optional[Dict[str, Any]] = None):
        self.message = message or self.default_message
        self.debug = debug
        super().__init__(self.message)


class InvalidRequestError(NotesError):
    error_code = "BAD_REQUEST"
    default_message = "Video URL is required"


class InvalidVideoUrlError(NotesError):
    error_code = "INVALID_URL"
    default_message = "Invalid YouTube URL"


class AINotConfiguredError(NotesError):
    error_code = "AI_NOT_CONFIGURED"
    default_message = "AI service not configured"


class NoTranscriptError(NotesError):
    error_code = "NO_TRANSCRIPT"
    default_message = (
        "Could not retrieve a transcript for this video. "
        "Captions may be disabled, or you can paste the transcript manually."
    )


class GenerationError(NotesError):
    """The text generation service failed."""
    default_message = "Failed to generate notes. Please try again."

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None,
                 debug: Optional[Dict[str, Any]] = None):
        super().__init__(message, debug)
        self.status_code = status_code


class RateLimitError(GenerationError):
    error_code = "RATE_LIMIT"
    default_message = "Rate limit exceeded. Please try again in a moment."


class PaymentRequiredError(GenerationError):
    error_code = "PAYMENT_REQUIRED"
    default_message = "Usage limit reached. Please add credits to continue."


class EmptyResponseError(GenerationError):
    # The envelope code set is fixed, so an empty reply is reported as a parse failure.
    error_code = "PARSE_ERROR"
    default_message = "The AI service returned an empty response. Please try again."


class NotesParseError(NotesError):
    error_code = "PARSE_ERROR"
    default_message = "Failed to parse notes. Please try again."


class FetchError(Exception):
    """A single transcript strategy failed. Never leaves the resolver."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


def log_diagnostic_info(context: Dict[str, Any]):
    """
    Log diagnostic information for debugging.

    Args:
        context: Dictionary of diagnostic information
    """
    if not config.DEBUG:
        return

    try:
        logging.info(f"Diagnostic info: {json.dumps(context, default=str)}")
    except (TypeError, ValueError) as e:
        logging.error(f"Error logging diagnostic info: {str(e)}")
