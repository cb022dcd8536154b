"""Error handling helpers for storefront operations."""
from typing import Any, Dict, Optional
import logging

from storefront.errors import NetworkFailure, ServerError, StorefrontError, ValidationGap
from storefront.integrations.response_wrappers import IntegrationResponseError
from storefront.validation import FormValidationError

logger = logging.getLogger(__name__)

GENERIC_MESSAGE = "Something went wrong. Please try again."


class ErrorHandler:
    def handle_exception(
        self,
        exc: Exception,
        context: Optional[Dict[str, Any]] = None,
        fallback: Optional[str] = None,
        always_fallback: bool = False,
    ) -> Dict[str, Any]:
        """Turn an operation failure into the status message shown to the user.

        ``fallback`` replaces messages that are not meant for users (malformed
        responses, unexpected exceptions); ``always_fallback`` uses it for every
        failure.
        """
        context = context or {}
        error_type = _classify(exc)

        if isinstance(exc, (StorefrontError, FormValidationError)) and not always_fallback:
            message = str(exc) or fallback or GENERIC_MESSAGE
        else:
            message = fallback or GENERIC_MESSAGE

        if error_type == "unexpected":
            logger.error("Unhandled exception in storefront operation: %s", exc, exc_info=True)
        else:
            logger.warning("Storefront operation failed (%s): %s context=%s", error_type, exc, context)

        return {
            "message": message,
            "error_type": error_type,
            "metadata": {"error": str(exc), "context": context},
        }


def _classify(exc: Exception) -> str:
    if isinstance(exc, NetworkFailure):
        return "network_failure"
    if isinstance(exc, ServerError):
        return "server_error"
    if isinstance(exc, (ValidationGap, FormValidationError)):
        return "validation_gap"
    if isinstance(exc, IntegrationResponseError):
        return "invalid_response"
    return "unexpected"
