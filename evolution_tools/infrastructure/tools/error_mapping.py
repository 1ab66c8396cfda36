"""Map classified request failures to agent-facing ToolResult errors.

Each failure kind gets a fixed message template and a suggestion telling the
agent (or operator) what to do next.
"""

import logging
from typing import Any

from evolution_tools.domain.model.tool import ToolErrorType, ToolResult
from evolution_tools.infrastructure.evolution.errors import RequestError, RequestErrorKind

logger = logging.getLogger(__name__)

AUTH_SUGGESTION = "Verify that your EVOLUTION_API_KEY environment variable is set correctly"
NETWORK_SUGGESTION = "Verify that your EVOLUTION_URL is correct and the API is accessible"
TIMEOUT_SUGGESTION = "Try again in a few moments. The API might be experiencing high load"
NOT_FOUND_SUGGESTION = "Check that the instance name is correct and that the instance exists"
VALIDATION_SUGGESTION = "Check the parameter values and format"
CONFLICT_SUGGESTION = "Use a different name or check the current state of the instance"
API_SUGGESTION = "Check the Evolution API logs for more details"
RATE_LIMIT_SUGGESTION = "Wait a moment before trying again"
UNKNOWN_SUGGESTION = "Please try again or contact support if the problem persists"
UNEXPECTED_SUGGESTION = "This is an unexpected error. Please try again or contact support."


def _error_details(error: RequestError) -> dict[str, Any]:
    details: dict[str, Any] = {
        "status_code": error.status_code,
        "original_error": error.details.get("original_error", error.message),
        "api_response": error.details.get("api_response"),
    }
    if "retry_after" in error.details:
        details["retry_after"] = error.details["retry_after"]
    return details


def map_request_error(error: RequestError, operation: str) -> ToolResult:
    """
    Convert a classified request failure into a failed ToolResult.

    Args:
        error: Classified failure from the request client
        operation: Human readable operation label (e.g. "send text")

    Returns:
        Failed ToolResult with type, message, code, details and suggestion
    """
    base = f"Failed to {operation}"
    details = _error_details(error)

    if error.kind == RequestErrorKind.AUTHENTICATION:
        return ToolResult.fail(
            ToolErrorType.AUTHENTICATION_ERROR,
            f"{base}: Authentication failed. Please check your Evolution API key.",
            code=error.code,
            details=details,
            suggestion=AUTH_SUGGESTION,
        )

    if error.kind == RequestErrorKind.NETWORK:
        return ToolResult.fail(
            ToolErrorType.NETWORK_ERROR,
            f"{base}: Network error occurred. Please check your connection to the Evolution API.",
            code=error.code,
            details=details,
            suggestion=NETWORK_SUGGESTION,
        )

    if error.kind == RequestErrorKind.TIMEOUT:
        return ToolResult.fail(
            ToolErrorType.TIMEOUT_ERROR,
            f"{base}: Request timed out. The Evolution API did not respond in time.",
            code=error.code,
            details=details,
            suggestion=TIMEOUT_SUGGESTION,
        )

    if error.kind == RequestErrorKind.RATE_LIMIT:
        return ToolResult.fail(
            ToolErrorType.RATE_LIMIT_ERROR,
            f"{base}: Rate limit exceeded. Too many requests.",
            code=error.code,
            details=details,
            suggestion=RATE_LIMIT_SUGGESTION,
        )

    if error.kind == RequestErrorKind.API:
        if error.status_code == 404:
            return ToolResult.fail(
                ToolErrorType.API_ERROR,
                f"{base}: Instance not found or endpoint not available.",
                code=error.code,
                details=details,
                suggestion=NOT_FOUND_SUGGESTION,
            )
        if error.status_code in (400, 422):
            return ToolResult.fail(
                ToolErrorType.VALIDATION_ERROR,
                f"{base}: Invalid parameters provided. {error.message}",
                code=error.code,
                details=details,
                suggestion=VALIDATION_SUGGESTION,
            )
        if error.status_code == 409:
            return ToolResult.fail(
                ToolErrorType.API_ERROR,
                f"{base}: Conflict - instance may already exist or be in use.",
                code=error.code,
                details=details,
                suggestion=CONFLICT_SUGGESTION,
            )
        return ToolResult.fail(
            ToolErrorType.API_ERROR,
            f"{base}: {error.message}",
            code=error.code,
            details=details,
            suggestion=API_SUGGESTION,
        )

    return ToolResult.fail(
        ToolErrorType.UNKNOWN_ERROR,
        f"{base}: {error.message}",
        code=error.code,
        details=details,
        suggestion=UNKNOWN_SUGGESTION,
    )


def map_unexpected_exception(error: Exception, operation: str) -> ToolResult:
    """Convert an exception raised inside a tool handler into a failed ToolResult."""
    logger.error(f"Unexpected error while trying to {operation}: {error}", exc_info=True)
    return ToolResult.fail(
        ToolErrorType.UNKNOWN_ERROR,
        f"Failed to {operation}: {error}",
        code=type(error).__name__,
        details={"original_error": repr(error)},
        suggestion=UNEXPECTED_SUGGESTION,
    )
