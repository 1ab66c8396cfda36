"""
Tool catalog domain exceptions.

Raised by the tool registry and generator when the catalog structure is
violated. Remote call failures never surface as exceptions; they are
returned to the agent as ToolResult errors.

Exception Hierarchy:
    ToolCatalogError (base)
    ├── InvalidToolError        - Tool fails structural validation
    ├── DuplicateToolError      - Tool name already registered
    ├── ToolNotFoundError       - Tool name not registered
    ├── ToolRegistrationError   - One or more tools in a batch failed
    ├── EndpointNotFoundError   - Endpoint name not in the catalog
    └── ToolGenerationError     - Generation pass failed
"""

from typing import Any


class ToolCatalogError(Exception):
    """Base exception for all tool catalog errors."""

    def __init__(
        self,
        message: str,
        original_error: Exception | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.original_error = original_error
        self.details = details or {}

    def __str__(self) -> str:
        if self.original_error:
            return f"{self.message} (caused by: {self.original_error})"
        return self.message


class InvalidToolError(ToolCatalogError):
    """Raised when a tool is missing required fields or is malformed."""

    def __init__(
        self,
        errors: list[str],
        tool_name: str | None = None,
        message: str | None = None,
    ) -> None:
        self.errors = list(errors)
        self.tool_name = tool_name
        msg = message or f"Invalid tool info: {', '.join(self.errors)}"
        super().__init__(msg, details={"tool_name": tool_name, "errors": self.errors})


class DuplicateToolError(ToolCatalogError):
    """Raised when registering a name that is already taken."""

    def __init__(self, tool_name: str, message: str | None = None) -> None:
        self.tool_name = tool_name
        msg = message or f"Tool '{tool_name}' is already registered"
        super().__init__(msg, details={"tool_name": tool_name})


class ToolNotFoundError(ToolCatalogError):
    """Raised when a tool cannot be found in the registry."""

    def __init__(self, tool_name: str, message: str | None = None) -> None:
        self.tool_name = tool_name
        msg = message or f"Tool '{tool_name}' not found"
        super().__init__(msg, details={"tool_name": tool_name})


class ToolRegistrationError(ToolCatalogError):
    """Raised when a batch registration had at least one failure.

    ``failures`` holds ``(index, name, message)`` triples for each rejected
    tool. Tools that registered successfully stay registered.
    """

    def __init__(
        self,
        failures: list[tuple[int, str, str]],
        message: str | None = None,
    ) -> None:
        self.failures = list(failures)
        lines = [f"Tool at index {index} ({name}): {error}" for index, name, error in self.failures]
        msg = message or f"Failed to register some tools: {'; '.join(lines)}"
        super().__init__(
            msg,
            details={
                "failures": [
                    {"index": index, "name": name, "error": error}
                    for index, name, error in self.failures
                ]
            },
        )


class EndpointNotFoundError(ToolCatalogError):
    """Raised when an endpoint name is not present in the catalog."""

    def __init__(self, endpoint_name: str, message: str | None = None) -> None:
        self.endpoint_name = endpoint_name
        msg = message or f"Endpoint '{endpoint_name}' not found"
        super().__init__(msg, details={"endpoint_name": endpoint_name})


class ToolGenerationError(ToolCatalogError):
    """Raised when a generation pass cannot register its tools."""

    def __init__(
        self,
        message: str | None = None,
        original_error: Exception | None = None,
    ) -> None:
        msg = message or "Failed to register tools"
        if original_error is not None and message is None:
            msg = f"Failed to register tools: {getattr(original_error, 'message', original_error)}"
        super().__init__(msg, original_error=original_error)
