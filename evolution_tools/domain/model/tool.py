"""Tool and tool result types exposed to the agent.

A Tool couples a schema-validated, agent-callable name with the endpoint it
drives and an async handler. Handlers always return a ToolResult: either
success data or a classified ToolError, never both.
"""

from __future__ import annotations

import copy
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable

from evolution_tools.domain.model.endpoint import ControllerType, EndpointDescriptor

TOOL_NAME_PATTERN = re.compile(r"[A-Za-z][A-Za-z0-9_-]*")


class ToolErrorType(str, Enum):
    """Failure categories surfaced to the agent."""

    AUTHENTICATION_ERROR = "AUTHENTICATION_ERROR"
    NETWORK_ERROR = "NETWORK_ERROR"
    TIMEOUT_ERROR = "TIMEOUT_ERROR"
    API_ERROR = "API_ERROR"
    RATE_LIMIT_ERROR = "RATE_LIMIT_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"


@dataclass
class ToolError:
    """Classified failure returned by a tool handler.

    Attributes:
        type: Failure category.
        message: Human readable explanation.
        code: Machine readable code (e.g. ``HTTP_404``, ``ConnectError``).
        details: Extra context (status code, upstream response...).
        suggestion: What the agent or operator can do about it.
    """

    type: ToolErrorType
    message: str
    code: str | None = None
    details: dict[str, Any] = field(default_factory=dict)
    suggestion: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "type": self.type.value,
            "message": self.message,
            "code": self.code,
            "details": self.details,
            "suggestion": self.suggestion,
        }


@dataclass
class ToolResult:
    """Outcome of a tool invocation.

    Exactly one of ``data`` and ``error`` is meaningful. ``success`` is
    derived from the presence of ``error``.
    """

    data: Any = None
    error: ToolError | None = None

    def __post_init__(self) -> None:
        if self.error is not None and self.data is not None:
            raise ValueError("ToolResult cannot carry both data and error")

    @property
    def success(self) -> bool:
        return self.error is None

    @classmethod
    def ok(cls, data: Any = None) -> ToolResult:
        """Create a successful result."""
        return cls(data=data)

    @classmethod
    def fail(
        cls,
        error_type: ToolErrorType,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
        suggestion: str | None = None,
    ) -> ToolResult:
        """Create a failed result."""
        return cls(
            error=ToolError(
                type=error_type,
                message=message,
                code=code,
                details=details or {},
                suggestion=suggestion,
            )
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        if self.error is not None:
            return {"success": False, "error": self.error.to_dict()}
        return {"success": True, "data": self.data}


ToolHandler = Callable[[dict[str, Any] | None], Awaitable[ToolResult]]


@dataclass
class ToolExample:
    """Example invocation shown alongside a tool."""

    description: str
    parameters: dict[str, Any] = field(default_factory=dict)


@dataclass
class Tool:
    """An agent-callable operation backed by one Evolution API endpoint."""

    name: str
    description: str
    controller: ControllerType
    endpoint: EndpointDescriptor
    parameter_schema: dict[str, Any]
    handler: ToolHandler
    example: ToolExample | None = None

    async def __call__(self, params: dict[str, Any] | None = None) -> ToolResult:
        return await self.handler(params)

    def copy(self) -> Tool:
        """Return a copy that shares no mutable state with this tool.

        The endpoint is frozen and the handler is a closure, so both are
        shared; schema and example are deep-copied.
        """
        return Tool(
            name=self.name,
            description=self.description,
            controller=self.controller,
            endpoint=self.endpoint,
            parameter_schema=copy.deepcopy(self.parameter_schema),
            handler=self.handler,
            example=copy.deepcopy(self.example),
        )

    def to_openai_format(self) -> dict[str, Any]:
        """Convert to OpenAI function calling format."""
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": copy.deepcopy(self.parameter_schema),
            },
        }
