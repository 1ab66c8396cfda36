"""Domain model for the tool catalog."""

from evolution_tools.domain.model.endpoint import (
    ControllerType,
    EndpointDescriptor,
    EndpointParameter,
    HttpMethod,
    ParameterLocation,
)
from evolution_tools.domain.model.tool import (
    Tool,
    ToolError,
    ToolErrorType,
    ToolExample,
    ToolResult,
)

__all__ = [
    "ControllerType",
    "EndpointDescriptor",
    "EndpointParameter",
    "HttpMethod",
    "ParameterLocation",
    "Tool",
    "ToolError",
    "ToolErrorType",
    "ToolExample",
    "ToolResult",
]
