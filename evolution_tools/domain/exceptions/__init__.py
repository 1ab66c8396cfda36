"""
Domain exceptions for the tool catalog.
"""

from evolution_tools.domain.exceptions.tool_catalog import (
    DuplicateToolError,
    EndpointNotFoundError,
    InvalidToolError,
    ToolCatalogError,
    ToolGenerationError,
    ToolNotFoundError,
    ToolRegistrationError,
)

__all__ = [
    "ToolCatalogError",
    "InvalidToolError",
    "DuplicateToolError",
    "ToolNotFoundError",
    "ToolRegistrationError",
    "EndpointNotFoundError",
    "ToolGenerationError",
]
