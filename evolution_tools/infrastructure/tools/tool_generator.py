"""Tool Generator.

Batches tool construction per controller, applies include/exclude filters
and an optional name prefix, and registers the result.
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field
from typing import Any

from evolution_tools.domain.exceptions.tool_catalog import (
    EndpointNotFoundError,
    ToolGenerationError,
    ToolRegistrationError,
)
from evolution_tools.domain.model.endpoint import ControllerType
from evolution_tools.domain.model.tool import Tool
from evolution_tools.infrastructure.endpoints.catalog import EndpointCatalog
from evolution_tools.infrastructure.tools.tool_factory import ToolFactory
from evolution_tools.infrastructure.tools.tool_registry import ToolRegistry

logger = logging.getLogger(__name__)


@dataclass
class ToolGenerationConfig:
    """Options for a generation pass.

    Attributes:
        controllers: Controllers to generate; None means all.
        include_endpoints: If non-empty, only these endpoints are kept.
        exclude_endpoints: Endpoints to skip (ignored when an include list is given).
        tool_name_prefix: Extra prefix prepended to every generated name.
    """

    controllers: list[ControllerType] | None = None
    include_endpoints: list[str] = field(default_factory=list)
    exclude_endpoints: list[str] = field(default_factory=list)
    tool_name_prefix: str | None = None


@dataclass
class ValidationReport:
    valid: bool
    errors: list[str] = field(default_factory=list)


@dataclass
class GenerationStats:
    available_endpoints: int
    registered_tools: int
    by_controller: dict[str, dict[str, int]] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return dataclasses.asdict(self)


class ToolGenerator:
    """Generates tools from the endpoint catalog into a registry."""

    def __init__(
        self,
        registry: ToolRegistry,
        factory: ToolFactory,
        endpoints: EndpointCatalog,
    ) -> None:
        self._registry = registry
        self._factory = factory
        self._endpoints = endpoints

    def generate_all(self, config: ToolGenerationConfig | None = None) -> list[Tool]:
        """Regenerate the registry from scratch.

        Args:
            config: Generation options (defaults to every controller, no filters)

        Returns:
            The generated tools

        Raises:
            ToolGenerationError: If any tool failed to register
        """
        config = config or ToolGenerationConfig()
        self._registry.clear()

        controllers = config.controllers or self._endpoints.get_controllers()
        tools: list[Tool] = []
        for controller in controllers:
            tools.extend(self._factory.create_tools_for_controller(controller))

        if config.include_endpoints:
            include = set(config.include_endpoints)
            tools = [t for t in tools if t.endpoint.name in include or t.name in include]
        elif config.exclude_endpoints:
            exclude = set(config.exclude_endpoints)
            tools = [t for t in tools if t.endpoint.name not in exclude and t.name not in exclude]

        if config.tool_name_prefix:
            tools = [
                dataclasses.replace(t, name=f"{config.tool_name_prefix}{t.name}") for t in tools
            ]

        try:
            self._registry.register_many(tools)
        except ToolRegistrationError as e:
            logger.error(f"Tool generation failed: {e.message}")
            raise ToolGenerationError(original_error=e) from e

        logger.info(
            f"Generated {len(tools)} tools for controllers: "
            f"{', '.join(ControllerType(c).value for c in controllers)}"
        )
        return tools

    def regenerate(self, config: ToolGenerationConfig | None = None) -> list[Tool]:
        """Alias of ``generate_all`` used after configuration changes."""
        return self.generate_all(config)

    def generate_for_controller(self, controller: ControllerType | str) -> list[Tool]:
        """Generate and register the tools of one controller, keeping existing tools.

        Raises:
            ToolRegistrationError: If any tool failed to register
        """
        tools = self._factory.create_tools_for_controller(controller)
        self._registry.register_many(tools)
        return tools

    def generate_for_endpoint(self, endpoint_name: str) -> Tool:
        """Generate and register the tool of one endpoint, keeping existing tools.

        Raises:
            EndpointNotFoundError: If the endpoint is not in the catalog
            DuplicateToolError: If the tool is already registered
        """
        endpoint = self._endpoints.get_endpoint(endpoint_name)
        if endpoint is None:
            raise EndpointNotFoundError(endpoint_name)
        tool = self._factory.create_tool_for_endpoint(endpoint)
        self._registry.register(tool)
        return tool

    def validate(self) -> ValidationReport:
        """Check the catalog and the registered tools. Never raises."""
        errors: list[str] = []
        try:
            errors.extend(self._endpoints.validate())

            tools = self._registry.list_tools()
            if not tools:
                errors.append("No tools have been generated")

            for tool in tools:
                errors.extend(f"{tool.name}: {e}" for e in self._registry.validate_tool(tool))
                if self._endpoints.get_endpoint(tool.endpoint.name) is None:
                    errors.append(f"{tool.name}: unknown endpoint '{tool.endpoint.name}'")
        except Exception as e:
            logger.error(f"Validation failed: {e}", exc_info=True)
            errors.append(f"Validation failed: {e}")

        return ValidationReport(valid=not errors, errors=errors)

    def stats(self) -> GenerationStats:
        registry_stats = self._registry.stats()
        by_controller = {
            c.value: {
                "endpoints": len(self._endpoints.get_endpoints_by_controller(c)),
                "tools": registry_stats.by_controller.get(c.value, 0),
            }
            for c in ControllerType
        }
        return GenerationStats(
            available_endpoints=len(self._endpoints),
            registered_tools=registry_stats.total,
            by_controller=by_controller,
        )

    def export_config(self) -> dict[str, Any]:
        """Export generation stats, validation, registry contents and endpoint stats."""
        return {
            "generation": self.stats().to_dict(),
            "validation": dataclasses.asdict(self.validate()),
            "registry": self._registry.export_config(),
            "endpoints": self._endpoints.stats(),
        }
