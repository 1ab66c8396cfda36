"""Tool Registry.

Central store for generated tools. Enforces structural validity and unique
names; every read and write goes through defensive copies so callers cannot
mutate registered state.
"""

import dataclasses
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from evolution_tools.domain.exceptions.tool_catalog import (
    DuplicateToolError,
    InvalidToolError,
    ToolNotFoundError,
    ToolRegistrationError,
)
from evolution_tools.domain.model.endpoint import ControllerType
from evolution_tools.domain.model.tool import TOOL_NAME_PATTERN, Tool

logger = logging.getLogger(__name__)

_TOOL_FIELDS = frozenset(f.name for f in dataclasses.fields(Tool))


@dataclass
class RegistryStats:
    """Snapshot of the registry contents."""

    total: int
    by_controller: Dict[str, int] = field(default_factory=dict)
    registered: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "total": self.total,
            "by_controller": dict(self.by_controller),
            "registered": list(self.registered),
        }


class ToolRegistry:
    """
    Central registry for Evolution API tools.

    Manages tool registration, lookup and controller-scoped queries.
    """

    def __init__(self, controllers: Iterable[ControllerType] = tuple(ControllerType)) -> None:
        """Initialize the tool registry.

        Args:
            controllers: Controllers a tool may belong to
        """
        self._controllers = tuple(ControllerType(c) for c in controllers)
        self._tools: Dict[str, Tool] = {}

    def __len__(self) -> int:
        return len(self._tools)

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def validate_tool(self, tool: Any) -> List[str]:
        """Check a tool for structural problems.

        Args:
            tool: Candidate tool

        Returns:
            Error messages; empty when the tool is valid
        """
        errors: List[str] = []

        name = getattr(tool, "name", None)
        if not isinstance(name, str) or not name:
            errors.append("Tool name is required and must be a string")
        elif not TOOL_NAME_PATTERN.fullmatch(name):
            errors.append(
                "Tool name must start with a letter and contain only letters, "
                "numbers, underscores, and hyphens"
            )

        description = getattr(tool, "description", None)
        if not isinstance(description, str) or not description:
            errors.append("Tool description is required and must be a string")

        controller = getattr(tool, "controller", None)
        if not controller:
            errors.append("Tool controller is required")
        elif controller not in self._controllers:
            allowed = ", ".join(c.value for c in self._controllers)
            label = getattr(controller, "value", controller)
            errors.append(f"Invalid controller: {label}. Must be one of: {allowed}")

        if getattr(tool, "endpoint", None) is None:
            errors.append("Tool endpoint is required")

        if not isinstance(getattr(tool, "parameter_schema", None), dict):
            errors.append("Tool parameter schema is required")

        if not callable(getattr(tool, "handler", None)):
            errors.append("Tool handler is required and must be a function")

        return errors

    def register(self, tool: Tool) -> None:
        """Register a tool.

        Args:
            tool: The tool to register

        Raises:
            DuplicateToolError: If the name is already registered
            InvalidToolError: If the tool fails validation
        """
        name = getattr(tool, "name", None)
        if isinstance(name, str) and name in self._tools:
            raise DuplicateToolError(name)

        errors = self.validate_tool(tool)
        if errors:
            raise InvalidToolError(errors, tool_name=name if isinstance(name, str) else None)

        self._tools[name] = tool.copy()
        logger.info(f"Registered tool: {name}")

    def register_many(self, tools: Iterable[Tool]) -> List[str]:
        """Register tools one by one.

        Each registration is independent: a failure does not roll back
        earlier successes.

        Args:
            tools: Tools to register

        Returns:
            Names of the tools that were registered

        Raises:
            ToolRegistrationError: If at least one tool failed
        """
        registered: List[str] = []
        failures: List[tuple] = []

        for index, tool in enumerate(tools):
            try:
                self.register(tool)
                registered.append(tool.name)
            except (DuplicateToolError, InvalidToolError) as e:
                name = getattr(tool, "name", None)
                failures.append((index, name if isinstance(name, str) else "unknown", e.message))

        if failures:
            logger.warning(f"Registered {len(registered)} tools, {len(failures)} failed")
            raise ToolRegistrationError(failures)

        return registered

    def get(self, name: str) -> Optional[Tool]:
        """Get a copy of a tool by name."""
        tool = self._tools.get(name)
        return tool.copy() if tool else None

    def has(self, name: str) -> bool:
        return name in self._tools

    def list_tools(self) -> List[Tool]:
        return [tool.copy() for tool in self._tools.values()]

    def list_names(self) -> List[str]:
        return list(self._tools.keys())

    def list_by_controller(self, controller: ControllerType | str) -> List[Tool]:
        """List tools belonging to one controller."""
        controller = ControllerType(controller)
        return [tool.copy() for tool in self._tools.values() if tool.controller == controller]

    def search(self, query: str) -> List[Tool]:
        """Case-insensitive substring search over tool names and descriptions."""
        needle = query.lower()
        return [
            tool.copy()
            for tool in self._tools.values()
            if needle in tool.name.lower() or needle in tool.description.lower()
        ]

    def update(self, name: str, /, **changes: Any) -> Tool:
        """Update fields of a registered tool.

        ``name`` is positional-only so ``update("a", name="b")`` renames.
        Replacing ``parameter_schema`` only changes the advertised schema:
        the handler keeps validating against the schema it was built with,
        so pass a new ``handler`` (e.g. from ``ToolFactory.create_handler``)
        to change validation as well.

        Args:
            name: Name of the tool to update
            **changes: Tool fields to replace

        Returns:
            A copy of the updated tool

        Raises:
            ToolNotFoundError: If no tool has this name
            InvalidToolError: If a field is unknown or the result is invalid
            DuplicateToolError: If renaming onto an existing name
        """
        current = self._tools.get(name)
        if current is None:
            raise ToolNotFoundError(name)

        unknown = sorted(set(changes) - _TOOL_FIELDS)
        if unknown:
            raise InvalidToolError([f"Unknown tool field: {key}" for key in unknown], tool_name=name)

        updated = dataclasses.replace(current, **changes)
        errors = self.validate_tool(updated)
        if errors:
            raise InvalidToolError(errors, tool_name=name)

        if updated.name != name:
            if updated.name in self._tools:
                raise DuplicateToolError(updated.name)
            del self._tools[name]
        self._tools[updated.name] = updated.copy()

        logger.info(f"Updated tool: {name}")
        return updated.copy()

    def remove(self, name: str) -> None:
        """Remove a tool.

        Raises:
            ToolNotFoundError: If no tool has this name
        """
        if name not in self._tools:
            raise ToolNotFoundError(name)
        del self._tools[name]
        logger.info(f"Removed tool: {name}")

    def clear(self) -> None:
        count = len(self._tools)
        self._tools.clear()
        logger.info(f"Cleared {count} tools from registry")

    def stats(self) -> RegistryStats:
        by_controller = {c.value: 0 for c in self._controllers}
        for tool in self._tools.values():
            by_controller[ControllerType(tool.controller).value] += 1
        return RegistryStats(
            total=len(self._tools),
            by_controller=by_controller,
            registered=list(self._tools.keys()),
        )

    def export_config(self) -> Dict[str, Any]:
        """Export a JSON-ready description of the registry."""
        return {
            "tools": [
                {
                    "name": tool.name,
                    "description": tool.description,
                    "controller": ControllerType(tool.controller).value,
                    "endpoint": {
                        "name": tool.endpoint.name,
                        "path": tool.endpoint.path,
                        "method": tool.endpoint.method.value,
                    },
                    "has_handler": callable(tool.handler),
                    "has_schema": bool(tool.parameter_schema),
                }
                for tool in self._tools.values()
            ],
            "stats": self.stats().to_dict(),
        }
