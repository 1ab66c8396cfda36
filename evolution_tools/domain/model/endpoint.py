"""Endpoint descriptors for the Evolution API.

A descriptor is static metadata for one remote operation: where it lives
(path template + HTTP method), which controller group it belongs to and which
parameters it accepts. Descriptors are immutable and validated on creation so
a malformed catalog fails at import time rather than at call time.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping
from urllib.parse import quote

INSTANCE_PLACEHOLDER = "{instance}"
INSTANCE_PARAMETER = "instance"

_PLACEHOLDER_PATTERN = re.compile(r"\{([^{}]+)\}")

_JSON_SCHEMA_TYPES = {"string", "number", "integer", "boolean", "array", "object"}


def freeze(value: Any) -> Any:
    """Recursively turn mappings into read-only proxies and lists into tuples."""
    if isinstance(value, Mapping):
        return MappingProxyType({key: freeze(item) for key, item in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(freeze(item) for item in value)
    return value


def thaw(value: Any) -> Any:
    """Inverse of freeze(): fresh plain dicts and lists."""
    if isinstance(value, Mapping):
        return {key: thaw(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [thaw(item) for item in value]
    return value


class HttpMethod(str, Enum):
    """HTTP methods used by the Evolution API."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


class ControllerType(str, Enum):
    """Controller groups partitioning the Evolution API endpoints."""

    INSTANCE = "instance"
    MESSAGE = "message"
    CHAT = "chat"
    GROUP = "group"
    PROFILE = "profile"
    WEBHOOK = "webhook"
    INFORMATION = "information"


class ParameterLocation(str, Enum):
    """Where a parameter travels in the outgoing request."""

    PATH = "path"
    QUERY = "query"
    BODY = "body"


@dataclass(frozen=True)
class EndpointParameter:
    """A single parameter accepted by an endpoint.

    Attributes:
        name: Parameter name as sent to the API.
        type: JSON-Schema type name.
        required: Whether the caller must supply it.
        description: Human readable description shown to the agent.
        location: Where the value is placed in the request.
        example: Example value used for generated tool examples.
        constraints: Extra JSON-Schema keywords (enum, minLength, items...).
    """

    name: str
    type: str
    required: bool = False
    description: str = ""
    location: ParameterLocation = ParameterLocation.BODY
    example: Any = None
    constraints: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.type not in _JSON_SCHEMA_TYPES:
            raise ValueError(f"Parameter '{self.name}' has unsupported type '{self.type}'")
        # Deep-frozen: catalog metadata is shared by every tool built from it.
        object.__setattr__(self, "constraints", freeze(self.constraints))
        object.__setattr__(self, "example", freeze(self.example))

    def to_json_schema(self) -> dict[str, Any]:
        """Render this parameter as a JSON-Schema property."""
        schema: dict[str, Any] = {"type": self.type}
        if self.description:
            schema["description"] = self.description
        schema.update(thaw(self.constraints))
        return schema


@dataclass(frozen=True)
class EndpointDescriptor:
    """Static description of one remote Evolution API operation.

    Attributes:
        name: Unique endpoint name (e.g. ``send-text``).
        path: Path template with at most one ``{instance}`` placeholder.
        method: HTTP method.
        description: What the operation does.
        controller: Controller group the endpoint belongs to.
        requires_instance: Whether the path targets a named instance.
        parameters: Accepted parameters.
        tool_name: Optional slug used instead of ``name`` for the tool name.
        example_request: Optional example payload for documentation.
    """

    name: str
    path: str
    method: HttpMethod
    description: str
    controller: ControllerType
    requires_instance: bool = False
    parameters: tuple[EndpointParameter, ...] = ()
    tool_name: str | None = None
    example_request: Mapping[str, Any] | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "parameters", tuple(self.parameters))
        if self.example_request is not None:
            object.__setattr__(self, "example_request", freeze(self.example_request))

        placeholders = _PLACEHOLDER_PATTERN.findall(self.path)
        if len(placeholders) > 1:
            raise ValueError(
                f"Endpoint '{self.name}' path '{self.path}' has more than one placeholder"
            )
        if placeholders and placeholders[0] != INSTANCE_PARAMETER:
            raise ValueError(
                f"Endpoint '{self.name}' uses unsupported placeholder '{{{placeholders[0]}}}'"
            )

        has_placeholder = bool(placeholders)
        if has_placeholder != self.requires_instance:
            raise ValueError(
                f"Endpoint '{self.name}': requires_instance={self.requires_instance} "
                f"does not match path '{self.path}'"
            )

        names = [param.name for param in self.parameters]
        if len(names) != len(set(names)):
            raise ValueError(f"Endpoint '{self.name}' declares duplicate parameters")

        if self.requires_instance:
            instance_param = self.get_parameter(INSTANCE_PARAMETER)
            if instance_param is None or instance_param.location != ParameterLocation.PATH:
                raise ValueError(
                    f"Endpoint '{self.name}' requires an '{INSTANCE_PARAMETER}' path parameter"
                )

    def get_parameter(self, name: str) -> EndpointParameter | None:
        """Get a declared parameter by name."""
        for param in self.parameters:
            if param.name == name:
                return param
        return None

    @property
    def path_parameter_names(self) -> frozenset[str]:
        """Names of parameters substituted into the path."""
        return frozenset(
            param.name for param in self.parameters if param.location == ParameterLocation.PATH
        )

    @property
    def placeholders(self) -> list[str]:
        """Placeholder names found in the path template."""
        return _PLACEHOLDER_PATTERN.findall(self.path)

    @property
    def parameter_schema(self) -> dict[str, Any]:
        """JSON-Schema (draft 7) object describing the accepted parameters."""
        properties = {param.name: param.to_json_schema() for param in self.parameters}
        required = [param.name for param in self.parameters if param.required]
        schema: dict[str, Any] = {"type": "object", "properties": properties}
        if required:
            schema["required"] = required
        return schema

    def resolve_path(self, params: Mapping[str, Any]) -> str:
        """Substitute the instance identifier into the path template.

        Args:
            params: Validated tool parameters

        Returns:
            The resolved request path

        Raises:
            KeyError: If the endpoint requires an instance and none is given
        """
        if not self.requires_instance:
            return self.path
        instance = params[INSTANCE_PARAMETER]
        return self.path.replace(INSTANCE_PLACEHOLDER, quote(str(instance), safe=""))

    @property
    def operation(self) -> str:
        """Human readable operation label (``send-text`` -> ``send text``)."""
        return self.name.replace("-", " ")
