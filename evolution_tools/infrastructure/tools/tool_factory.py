"""Tool Factory.

Builds agent-callable Tools from endpoint descriptors. Each tool gets a
precompiled JSON-Schema validator and an async handler that validates
parameters, builds the request, calls the shared Evolution HTTP client and
maps the outcome to a ToolResult.
"""

import copy
import logging
import re
from typing import Any, Mapping, Optional

from jsonschema import Draft7Validator

from evolution_tools.domain.model.endpoint import (
    INSTANCE_PARAMETER,
    ControllerType,
    EndpointDescriptor,
    EndpointParameter,
    HttpMethod,
    ParameterLocation,
    thaw,
)
from evolution_tools.domain.model.tool import (
    Tool,
    ToolErrorType,
    ToolExample,
    ToolHandler,
    ToolResult,
)
from evolution_tools.infrastructure.endpoints.catalog import EndpointCatalog
from evolution_tools.infrastructure.evolution.http_client import EvolutionHttpClient
from evolution_tools.infrastructure.tools.error_mapping import (
    VALIDATION_SUGGESTION,
    map_request_error,
    map_unexpected_exception,
)
from evolution_tools.infrastructure.tools.shaping import DEFAULT_SHAPERS, Shaper, default_shaper

logger = logging.getLogger(__name__)

_NON_ALNUM = re.compile(r"[^a-z0-9]")

# Ordered: the first matching name fragment wins.
_NAMED_EXAMPLES: list[tuple[tuple[str, ...], str, Any]] = [
    (("instance",), "string", "my_instance"),
    (("number", "phone"), "string", "5511999999999"),
    (("text", "message"), "string", "Hello, this is a test message"),
    (("url",), "string", "https://example.com"),
    (("email",), "string", "user@example.com"),
    (("name",), "string", "Example Name"),
    (("id", "jid"), "string", "example_id"),
    (("delay",), "integer", 1000),
    (("enabled", "active"), "boolean", True),
]

_TYPE_EXAMPLES: dict[str, Any] = {
    "string": "example_value",
    "number": 123,
    "integer": 123,
    "boolean": True,
    "array": [],
    "object": {},
}


def example_value(param: EndpointParameter) -> Any:
    """Pick an example value for a parameter.

    The declared example wins; otherwise a value is derived from the
    parameter name, then from its type. Derived strings are cut to the
    parameter's maxLength.
    """
    if param.example is not None:
        return thaw(param.example)

    enum = param.constraints.get("enum")
    if enum:
        return thaw(enum[0])

    value = copy.deepcopy(_TYPE_EXAMPLES[param.type])
    lowered = param.name.lower()
    for fragments, value_type, named in _NAMED_EXAMPLES:
        type_matches = value_type == param.type or (
            value_type == "integer" and param.type == "number"
        )
        if type_matches and any(fragment in lowered for fragment in fragments):
            value = named
            break

    max_length = param.constraints.get("maxLength")
    if isinstance(value, str) and max_length is not None:
        value = value[:max_length]
    return value


def _format_violation(error) -> str:
    path = ".".join(str(segment) for segment in error.path) or "$"
    return f"{path}: {error.message}"


class ToolFactory:
    """
    Factory turning endpoint descriptors into Tools.

    All tools built by one factory share its HTTP client.
    """

    DEFAULT_NAME_PREFIX = "evolution_"

    def __init__(
        self,
        http_client: EvolutionHttpClient,
        endpoints: Optional[EndpointCatalog] = None,
        name_prefix: str = DEFAULT_NAME_PREFIX,
        shapers: Optional[Mapping[str, Shaper]] = None,
    ) -> None:
        """Initialize the factory.

        Args:
            http_client: Shared Evolution API client
            endpoints: Endpoint catalog (defaults to the full catalog)
            name_prefix: Prefix prepended to every tool name
            shapers: Success shapers keyed by endpoint name
        """
        self._http_client = http_client
        self._endpoints = endpoints or EndpointCatalog()
        self._name_prefix = name_prefix
        self._shapers: dict[str, Shaper] = dict(DEFAULT_SHAPERS if shapers is None else shapers)

    @property
    def endpoints(self) -> EndpointCatalog:
        return self._endpoints

    def build_tool_name(self, endpoint: EndpointDescriptor) -> str:
        slug = _NON_ALNUM.sub("_", (endpoint.tool_name or endpoint.name).lower())
        return f"{self._name_prefix}{slug}"

    def build_description(self, endpoint: EndpointDescriptor) -> str:
        return f"{endpoint.controller.value.capitalize()} Controller: {endpoint.description}"

    def build_parameter_schema(self, endpoint: EndpointDescriptor) -> dict[str, Any]:
        """Build the JSON-Schema handed to the agent and used for validation."""
        return copy.deepcopy(endpoint.parameter_schema)

    def build_example(self, endpoint: EndpointDescriptor) -> Optional[ToolExample]:
        """Build an example call from required parameters and the declared example payload."""
        parameters: dict[str, Any] = {}
        for param in endpoint.parameters:
            if param.required:
                parameters[param.name] = example_value(param)
        if endpoint.example_request:
            parameters.update(thaw(endpoint.example_request))
        if not parameters:
            return None
        return ToolExample(
            description=f"Example call to {endpoint.operation}",
            parameters=parameters,
        )

    def create_tool_for_endpoint(self, endpoint: EndpointDescriptor) -> Tool:
        schema = self.build_parameter_schema(endpoint)
        return Tool(
            name=self.build_tool_name(endpoint),
            description=self.build_description(endpoint),
            controller=endpoint.controller,
            endpoint=endpoint,
            parameter_schema=schema,
            handler=self.create_handler(endpoint, schema),
            example=self.build_example(endpoint),
        )

    def create_tools_for_controller(self, controller: ControllerType | str) -> list[Tool]:
        endpoints = self._endpoints.get_endpoints_by_controller(controller)
        tools = [self.create_tool_for_endpoint(endpoint) for endpoint in endpoints]
        logger.debug(f"Built {len(tools)} tools for controller {ControllerType(controller).value}")
        return tools

    @staticmethod
    def split_payload(
        endpoint: EndpointDescriptor,
        params: Mapping[str, Any],
    ) -> tuple[dict[str, Any], dict[str, Any]]:
        """Split validated parameters into (query, body).

        Path parameters and undeclared keys are dropped. GET requests carry
        every remaining parameter in the query string.
        """
        query: dict[str, Any] = {}
        body: dict[str, Any] = {}
        for key, value in params.items():
            param = endpoint.get_parameter(key)
            if param is None or key == INSTANCE_PARAMETER:
                continue
            if param.location == ParameterLocation.PATH:
                continue
            if endpoint.method == HttpMethod.GET or param.location == ParameterLocation.QUERY:
                query[key] = value
            else:
                body[key] = value
        return query, body

    def create_handler(self, endpoint: EndpointDescriptor, schema: dict[str, Any]) -> ToolHandler:
        """Create the async handler for an endpoint.

        The handler never raises: validation problems, classified request
        failures and unexpected exceptions all come back as failed results.
        """
        validator = Draft7Validator(copy.deepcopy(schema))
        shaper = self._shapers.get(endpoint.name, default_shaper)
        client = self._http_client
        operation = endpoint.operation

        async def handler(params: Optional[dict[str, Any]] = None) -> ToolResult:
            if params is None:
                params = {}
            try:
                errors = sorted(
                    validator.iter_errors(params),
                    key=lambda item: [str(segment) for segment in item.path],
                )
                if errors:
                    violations = [_format_violation(error) for error in errors]
                    return ToolResult.fail(
                        ToolErrorType.VALIDATION_ERROR,
                        f"Invalid parameters for {operation}: {'; '.join(violations)}",
                        code="INVALID_PARAMETERS",
                        details={"errors": violations},
                        suggestion=VALIDATION_SUGGESTION,
                    )

                path = endpoint.resolve_path(params)
                query, body = self.split_payload(endpoint, params)
                outcome = await client.request(
                    endpoint.method,
                    path,
                    body=body or None,
                    params=query or None,
                )
                if not outcome.success:
                    return map_request_error(outcome.error, operation)
                return ToolResult.ok(shaper(params, outcome.data))
            except Exception as e:
                return map_unexpected_exception(e, operation)

        return handler
