"""Pytest configuration and shared fixtures for testing."""

from typing import Any, Callable

import httpx
import pytest

from evolution_tools.domain.model.endpoint import (
    ControllerType,
    EndpointDescriptor,
    EndpointParameter,
    HttpMethod,
    ParameterLocation,
)
from evolution_tools.domain.model.tool import Tool, ToolResult
from evolution_tools.infrastructure.endpoints.catalog import EndpointCatalog
from evolution_tools.infrastructure.evolution.http_client import (
    EvolutionClientConfig,
    EvolutionHttpClient,
)

TEST_BASE_URL = "https://evolution.test"
TEST_API_KEY = "test-api-key"


# --- HTTP Client Fixtures ---


@pytest.fixture
def client_config() -> EvolutionClientConfig:
    """Client config with short retry delays."""
    return EvolutionClientConfig(
        base_url=TEST_BASE_URL,
        api_key=TEST_API_KEY,
        retry_attempts=3,
        retry_delay_ms=10,
    )


@pytest.fixture
async def make_client(client_config):
    """Build clients backed by an ``httpx.MockTransport`` and close them afterwards."""
    clients: list[EvolutionHttpClient] = []

    def _make(handler: Callable[[httpx.Request], Any], **overrides: Any) -> EvolutionHttpClient:
        config = client_config.model_copy(update=overrides)
        client = EvolutionHttpClient(config, transport=httpx.MockTransport(handler))
        clients.append(client)
        return client

    yield _make

    for client in clients:
        await client.aclose()


class RecordingHandler:
    """MockTransport handler replaying scripted responses and recording requests."""

    def __init__(self, *steps: Any) -> None:
        self.steps = list(steps)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        step = self.steps.pop(0) if len(self.steps) > 1 else self.steps[0]
        if isinstance(step, BaseException):
            raise step
        # fresh response per call; scripted steps may repeat
        return httpx.Response(step.status_code, headers=step.headers, content=step.content)

    @property
    def calls(self) -> int:
        return len(self.requests)


@pytest.fixture
def recording_handler():
    """Create a RecordingHandler from scripted steps."""
    return RecordingHandler


# --- Endpoint Fixtures ---


def instance_parameter() -> EndpointParameter:
    return EndpointParameter(
        name="instance",
        type="string",
        required=True,
        location=ParameterLocation.PATH,
    )


@pytest.fixture
def send_text_endpoint() -> EndpointDescriptor:
    return EndpointDescriptor(
        name="send-text",
        path="/message/sendText/{instance}",
        method=HttpMethod.POST,
        description="Send a text message",
        controller=ControllerType.MESSAGE,
        requires_instance=True,
        parameters=(
            instance_parameter(),
            EndpointParameter(
                name="number",
                type="string",
                required=True,
                constraints={"minLength": 10, "pattern": r"^\d+$"},
            ),
            EndpointParameter(name="text", type="string", required=True),
            EndpointParameter(name="delay", type="integer", constraints={"minimum": 0}),
        ),
    )


@pytest.fixture
def connect_instance_endpoint() -> EndpointDescriptor:
    return EndpointDescriptor(
        name="connect-instance",
        path="/instance/connect/{instance}",
        method=HttpMethod.GET,
        description="Connect an instance",
        controller=ControllerType.INSTANCE,
        requires_instance=True,
        parameters=(instance_parameter(),),
    )


@pytest.fixture
def fetch_instances_endpoint() -> EndpointDescriptor:
    return EndpointDescriptor(
        name="fetch-instances",
        path="/instance/fetchInstances",
        method=HttpMethod.GET,
        description="List instances",
        controller=ControllerType.INSTANCE,
        parameters=(EndpointParameter(name="instanceName", type="string"),),
    )


@pytest.fixture
def sample_catalog(send_text_endpoint, connect_instance_endpoint, fetch_instances_endpoint):
    """A small catalog spanning two controllers."""
    return EndpointCatalog([connect_instance_endpoint, fetch_instances_endpoint, send_text_endpoint])


# --- Tool Fixtures ---


async def _noop_handler(params=None) -> ToolResult:
    return ToolResult.ok({"echo": params})


@pytest.fixture
def make_tool(send_text_endpoint, connect_instance_endpoint):
    """Build minimal valid tools for registry tests."""
    endpoints = {
        ControllerType.MESSAGE: send_text_endpoint,
        ControllerType.INSTANCE: connect_instance_endpoint,
    }

    def _make(
        name: str = "test_tool",
        controller: ControllerType = ControllerType.MESSAGE,
        description: str = "A test tool",
        **overrides: Any,
    ) -> Tool:
        endpoint = endpoints.get(controller, send_text_endpoint)
        fields = {
            "name": name,
            "description": description,
            "controller": controller,
            "endpoint": endpoint,
            "parameter_schema": endpoint.parameter_schema,
            "handler": _noop_handler,
        }
        fields.update(overrides)
        return Tool(**fields)

    return _make
