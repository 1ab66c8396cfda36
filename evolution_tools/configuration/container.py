"""DI container for the Evolution API tool catalog."""

import logging
from typing import Optional

import httpx

from evolution_tools.configuration.config import Settings, get_settings
from evolution_tools.infrastructure.endpoints.catalog import EndpointCatalog
from evolution_tools.infrastructure.evolution.http_client import EvolutionHttpClient
from evolution_tools.infrastructure.tools.tool_factory import ToolFactory
from evolution_tools.infrastructure.tools.tool_generator import (
    ToolGenerationConfig,
    ToolGenerator,
)
from evolution_tools.infrastructure.tools.tool_registry import ToolRegistry

logger = logging.getLogger(__name__)


class ToolCatalogContainer:
    """Composition root for the tool catalog.

    Builds each collaborator once, on first use: one HTTP client per
    container, shared by every generated tool.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        http_client: Optional[EvolutionHttpClient] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        endpoint_catalog: Optional[EndpointCatalog] = None,
    ) -> None:
        self._settings = settings
        self._http_client = http_client
        self._transport = transport
        self._endpoint_catalog = endpoint_catalog
        self._tool_registry: Optional[ToolRegistry] = None
        self._tool_factory: Optional[ToolFactory] = None
        self._tool_generator: Optional[ToolGenerator] = None

    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    def http_client(self) -> EvolutionHttpClient:
        """Get the shared Evolution API client."""
        if self._http_client is None:
            self._http_client = EvolutionHttpClient(
                self.settings().to_client_config(),
                transport=self._transport,
            )
        return self._http_client

    def endpoint_catalog(self) -> EndpointCatalog:
        if self._endpoint_catalog is None:
            self._endpoint_catalog = EndpointCatalog()
        return self._endpoint_catalog

    def tool_registry(self) -> ToolRegistry:
        if self._tool_registry is None:
            self._tool_registry = ToolRegistry()
        return self._tool_registry

    def tool_factory(self) -> ToolFactory:
        if self._tool_factory is None:
            self._tool_factory = ToolFactory(self.http_client(), self.endpoint_catalog())
        return self._tool_factory

    def tool_generator(self) -> ToolGenerator:
        if self._tool_generator is None:
            self._tool_generator = ToolGenerator(
                self.tool_registry(),
                self.tool_factory(),
                self.endpoint_catalog(),
            )
        return self._tool_generator

    def generation_config(self) -> ToolGenerationConfig:
        """Build the generation options from settings."""
        settings = self.settings()
        return ToolGenerationConfig(
            controllers=settings.controllers,
            include_endpoints=settings.include_endpoint_names,
            exclude_endpoints=settings.exclude_endpoint_names,
            tool_name_prefix=settings.tool_name_prefix or None,
        )

    def build_catalog(self) -> ToolRegistry:
        """Generate every configured tool and return the populated registry."""
        tools = self.tool_generator().generate_all(self.generation_config())
        logger.info(f"Tool catalog ready with {len(tools)} tools")
        return self.tool_registry()

    async def aclose(self) -> None:
        """Close the HTTP client if one was created."""
        if self._http_client is not None:
            await self._http_client.aclose()
