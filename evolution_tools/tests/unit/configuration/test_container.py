"""Tests for ToolCatalogContainer."""

import httpx
import pytest

from evolution_tools.configuration.config import Settings
from evolution_tools.configuration.container import ToolCatalogContainer


def _settings(**env) -> Settings:
    values = {"EVOLUTION_URL": "https://evolution.test", "EVOLUTION_API_KEY": "test-api-key"}
    values.update(env)
    return Settings(_env_file=None, **values)


class TestToolCatalogContainer:
    """Tests for the composition root."""

    def test_builds_collaborators_once(self) -> None:
        """Should share one client across the factory and generator."""
        container = ToolCatalogContainer(settings=_settings())

        assert container.http_client() is container.http_client()
        assert container.tool_registry() is container.tool_registry()
        assert container.tool_generator() is container.tool_generator()
        assert container.tool_factory().endpoints is container.endpoint_catalog()

    def test_build_catalog_uses_settings(self) -> None:
        """Should apply generation settings."""
        container = ToolCatalogContainer(
            settings=_settings(
                ENABLED_CONTROLLERS="instance",
                EXCLUDE_ENDPOINTS="delete-instance",
                TOOL_NAME_PREFIX="wa_",
            )
        )

        registry = container.build_catalog()

        assert len(registry) == 5
        assert "wa_evolution_connect_instance" in registry
        assert "wa_evolution_delete_instance" not in registry

    def test_build_catalog_all_controllers(self) -> None:
        container = ToolCatalogContainer(settings=_settings())

        assert len(container.build_catalog()) == 43

    def test_missing_credentials(self, monkeypatch) -> None:
        monkeypatch.delenv("EVOLUTION_API_KEY", raising=False)
        container = ToolCatalogContainer(settings=Settings(_env_file=None, EVOLUTION_URL="https://x.test"))

        with pytest.raises(ValueError, match="EVOLUTION_API_KEY"):
            container.http_client()

    @pytest.mark.asyncio
    async def test_generated_tool_calls_api(self) -> None:
        """Should wire generated tools to the shared client end to end."""
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"key": {"id": "MSG1"}})

        container = ToolCatalogContainer(
            settings=_settings(ENABLED_CONTROLLERS="message"),
            transport=httpx.MockTransport(handler),
        )
        registry = container.build_catalog()

        tool = registry.get("evolution_send_text_message")
        result = await tool({"instance": "sales", "number": "5511999999999", "text": "Hello"})
        await container.aclose()

        assert result.success is True
        assert result.data["message_id"] == "MSG1"
        assert seen[0].url.path == "/message/sendText/sales"
        assert seen[0].headers["apikey"] == "test-api-key"
