"""Tests for ToolGenerator."""

from unittest.mock import MagicMock

import pytest

from evolution_tools.domain.exceptions.tool_catalog import (
    DuplicateToolError,
    EndpointNotFoundError,
    ToolGenerationError,
    ToolRegistrationError,
)
from evolution_tools.domain.model.endpoint import ControllerType
from evolution_tools.infrastructure.endpoints.catalog import EndpointCatalog
from evolution_tools.infrastructure.tools.tool_factory import ToolFactory
from evolution_tools.infrastructure.tools.tool_generator import (
    ToolGenerationConfig,
    ToolGenerator,
)
from evolution_tools.infrastructure.tools.tool_registry import ToolRegistry


@pytest.fixture
def full_generator():
    """Generator over the full Evolution API catalog."""
    catalog = EndpointCatalog()
    registry = ToolRegistry()
    return ToolGenerator(registry, ToolFactory(MagicMock(), catalog), catalog), registry


@pytest.fixture
def small_generator(sample_catalog):
    registry = ToolRegistry()
    return ToolGenerator(registry, ToolFactory(MagicMock(), sample_catalog), sample_catalog), registry


class TestGenerateAll:
    """Tests for generate_all."""

    def test_generates_every_endpoint(self, full_generator) -> None:
        """Should register one tool per endpoint and keep stats consistent."""
        generator, registry = full_generator

        tools = generator.generate_all()

        stats = registry.stats()
        assert len(tools) == 43
        assert stats.total == 43
        assert sum(stats.by_controller.values()) == 43
        assert "evolution_send_text_message" in registry
        assert "evolution_get_information" in registry

    def test_generated_names_are_unique(self, full_generator) -> None:
        generator, _ = full_generator

        names = [t.name for t in generator.generate_all()]

        assert len(names) == len(set(names))

    def test_controller_filter(self, full_generator) -> None:
        """Should only build the requested controllers."""
        generator, registry = full_generator

        generator.generate_all(ToolGenerationConfig(controllers=[ControllerType.WEBHOOK]))

        assert registry.list_names() == ["evolution_set_webhook", "evolution_get_webhook"]

    def test_include_wins_over_exclude(self, small_generator) -> None:
        generator, registry = small_generator

        generator.generate_all(
            ToolGenerationConfig(include_endpoints=["send-text"], exclude_endpoints=["send-text"])
        )

        assert registry.list_names() == ["evolution_send_text"]

    def test_exclude(self, small_generator) -> None:
        generator, registry = small_generator

        generator.generate_all(ToolGenerationConfig(exclude_endpoints=["send-text"]))

        assert registry.list_names() == ["evolution_connect_instance", "evolution_fetch_instances"]

    def test_prefix(self, small_generator) -> None:
        generator, registry = small_generator

        generator.generate_all(
            ToolGenerationConfig(include_endpoints=["connect-instance"], tool_name_prefix="wa_")
        )

        assert registry.list_names() == ["wa_evolution_connect_instance"]

    def test_clears_previous_tools(self, small_generator) -> None:
        """Should start from an empty registry each time."""
        generator, registry = small_generator
        generator.generate_all()

        generator.regenerate(ToolGenerationConfig(include_endpoints=["send-text"]))

        assert registry.list_names() == ["evolution_send_text"]

    def test_registration_failure_wrapped(self, small_generator) -> None:
        """Should re-raise registry failures as generation errors."""
        generator, _ = small_generator

        with pytest.raises(ToolGenerationError, match="Failed to register tools") as exc_info:
            generator.generate_all(ToolGenerationConfig(tool_name_prefix="1bad_"))

        assert isinstance(exc_info.value.original_error, ToolRegistrationError)


class TestIncrementalGeneration:
    """Tests for generate_for_controller and generate_for_endpoint."""

    def test_generate_for_controller_is_additive(self, small_generator) -> None:
        generator, registry = small_generator
        generator.generate_for_endpoint("send-text")

        tools = generator.generate_for_controller(ControllerType.INSTANCE)

        assert len(tools) == 2
        assert len(registry) == 3

    def test_generate_for_unknown_endpoint(self, small_generator) -> None:
        generator, registry = small_generator

        with pytest.raises(EndpointNotFoundError, match="Endpoint 'nope' not found"):
            generator.generate_for_endpoint("nope")

        assert len(registry) == 0

    def test_generate_for_endpoint_twice(self, small_generator) -> None:
        generator, _ = small_generator
        generator.generate_for_endpoint("send-text")

        with pytest.raises(DuplicateToolError):
            generator.generate_for_endpoint("send-text")


class TestValidationAndStats:
    """Tests for validate, stats and export_config."""

    def test_validate_after_generation(self, full_generator) -> None:
        generator, _ = full_generator
        generator.generate_all()

        report = generator.validate()

        assert report.valid is True
        assert report.errors == []

    def test_validate_empty_registry(self, small_generator) -> None:
        generator, _ = small_generator

        report = generator.validate()

        assert report.valid is False
        assert "No tools have been generated" in report.errors

    def test_validate_never_raises(self, small_generator) -> None:
        generator, registry = small_generator
        registry.list_tools = MagicMock(side_effect=RuntimeError("broken"))

        report = generator.validate()

        assert report.valid is False
        assert report.errors == ["Validation failed: broken"]

    def test_stats(self, small_generator) -> None:
        generator, _ = small_generator
        generator.generate_all(ToolGenerationConfig(controllers=[ControllerType.INSTANCE]))

        stats = generator.stats()

        assert stats.available_endpoints == 3
        assert stats.registered_tools == 2
        assert stats.by_controller["instance"] == {"endpoints": 2, "tools": 2}
        assert stats.by_controller["message"] == {"endpoints": 1, "tools": 0}

    def test_export_config(self, small_generator) -> None:
        generator, _ = small_generator
        generator.generate_all()

        exported = generator.export_config()

        assert exported["generation"]["registered_tools"] == 3
        assert exported["validation"]["valid"] is True
        assert len(exported["registry"]["tools"]) == 3
        assert exported["endpoints"]["total"] == 3
