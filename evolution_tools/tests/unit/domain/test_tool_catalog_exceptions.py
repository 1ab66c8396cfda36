"""Tests for tool catalog domain exceptions."""

from evolution_tools.domain.exceptions.tool_catalog import (
    DuplicateToolError,
    EndpointNotFoundError,
    InvalidToolError,
    ToolCatalogError,
    ToolGenerationError,
    ToolNotFoundError,
    ToolRegistrationError,
)


class TestToolCatalogExceptions:
    """Tests for the exception hierarchy."""

    def test_all_derive_from_base(self) -> None:
        """Should share one base class."""
        for error in (
            InvalidToolError(["x"]),
            DuplicateToolError("t"),
            ToolNotFoundError("t"),
            ToolRegistrationError([(0, "t", "x")]),
            EndpointNotFoundError("e"),
            ToolGenerationError(),
        ):
            assert isinstance(error, ToolCatalogError)

    def test_invalid_tool_message(self) -> None:
        """Should join validation errors."""
        error = InvalidToolError(["Tool name is required", "Tool endpoint is required"])

        assert str(error) == "Invalid tool info: Tool name is required, Tool endpoint is required"
        assert error.details["errors"] == error.errors

    def test_registration_error_lists_failures(self) -> None:
        """Should describe every failure with index and name."""
        error = ToolRegistrationError([(1, "a", "bad"), (3, "b", "worse")])

        assert "Tool at index 1 (a): bad" in error.message
        assert "Tool at index 3 (b): worse" in error.message
        assert error.details["failures"][1] == {"index": 3, "name": "b", "error": "worse"}

    def test_generation_error_wraps_cause(self) -> None:
        """Should prefix the wrapped message and keep the cause."""
        cause = ToolRegistrationError([(0, "a", "bad")])

        error = ToolGenerationError(original_error=cause)

        assert error.message.startswith("Failed to register tools: Failed to register some tools")
        assert error.original_error is cause
        assert "caused by" in str(error)

    def test_endpoint_not_found_message(self) -> None:
        """Should name the missing endpoint."""
        assert str(EndpointNotFoundError("nope")) == "Endpoint 'nope' not found"
