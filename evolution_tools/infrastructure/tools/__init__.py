"""Tool factory, registry and generator for the Evolution API catalog."""

from .tool_factory import ToolFactory
from .tool_generator import GenerationStats, ToolGenerationConfig, ToolGenerator, ValidationReport
from .tool_registry import RegistryStats, ToolRegistry

__all__ = [
    "GenerationStats",
    "RegistryStats",
    "ToolFactory",
    "ToolGenerationConfig",
    "ToolGenerator",
    "ToolRegistry",
    "ValidationReport",
]
