"""KnowS clinical evidence tools for agents."""

from knows.config import ConfigurationError, KnowsSettings, get_settings
from knows.models import ToolResult
from knows.tools import KnowsTool, KnowsToolkit, build_toolkit

__version__ = "0.1.0"

__all__ = [
    "ConfigurationError",
    "KnowsSettings",
    "get_settings",
    "ToolResult",
    "KnowsTool",
    "KnowsToolkit",
    "build_toolkit",
]
