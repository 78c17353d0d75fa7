from knows.tools.base import KnowsTool, ToolContext
from knows.tools.toolkit import KnowsToolkit, build_toolkit

__all__ = [
    "KnowsTool",
    "ToolContext",
    "KnowsToolkit",
    "build_toolkit",
]
