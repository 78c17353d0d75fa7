import json
from typing import Any

from pydantic import BaseModel, Field


class ToolResult(BaseModel):
    """Outcome of a tool execution, ready to hand back to the agent."""

    content: str = Field(..., description="JSON result, or an error message when is_error")
    is_error: bool = Field(default=False, description="Whether the call failed")

    @classmethod
    def success(cls, data: Any) -> "ToolResult":
        """Serialize a handler result as compact JSON."""
        return cls(content=json.dumps(data, ensure_ascii=False, allow_nan=False, separators=(",", ":")))

    @classmethod
    def failure(cls, message: str) -> "ToolResult":
        return cls(content=message, is_error=True)

    def json_data(self) -> Any:
        """Decode the content of a successful result."""
        if self.is_error:
            raise ValueError(f"tool call failed: {self.content}")
        return json.loads(self.content)
