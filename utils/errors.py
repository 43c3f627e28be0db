"""Errors raised at the boundary of the product text pipeline."""

from __future__ import annotations

from typing import Optional


class InvalidInput(ValueError):
    """Caller passed a non-string where text is required, or malformed product JSON."""

    def __init__(self, message: str, field: Optional[str] = None):
        self.field = field
        super().__init__(message)


class UnknownTool(LookupError):
    """No operation is registered under the requested tool name."""

    def __init__(self, tool_name: str):
        self.tool_name = tool_name
        super().__init__(f"Unknown tool: {tool_name}")
