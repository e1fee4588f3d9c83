from __future__ import annotations

from typing import Optional


class AgentDeskError(Exception):
    """Base class for every error raised by the session core."""


class ToolError(AgentDeskError):
    """Raised by the tool registry or by a tool rejecting its input."""


class UnsupportedTool(ToolError):
    def __init__(self, tool_name: str) -> None:
        super().__init__(f"Unsupported tool: {tool_name}")
        self.tool_name = tool_name


class InvalidArguments(ToolError):
    """Argument map does not satisfy a tool's parameter specs."""

    def __init__(
        self,
        parameter: str,
        reason: str,
        expected: Optional[str] = None,
        actual: Optional[str] = None,
    ) -> None:
        super().__init__(f"Invalid arguments: {reason}")
        self.parameter = parameter
        self.reason = reason
        self.expected = expected
        self.actual = actual


class ExecutorFailure(ToolError):
    def __init__(self, tool_name: str, cause: BaseException) -> None:
        super().__init__(f"Tool {tool_name} failed: {cause}")
        self.tool_name = tool_name
        self.cause = cause


class StorageFailure(AgentDeskError):
    """A message store operation could not be completed."""
