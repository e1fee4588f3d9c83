from __future__ import annotations

import math
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

from agentdesk.schemas.errors import InvalidArguments
from agentdesk.tools.parameters import ParameterKind, describe_shape


class Role(str, Enum):
    SYSTEM = "system"
    MANAGER = "manager"
    WORKER = "worker"
    VALIDATOR = "validator"
    ADVISOR = "advisor"
    USER = "user"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def estimate_tokens(text: str) -> int:
    """Rough token count, four characters per token."""
    return math.ceil(len(text) / 4)


@dataclass(frozen=True)
class ToolCall:
    """Tool name plus arguments, each one of the eight supported value shapes."""

    name: str
    arguments: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "arguments", dict(self.arguments))
        for key, value in self.arguments.items():
            if ParameterKind.of(value) is None:
                raise InvalidArguments(
                    key,
                    f"Parameter {key} has unsupported value shape {describe_shape(value)}",
                    expected="one of " + ", ".join(kind.value for kind in ParameterKind),
                    actual=describe_shape(value),
                )


@dataclass(frozen=True)
class Turn:
    """Single message in a task's conversation history; changes go through ``dataclasses.replace``."""

    task_id: str
    role: Role
    content: str
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: datetime = field(default_factory=utcnow)
    tool_call: Optional[ToolCall] = None
    token_estimate: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "role", Role(self.role))


@dataclass
class ToolCallResult:
    name: str
    payload: Any
