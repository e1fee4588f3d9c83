from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Tuple

from agentdesk.schemas.messages import ToolCallResult
from agentdesk.tools.parameters import ParameterSpec


class ToolExecutor(ABC):
    """Executes a tool against already validated arguments."""

    @abstractmethod
    def run(self, arguments: Dict[str, Any]) -> Any:
        """Execute tool logic and return structured output."""


class FunctionExecutor(ToolExecutor):
    def __init__(self, fn: Callable[[Dict[str, Any]], Any]) -> None:
        self.fn = fn

    def run(self, arguments: Dict[str, Any]) -> Any:
        return self.fn(arguments)


@dataclass(frozen=True)
class ToolDescriptor:
    name: str
    summary: str
    parameters: Tuple[ParameterSpec, ...]
    executor: ToolExecutor

    @classmethod
    def from_function(
        cls,
        name: str,
        summary: str,
        parameters: Iterable[ParameterSpec],
        fn: Callable[[Dict[str, Any]], Any],
    ) -> "ToolDescriptor":
        return cls(name=name, summary=summary, parameters=tuple(parameters), executor=FunctionExecutor(fn))

    def required_parameters(self) -> List[ParameterSpec]:
        return [p for p in self.parameters if p.required]


class Tool(ToolExecutor):
    """Base for builtin tools: a self-describing executor."""

    name: str
    summary: str
    parameters: Tuple[ParameterSpec, ...] = ()

    def descriptor(self) -> ToolDescriptor:
        return ToolDescriptor(
            name=self.name,
            summary=self.summary,
            parameters=tuple(self.parameters),
            executor=self,
        )


class ToolInvoker(ABC):
    """What the session orchestrator needs from a tool registry."""

    @abstractmethod
    def call(self, name: str, arguments: Dict[str, Any]) -> ToolCallResult:
        """Validate ``arguments`` and run the named tool."""
