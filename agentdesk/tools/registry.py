from __future__ import annotations

import logging
import threading
from typing import Any, Dict, List, Optional

from agentdesk.schemas.errors import ExecutorFailure, InvalidArguments, ToolError, UnsupportedTool
from agentdesk.schemas.messages import ToolCallResult
from agentdesk.tools.base import ToolDescriptor, ToolInvoker
from agentdesk.tools.parameters import describe_shape

logger = logging.getLogger(__name__)


def validate_arguments(descriptor: ToolDescriptor, arguments: Dict[str, Any]) -> Dict[str, Any]:
    """Check ``arguments`` against the descriptor's specs in declaration order.

    Returns only the declared parameters that were supplied; undeclared keys
    are dropped.
    """
    processed: Dict[str, Any] = {}
    for spec in descriptor.parameters:
        if spec.name not in arguments:
            if not spec.required:
                continue
            raise InvalidArguments(
                spec.name,
                f"Missing required parameter {spec.name}",
                expected=spec.kind.value,
            )
        value = arguments[spec.name]
        if not spec.kind.accepts(value):
            actual = describe_shape(value)
            raise InvalidArguments(
                spec.name,
                f"Parameter {spec.name} expected {spec.kind.value} but received {actual}",
                expected=spec.kind.value,
                actual=actual,
            )
        processed[spec.name] = value
    return processed


class ToolRegistry(ToolInvoker):
    """Named catalog of tool descriptors with validated dispatch."""

    def __init__(self, descriptors: Optional[List[ToolDescriptor]] = None) -> None:
        self._descriptors: Dict[str, ToolDescriptor] = {}
        self._lock = threading.Lock()
        for descriptor in descriptors or []:
            self.register(descriptor)

    def register(self, descriptor: ToolDescriptor) -> None:
        with self._lock:
            replaced = descriptor.name in self._descriptors
            self._descriptors[descriptor.name] = descriptor
        logger.debug("Registered tool %s%s", descriptor.name, " (replaced)" if replaced else "")

    def unregister(self, name: str) -> None:
        with self._lock:
            self._descriptors.pop(name, None)

    def get(self, name: str) -> Optional[ToolDescriptor]:
        with self._lock:
            return self._descriptors.get(name)

    def names(self) -> List[str]:
        with self._lock:
            return sorted(self._descriptors)

    def descriptors(self) -> List[ToolDescriptor]:
        with self._lock:
            return [self._descriptors[name] for name in sorted(self._descriptors)]

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._descriptors

    def __len__(self) -> int:
        with self._lock:
            return len(self._descriptors)

    def call(self, name: str, arguments: Dict[str, Any]) -> ToolCallResult:
        descriptor = self.get(name)
        if descriptor is None:
            raise UnsupportedTool(name)

        validated = validate_arguments(descriptor, arguments)
        logger.debug("Calling tool %s with %s", name, sorted(validated))
        try:
            payload = descriptor.executor.run(validated)
        except ToolError:
            raise
        except Exception as exc:
            logger.warning("Tool %s failed: %s", name, exc)
            raise ExecutorFailure(name, exc) from exc
        return ToolCallResult(name=name, payload=payload)
