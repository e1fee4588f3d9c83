from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class ParameterKind(Enum):
    """The eight value shapes a tool argument may take."""

    STRING = "string"
    INT = "int"
    DOUBLE = "double"
    BOOL = "bool"
    STRING_LIST = "string_list"
    ANY_LIST = "any_list"
    STRING_MAP = "string_map"
    ANY_MAP = "any_map"

    def accepts(self, value: Any) -> bool:
        # bool is an int subclass in Python but never a numeric argument here
        if self is ParameterKind.STRING:
            return isinstance(value, str)
        if self is ParameterKind.INT:
            return isinstance(value, int) and not isinstance(value, bool)
        if self is ParameterKind.DOUBLE:
            return isinstance(value, (int, float)) and not isinstance(value, bool)
        if self is ParameterKind.BOOL:
            return isinstance(value, bool)
        if self is ParameterKind.STRING_LIST:
            return isinstance(value, list) and all(isinstance(item, str) for item in value)
        if self is ParameterKind.ANY_LIST:
            return isinstance(value, list)
        if self is ParameterKind.STRING_MAP:
            return isinstance(value, dict) and all(
                isinstance(key, str) and isinstance(item, str) for key, item in value.items()
            )
        return isinstance(value, dict) and all(isinstance(key, str) for key in value)

    @classmethod
    def of(cls, value: Any) -> Optional["ParameterKind"]:
        """Most specific kind describing ``value``, or None outside the eight shapes."""
        for kind in (
            cls.BOOL,
            cls.INT,
            cls.DOUBLE,
            cls.STRING,
            cls.STRING_LIST,
            cls.ANY_LIST,
            cls.STRING_MAP,
            cls.ANY_MAP,
        ):
            if kind.accepts(value):
                return kind
        return None


def describe_shape(value: Any) -> str:
    kind = ParameterKind.of(value)
    if kind is not None:
        return kind.value
    return type(value).__name__


@dataclass(frozen=True)
class ParameterSpec:
    name: str
    kind: ParameterKind
    required: bool = True
    description: str = ""
