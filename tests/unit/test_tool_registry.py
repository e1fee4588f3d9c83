import pytest

from agentdesk.schemas.errors import ExecutorFailure, InvalidArguments, UnsupportedTool
from agentdesk.tools.base import ToolDescriptor
from agentdesk.tools.catalog import build_registry
from agentdesk.tools.parameters import ParameterKind, ParameterSpec
from agentdesk.tools.registry import ToolRegistry


def echo_descriptor(name="echo", fn=None):
    return ToolDescriptor.from_function(
        name,
        "Echoes its validated arguments.",
        [
            ParameterSpec("text", ParameterKind.STRING),
            ParameterSpec("ratio", ParameterKind.DOUBLE, required=False),
            ParameterSpec("count", ParameterKind.INT, required=False),
        ],
        fn or (lambda args: dict(args)),
    )


def test_unknown_tool_is_unsupported():
    registry = ToolRegistry()
    with pytest.raises(UnsupportedTool) as excinfo:
        registry.call("nope", {})
    assert excinfo.value.tool_name == "nope"


def test_missing_required_parameter_names_it():
    registry = ToolRegistry([echo_descriptor()])
    with pytest.raises(InvalidArguments) as excinfo:
        registry.call("echo", {})
    assert excinfo.value.parameter == "text"
    assert "text" in str(excinfo.value)


def test_shape_mismatch_reports_expected_and_actual():
    registry = ToolRegistry([echo_descriptor()])
    with pytest.raises(InvalidArguments) as excinfo:
        registry.call("echo", {"text": "hi", "count": "three"})
    assert excinfo.value.parameter == "count"
    assert excinfo.value.expected == "int"
    assert excinfo.value.actual == "string"


def test_first_declared_parameter_is_reported_first():
    registry = ToolRegistry([echo_descriptor()])
    with pytest.raises(InvalidArguments) as excinfo:
        registry.call("echo", {"count": "bad"})
    assert excinfo.value.parameter == "text"


def test_double_parameter_accepts_int_and_extra_keys_are_dropped():
    registry = ToolRegistry([echo_descriptor()])
    result = registry.call("echo", {"text": "hi", "ratio": 2, "unknown": True})
    assert result.name == "echo"
    assert result.payload == {"text": "hi", "ratio": 2}


def test_register_overrides_existing_descriptor():
    calls = []
    registry = ToolRegistry([echo_descriptor(fn=lambda args: calls.append("old"))])
    registry.register(echo_descriptor(fn=lambda args: calls.append("new") or "replaced"))
    result = registry.call("echo", {"text": "x"})
    assert calls == ["new"]
    assert result.payload == "replaced"
    assert len(registry) == 1


def test_builtin_tool_can_be_overridden():
    registry = build_registry()
    registry.register(
        ToolDescriptor.from_function("doc.format", "Override", [], lambda args: {"html": "override"})
    )
    assert registry.call("doc.format", {}).payload == {"html": "override"}


def test_executor_errors_are_wrapped_with_tool_name():
    def boom(args):
        raise RuntimeError("disk full")

    registry = ToolRegistry([echo_descriptor(fn=boom)])
    with pytest.raises(ExecutorFailure) as excinfo:
        registry.call("echo", {"text": "x"})
    assert excinfo.value.tool_name == "echo"
    assert isinstance(excinfo.value.__cause__, RuntimeError)


def test_unregister_removes_tool():
    registry = ToolRegistry([echo_descriptor()])
    registry.unregister("echo")
    assert "echo" not in registry
    with pytest.raises(UnsupportedTool):
        registry.call("echo", {"text": "x"})
