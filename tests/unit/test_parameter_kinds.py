import pytest

from agentdesk.schemas.errors import InvalidArguments
from agentdesk.schemas.messages import ToolCall
from agentdesk.tools.parameters import ParameterKind, describe_shape


def test_exactly_eight_kinds():
    assert len(ParameterKind) == 8


def test_double_accepts_int_promotion():
    assert ParameterKind.DOUBLE.accepts(3)
    assert ParameterKind.DOUBLE.accepts(2.5)
    assert not ParameterKind.INT.accepts(2.5)


def test_bool_is_not_numeric():
    assert ParameterKind.BOOL.accepts(True)
    assert not ParameterKind.INT.accepts(True)
    assert not ParameterKind.DOUBLE.accepts(False)


def test_list_and_map_shapes():
    assert ParameterKind.STRING_LIST.accepts(["a", "b"])
    assert not ParameterKind.STRING_LIST.accepts(["a", 1])
    assert ParameterKind.ANY_LIST.accepts(["a", 1, {"x": 1}])
    assert ParameterKind.STRING_MAP.accepts({"k": "v"})
    assert not ParameterKind.STRING_MAP.accepts({"k": 1})
    assert ParameterKind.ANY_MAP.accepts({"k": [1, 2]})
    assert not ParameterKind.ANY_MAP.accepts({1: "v"})


def test_of_picks_most_specific_kind():
    assert ParameterKind.of(True) is ParameterKind.BOOL
    assert ParameterKind.of(1) is ParameterKind.INT
    assert ParameterKind.of(1.5) is ParameterKind.DOUBLE
    assert ParameterKind.of(["x"]) is ParameterKind.STRING_LIST
    assert ParameterKind.of([1]) is ParameterKind.ANY_LIST
    assert ParameterKind.of({"a": "b"}) is ParameterKind.STRING_MAP
    assert ParameterKind.of({"a": 1}) is ParameterKind.ANY_MAP
    assert ParameterKind.of(None) is None
    assert ParameterKind.of((1, 2)) is None


def test_describe_shape_falls_back_to_type_name():
    assert describe_shape("x") == "string"
    assert describe_shape({1, 2}) == "set"


def test_tool_call_rejects_values_outside_the_eight_shapes():
    with pytest.raises(InvalidArguments) as excinfo:
        ToolCall(name="doc.format", arguments={"input": None})
    assert excinfo.value.parameter == "input"
    assert excinfo.value.actual == "NoneType"
