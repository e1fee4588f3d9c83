import pytest

from agentdesk.memory.file_store import FileBackedMessageStore
from agentdesk.memory.session_store import InMemoryMessageStore
from agentdesk.schemas.errors import StorageFailure
from agentdesk.schemas.messages import Role, ToolCall, Turn


@pytest.fixture(params=["memory", "file"])
def store(request, tmp_path):
    if request.param == "memory":
        return InMemoryMessageStore()
    return FileBackedMessageStore(tmp_path / "sessions")


def test_append_and_history_keep_order(store):
    first = Turn(task_id="t1", role=Role.USER, content="hello")
    second = Turn(task_id="t1", role=Role.MANAGER, content="on it")
    other = Turn(task_id="t2", role=Role.USER, content="unrelated")
    for turn in (first, second, other):
        store.append(turn)

    assert [t.id for t in store.history("t1")] == [first.id, second.id]
    assert [t.content for t in store.history("t2")] == ["unrelated"]
    assert store.history("unknown") == []


def test_replace_and_remove_all(store):
    store.append(Turn(task_id="t1", role=Role.USER, content="a"))
    replacement = Turn(task_id="t1", role=Role.SYSTEM, content="summary")
    store.replace_history("t1", [replacement])
    assert [t.content for t in store.history("t1")] == ["summary"]

    store.remove_all("t1")
    assert store.history("t1") == []


def test_history_is_a_copy(store):
    store.append(Turn(task_id="t1", role=Role.USER, content="a"))
    store.history("t1").clear()
    assert len(store.history("t1")) == 1


def test_file_store_round_trips_tool_calls(tmp_path):
    turn = Turn(
        task_id="t1",
        role=Role.WORKER,
        content="formatting",
        tool_call=ToolCall(name="doc.format", arguments={"input": "Hi", "style": "formal", "ratio": 1.5}),
        token_estimate=3,
    )
    FileBackedMessageStore(tmp_path).append(turn)

    loaded = FileBackedMessageStore(tmp_path).history("t1")
    assert loaded == [turn]
    assert loaded[0].role is Role.WORKER


def test_file_store_wraps_corrupt_files(tmp_path):
    (tmp_path / "t1.json").write_text("{not json", encoding="utf-8")
    with pytest.raises(StorageFailure):
        FileBackedMessageStore(tmp_path).history("t1")


@pytest.mark.parametrize("task_id", ["task 1", "../escape", "..", "client/42", "résumé"])
def test_file_store_encodes_task_ids_that_are_not_plain_names(tmp_path, task_id):
    root = tmp_path / "sessions"
    FileBackedMessageStore(root).append(Turn(task_id=task_id, role=Role.USER, content="x"))

    assert [t.content for t in FileBackedMessageStore(root).history(task_id)] == ["x"]
    assert [p.parent for p in tmp_path.rglob("*.json")] == [root]
    assert FileBackedMessageStore(root).history("task_1") == []


def test_file_store_keeps_plain_task_ids_as_file_names(tmp_path):
    FileBackedMessageStore(tmp_path).append(Turn(task_id="task-1.v2", role=Role.USER, content="x"))
    assert (tmp_path / "task-1.v2.json").exists()
