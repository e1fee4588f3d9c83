from __future__ import annotations

import base64
import logging
import os
import re
import tempfile
import threading
from pathlib import Path
from typing import Iterable, List, Union

from pydantic import TypeAdapter

from agentdesk.memory.session_store import MessageStore
from agentdesk.schemas.errors import StorageFailure
from agentdesk.schemas.messages import Turn

logger = logging.getLogger(__name__)

_TURNS = TypeAdapter(List[Turn])
_SAFE_KEY = re.compile(r"^[A-Za-z0-9._-]+$")


def file_stem(task_id: str) -> str:
    """Plain task ids name their file directly; anything else is base64-encoded behind a ``~``."""
    if _SAFE_KEY.match(task_id) and not task_id.startswith("."):
        return task_id
    return "~" + base64.urlsafe_b64encode(task_id.encode("utf-8")).decode("ascii")


class FileBackedMessageStore(MessageStore):
    """One JSON document per task under ``root``, rewritten atomically."""

    def __init__(self, root: Union[str, Path]) -> None:
        self.root = Path(root)
        try:
            self.root.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageFailure(f"Cannot create store directory {self.root}: {exc}") from exc
        self._lock = threading.Lock()

    def append(self, turn: Turn) -> None:
        with self._lock:
            turns = self._load(turn.task_id)
            turns.append(turn)
            self._save(turn.task_id, turns)

    def history(self, task_id: str) -> List[Turn]:
        with self._lock:
            return self._load(task_id)

    def replace_history(self, task_id: str, turns: Iterable[Turn]) -> None:
        turns = list(turns)
        with self._lock:
            self._save(task_id, turns)

    def remove_all(self, task_id: str) -> None:
        with self._lock:
            self._save(task_id, [])

    def _path(self, task_id: str) -> Path:
        return self.root / f"{file_stem(task_id)}.json"

    def _load(self, task_id: str) -> List[Turn]:
        path = self._path(task_id)
        try:
            if not path.exists():
                return []
            return _TURNS.validate_json(path.read_bytes())
        except (OSError, ValueError) as exc:
            raise StorageFailure(f"Cannot read history for task {task_id}: {exc}") from exc

    def _save(self, task_id: str, turns: List[Turn]) -> None:
        path = self._path(task_id)
        try:
            payload = _TURNS.dump_json(turns, indent=2)
            fd, tmp_name = tempfile.mkstemp(dir=self.root, prefix=f".{path.stem}.", suffix=".tmp")
            try:
                with os.fdopen(fd, "wb") as handle:
                    handle.write(payload)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except (OSError, ValueError) as exc:
            raise StorageFailure(f"Cannot write history for task {task_id}: {exc}") from exc
        logger.debug("Wrote %d turns for task %s", len(turns), task_id)
