from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from typing import Dict, Iterable, List

from agentdesk.schemas.messages import Turn


class MessageStore(ABC):
    """Ordered per-task conversation log backing the session orchestrator."""

    @abstractmethod
    def append(self, turn: Turn) -> None:
        """Add ``turn`` at the end of its task's history."""

    @abstractmethod
    def history(self, task_id: str) -> List[Turn]:
        """Return the task's turns in stored order."""

    @abstractmethod
    def replace_history(self, task_id: str, turns: Iterable[Turn]) -> None:
        """Swap the task's history for ``turns``."""

    @abstractmethod
    def remove_all(self, task_id: str) -> None:
        """Empty the task's history."""


class InMemoryMessageStore(MessageStore):
    def __init__(self) -> None:
        self._turns: Dict[str, List[Turn]] = {}
        self._lock = threading.Lock()

    def append(self, turn: Turn) -> None:
        with self._lock:
            self._turns.setdefault(turn.task_id, []).append(turn)

    def history(self, task_id: str) -> List[Turn]:
        with self._lock:
            return list(self._turns.get(task_id, []))

    def replace_history(self, task_id: str, turns: Iterable[Turn]) -> None:
        turns = list(turns)
        with self._lock:
            self._turns[task_id] = turns

    def remove_all(self, task_id: str) -> None:
        with self._lock:
            self._turns[task_id] = []
