from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass, field, replace
from typing import Dict, Iterator, List, Optional

from agentdesk.memory.session_store import MessageStore
from agentdesk.schemas.messages import Turn, estimate_tokens, utcnow
from agentdesk.tools.base import ToolInvoker
from agentdesk.workflows.compaction import DEFAULT_MAX_ROUNDS, compact_history

logger = logging.getLogger(__name__)

DEFAULT_CONTEXT_CHARACTER_LIMIT = 8000


@dataclass
class _TaskLock:
    lock: threading.Lock = field(default_factory=threading.Lock)
    users: int = 0


class SessionOrchestrator:
    """Appends turns per task, dispatches their tool calls and keeps history under budget."""

    def __init__(
        self,
        store: MessageStore,
        tool_invoker: ToolInvoker,
        context_character_limit: int = DEFAULT_CONTEXT_CHARACTER_LIMIT,
        max_summary_rounds: int = DEFAULT_MAX_ROUNDS,
    ) -> None:
        if context_character_limit < 1:
            raise ValueError("context_character_limit must be at least 1")
        self.store = store
        self.tool_invoker = tool_invoker
        self.context_character_limit = context_character_limit
        self.max_summary_rounds = max_summary_rounds
        self._task_locks: Dict[str, _TaskLock] = {}
        self._locks_guard = threading.Lock()

    def send(self, turn: Turn) -> Turn:
        """Stamp and append ``turn``, run its tool call, then compact the task history.

        A failing tool call, whatever the invoker raises, is re-raised only
        after the turn is stored and the history compacted; the append is
        never rolled back.
        """
        enriched = replace(turn, timestamp=utcnow(), token_estimate=estimate_tokens(turn.content))
        tool_error: Optional[Exception] = None

        with self._task_lock(enriched.task_id):
            self.store.append(enriched)

            if enriched.tool_call is not None:
                try:
                    self.tool_invoker.call(enriched.tool_call.name, enriched.tool_call.arguments)
                except Exception as exc:
                    logger.warning("Tool %s failed for task %s: %s", enriched.tool_call.name, enriched.task_id, exc)
                    tool_error = exc

            self._enforce_context_limit(enriched.task_id)

        if tool_error is not None:
            raise tool_error
        return enriched

    def history(self, task_id: str) -> List[Turn]:
        return self.store.history(task_id)

    def clear(self, task_id: str) -> None:
        with self._task_lock(task_id):
            self.store.remove_all(task_id)

    def _enforce_context_limit(self, task_id: str) -> None:
        result = compact_history(
            task_id,
            self.store.history(task_id),
            self.context_character_limit,
            max_rounds=self.max_summary_rounds,
        )
        if result.rounds or result.evicted:
            logger.debug(
                "Compacted task %s: %d summary rounds, %d evicted, %d turns kept",
                task_id,
                result.rounds,
                result.evicted,
                len(result.turns),
            )
        self.store.replace_history(task_id, result.turns)

    @contextmanager
    def _task_lock(self, task_id: str) -> Iterator[None]:
        # Entries live only while some caller holds or waits on them.
        with self._locks_guard:
            entry = self._task_locks.get(task_id)
            if entry is None:
                entry = self._task_locks[task_id] = _TaskLock()
            entry.users += 1
        try:
            with entry.lock:
                yield
        finally:
            with self._locks_guard:
                entry.users -= 1
                if entry.users == 0:
                    del self._task_locks[task_id]
