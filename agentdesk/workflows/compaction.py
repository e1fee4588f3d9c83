from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Sequence

from agentdesk.schemas.messages import Role, Turn, estimate_tokens

EXCERPT_CHARS = 120
EXCERPT_TURNS = 2
DEFAULT_MAX_ROUNDS = 5


@dataclass
class CompactionResult:
    turns: List[Turn]
    rounds: int
    evicted: int


def total_length(turns: Iterable[Turn]) -> int:
    return sum(len(turn.content) for turn in turns)


def summarize(turns: Sequence[Turn]) -> str:
    """Deterministic digest: distinct roles plus an excerpt of the first two turns."""
    if not turns:
        return ""
    roles = list(dict.fromkeys(turn.role.value for turn in turns))
    excerpt = " | ".join(
        f"{turn.role.value.capitalize()}: {turn.content[:EXCERPT_CHARS]}" for turn in turns[:EXCERPT_TURNS]
    )
    return f"[Context Summary] Roles: {', '.join(roles)}. Highlights: {excerpt}…"


def compact_history(
    task_id: str,
    history: Iterable[Turn],
    limit: int,
    max_rounds: int = DEFAULT_MAX_ROUNDS,
) -> CompactionResult:
    """Bring ``history`` under ``limit`` characters.

    First folds the earlier half into a system summary turn, at most
    ``max_rounds`` times, then evicts turns oldest first while keeping a
    leading system summary. Never drops below one turn.
    """
    turns = sorted(history, key=lambda turn: turn.timestamp)

    rounds = 0
    while total_length(turns) > limit and len(turns) > 2 and rounds < max_rounds:
        rounds += 1
        midpoint = max(1, len(turns) // 2)
        head, tail = turns[:midpoint], turns[midpoint:]
        digest = summarize(head)[:limit]
        # the summary sorts where the turns it replaces were
        summary = Turn(
            task_id=task_id,
            role=Role.SYSTEM,
            content=digest,
            timestamp=head[-1].timestamp,
            token_estimate=estimate_tokens(digest),
        )
        turns = [summary] + tail

    evicted = 0
    while total_length(turns) > limit and len(turns) > 1:
        if turns[0].role == Role.SYSTEM:
            del turns[1]
        else:
            del turns[0]
        evicted += 1

    return CompactionResult(turns=turns, rounds=rounds, evicted=evicted)
