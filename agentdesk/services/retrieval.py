from __future__ import annotations

import logging
import re
import threading
import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List

logger = logging.getLogger(__name__)

_SENTENCE_SPLIT = re.compile(r"[.!?\n]")
_TOKEN_SPLIT = re.compile(r"[^0-9a-z]+")


@dataclass
class Chunk:
    text: str
    source: str
    score: float = 0.0
    id: str = field(default_factory=lambda: str(uuid.uuid4()))


@dataclass
class IndexedDocument:
    path: str
    collection: str
    chunks: List[Chunk]


@dataclass
class IndexStats:
    files: int
    chunks: int


def tokenise(text: str) -> List[str]:
    return [token for token in _TOKEN_SPLIT.split(text.lower()) if token]


class RetrievalService:
    """In-process keyword index over local documents, grouped by collection."""

    def __init__(self, sentences_per_chunk: int = 3) -> None:
        self.sentences_per_chunk = sentences_per_chunk
        self._documents: Dict[str, List[IndexedDocument]] = {}
        self._lock = threading.Lock()

    def index(self, paths: Iterable[str], collection: str) -> IndexStats:
        inserted = []
        for path in paths:
            try:
                content = Path(path).read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError):
                logger.info("Could not read %s, indexing placeholder text", path)
                content = f"Document placeholder for {path}"
            inserted.append(
                IndexedDocument(path=path, collection=collection, chunks=self._build_chunks(content, path))
            )
        with self._lock:
            self._documents.setdefault(collection, []).extend(inserted)
        return IndexStats(files=len(inserted), chunks=sum(len(doc.chunks) for doc in inserted))

    def retrieve(self, query: str, collections: Iterable[str], k: int = 3) -> List[Chunk]:
        if not query.strip():
            return []
        with self._lock:
            pool = [
                chunk
                for name in collections
                for doc in self._documents.get(name, [])
                for chunk in doc.chunks
            ]
        query_tokens = tokenise(query)
        ranked = [
            Chunk(text=chunk.text, source=chunk.source, score=self._score(query_tokens, chunk), id=chunk.id)
            for chunk in pool
        ]
        ranked.sort(key=lambda chunk: (-chunk.score, len(chunk.text)))
        return ranked[: max(1, k)]

    def _build_chunks(self, content: str, source: str) -> List[Chunk]:
        sentences = [s.strip() for s in _SENTENCE_SPLIT.split(content) if s.strip()]
        if not sentences:
            return [Chunk(text=content[:280], source=source)]
        size = self.sentences_per_chunk
        return [
            Chunk(text=". ".join(sentences[start : start + size]), source=source)
            for start in range(0, len(sentences), size)
        ]

    @staticmethod
    def _score(query_tokens: List[str], chunk: Chunk) -> float:
        chunk_tokens = tokenise(chunk.text)
        if not chunk_tokens:
            return 0.0
        matches = [token for token in query_tokens if token in chunk_tokens]
        return len(matches) / len(chunk_tokens)
