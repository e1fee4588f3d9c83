from __future__ import annotations

from typing import Any, Dict

from agentdesk.services.retrieval import RetrievalService
from agentdesk.tools.base import Tool
from agentdesk.tools.parameters import ParameterKind, ParameterSpec


class RagIndexTool(Tool):
    name = "rag.index"
    summary = "Indexes supplied file paths into the local knowledge store."
    parameters = (
        ParameterSpec("paths", ParameterKind.STRING_LIST, description="File paths to index."),
        ParameterSpec("collection", ParameterKind.STRING, description="Collection identifier."),
    )

    def __init__(self, retrieval: RetrievalService) -> None:
        self.retrieval = retrieval

    def run(self, arguments: Dict[str, Any]) -> Dict[str, Any]:
        stats = self.retrieval.index(arguments["paths"], arguments["collection"])
        return {"stats": {"files": stats.files, "chunks": stats.chunks}}


class RagRetrieveTool(Tool):
    name = "rag.retrieve"
    summary = "Retrieves relevant knowledge base chunks for grounding."
    parameters = (
        ParameterSpec("query", ParameterKind.STRING, description="User query or task brief."),
        ParameterSpec("collections", ParameterKind.STRING_LIST, description="Collections to search."),
        ParameterSpec("k", ParameterKind.INT, required=False, description="Number of chunks (default 3)."),
    )

    def __init__(self, retrieval: RetrievalService) -> None:
        self.retrieval = retrieval

    def run(self, arguments: Dict[str, Any]) -> Dict[str, Any]:
        chunks = self.retrieval.retrieve(
            arguments["query"], arguments["collections"], k=arguments.get("k", 3)
        )
        return {
            "chunks": [{"text": c.text, "source": c.source, "score": c.score} for c in chunks]
        }
