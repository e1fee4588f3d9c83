from __future__ import annotations

from typing import Any, Dict

from agentdesk.schemas.errors import InvalidArguments
from agentdesk.services.compliance import ComplianceService
from agentdesk.tools.base import Tool
from agentdesk.tools.parameters import ParameterKind, ParameterSpec


class WebFetchTool(Tool):
    """Placeholder fetcher; only https URLs are accepted."""

    name = "web.fetch"
    summary = "Safely fetches public content via HTTPS using GET."
    parameters = (
        ParameterSpec("url", ParameterKind.STRING, description="Absolute https URL."),
        ParameterSpec("mode", ParameterKind.STRING, required=False, description="html|text|pdf"),
    )

    def run(self, arguments: Dict[str, Any]) -> Dict[str, Any]:
        url = arguments["url"]
        if not url.lower().startswith("https://"):
            raise InvalidArguments("url", "Only https:// URLs are permitted", expected="https URL", actual=url)
        mode = arguments.get("mode", "text")
        return {
            "content": f"Fetched placeholder content from {url} in mode {mode}.",
            "meta": {"status": 200, "final_url": url},
        }


class DocFormatTool(Tool):
    name = "doc.format"
    summary = "Formats markdown/HTML fragments into styled HTML articles."
    parameters = (
        ParameterSpec("input", ParameterKind.STRING, description="Markdown or HTML input."),
        ParameterSpec("style", ParameterKind.STRING, description="Style preset key."),
    )

    def run(self, arguments: Dict[str, Any]) -> Dict[str, Any]:
        html = f'<article data-style="{arguments["style"]}">\n  {arguments["input"]}\n</article>'
        return {"html": html}


class SanitizeTool(Tool):
    name = "security.sanitize"
    summary = "Sanitises HTML output removing unsafe script and style blocks."
    parameters = (ParameterSpec("html", ParameterKind.STRING, description="Raw HTML."),)

    def __init__(self, compliance: ComplianceService) -> None:
        self.compliance = compliance

    def run(self, arguments: Dict[str, Any]) -> Dict[str, Any]:
        clean, removed = self.compliance.sanitize(arguments["html"])
        return {"clean_html": clean, "report": {"flags": ["removed_script"] if removed else []}}
