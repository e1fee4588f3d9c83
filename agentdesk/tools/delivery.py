from __future__ import annotations

import hashlib
from pathlib import Path
from typing import Any, Dict, List

import yaml

from agentdesk.tools.base import Tool
from agentdesk.tools.parameters import ParameterKind, ParameterSpec


def load_checklist(checklist: str) -> Dict[str, Any]:
    """Accept a checklist path or inline YAML; anything else is an empty checklist."""
    source = checklist
    path = Path(checklist)
    try:
        if path.suffix in (".yml", ".yaml") and path.is_file():
            source = path.read_text(encoding="utf-8")
    except OSError:
        return {}
    try:
        parsed = yaml.safe_load(source)
    except yaml.YAMLError:
        return {}
    return parsed if isinstance(parsed, dict) else {}


def checklist_terms(checklist: Dict[str, Any], key: str) -> List[str]:
    """Terms under ``key``; a scalar counts as one term, other shapes as none."""
    value = checklist.get(key)
    if isinstance(value, list):
        return [str(term) for term in value if term is not None]
    if isinstance(value, (str, int, float)) and not isinstance(value, bool):
        return [str(value)]
    return []


class StyleQATool(Tool):
    """Checklist-driven QA over a text artefact."""

    name = "qa.style_text"
    summary = "Runs checklist-driven QA on textual artefacts."
    parameters = (
        ParameterSpec("doc", ParameterKind.STRING, description="Document body."),
        ParameterSpec("checklist", ParameterKind.STRING, description="Checklist path or YAML."),
    )

    def run(self, arguments: Dict[str, Any]) -> Dict[str, Any]:
        doc = arguments["doc"]
        lower = doc.lower()
        checklist = load_checklist(arguments["checklist"])

        findings: List[Dict[str, str]] = []
        if "todo" in lower:
            findings.append({"type": "tone", "msg": "Document contains TODO markers."})
        for term in checklist_terms(checklist, "banned_terms"):
            if term.lower() in lower:
                findings.append({"type": "terminology", "msg": f"Banned term present: {term}"})
        for term in checklist_terms(checklist, "required_terms"):
            if term.lower() not in lower:
                findings.append({"type": "coverage", "msg": f"Required term missing: {term}"})

        return {"findings": findings, "verdict": "revise" if findings else "accept"}


class GitPatchTool(Tool):
    name = "git.patch"
    summary = "Applies a validated git patch via safe shell wrapper."
    parameters = (
        ParameterSpec("repo_path", ParameterKind.STRING, description="Repository root."),
        ParameterSpec("patch", ParameterKind.STRING, description="Unified diff patch."),
        ParameterSpec("message", ParameterKind.STRING, description="Commit message."),
    )

    def run(self, arguments: Dict[str, Any]) -> Dict[str, Any]:
        return {"commit": "mocked-commit-for-" + arguments["message"].replace(" ", "-")}


class EmailDraftTool(Tool):
    name = "email.draft"
    summary = "Creates an email draft for delivery or follow-up."
    parameters = (
        ParameterSpec("to", ParameterKind.STRING_LIST, description="Recipient list."),
        ParameterSpec("subject", ParameterKind.STRING, description="Email subject."),
        ParameterSpec("html", ParameterKind.STRING, description="Email body HTML."),
        ParameterSpec("attachments", ParameterKind.STRING_LIST, required=False, description="Attachment file paths."),
    )

    def run(self, arguments: Dict[str, Any]) -> Dict[str, Any]:
        digest = hashlib.sha1(arguments["subject"].encode("utf-8")).hexdigest()[:12]
        return {
            "draft_id": f"draft-{digest}",
            "recipients": list(arguments["to"]),
            "attachments": list(arguments.get("attachments", [])),
        }
