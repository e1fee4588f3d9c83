from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

_PII = re.compile(r"\b[0-9]{3}-[0-9]{2}-[0-9]{4}\b")
_EMAIL = re.compile(r"[A-Z0-9._%+-]+@[A-Z0-9.-]+\.[A-Z]{2,}", re.IGNORECASE)
_PHONE = re.compile(r"\+?[0-9]{7,15}")
_TAG = re.compile(r"<[^>]+>")
_SCRIPT_OR_STYLE = re.compile(r"<(script|style)[^>]*>[\s\S]*?</\1>", re.IGNORECASE)

BANNED_PHRASES = ("hack", "bypass", "impersonate")
FREEZE_SCOPES = ("persona", "all")


@dataclass
class ComplianceReport:
    flags: List[str]
    verdict: str
    details: List[str] = field(default_factory=list)


class ComplianceService:
    """Pattern-based scanner for personal data and restricted phrases."""

    def scan(
        self,
        text: Optional[str] = None,
        html: Optional[str] = None,
        doc_id: Optional[str] = None,
    ) -> ComplianceReport:
        body = _TAG.sub(" ", html or "") + " " + (text or "")
        flags: List[str] = []
        details: List[str] = []

        if _PII.search(body):
            flags.append("pii")
            details.append("Potential SSN detected")
        if _EMAIL.search(body):
            flags.append("email")
            details.append("Email address present")
        if _PHONE.search(body):
            flags.append("phone")
            details.append("Phone number present")
        lower = body.lower()
        hits = [phrase for phrase in BANNED_PHRASES if phrase in lower]
        if hits:
            flags.append("policy")
            details.append(f"Contains restricted phrases: {', '.join(hits)}")

        verdict = "manual_review" if {"pii", "policy"} & set(flags) else "ok"
        if doc_id is not None:
            details.append(f"doc_id={doc_id}")
        return ComplianceReport(flags=flags, verdict=verdict, details=details)

    def sanitize(self, html: str) -> Tuple[str, List[str]]:
        clean = _SCRIPT_OR_STYLE.sub("", html)
        removed = [] if clean == html else ["script/style"]
        return clean, removed

    def freeze(self, scope: str, reason: str) -> bool:
        if not reason.strip():
            return False
        return scope in FREEZE_SCOPES
