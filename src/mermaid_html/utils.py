"""Stateless helpers for diagram source: keyword detection and ids."""

from __future__ import annotations

import hashlib
import uuid

# Leading keywords the client library recognizes. This is a prefix check,
# not a grammar check.
DIAGRAM_KEYWORDS: tuple[str, ...] = (
    "graph",
    "flowchart",
    "sequenceDiagram",
    "gantt",
    "classDiagram",
    "stateDiagram",
    "erDiagram",
    "journey",
    "gitGraph",
    "pie",
    "quadrantChart",
    "requirementDiagram",
    "C4Context",
    "C4Container",
    "C4Component",
    "C4Dynamic",
    "C4Deployment",
    "mindmap",
    "timeline",
    "zenuml",
    "sankey",
)

# Longest first so "stateDiagram-v2" is not cut down to "stateDiagram".
_KEYWORDS_BY_LENGTH = sorted(DIAGRAM_KEYWORDS + ("stateDiagram-v2", "sankey-beta"), key=len, reverse=True)

_SAFE_ID_HASH_CHARS = 12
_RANDOM_SUFFIX_CHARS = 8


def is_valid_syntax(content: str) -> bool:
    """Return True if the trimmed content starts with a known diagram keyword."""
    trimmed = content.strip()
    return any(trimmed.startswith(kw) for kw in DIAGRAM_KEYWORDS)


def extract_diagram_type(content: str) -> str | None:
    """Return the leading diagram keyword of ``content``, or None."""
    trimmed = content.strip()
    for kw in _KEYWORDS_BY_LENGTH:
        if trimmed.startswith(kw):
            return kw
    return None


def generate_safe_id(content: str, prefix: str = "mermaid-") -> str:
    """Derive a stable HTML id from diagram content.

    The same content and prefix always give the same id, in any process.
    """
    digest = hashlib.sha256(content.encode("utf-8")).hexdigest()
    return f"{prefix}{digest[:_SAFE_ID_HASH_CHARS]}"


def generate_diagram_id(prefix: str = "mermaid-") -> str:
    """Return ``prefix`` plus an 8-character random hex suffix."""
    return f"{prefix}{uuid.uuid4().hex[:_RANDOM_SUFFIX_CHARS]}"
