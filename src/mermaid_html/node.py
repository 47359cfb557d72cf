"""Diagram nodes and discovery of ```mermaid fences in markdown.

The full markdown parser lives upstream; this module only knows enough
fenced-code-block syntax to pull diagram sources out of a document.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from mermaid_html.utils import extract_diagram_type

# Leading keyword -> diagram family name
_FAMILIES: dict[str, str] = {
    "graph": "flowchart",
    "flowchart": "flowchart",
    "sequenceDiagram": "sequence",
    "classDiagram": "class",
    "stateDiagram": "state",
    "stateDiagram-v2": "state",
    "erDiagram": "er",
    "gantt": "gantt",
    "pie": "pie",
    "journey": "journey",
    "gitGraph": "git",
    "quadrantChart": "quadrant",
    "requirementDiagram": "requirement",
    "C4Context": "c4",
    "C4Container": "c4",
    "C4Component": "c4",
    "C4Dynamic": "c4",
    "C4Deployment": "c4",
    "mindmap": "mindmap",
    "timeline": "timeline",
    "zenuml": "zenuml",
    "sankey": "sankey",
    "sankey-beta": "sankey",
}

_FENCE_OPEN_RE = re.compile(r"^ {0,3}(?P<fence>`{3,}|~{3,})[ \t]*(?P<info>[^\n]*)$")
_FENCE_LANGUAGE = "mermaid"


@dataclass(frozen=True)
class DiagramNode:
    """A diagram block as produced by the markdown parser."""

    content: str
    line: int | None = None

    @property
    def diagram_type(self) -> str | None:
        """Family name of the diagram (``flowchart``, ``sequence``, ...), or None."""
        keyword = _first_keyword(self.content)
        if keyword is None:
            return None
        return _FAMILIES.get(keyword)


def _first_keyword(content: str) -> str | None:
    """Keyword on the first line that is neither blank nor a ``%%`` comment."""
    for line in content.splitlines():
        line = line.strip()
        if not line or line.startswith("%%"):
            continue
        return extract_diagram_type(line)
    return None


def extract_diagrams(markdown: str) -> list[DiagramNode]:
    """Return a DiagramNode for every ```mermaid fenced block, in document order.

    An unterminated fence runs to the end of the document.
    """
    lines = markdown.splitlines()
    nodes: list[DiagramNode] = []
    i = 0
    while i < len(lines):
        m = _FENCE_OPEN_RE.match(lines[i])
        if not m or (m.group("fence")[0] == "`" and "`" in m.group("info")):
            i += 1
            continue
        fence = m.group("fence")
        info = m.group("info").strip().split()
        start = i + 1
        end = start
        while end < len(lines) and not _closes(lines[end], fence):
            end += 1
        if info and info[0].lower() == _FENCE_LANGUAGE:
            nodes.append(DiagramNode(content="\n".join(lines[start:end]), line=i + 1))
        i = end + 1
    return nodes


def _closes(line: str, fence: str) -> bool:
    stripped = line.strip()
    if len(line) - len(line.lstrip(" ")) > 3:
        return False
    return len(stripped) >= len(fence) and set(stripped) == {fence[0]}
