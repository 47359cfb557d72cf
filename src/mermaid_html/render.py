"""Diagram node -> HTML: fragments, documents and standalone pages.

Pipeline (per document):
  1. load-strategy tag (shim.loader_tag)
  2. init script (script.init_script)
  3. one container per diagram, in input order
  4. trigger script, run on DOMContentLoaded

Step 4 is deferred because the library may still be loading when the
fragments are parsed; under the embedded strategy the trigger call lands in
the shim's queue and is replayed once the library arrives.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from html import escape

from mermaid_html.config import MermaidConfig
from mermaid_html.node import DiagramNode, extract_diagrams
from mermaid_html.script import init_script
from mermaid_html.shim import loader_tag
from mermaid_html.utils import generate_diagram_id, generate_safe_id, is_valid_syntax

logger = logging.getLogger(__name__)

CODE_LANGUAGE_CLASS = "language-mermaid"

TRIGGER_SCRIPT = """\
<script>
document.addEventListener('DOMContentLoaded', function() {
    if (typeof mermaid !== 'undefined') {
        mermaid.init();
    }
});
</script>
"""

_BASE_CSS = """\
body {
    font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, "Helvetica Neue", Arial, sans-serif;
    line-height: 1.6;
    color: #333;
    max-width: 900px;
    margin: 0 auto;
    padding: 20px;
}
.mermaid-container {
    margin: 20px 0;
    padding: 15px;
    background: #f8f9fa;
    border-radius: 8px;
    overflow-x: auto;
}
.mermaid {
    text-align: center;
}
"""


def code_block(source: str) -> str:
    """Escaped ``<pre><code>`` block for diagram source that will not be rendered."""
    return f'<pre><code class="{CODE_LANGUAGE_CLASS}">{escape(source)}</code></pre>'


@dataclass(frozen=True)
class RenderedFragment:
    """HTML for one diagram and the id it was given."""

    id: str
    html: str


@dataclass(frozen=True)
class MermaidRenderer:
    """Render diagram nodes to HTML according to a MermaidConfig."""

    config: MermaidConfig = field(default_factory=MermaidConfig.default)

    def render_fragment(self, node: DiagramNode, id: str | None = None) -> RenderedFragment:
        """Render one diagram.

        When rendering is disabled the result is an escaped code block and the
        returned id is still assigned, but not present in the HTML.
        """
        diagram_id = id if id is not None else generate_diagram_id(self.config.id_prefix)
        if not self.config.enabled:
            return RenderedFragment(id=diagram_id, html=code_block(node.content))
        if not is_valid_syntax(node.content):
            logger.debug("event=unrecognized_diagram id=%s", diagram_id)
        # The library parses its own notation, so the content stays unescaped.
        html = (
            f'<div class="mermaid-container" id="{diagram_id}-container">\n'
            f'    <pre class="mermaid" id="{diagram_id}">{node.content}</pre>\n'
            "</div>\n"
        )
        return RenderedFragment(id=diagram_id, html=html)

    def render_diagram(self, node: DiagramNode, id: str | None = None) -> str:
        return self.render_fragment(node, id).html

    def render_document(self, diagrams: Sequence[tuple[DiagramNode, str]]) -> str:
        """Render several diagrams with everything needed to draw them.

        Returns an empty string when rendering is disabled or there is nothing
        to render.
        """
        if not self.config.enabled or not diagrams:
            return ""
        parts = [self.library_head()]
        parts.extend(self.render_diagram(node, id) for node, id in diagrams)
        parts.append(TRIGGER_SCRIPT)
        logger.debug("event=render_document diagrams=%d", len(diagrams))
        return "".join(parts)

    def library_head(self) -> str:
        """The load-strategy tag followed by the init script."""
        return loader_tag(self.config.load_strategy) + f"<script>\n{init_script(self.config)}</script>\n"

    def standalone_html(self, content: str, title: str = "Mermaid Diagram") -> str:
        """Wrap ``content`` in a complete HTML page wired up for diagrams."""
        css = _BASE_CSS + (self.config.custom_css + "\n" if self.config.custom_css else "")
        head_scripts = self.library_head() if self.config.enabled else ""
        trigger = TRIGGER_SCRIPT if self.config.enabled else ""
        return (
            "<!DOCTYPE html>\n"
            '<html lang="en">\n'
            "<head>\n"
            '<meta charset="UTF-8">\n'
            '<meta name="viewport" content="width=device-width, initial-scale=1.0">\n'
            f"<title>{escape(title)}</title>\n"
            f"<style>\n{css}</style>\n"
            f"{head_scripts}"
            "</head>\n"
            "<body>\n"
            f"{content}"
            f"{trigger}"
            "</body>\n"
            "</html>\n"
        )


def assign_ids(nodes: Sequence[DiagramNode], prefix: str) -> list[tuple[DiagramNode, str]]:
    """Pair each node with a content-derived id, suffixing repeats with ``-2``, ``-3``..."""
    seen: dict[str, int] = {}
    pairs: list[tuple[DiagramNode, str]] = []
    for node in nodes:
        base = generate_safe_id(node.content, prefix)
        seen[base] = seen.get(base, 0) + 1
        pairs.append((node, base if seen[base] == 1 else f"{base}-{seen[base]}"))
    return pairs


def render_markdown_diagrams(markdown: str, config: MermaidConfig | None = None) -> str:
    """Find every ```mermaid block in ``markdown`` and render them as one snippet.

    With rendering disabled the blocks come back as escaped code blocks, one
    per line, instead of the empty string ``render_document`` gives.
    """
    renderer = MermaidRenderer(config or MermaidConfig.default())
    pairs = _discover(markdown, renderer.config.id_prefix)
    if not renderer.config.enabled:
        return _join(renderer.render_diagram(node, id) for node, id in pairs)
    return renderer.render_document(pairs)


def render_markdown_page(markdown: str, config: MermaidConfig | None = None, title: str = "Mermaid Diagrams") -> str:
    """Render every ```mermaid block in ``markdown`` into a standalone HTML page."""
    renderer = MermaidRenderer(config or MermaidConfig.default())
    pairs = _discover(markdown, renderer.config.id_prefix)
    body = _join(renderer.render_diagram(node, id) for node, id in pairs)
    return renderer.standalone_html(body, title=title)


def _discover(markdown: str, prefix: str) -> list[tuple[DiagramNode, str]]:
    nodes = extract_diagrams(markdown)
    logger.info("event=diagrams_found count=%d", len(nodes))
    return assign_ids(nodes, prefix)


def _join(fragments: Iterable[str]) -> str:
    return "".join(f if f.endswith("\n") else f + "\n" for f in fragments)
