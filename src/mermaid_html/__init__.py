"""mermaid-html: Mermaid diagram blocks to embeddable HTML."""

from mermaid_html.config import DARK, DARK_HIGH_CONTRAST, DEFAULT, FlowchartConfig, MermaidConfig, SequenceConfig
from mermaid_html.loader import ClientLoader, LibraryHandle, LoaderState, LoaderStateError, Page, RenderTarget
from mermaid_html.node import DiagramNode, extract_diagrams
from mermaid_html.render import MermaidRenderer, RenderedFragment, render_markdown_diagrams, render_markdown_page
from mermaid_html.script import init_script
from mermaid_html.types import Cdn, Curve, Custom, Embedded, SecurityLevel, Theme
from mermaid_html.utils import extract_diagram_type, generate_diagram_id, generate_safe_id, is_valid_syntax

__all__ = [
    "DARK",
    "DARK_HIGH_CONTRAST",
    "DEFAULT",
    "Cdn",
    "ClientLoader",
    "Curve",
    "Custom",
    "DiagramNode",
    "Embedded",
    "FlowchartConfig",
    "LibraryHandle",
    "LoaderState",
    "LoaderStateError",
    "MermaidConfig",
    "MermaidRenderer",
    "Page",
    "RenderTarget",
    "RenderedFragment",
    "SecurityLevel",
    "SequenceConfig",
    "Theme",
    "extract_diagram_type",
    "extract_diagrams",
    "generate_diagram_id",
    "generate_safe_id",
    "init_script",
    "is_valid_syntax",
    "render_diagram",
    "render_markdown_diagrams",
    "render_markdown_page",
]


def render_diagram(src: str, config: MermaidConfig | None = None, id: str | None = None) -> str:
    """Render one Mermaid source string to an HTML fragment.

    Args:
        src: Mermaid DSL source string.
        config: Rendering configuration; the default config when omitted.
        id: Element id for the rendering target; generated when omitted.

    Returns:
        The container fragment, or an escaped code block when rendering is disabled.
    """
    return MermaidRenderer(config or DEFAULT).render_diagram(DiagramNode(content=src), id=id)
