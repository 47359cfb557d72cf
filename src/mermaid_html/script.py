"""Client-side initialization script emitter.

Serializes a MermaidConfig into the JavaScript that sets
``window.mermaidConfig`` and hands it to ``mermaid.initialize`` when the
library is already on the page. Output is a pure function of the config:
keys are emitted in a fixed order with fixed indentation.
"""

from __future__ import annotations

from mermaid_html.config import MermaidConfig

CONFIG_GLOBAL = "window.mermaidConfig"

_INDENT = "    "


def js_string(value: str) -> str:
    """Quote ``value`` as a single-quoted JavaScript string literal.

    ``</`` is written as ``<\\/`` so the literal can never close the
    enclosing ``<script>`` element.
    """
    escaped = (
        value.replace("\\", "\\\\")
        .replace("'", "\\'")
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\u2028", "\\u2028")
        .replace("\u2029", "\\u2029")
        .replace("</", "<\\/")
    )
    return f"'{escaped}'"


def js_bool(value: bool) -> str:
    return "true" if value else "false"


def _object(entries: list[tuple[str, str]], depth: int) -> str:
    pad = _INDENT * (depth + 1)
    body = ",\n".join(f"{pad}{key}: {value}" for key, value in entries)
    return "{\n" + body + "\n" + _INDENT * depth + "}"


def config_literal(config: MermaidConfig) -> str:
    """Render the config as a JavaScript object literal."""
    fc = config.flowchart
    sc = config.sequence
    flowchart = _object(
        [
            ("curve", js_string(fc.curve.value)),
            ("padding", str(fc.padding)),
            ("nodeSpacing", str(fc.node_spacing)),
            ("rankSpacing", str(fc.rank_spacing)),
            ("useMaxWidth", js_bool(fc.use_max_width)),
        ],
        depth=1,
    )
    sequence = _object(
        [
            ("showSequenceNumbers", js_bool(sc.show_numbers)),
            ("actorMargin", str(sc.actor_margin)),
            ("noteMargin", str(sc.note_margin)),
            ("messageMargin", str(sc.message_margin)),
            ("mirrorActors", js_bool(sc.mirror_actors)),
            ("useMaxWidth", js_bool(sc.use_max_width)),
        ],
        depth=1,
    )
    return _object(
        [
            ("startOnLoad", js_bool(config.start_on_load)),
            ("theme", js_string(config.theme.value)),
            ("securityLevel", js_string(config.security_level.value)),
            ("fontFamily", js_string(config.font_family)),
            ("fontSize", str(config.font_size)),
            ("maxTextSize", str(config.max_text_size)),
            ("useMaxWidth", js_bool(config.use_max_width)),
            ("htmlLabels", "true"),
            ("displayMode", js_string("iframe")),
            ("logLevel", str(config.log_level)),
            ("flowchart", flowchart),
            ("sequence", sequence),
        ],
        depth=0,
    )


def init_script(config: MermaidConfig) -> str:
    """Return the initialization script body (without ``<script>`` tags)."""
    parts = [
        f"{CONFIG_GLOBAL} = {config_literal(config)};\n"
        "if (typeof mermaid !== 'undefined') {\n"
        f"    mermaid.initialize({CONFIG_GLOBAL});\n"
        "}\n"
    ]
    if config.custom_css:
        # document.head may not exist yet when this runs inline.
        parts.append(
            "document.addEventListener('DOMContentLoaded', function() {\n"
            "    var style = document.createElement('style');\n"
            f"    style.textContent = {js_string(config.custom_css)};\n"
            "    document.head.appendChild(style);\n"
            "});\n"
        )
    return "".join(parts)
