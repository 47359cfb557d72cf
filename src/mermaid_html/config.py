"""Centralized configuration for mermaid-html.

Every field has a default, so ``MermaidConfig()`` is always a complete,
valid configuration. Instances are frozen; derive variants with
``dataclasses.replace``.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field, fields, replace
from typing import Any

from mermaid_html.types import Cdn, Curve, Custom, Embedded, LoadStrategy, SecurityLevel, Theme

logger = logging.getLogger(__name__)

DEFAULT_FONT_FAMILY = '"Trebuchet MS", verdana, arial, sans-serif'


@dataclass(frozen=True)
class FlowchartConfig:
    """Flowchart-specific options."""

    curve: Curve = field(default_factory=Curve.default)
    padding: int = 8
    node_spacing: int = 50
    rank_spacing: int = 50
    use_max_width: bool = True


@dataclass(frozen=True)
class SequenceConfig:
    """Sequence-diagram-specific options."""

    show_numbers: bool = False
    actor_margin: int = 50
    note_margin: int = 10
    message_margin: int = 35
    mirror_actors: bool = True
    use_max_width: bool = True


@dataclass(frozen=True)
class MermaidConfig:
    """Settings for one rendering session."""

    enabled: bool = True
    theme: Theme = field(default_factory=Theme.default)
    load_strategy: LoadStrategy = field(default_factory=Embedded)
    security_level: SecurityLevel = field(default_factory=SecurityLevel.default)
    start_on_load: bool = True
    font_family: str = DEFAULT_FONT_FAMILY
    font_size: int = 16
    max_text_size: int = 50000
    use_max_width: bool = True
    id_prefix: str = "mermaid-"
    # Accepted for compatibility with existing configs; not yet emitted into the init script.
    display_errors: bool = False
    log_level: int = 5
    custom_css: str | None = None
    flowchart: FlowchartConfig = field(default_factory=FlowchartConfig)
    sequence: SequenceConfig = field(default_factory=SequenceConfig)

    @classmethod
    def default(cls) -> MermaidConfig:
        return DEFAULT

    @classmethod
    def dark(cls) -> MermaidConfig:
        return DARK

    @classmethod
    def dark_high_contrast(cls) -> MermaidConfig:
        return DARK_HIGH_CONTRAST

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], base: MermaidConfig | None = None) -> MermaidConfig:
        """Build a config from a plain mapping, e.g. a parsed TOML table.

        Keys use the Python field names. Unset keys keep the value from
        ``base`` (the default config when omitted). Unknown keys are ignored.

        Raises:
            TypeError: If ``data`` or a nested section is not a mapping.
            ValueError: If an enum value or load strategy is not recognized.
        """
        _require_table(data, "mermaid")
        base = base or DEFAULT
        known = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            if key not in known:
                logger.warning("event=config_unknown_key key=%s", key)
                continue
            if key == "theme":
                kwargs[key] = _enum_value(Theme, value, key)
            elif key == "security_level":
                kwargs[key] = _enum_value(SecurityLevel, value, key)
            elif key == "load_strategy":
                kwargs[key] = parse_load_strategy(value)
            elif key == "flowchart":
                sub = dict(_require_table(value, f"mermaid.{key}"))
                if "curve" in sub:
                    sub["curve"] = _enum_value(Curve, sub["curve"], "flowchart.curve")
                kwargs[key] = _sub_config(FlowchartConfig, base.flowchart, sub)
            elif key == "sequence":
                kwargs[key] = _sub_config(SequenceConfig, base.sequence, dict(_require_table(value, f"mermaid.{key}")))
            else:
                kwargs[key] = value
        return replace(base, **kwargs)


def parse_load_strategy(value: Any) -> LoadStrategy:
    """Parse ``"embedded"``, ``{"cdn": version}`` or ``{"custom": url}``."""
    if isinstance(value, (Embedded, Cdn, Custom)):
        return value
    if value == "embedded":
        return Embedded()
    if value == "cdn":
        return Cdn()
    if isinstance(value, Mapping) and len(value) == 1:
        kind, arg = next(iter(value.items()))
        if kind == "cdn":
            return Cdn(version=str(arg))
        if kind == "custom":
            return Custom(url=str(arg))
    raise ValueError(f"Unknown load strategy {value!r}; use 'embedded', {{cdn = VERSION}} or {{custom = URL}}")


def _require_table(value: Any, key: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise TypeError(f"[{key}] must be a table, got {type(value).__name__}")
    return value


def _enum_value(enum_cls: type, value: Any, key: str) -> Any:
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        choices = ", ".join(m.value for m in enum_cls)
        raise ValueError(f"Unknown {key} '{value}'; use one of: {choices}") from None


def _sub_config(cls: type, base: Any, data: dict[str, Any]) -> Any:
    known = {f.name for f in fields(cls)}
    for key in [k for k in data if k not in known]:
        logger.warning("event=config_unknown_key key=%s.%s", cls.__name__, key)
        del data[key]
    return replace(base, **data)


# ─── Presets ─────────────────────────────────────────────────────────────────

_DARK_CSS = """\
.mermaid .messageText {
    fill: #ffffff !important;
    font-weight: 500;
}
.mermaid .actor {
    fill: #2d2d2d !important;
    stroke: #ffffff !important;
}
.mermaid .actor-box {
    fill: #2d2d2d !important;
}
.mermaid .labelText {
    fill: #ffffff !important;
    font-weight: 500;
}
.mermaid text {
    fill: #ffffff !important;
}
.mermaid .sequenceNumber {
    fill: #ffffff !important;
}
.mermaid .note {
    fill: #4a4a4a !important;
    stroke: #ffffff !important;
}
.mermaid .noteText {
    fill: #ffffff !important;
}"""

_DARK_HIGH_CONTRAST_CSS = """\
.mermaid .messageText {
    fill: #ffffff !important;
    font-weight: bold;
    font-size: 14px;
}
.mermaid .actor {
    fill: #1a1a1a !important;
    stroke: #ffffff !important;
    stroke-width: 2px;
}
.mermaid .actor-box {
    fill: #1a1a1a !important;
}
.mermaid .labelText, .mermaid text {
    fill: #ffffff !important;
    font-weight: bold;
    text-shadow: 1px 1px 2px rgba(0,0,0,0.8);
}
.mermaid .sequenceNumber {
    fill: #ffffff !important;
    font-weight: bold;
}
.mermaid .note {
    fill: #2d2d2d !important;
    stroke: #ffffff !important;
    stroke-width: 2px;
}
.mermaid .noteText {
    fill: #ffffff !important;
    font-weight: bold;
}
.mermaid .activation0, .mermaid .activation1, .mermaid .activation2 {
    fill: #4a4a4a !important;
    stroke: #ffffff !important;
}"""

DEFAULT = MermaidConfig()
DARK = MermaidConfig(theme=Theme.DARK, custom_css=_DARK_CSS)
DARK_HIGH_CONTRAST = MermaidConfig(theme=Theme.DARK, custom_css=_DARK_HIGH_CONTRAST_CSS)

PRESETS: dict[str, MermaidConfig] = {
    "default": DEFAULT,
    "dark": DARK,
    "dark-high-contrast": DARK_HIGH_CONTRAST,
}
