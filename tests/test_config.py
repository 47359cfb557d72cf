"""Tests for mermaid_html.config — defaults, presets, and mapping input."""

import logging
from dataclasses import FrozenInstanceError, replace

import pytest

from mermaid_html.config import (
    DARK,
    DARK_HIGH_CONTRAST,
    DEFAULT,
    PRESETS,
    FlowchartConfig,
    MermaidConfig,
    SequenceConfig,
    parse_load_strategy,
)
from mermaid_html.types import Cdn, Curve, Custom, Embedded, SecurityLevel, Theme


class TestDefaults:
    def test_no_arguments_gives_complete_config(self):
        config = MermaidConfig()
        assert config.enabled
        assert config.theme == Theme.DEFAULT
        assert config.load_strategy == Embedded()
        assert config.security_level == SecurityLevel.STRICT
        assert config.start_on_load
        assert config.font_family == '"Trebuchet MS", verdana, arial, sans-serif'
        assert config.font_size == 16
        assert config.max_text_size == 50000
        assert config.use_max_width
        assert config.id_prefix == "mermaid-"
        assert not config.display_errors
        assert config.log_level == 5
        assert config.custom_css is None

    def test_flowchart_defaults(self):
        fc = FlowchartConfig()
        assert fc.curve == Curve.BASIS
        assert (fc.padding, fc.node_spacing, fc.rank_spacing) == (8, 50, 50)
        assert fc.use_max_width

    def test_sequence_defaults(self):
        sc = SequenceConfig()
        assert not sc.show_numbers
        assert (sc.actor_margin, sc.note_margin, sc.message_margin) == (50, 10, 35)
        assert sc.mirror_actors
        assert sc.use_max_width

    def test_partial_override_keeps_other_defaults(self):
        config = MermaidConfig(
            theme=Theme.FOREST,
            security_level=SecurityLevel.LOOSE,
            font_size=18,
            id_prefix="custom-",
            load_strategy=Custom(url="https://example.com/mermaid.js"),
        )
        assert config.theme == Theme.FOREST
        assert config.security_level == SecurityLevel.LOOSE
        assert config.font_size == 18
        assert config.id_prefix == "custom-"
        assert config.load_strategy == Custom(url="https://example.com/mermaid.js")
        assert config.start_on_load
        assert config.flowchart == FlowchartConfig()

    def test_frozen(self):
        config = MermaidConfig()
        with pytest.raises(FrozenInstanceError):
            config.theme = Theme.DARK  # type: ignore[misc]

    def test_replace_derives_variant(self):
        config = replace(DEFAULT, enabled=False)
        assert not config.enabled
        assert DEFAULT.enabled


class TestPresets:
    def test_default_preset_equals_fresh_config(self):
        assert MermaidConfig.default() == MermaidConfig()

    def test_presets_are_stable(self):
        assert MermaidConfig.dark() == MermaidConfig.dark()
        assert MermaidConfig.dark_high_contrast() == MermaidConfig.dark_high_contrast()

    def test_dark(self):
        assert DARK.theme == Theme.DARK
        assert DARK.enabled
        assert DARK.custom_css is not None
        assert ".mermaid .messageText" in DARK.custom_css

    def test_dark_high_contrast(self):
        assert DARK_HIGH_CONTRAST.theme == Theme.DARK
        assert DARK_HIGH_CONTRAST.custom_css is not None
        assert "text-shadow" in DARK_HIGH_CONTRAST.custom_css
        assert DARK_HIGH_CONTRAST.custom_css != DARK.custom_css

    def test_preset_names(self):
        assert set(PRESETS) == {"default", "dark", "dark-high-contrast"}


class TestFromMapping:
    def test_empty_mapping_is_default(self):
        assert MermaidConfig.from_mapping({}) == DEFAULT

    def test_scalar_and_enum_fields(self):
        config = MermaidConfig.from_mapping(
            {"theme": "neutral", "security_level": "sandbox", "font_size": 20, "start_on_load": False}
        )
        assert config.theme == Theme.NEUTRAL
        assert config.security_level == SecurityLevel.SANDBOX
        assert config.font_size == 20
        assert not config.start_on_load

    def test_nested_tables(self):
        config = MermaidConfig.from_mapping(
            {"flowchart": {"curve": "stepAfter", "padding": 12}, "sequence": {"show_numbers": True}}
        )
        assert config.flowchart.curve == Curve.STEP_AFTER
        assert config.flowchart.padding == 12
        assert config.flowchart.node_spacing == 50
        assert config.sequence.show_numbers
        assert config.sequence.actor_margin == 50

    def test_base_is_respected(self):
        config = MermaidConfig.from_mapping({"font_size": 12}, base=DARK)
        assert config.theme == Theme.DARK
        assert config.custom_css == DARK.custom_css
        assert config.font_size == 12

    def test_unknown_key_ignored_and_logged(self, caplog):
        with caplog.at_level(logging.WARNING, logger="mermaid_html.config"):
            config = MermaidConfig.from_mapping({"colour": "red", "flowchart": {"wiggle": 3}})
        assert config == DEFAULT
        assert "key=colour" in caplog.text
        assert "wiggle" in caplog.text

    def test_bad_enum_value_raises(self):
        with pytest.raises(ValueError, match="Unknown theme 'sepia'"):
            MermaidConfig.from_mapping({"theme": "sepia"})

    def test_bad_curve_raises(self):
        with pytest.raises(ValueError, match="flowchart.curve"):
            MermaidConfig.from_mapping({"flowchart": {"curve": "wavy"}})

    def test_non_table_raises(self):
        with pytest.raises(TypeError, match=r"\[mermaid\] must be a table, got int"):
            MermaidConfig.from_mapping(1)  # type: ignore[arg-type]

    def test_non_table_section_raises(self):
        with pytest.raises(TypeError, match=r"\[mermaid.sequence\] must be a table"):
            MermaidConfig.from_mapping({"sequence": "compact"})


class TestParseLoadStrategy:
    def test_embedded(self):
        assert parse_load_strategy("embedded") == Embedded()

    def test_cdn_default_version(self):
        assert parse_load_strategy("cdn") == Cdn()

    def test_cdn_with_version(self):
        assert parse_load_strategy({"cdn": "10.9.0"}) == Cdn(version="10.9.0")

    def test_custom(self):
        assert parse_load_strategy({"custom": "/static/mermaid.js"}) == Custom(url="/static/mermaid.js")

    def test_strategy_instance_passes_through(self):
        assert parse_load_strategy(Cdn(version="11")) == Cdn(version="11")

    def test_unknown_raises(self):
        with pytest.raises(ValueError, match="Unknown load strategy"):
            parse_load_strategy("bundled")
