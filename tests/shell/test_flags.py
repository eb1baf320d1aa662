"""Tests for inline flag parsing and style resolution."""

import pytest

from upsicron.shell.flags import (
    FLAGS,
    FlagDef,
    has_flag,
    parse_flags,
    render_line,
    resolve_flag,
    strip_flags,
)


class TestFlagTable:
    """The static flag table and its entries."""

    def test_flag_def_fields(self):
        """A table entry exposes its CSS property and template."""
        flag = FlagDef("style", "color", "#value")
        assert flag.css_property == "color"
        assert flag.parameterized is True

    def test_fixed_template_not_parameterized(self):
        """Templates without the value placeholder are fixed styles."""
        assert FLAGS["bold"].parameterized is False
        assert FLAGS["bold"].css_property == "font-weight"

    def test_table_has_behavior_and_style_kinds(self):
        """The table mixes style flags with the noclear behavior flag."""
        kinds = {flag.kind for flag in FLAGS.values()}
        assert kinds == {"style", "behavior"}


class TestParseFlags:
    """Extraction of style and behavior flags."""

    def test_parameterized_style_flag(self):
        """A ``name=value`` style flag substitutes the value into its template."""
        parsed = parse_flags("hello $@color=red$")
        assert parsed.styles == (("color", "red"),)
        assert parsed.markers == ()

    def test_parameterless_style_flags_keep_order(self):
        """Styles come out in the order they appear in the line."""
        parsed = parse_flags("$@bold$ x $@italic$ $@underline$")
        assert parsed.styles == (
            ("font-weight", "bold"),
            ("font-style", "italic"),
            ("text-decoration", "underline"),
        )

    def test_behavior_flag_becomes_marker(self):
        """Behavior flags become markers, not styles."""
        parsed = parse_flags("keep me $@noclear$")
        assert parsed.styles == ()
        assert parsed.markers == ("noclear",)

    def test_unknown_flag_dropped(self):
        """Unknown flag names produce neither styles nor markers."""
        parsed = parse_flags("a $@sparkle$ b $@sparkle=lots$")
        assert parsed.styles == ()
        assert parsed.markers == ()

    def test_background_flag(self):
        """``background`` maps to the background-color property."""
        parsed = parse_flags("$@background=black$")
        assert parsed.styles == (("background-color", "black"),)

    def test_custom_table(self):
        """A caller-supplied table replaces the built-in one."""
        table = {"shout": FlagDef("style", "text-transform", "uppercase")}
        assert parse_flags("$@shout$ $@bold$", table).styles == (("text-transform", "uppercase"),)

    def test_resolve_behavior_flag_is_none(self):
        """Only style flags resolve to a property/value pair."""
        assert resolve_flag("noclear") is None
        assert resolve_flag("missing=1") is None
        assert resolve_flag("color=blue") == ("color", "blue")


class TestStripFlags:
    """Directives never reach the visible text."""

    @pytest.mark.parametrize(
        "text, visible",
        [
            ("Result: 4 $@color=green$", "Result: 4 "),
            ("$@bold$bold$@italic$", "bold"),
            ("no flags here", "no flags here"),
            ("unknown $@whatever$ stripped", "unknown  stripped"),
        ],
    )
    def test_strip(self, text, visible):
        """Known and unknown directives are removed alike."""
        assert strip_flags(text) == visible

    def test_well_formed_text_round_trip(self):
        """Parsing then stripping leaves no directive and matches every flag."""
        text = "Error $@color=red$ $@bold$ $@noclear$ done"
        rendered = render_line(text)
        assert "$@" not in rendered.text
        assert rendered.styles == (("color", "red"), ("font-weight", "bold"))
        assert rendered.markers == ("noclear",)
        assert rendered.original == text

    def test_has_flag(self):
        """``has_flag`` matches on the flag name, with or without a value."""
        assert has_flag("x $@noclear$", "noclear")
        assert has_flag("x $@color=red$", "color")
        assert not has_flag("x $@colour$", "color")


class TestRenderLine:
    """Lines as handed to the rendering surface."""

    def test_preserve_adds_noclear_marker_once(self):
        """Preserved lines carry exactly one noclear marker."""
        assert render_line("a", preserve=True).markers == ("noclear",)
        assert render_line("a $@noclear$", preserve=True).markers == ("noclear",)

    def test_style_attribute(self):
        """Styles join into a CSS-style attribute string."""
        rendered = render_line("x $@color=red$ $@bold$")
        assert rendered.style_attribute == "color:red;font-weight:bold"
