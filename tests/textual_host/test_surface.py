"""Tests for the Rich rendering surface."""

from unittest.mock import Mock

from rich.text import Text

from upsicron.shell.flags import render_line
from upsicron.textual_host.surface import TextualSurface, style_for, to_text


class TestStyleFor:
    """Resolved styles to Rich styles."""

    def test_color_and_weight(self):
        """Color and weight combine into one style."""
        style = style_for([("color", "red"), ("font-weight", "bold")])
        assert style.color.name == "red"
        assert style.bold is True

    def test_background(self):
        """background-color maps to bgcolor."""
        style = style_for([("background-color", "black")])
        assert style.bgcolor.name == "black"

    def test_transparent_background_skipped(self):
        """Colors Rich cannot parse are skipped and logged."""
        messages = []
        style = style_for([("background-color", "transparent")], messages.append)
        assert style.bgcolor is None
        assert messages and "transparent" in messages[0]

    def test_fixed_styles(self):
        """Fixed CSS values map to terminal attributes."""
        style = style_for(
            [
                ("font-style", "italic"),
                ("text-decoration", "underline"),
                ("opacity", "0.6"),
                ("filter", "invert"),
            ]
        )
        assert style.italic and style.underline and style.dim and style.reverse

    def test_unknown_property_ignored(self):
        """Properties with no terminal equivalent are ignored."""
        assert style_for([("letter-spacing", "2px")]).bold is None


class TestToText:
    """Buffers to Rich text."""

    def test_lines_joined_without_directives(self):
        """Lines join with newlines and carry no directives."""
        lines = [render_line("=== Calculator ==="), render_line("Result: 4 $@color=green$")]
        text = to_text(lines)
        assert isinstance(text, Text)
        assert text.plain == "=== Calculator ===\nResult: 4 "


class TestTextualSurface:
    """The surface writing into a widget."""

    def test_write_updates_view(self):
        """A write updates the view once and records the lines."""
        view = Mock()
        surface = TextualSurface(view)
        lines = (render_line("hello"),)

        surface.write(lines)

        view.update.assert_called_once()
        assert view.update.call_args[0][0].plain == "hello"
        assert surface.last_lines == lines
        assert surface.writes == 1

    def test_view_errors_are_logged(self):
        """View failures are logged instead of raised."""
        view = Mock()
        view.update.side_effect = RuntimeError("not mounted")
        messages = []
        surface = TextualSurface(view, debug_logger=messages.append)

        surface.write((render_line("x"),))

        assert messages == ["Error updating view: not mounted"]
