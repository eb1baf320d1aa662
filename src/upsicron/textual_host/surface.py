"""Rendering surface that turns rendered lines into Rich text."""

from __future__ import annotations

from typing import Callable, Dict, Optional, Sequence, Tuple

from rich.color import Color, ColorParseError
from rich.style import Style
from rich.text import Text

from ..shell.flags import RenderedLine


# (property, value) -> Style keyword arguments for fixed-value styles.
_FIXED_STYLES: Dict[Tuple[str, str], Dict[str, bool]] = {
    ("font-weight", "bold"): {"bold": True},
    ("font-style", "italic"): {"italic": True},
    ("text-decoration", "underline"): {"underline": True},
    ("opacity", "0.6"): {"dim": True},
    ("filter", "invert"): {"reverse": True},
}

_COLOR_PROPERTIES = {"color": "color", "background-color": "bgcolor"}


def style_for(styles: Sequence[Tuple[str, str]], debug_logger: Optional[Callable[[str], None]] = None) -> Style:
    """Combine resolved ``(property, value)`` pairs into one Rich style.

    Unparseable colors (e.g. ``transparent``) are skipped.
    """
    log = debug_logger or (lambda msg: None)
    style = Style()
    for prop, value in styles:
        if prop in _COLOR_PROPERTIES:
            try:
                Color.parse(value)
            except ColorParseError:
                log(f"Surface: ignoring color {value!r} for {prop}")
                continue
            style += Style(**{_COLOR_PROPERTIES[prop]: value})
            continue
        fixed = _FIXED_STYLES.get((prop, value))
        if fixed is None:
            log(f"Surface: no terminal style for {prop}:{value}")
            continue
        style += Style(**fixed)
    return style


def to_text(lines: Sequence[RenderedLine], debug_logger: Optional[Callable[[str], None]] = None) -> Text:
    text = Text(no_wrap=True, overflow="crop")
    for index, line in enumerate(lines):
        if index:
            text.append("\n")
        text.append(line.text, style=style_for(line.styles, debug_logger))
    return text


class TextualSurface:
    """``RenderSurface`` writing into a widget with an ``update`` method."""

    def __init__(self, view, debug_logger: Optional[Callable[[str], None]] = None):
        self.view = view
        self._debug_logger = debug_logger or (lambda msg: None)
        self.last_lines: Tuple[RenderedLine, ...] = ()
        self.writes = 0

    def write(self, lines: Sequence[RenderedLine]) -> None:
        self.last_lines = tuple(lines)
        self.writes += 1
        try:
            self.view.update(to_text(lines, self._debug_logger))
        except Exception as e:
            self._debug_logger(f"Error updating view: {e}")
