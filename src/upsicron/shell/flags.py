"""Inline flag directives: parsing and style resolution.

Line text may carry directives of the form ``$@name$`` or
``$@name=value$``. Style flags resolve to a ``(property, value)`` pair
through the static ``FLAGS`` table; behavior flags pass through as
markers on the rendered line. Directives are always stripped from the
visible text, including unknown ones.

Example::

    >>> render_line("Result: 4 $@color=green$ $@bold$").styles
    (('color', 'green'), ('font-weight', 'bold'))
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple


FLAG_PATTERN = re.compile(r"\$@(.*?)\$")

VALUE_PLACEHOLDER = "#value"

NOCLEAR = "noclear"


@dataclass(frozen=True)
class FlagDef:
    """Entry of the static flag table."""

    kind: str  # "style" or "behavior"
    css_property: str = ""
    template: str = ""

    @property
    def parameterized(self) -> bool:
        return VALUE_PLACEHOLDER in self.template


FLAGS: Dict[str, FlagDef] = {
    "color": FlagDef("style", "color", VALUE_PLACEHOLDER),
    "background": FlagDef("style", "background-color", VALUE_PLACEHOLDER),
    "bold": FlagDef("style", "font-weight", "bold"),
    "italic": FlagDef("style", "font-style", "italic"),
    "underline": FlagDef("style", "text-decoration", "underline"),
    "dim": FlagDef("style", "opacity", "0.6"),
    "reverse": FlagDef("style", "filter", "invert"),
    NOCLEAR: FlagDef("behavior"),
}


@dataclass(frozen=True)
class ParsedFlags:
    styles: Tuple[Tuple[str, str], ...] = ()
    markers: Tuple[str, ...] = ()


@dataclass(frozen=True)
class RenderedLine:
    """One line as handed to the rendering surface."""

    text: str
    styles: Tuple[Tuple[str, str], ...] = ()
    markers: Tuple[str, ...] = ()
    original: str = ""

    @property
    def style_attribute(self) -> str:
        """Styles joined CSS-style, e.g. ``color:red;font-weight:bold``."""
        return ";".join(f"{prop}:{value}" for prop, value in self.styles)


def split_directive(body: str) -> Tuple[str, Optional[str]]:
    """Split the inside of a directive into ``(name, value)``."""
    if "=" in body:
        name, value = body.split("=", 1)
        return name, value
    return body, None


def resolve_flag(body: str, table: Optional[Dict[str, FlagDef]] = None) -> Optional[Tuple[str, str]]:
    """Resolve one style directive body to ``(property, value)``.

    Returns None for unknown names and for behavior flags.
    """
    table = FLAGS if table is None else table
    name, value = split_directive(body)
    flag = table.get(name)
    if flag is None or flag.kind != "style":
        return None
    css_value = flag.template
    if flag.parameterized:
        css_value = css_value.replace(VALUE_PLACEHOLDER, value or "")
    return flag.css_property, css_value


def parse_flags(text: str, table: Optional[Dict[str, FlagDef]] = None) -> ParsedFlags:
    """Extract style and behavior flags from ``text``.

    Unknown flag names are dropped.
    """
    table = FLAGS if table is None else table
    styles: List[Tuple[str, str]] = []
    markers: List[str] = []
    for body in FLAG_PATTERN.findall(text):
        name, _ = split_directive(body)
        flag = table.get(name)
        if flag is None:
            continue
        if flag.kind == "style":
            resolved = resolve_flag(body, table)
            if resolved is not None:
                styles.append(resolved)
        else:
            markers.append(body)
    return ParsedFlags(tuple(styles), tuple(markers))


def strip_flags(text: str) -> str:
    return FLAG_PATTERN.sub("", text)


def has_flag(text: str, name: str) -> bool:
    return any(split_directive(body)[0] == name for body in FLAG_PATTERN.findall(text))


def render_line(text: str, preserve: bool = False, table: Optional[Dict[str, FlagDef]] = None) -> RenderedLine:
    parsed = parse_flags(text, table)
    markers = parsed.markers
    if preserve and NOCLEAR not in markers:
        markers = markers + (NOCLEAR,)
    return RenderedLine(
        text=strip_flags(text),
        styles=parsed.styles,
        markers=markers,
        original=text,
    )
