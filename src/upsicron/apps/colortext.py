"""ColorText app: style free text with inline flags."""

from __future__ import annotations

from typing import Dict, List, Tuple

from ..shell.base_app import BaseApp, ShellContext


COLOR_KEYS: Dict[str, Tuple[str, str]] = {
    "1": ("red", "Red"),
    "2": ("green", "Green"),
    "3": ("blue", "Blue"),
    "4": ("yellow", "Yellow"),
}

BACKGROUND_KEYS: Dict[str, Tuple[str, str]] = {
    "5": ("black", "Black"),
    "6": ("transparent", "Transparent"),
}

DEFAULT_COLOR = "white"
DEFAULT_BACKGROUND = "transparent"

OUTPUT_LINE = 6
NOTICE_LINE = 7


class ColorText(BaseApp):
    title = "Color Text"
    id = "colortext"

    def __init__(self) -> None:
        self.color = DEFAULT_COLOR
        self.background = DEFAULT_BACKGROUND
        self.bold = False
        self.italic = False
        self.underline = False

    def flags(self) -> List[str]:
        """Directives for the current style selection."""
        flags: List[str] = []
        if self.color not in (DEFAULT_COLOR, ""):
            flags.append(f"$@color={self.color}$")
        if self.background not in (DEFAULT_BACKGROUND, ""):
            flags.append(f"$@background={self.background}$")
        if self.bold:
            flags.append("$@bold$")
        if self.italic:
            flags.append("$@italic$")
        if self.underline:
            flags.append("$@underline$")
        return flags

    def handle_input(self, ctx: ShellContext, key: str) -> None:
        session = ctx.session
        lowered = key.lower() if len(key) == 1 else key
        if key == "Escape":
            self.request_idle(ctx)
        elif key == "Enter":
            self.emit_styled_text(ctx)
        elif key == "Backspace":
            session.input_buffer = session.input_buffer[:-1]
        elif key in COLOR_KEYS:
            self.color, label = COLOR_KEYS[key]
            self.notify(ctx, f"Color: {label} $@color={self.color}$")
        elif key in BACKGROUND_KEYS:
            self.background, label = BACKGROUND_KEYS[key]
            suffix = f" $@background={self.background}$" if self.background != DEFAULT_BACKGROUND else ""
            self.notify(ctx, f"Background: {label}{suffix}")
        elif lowered == "b":
            self.bold = not self.bold
            self.notify(ctx, "Bold: " + ("ON $@bold$" if self.bold else "OFF"))
        elif lowered == "i":
            self.italic = not self.italic
            self.notify(ctx, "Italic: " + ("ON $@italic$" if self.italic else "OFF"))
        elif lowered == "u":
            self.underline = not self.underline
            self.notify(ctx, "Underline: " + ("ON $@underline$" if self.underline else "OFF"))
        elif len(key) == 1:
            session.input_buffer += key

    def emit_styled_text(self, ctx: ShellContext) -> None:
        styled = " ".join([ctx.session.input_buffer, *self.flags()])
        ctx.display.set_line(OUTPUT_LINE, styled, True)
        ctx.session.input_buffer = ""

    def notify(self, ctx: ShellContext, message: str) -> None:
        ctx.display.set_line(NOTICE_LINE, message, True)

    def main(self, ctx: ShellContext) -> None:
        display = ctx.display
        display.set_line(1, "Type text and press ENTER to style it:")
        display.set_line(2, "Input: " + ctx.session.input_buffer)
        display.set_line(3, "")
        display.set_line(4, "Style Options:")
        display.set_line(5, "1-4: Colors | 5-6: Background | B: Bold | I: Italic | U: Underline")
        display.set_line(8, "")
        display.set_line(9, "Press ESC to return to menu")
