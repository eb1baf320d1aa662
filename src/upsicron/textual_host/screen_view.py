from __future__ import annotations

from typing import Callable, Optional, Tuple

from textual.events import Key
from textual.widgets import Static


# Textual key names -> shell key identifiers
KEY_NAMES = {
    "enter": "Enter",
    "return": "Enter",
    "escape": "Escape",
    "backspace": "Backspace",
    "delete": "Delete",
    "up": "ArrowUp",
    "down": "ArrowDown",
    "left": "ArrowLeft",
    "right": "ArrowRight",
    "tab": "Tab",
    "home": "Home",
    "end": "End",
    "pageup": "PageUp",
    "pagedown": "PageDown",
}


def translate_key(key: Optional[str], character: Optional[str]) -> Optional[Tuple[str, bool]]:
    """Map a Textual key event to ``(shell_key, ctrl)``.

    Returns None for keys the shell has no name for.
    """
    k = key or ""
    ctrl = False
    if k.startswith("ctrl+"):
        ctrl = True
        k = k[len("ctrl+"):]
        if len(k) == 1:
            return k, True
    named = KEY_NAMES.get(k.lower())
    if named:
        return named, ctrl
    if ctrl:
        return None
    if character and len(character) == 1 and character.isprintable():
        return character, False
    if len(k) == 1 and k.isprintable():
        return k, False
    return None


class ScreenView(Static):
    """Focusable text screen that forwards keystrokes to a key handler.

    The host sets a handler receiving ``(key, ctrl)`` that returns True
    when the shell consumed the key; unconsumed keys keep bubbling so host
    shortcuts still work.
    """

    can_focus = True

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._key_handler: Optional[Callable[[str, bool], bool]] = None
        self._size_listener: Optional[Callable[[], None]] = None
        self._key_logger: Optional[Callable[[str, Optional[str], bool], None]] = None

    def set_key_handler(self, handler: Optional[Callable[[str, bool], bool]]) -> None:
        self._key_handler = handler

    def set_size_listener(self, callback: Callable[[], None]) -> None:
        """Set callback invoked when the widget is resized."""
        self._size_listener = callback

    def set_key_logger(self, callback: Callable[[str, Optional[str], bool], None]) -> None:
        """Set callback invoked for raw key events."""
        self._key_logger = callback

    def on_focus(self) -> None:
        self.add_class("has-focus")

    def on_blur(self) -> None:  # type: ignore[override]
        self.remove_class("has-focus")

    def on_resize(self, event) -> None:  # type: ignore[override]
        if self._size_listener:
            self._size_listener()

    # --- Key handling -------------------------------------------------

    def on_key(self, event: Key) -> None:  # type: ignore[override]
        if not self._key_handler:
            return
        translated = translate_key(getattr(event, "key", None), getattr(event, "character", None))
        if self._key_logger:
            self._key_logger(event.key or "", getattr(event, "character", None), bool(translated and translated[1]))
        if translated is None:
            return
        key, ctrl = translated
        if self._key_handler(key, ctrl):
            event.stop()
            event.prevent_default()
