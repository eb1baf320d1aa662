"""Application contract for pluggable shell apps.

Every app exposes a ``title``, an ``id`` and two handlers that receive the
shared ``ShellContext``:

- ``render(ctx)`` repaints the display buffer for the app's current state
- ``handle_input(ctx, key)`` mutates the app and/or requests a transition
  by writing ``ctx.session.current_state``

``BaseApp`` provides the default header and the universal Escape
contract; apps override ``main`` and ``handle_input``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from ..config import ShellConfig
from .display import DisplayBuffer
from .log_manager import LogManager
from .session import IDLE, SessionState
from .vfs import VirtualFileSystem


@dataclass
class ShellContext:
    """Everything a state handler may read or mutate.

    ``ctrl`` is only meaningful while a key event is being dispatched.
    """

    display: DisplayBuffer
    session: SessionState
    vfs: VirtualFileSystem
    log: LogManager = field(default_factory=LogManager)
    config: ShellConfig = field(default_factory=ShellConfig)
    countdown: int = 0
    ctrl: bool = False

    @property
    def capacity(self) -> int:
        return self.display.capacity or 0


@runtime_checkable
class AppDescriptor(Protocol):
    """Protocol every registered app implements."""

    title: str
    id: str

    def render(self, ctx: ShellContext) -> None:
        ...

    def handle_input(self, ctx: ShellContext, key: str) -> None:
        ...


class BaseApp:
    """Default app behavior: two-line header, no-op input."""

    title = "Untitled"
    id = "untitled"

    HEADER_LINES = 2

    def render(self, ctx: ShellContext) -> None:
        ctx.display.clear()
        self.paint_header(ctx)
        self.main(ctx)

    def paint_header(self, ctx: ShellContext) -> None:
        ctx.display.set_line(0, f"=== {self.title} ===")
        ctx.display.set_line(1, "")

    def main(self, ctx: ShellContext) -> None:
        ctx.log.debug(f"[{self.id}] main not implemented")

    def handle_input(self, ctx: ShellContext, key: str) -> None:
        ctx.log.debug(f"[{self.id}] input not handled: {key!r}")

    def request_idle(self, ctx: ShellContext) -> None:
        """Universal Escape: back to the menu with an empty input buffer."""
        ctx.session.current_state = IDLE
        ctx.session.input_buffer = ""

    def __repr__(self) -> str:
        return f"<{type(self).__name__} id={self.id!r}>"
