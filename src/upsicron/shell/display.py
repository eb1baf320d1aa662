"""Display buffer: fixed-length line slots with dirty tracking.

The buffer never patches single lines on the surface. Each flush renders
the whole buffer, compares it with the last emitted rendering, and hands
the surface one full replacement when (and only when) they differ.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional, Protocol, Sequence, Tuple, runtime_checkable

from .flags import NOCLEAR, RenderedLine, has_flag, render_line


@runtime_checkable
class RenderSurface(Protocol):
    """Receiver of full-buffer renderings."""

    def write(self, lines: Sequence[RenderedLine]) -> None:
        """Replace everything shown with ``lines``."""
        ...


@dataclass
class Line:
    text: str = ""
    preserve_on_clear: bool = False


def capacity_for(height: int, line_height: int, margin: int) -> int:
    """Number of lines that fit in ``height`` viewport units."""
    if line_height <= 0:
        return 0
    return max(0, height // line_height - margin)


class DisplayBuffer:
    """Ordered set of Lines sized from the viewport.

    Args:
        line_height: Viewport units per line
        margin: Lines reserved outside the buffer
        debug_logger: Optional callback for debug messages
    """

    def __init__(
        self,
        line_height: int = 1,
        margin: int = 2,
        debug_logger: Optional[Callable[[str], None]] = None,
    ):
        self.line_height = line_height
        self.margin = margin
        self.lines: List[Line] = []
        self.dirty = False
        self.capacity: Optional[int] = None
        self.last_render: Optional[Tuple[RenderedLine, ...]] = None
        self.writes = 0
        self._debug_logger = debug_logger or (lambda msg: None)

    def __len__(self) -> int:
        return len(self.lines)

    def update_capacity(self, height: int) -> bool:
        """Recompute capacity; reallocate the buffer when it changed.

        Returns:
            True if the capacity changed (and the buffer was hard cleared)
        """
        new_capacity = capacity_for(height, self.line_height, self.margin)
        if new_capacity == self.capacity:
            return False
        old = self.capacity
        self.capacity = new_capacity
        self.hard_clear()
        self._debug_logger(f"Display capacity {old} -> {new_capacity}")
        return True

    def set_line(self, index: int, text: str, preserve: bool = False) -> None:
        if index < 0 or index >= len(self.lines):
            return
        keep = preserve or has_flag(text, NOCLEAR)
        self.lines[index] = Line(text, keep)
        self.dirty = True

    def get_line(self, index: int) -> Optional[Line]:
        if 0 <= index < len(self.lines):
            return self.lines[index]
        return None

    def texts(self) -> List[str]:
        return [line.text for line in self.lines]

    def clear(self) -> None:
        """Empty every line not marked preserve-on-clear."""
        self.lines = [line if line.preserve_on_clear else Line() for line in self.lines]
        self.dirty = True

    def hard_clear(self) -> None:
        """Empty every line, preserved or not. Used on state transitions."""
        self.lines = [Line() for _ in range(self.capacity or 0)]
        self.dirty = True

    def render(self) -> Tuple[RenderedLine, ...]:
        return tuple(render_line(line.text, line.preserve_on_clear) for line in self.lines)

    def flush(self, surface: Optional[RenderSurface]) -> bool:
        """Emit the buffer to ``surface`` if it changed since the last write.

        Returns:
            True if the surface received a write
        """
        if not self.dirty:
            return False
        self.dirty = False
        rendered = self.render()
        if rendered == self.last_render:
            return False
        self.last_render = rendered
        if surface is not None:
            surface.write(rendered)
        self.writes += 1
        return True
