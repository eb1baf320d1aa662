from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Callable, Deque, Dict, List, Optional


CATEGORIES = ("events", "warnings", "errors", "debug", "troubleshooting")


@dataclass
class LogManager:
    """Line-buffered log manager by category.

    Categories: events, warnings, errors, debug, troubleshooting.
    Warnings are the operator channel: anything the person running the
    shell should notice (duplicate registrations, corrupt saved state).
    """

    max_lines: int = 2000
    buffers: Dict[str, Deque[str]] = field(default_factory=dict)
    listeners: List[Callable[[str, str], None]] = field(default_factory=list)

    def __post_init__(self) -> None:
        for name in CATEGORIES:
            self.buffers[name] = deque(maxlen=self.max_lines)

    def add(self, category: str, message: str) -> None:
        buf = self.buffers.setdefault(category, deque(maxlen=self.max_lines))
        for line in message.splitlines() or [message]:
            buf.append(line)
        for listener in list(self.listeners):
            listener(category, message)

    def event(self, message: str) -> None:
        self.add("events", message)

    def warning(self, message: str) -> None:
        self.add("warnings", message)

    def error(self, message: str) -> None:
        self.add("errors", message)

    def debug(self, message: str) -> None:
        self.add("debug", message)

    def subscribe(self, listener: Callable[[str, str], None]) -> None:
        """Call ``listener(category, message)`` for every new entry."""
        self.listeners.append(listener)

    def text(self, category: str) -> str:
        buf = self.buffers.get(category)
        if not buf:
            return ""
        return "\n".join(buf)

    def recent(self, category: str, limit: int = 50) -> List[str]:
        buf = self.buffers.get(category)
        if not buf:
            return []
        return list(buf)[-limit:]

    def last(self, category: str) -> Optional[str]:
        buf = self.buffers.get(category)
        return buf[-1] if buf else None
