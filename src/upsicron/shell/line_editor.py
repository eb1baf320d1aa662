"""Cursor-addressed multi-line text buffer.

Invariant after every operation::

    0 <= current_line < len(lines)
    0 <= cursor_column <= len(lines[current_line])
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List

if TYPE_CHECKING:
    from .vfs import VirtualFileSystem


@dataclass
class LineEditor:
    lines: List[str] = field(default_factory=lambda: [""])
    current_line: int = 0
    cursor_column: int = 0

    @property
    def line(self) -> str:
        return self.lines[self.current_line]

    @property
    def text(self) -> str:
        return "\n".join(self.lines)

    def reset(self) -> None:
        self.lines = [""]
        self.current_line = 0
        self.cursor_column = 0

    def load(self, text: str) -> None:
        self.lines = text.split("\n")
        self.current_line = 0
        self.cursor_column = 0

    # --- Movement -----------------------------------------------------

    def move_up(self) -> None:
        if self.current_line > 0:
            self.current_line -= 1
            self.cursor_column = min(self.cursor_column, len(self.line))

    def move_down(self) -> None:
        if self.current_line < len(self.lines) - 1:
            self.current_line += 1
            self.cursor_column = min(self.cursor_column, len(self.line))

    def move_left(self) -> None:
        if self.cursor_column > 0:
            self.cursor_column -= 1

    def move_right(self) -> None:
        if self.cursor_column < len(self.line):
            self.cursor_column += 1

    # --- Editing ------------------------------------------------------

    def insert_char(self, char: str) -> None:
        line = self.line
        col = self.cursor_column
        self.lines[self.current_line] = line[:col] + char + line[col:]
        self.cursor_column += len(char)

    def split_line(self) -> None:
        line = self.line
        col = self.cursor_column
        self.lines[self.current_line] = line[:col]
        self.lines.insert(self.current_line + 1, line[col:])
        self.current_line += 1
        self.cursor_column = 0

    def backspace(self) -> None:
        if self.cursor_column > 0:
            line = self.line
            col = self.cursor_column
            self.lines[self.current_line] = line[: col - 1] + line[col:]
            self.cursor_column -= 1
        elif self.current_line > 0:
            previous_length = len(self.lines[self.current_line - 1])
            self.lines[self.current_line - 1] += self.lines.pop(self.current_line)
            self.current_line -= 1
            self.cursor_column = previous_length

    def delete(self) -> None:
        line = self.line
        col = self.cursor_column
        if col < len(line):
            self.lines[self.current_line] = line[:col] + line[col + 1:]
        elif self.current_line < len(self.lines) - 1:
            self.lines[self.current_line] += self.lines.pop(self.current_line + 1)

    def save(self, vfs: "VirtualFileSystem", path: str) -> List[str]:
        """Write the buffer into ``vfs`` at ``path``; return the full path."""
        return vfs.save(path, self.text)
