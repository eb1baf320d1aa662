"""Files app: browse the virtual file system and page through files."""

from __future__ import annotations

from typing import List, Optional

from ..shell.base_app import BaseApp, ShellContext
from ..shell.vfs import Directory, File

RULE = "─────────────────────────────────────"

LIST_START = 4
# Header (title, path, hint, rule) plus the footer rule and position line.
VIEW_CHROME = 6


class Files(BaseApp):
    title = "Files"
    id = "files"

    def __init__(self) -> None:
        self.current_path: List[str] = []
        self.selected = 0
        self.viewing = False
        self.file_name = ""
        self.file_content = ""
        self.scroll = 0
        self.initialized = False

    # --- Navigation ---------------------------------------------------

    def reset(self, ctx: ShellContext) -> None:
        self.current_path = ctx.vfs.root_path
        self.selected = 0
        self.viewing = False
        self.scroll = 0
        self.initialized = True

    def current_directory(self, ctx: ShellContext) -> Directory:
        """Directory at ``current_path``; unresolved paths reset to the root."""
        resolution = ctx.vfs.resolve(self.current_path)
        if resolution.reset or not isinstance(resolution.node, Directory):
            self.current_path = ctx.vfs.root_path
            return ctx.vfs.root
        return resolution.node

    def items(self, ctx: ShellContext) -> List[str]:
        return list(self.current_directory(ctx).children)

    def page_height(self, ctx: ShellContext) -> int:
        return max(0, ctx.capacity - VIEW_CHROME)

    def enter(self, ctx: ShellContext, name: Optional[str] = None) -> None:
        """Open ``name`` (default: the selected entry)."""
        directory = self.current_directory(ctx)
        names = list(directory.children)
        if name is None:
            if not 0 <= self.selected < len(names):
                return
            name = names[self.selected]
        node = directory.children.get(name)
        if isinstance(node, Directory):
            self.current_path.append(name)
            self.selected = 0
            ctx.display.hard_clear()
        elif isinstance(node, File):
            self.viewing = True
            self.file_name = name
            self.file_content = node.content
            self.scroll = 0

    def leave(self, ctx: ShellContext) -> None:
        if len(self.current_path) > 1:
            self.current_path.pop()
            self.selected = 0
            ctx.display.hard_clear()

    # --- Input --------------------------------------------------------

    def handle_input(self, ctx: ShellContext, key: str) -> None:
        if not self.initialized:
            self.reset(ctx)
        if key == "Escape":
            if self.viewing:
                self.viewing = False
                self.scroll = 0
                ctx.display.hard_clear()
            else:
                self.initialized = False
                self.request_idle(ctx)
        elif key == "ArrowUp":
            if self.viewing:
                self.scroll = max(0, self.scroll - 1)
            else:
                self.selected = max(0, self.selected - 1)
        elif key == "ArrowDown":
            if self.viewing:
                # No upper clamp: scrolling past the end shows an empty page.
                self.scroll += 1
            else:
                self.selected = max(0, min(len(self.items(ctx)) - 1, self.selected + 1))
        elif key == "Enter":
            if not self.viewing:
                self.enter(ctx)
        elif key == "Backspace":
            if not self.viewing:
                self.leave(ctx)

    # --- Rendering ----------------------------------------------------

    def render(self, ctx: ShellContext) -> None:
        if not self.initialized:
            self.reset(ctx)
        super().render(ctx)

    def main(self, ctx: ShellContext) -> None:
        if self.viewing:
            self.render_file(ctx)
        else:
            self.render_listing(ctx)

    def render_listing(self, ctx: ShellContext) -> None:
        display = ctx.display
        directory = self.current_directory(ctx)
        display.set_line(1, "Files - " + "/".join(self.current_path), True)
        display.set_line(2, "Use ↑↓ to navigate, Enter to open, Backspace to go back", True)
        line = LIST_START
        for index, (name, node) in enumerate(directory.children.items()):
            indicator = "[DIR]" if isinstance(node, Directory) else "[FILE]"
            prefix = "> " if index == self.selected else "  "
            display.set_line(line, f"{prefix}{indicator} {name}", True)
            line += 1
        if not directory.children:
            display.set_line(line, "  (empty)", True)
            line += 1
        display.set_line(line + 1, "", True)
        display.set_line(line + 2, "Press ESC to return to menu", True)
        for index in range(line + 3, ctx.capacity):
            display.set_line(index, "", True)

    def render_file(self, ctx: ShellContext) -> None:
        display = ctx.display
        capacity = ctx.capacity
        display.set_line(1, "File: " + "/".join([*self.current_path, self.file_name]), True)
        display.set_line(2, "Use ↑↓ to scroll, ESC to go back", True)
        display.set_line(3, RULE, True)
        lines = self.file_content.split("\n")
        height = self.page_height(ctx)
        line = LIST_START
        for text in lines[self.scroll:self.scroll + height]:
            display.set_line(line, "  " + text, True)
            line += 1
        display.set_line(line, RULE, True)
        line += 1
        for index in range(line, capacity - 1):
            display.set_line(index, "", True)
        last = min(self.scroll + height, len(lines))
        display.set_line(capacity - 1, f"Line {self.scroll + 1}-{last} of {len(lines)}", True)
