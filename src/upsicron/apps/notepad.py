"""Notepad app: line editor with a save-as dialog into the virtual FS."""

from __future__ import annotations

from typing import List, Optional

from ..shell.base_app import BaseApp, ShellContext
from ..shell.line_editor import LineEditor
from ..shell.vfs import DEFAULT_FILE_NAME, VFSError

RULE = "─────────────────────────────────────"

# Header, rule, and the three footer lines.
EDITOR_CHROME = 6


class Notepad(BaseApp):
    title = "Notepad"
    id = "notepad"

    def __init__(self) -> None:
        self.editor = LineEditor()
        self.file_name = DEFAULT_FILE_NAME
        self.directory: List[str] = ["root", "documents"]
        self.save_mode = False
        self.path_input = ""
        self.status: Optional[str] = None
        self.initialized = False

    def new_file(self) -> None:
        self.editor.reset()
        self.file_name = DEFAULT_FILE_NAME

    def default_save_path(self) -> str:
        return "/".join([*self.directory[1:], self.file_name])

    def open_save_dialog(self) -> None:
        self.save_mode = True
        self.path_input = self.default_save_path()

    def save(self, ctx: ShellContext) -> None:
        try:
            path = self.editor.save(ctx.vfs, self.path_input)
        except VFSError as exc:
            ctx.log.warning(f"[notepad] save failed: {exc}")
            self.status = f"Save failed: {exc} $@color=red$"
            return
        self.directory = path[:-1]
        self.file_name = path[-1]
        self.save_mode = False
        self.path_input = ""
        self.status = f"Saved: {'/'.join(path)} $@color=green$"
        ctx.log.event(f"[notepad] saved {'/'.join(path)}")

    # --- Input --------------------------------------------------------

    def handle_input(self, ctx: ShellContext, key: str) -> None:
        if not self.initialized:
            self.new_file()
            self.initialized = True
        self.status = None
        if ctx.ctrl and key.lower() == "s":
            self.open_save_dialog()
        elif ctx.ctrl and key.lower() == "n":
            self.new_file()
        elif self.save_mode:
            self.handle_save_input(ctx, key)
        else:
            self.handle_edit_input(ctx, key)

    def handle_edit_input(self, ctx: ShellContext, key: str) -> None:
        editor = self.editor
        if key == "Escape":
            self.initialized = False
            self.request_idle(ctx)
        elif key == "ArrowUp":
            editor.move_up()
        elif key == "ArrowDown":
            editor.move_down()
        elif key == "ArrowLeft":
            editor.move_left()
        elif key == "ArrowRight":
            editor.move_right()
        elif key == "Enter":
            editor.split_line()
        elif key == "Backspace":
            editor.backspace()
        elif key == "Delete":
            editor.delete()
        elif len(key) == 1 and not ctx.ctrl:
            editor.insert_char(key)

    def handle_save_input(self, ctx: ShellContext, key: str) -> None:
        if key == "Escape":
            self.save_mode = False
            self.path_input = ""
        elif key == "Enter":
            self.save(ctx)
        elif key == "Backspace":
            self.path_input = self.path_input[:-1]
        elif len(key) == 1 and not ctx.ctrl:
            self.path_input += key

    # --- Rendering ----------------------------------------------------

    def render(self, ctx: ShellContext) -> None:
        ctx.display.hard_clear()
        self.paint_header(ctx)
        if not self.initialized:
            self.new_file()
            self.initialized = True
        self.main(ctx)

    def main(self, ctx: ShellContext) -> None:
        if self.save_mode:
            self.render_save_dialog(ctx)
        else:
            self.render_editor(ctx)

    def visible_range(self, capacity: int) -> range:
        editor = self.editor
        height = max(0, capacity - EDITOR_CHROME)
        start = max(0, editor.current_line - height // 2)
        end = min(len(editor.lines), start + height)
        return range(start, end)

    def render_editor(self, ctx: ShellContext) -> None:
        display = ctx.display
        editor = self.editor
        capacity = ctx.capacity
        display.set_line(
            1,
            f"File: {self.file_name} | Line {editor.current_line + 1}/{len(editor.lines)}"
            f" | Col {editor.cursor_column + 1}",
        )
        display.set_line(2, RULE)
        rows = self.visible_range(capacity)
        for offset, index in enumerate(rows):
            text = editor.lines[index]
            if index == editor.current_line:
                col = editor.cursor_column
                text = text[:col] + "▌" + text[col:]
                display.set_line(3 + offset, "> " + text)
            else:
                display.set_line(3 + offset, "  " + text)
        display.set_line(capacity - 3, self.status or "")
        display.set_line(capacity - 2, "Ctrl+S: Save | Ctrl+N: New | ESC: Exit")
        display.set_line(capacity - 1, "Arrow keys: Navigate | Type: Edit text")

    def render_save_dialog(self, ctx: ShellContext) -> None:
        display = ctx.display
        display.set_line(2, "Save File")
        display.set_line(3, RULE)
        display.set_line(4, "Enter file path (e.g., documents/notes.txt):")
        display.set_line(5, "> " + self.path_input + "_")
        display.set_line(7, "Enter: Save | Escape: Cancel")
        display.set_line(8, "Current path: " + "/".join(self.directory) + "/")
        if self.status:
            display.set_line(10, self.status)
