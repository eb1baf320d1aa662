"""Tests for the Notepad app and its save dialog."""

from upsicron.apps.notepad import Notepad
from upsicron.shell.vfs import Directory, File


def type_text(app, ctx, press, text):
    """Press one key per character, Enter for newlines."""
    for ch in text:
        press(app, ctx, "Enter" if ch == "\n" else ch)


class TestEditing:
    """The editor view."""

    def test_typing_and_enter(self, ctx, press):
        """Typing and Enter build lines and move the cursor."""
        app = Notepad()
        type_text(app, ctx, press, "ab\ncd")
        assert app.editor.lines == ["ab", "cd"]
        assert (app.editor.current_line, app.editor.cursor_column) == (1, 2)

    def test_navigation_and_delete(self, ctx, press):
        """Arrows, Delete and Backspace edit around the cursor."""
        app = Notepad()
        type_text(app, ctx, press, "abc")
        press(app, ctx, "ArrowLeft", "ArrowLeft", "Delete", "Backspace")
        assert app.editor.lines == ["c"]

    def test_render_shows_cursor_line(self, ctx, press):
        """The cursor line is marked and shows the block cursor."""
        app = Notepad()
        type_text(app, ctx, press, "hi\nyo")
        app.render(ctx)
        texts = ctx.display.texts()
        assert texts[1].startswith("File: untitled.txt | Line 2/2")
        assert texts[3] == "  hi"
        assert texts[4] == "> yo▌"
        assert texts[-2].startswith("Ctrl+S: Save")

    def test_ctrl_n_starts_new_document(self, ctx, press):
        """Ctrl+N discards the buffer and the file name."""
        app = Notepad()
        type_text(app, ctx, press, "junk")
        press(app, ctx, "n", ctrl=True)
        assert app.editor.lines == [""]
        assert app.file_name == "untitled.txt"

    def test_ctrl_letters_are_not_typed(self, ctx, press):
        """Unbound ctrl combinations insert nothing."""
        app = Notepad()
        press(app, ctx, "k", ctrl=True)
        assert app.editor.lines == [""]

    def test_escape_to_idle_and_reset_on_return(self, make_ctx, press):
        """Escape leaves the app and the document resets on return."""
        ctx = make_ctx("app.notepad")
        app = Notepad()
        type_text(app, ctx, press, "draft")
        press(app, ctx, "Escape")
        assert ctx.session.current_state == "idle"
        app.render(ctx)
        assert app.editor.lines == [""]


class TestSaveDialog:
    """The save-as dialog."""

    def test_ctrl_s_prefills_path(self, ctx, press):
        """Ctrl+S opens the dialog prefilled with the current path."""
        app = Notepad()
        press(app, ctx, "s", ctrl=True)
        assert app.save_mode
        assert app.path_input == "documents/untitled.txt"
        app.render(ctx)
        texts = ctx.display.texts()
        assert texts[2] == "Save File"
        assert texts[5] == "> documents/untitled.txt_"
        assert texts[8] == "Current path: root/documents/"

    def test_save_writes_file(self, ctx, press):
        """Enter writes the document, creating directories as needed."""
        app = Notepad()
        type_text(app, ctx, press, "hello\nworld")
        press(app, ctx, "s", ctrl=True)
        for _ in range(len(app.path_input)):
            press(app, ctx, "Backspace")
        type_text(app, ctx, press, "notes/today.txt")
        press(app, ctx, "Enter")

        assert not app.save_mode
        node = ctx.vfs.lookup(["root", "notes", "today.txt"])
        assert isinstance(node, File)
        assert node.content == "hello\nworld"
        assert isinstance(ctx.vfs.lookup(["root", "notes"]), Directory)
        assert app.file_name == "today.txt"
        assert app.directory == ["root", "notes"]

        app.render(ctx)
        assert "Saved: root/notes/today.txt" in ctx.display.texts()[ctx.capacity - 3]

    def test_typing_s_in_dialog_does_not_reopen(self, ctx, press):
        """A plain s in the dialog is typed into the path."""
        app = Notepad()
        press(app, ctx, "s", ctrl=True)
        press(app, ctx, "s")
        assert app.path_input.endswith(".txts")

    def test_escape_discards_without_writing(self, ctx, press):
        """Escape closes the dialog and keeps the document."""
        app = Notepad()
        type_text(app, ctx, press, "x")
        press(app, ctx, "s", ctrl=True)
        press(app, ctx, "Escape")
        assert not app.save_mode
        assert ctx.vfs.lookup(["root", "documents", "untitled.txt"]) is None
        assert ctx.session.current_state == "idle"  # untouched by the dialog
        assert app.editor.lines == ["x"]

    def test_save_failure_shown_inline(self, ctx, press):
        """A save error keeps the dialog open with a message."""
        app = Notepad()
        press(app, ctx, "s", ctrl=True)
        for _ in range(len(app.path_input)):
            press(app, ctx, "Backspace")
        type_text(app, ctx, press, "readme.txt/inner.txt")
        press(app, ctx, "Enter")
        assert app.save_mode
        app.render(ctx)
        assert ctx.display.texts()[10].startswith("Save failed")
