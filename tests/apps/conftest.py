import pytest

from upsicron.shell.base_app import ShellContext
from upsicron.shell.display import DisplayBuffer
from upsicron.shell.session import SessionState
from upsicron.shell.vfs import VirtualFileSystem, load_seed


def _build_ctx(state: str = "idle", height: int = 24, seed=None) -> ShellContext:
    """Context with a buffer sized for ``height`` rows."""
    display = DisplayBuffer(line_height=1, margin=2)
    display.update_capacity(height)
    vfs = VirtualFileSystem(load_seed() if seed is None else seed)
    return ShellContext(display=display, session=SessionState(state), vfs=vfs)


def _press(app, ctx, *keys, ctrl=False):
    """Feed keys to ``app`` the way the dispatcher does."""
    for key in keys:
        ctx.ctrl = ctrl
        try:
            app.handle_input(ctx, key)
        finally:
            ctx.ctrl = False


@pytest.fixture
def make_ctx():
    """Factory for a context with a 22-line buffer and the default tree."""
    return _build_ctx


@pytest.fixture
def ctx():
    """Idle context over the built-in tree."""
    return _build_ctx()


@pytest.fixture
def press():
    """``press(app, ctx, *keys, ctrl=False)`` feeds keys to an app."""
    return _press
