"""Tick scheduler and input dispatcher.

``ShellCore`` owns the display buffer, the session and the state machine.
The host drives it:

- ``tick()`` at a fixed rate (``ShellConfig.update_rate``)
- ``dispatch(key, ctrl)`` for every key event, out-of-band from ticks
- ``resize(height)`` whenever the viewport changes size

Per-tick order: capacity, state handler, flush, persist. A capacity change
has to be visible to the handler before it paints.
"""

from __future__ import annotations

from typing import Callable, Iterable, Optional

from ..config import ShellConfig
from .base_app import AppDescriptor, ShellContext
from .display import DisplayBuffer, RenderSurface
from .log_manager import LogManager
from .session import BOOT, IDLE, KeyValueStore, MemoryStore, SessionState, restore_session, save_session
from .states import AppRegistry, StateMachine
from .vfs import VirtualFileSystem, load_seed


# Ctrl+<key> combinations left to the host (copy, paste, cut, undo, redo,
# select-all, reload, italic, quit).
RESERVED_CTRL_KEYS = frozenset("cvxzyariq")


class ShellCore:
    """Fixed-rate control loop around the state machine.

    Args:
        config: Shell configuration
        store: Persistent key-value store for the session
        surface: Receiver of rendered buffers
        viewport: Callable returning the available height
        apps: Apps to register, in menu order
        vfs: File tree shared by the apps
        log: Log manager (operator channel)
    """

    def __init__(
        self,
        config: Optional[ShellConfig] = None,
        store: Optional[KeyValueStore] = None,
        surface: Optional[RenderSurface] = None,
        viewport: Optional[Callable[[], int]] = None,
        apps: Iterable[AppDescriptor] = (),
        vfs: Optional[VirtualFileSystem] = None,
        log: Optional[LogManager] = None,
    ):
        self.config = config or ShellConfig()
        self.log = log or LogManager()
        self.store = store if store is not None else MemoryStore()
        self.surface = surface
        self.viewport = viewport or (lambda: 0)
        self.display = DisplayBuffer(
            line_height=self.config.line_height,
            margin=self.config.margin,
            debug_logger=self.log.debug,
        )
        self.machine = StateMachine(self.log)
        self.registry = AppRegistry(self.machine, self.log)
        self.ctx = ShellContext(
            display=self.display,
            session=SessionState(),
            vfs=vfs if vfs is not None else VirtualFileSystem(load_seed(), debug_logger=self.log.debug),
            log=self.log,
            config=self.config,
            countdown=self.config.boot_countdown,
        )
        self.tick_count = 0
        for app in apps:
            self.registry.reg_app(app)

    @property
    def session(self) -> SessionState:
        return self.ctx.session

    @property
    def state(self) -> str:
        return self.ctx.session.current_state

    def reg_app(self, app: AppDescriptor) -> bool:
        return self.registry.reg_app(app)

    # --- Lifecycle ----------------------------------------------------

    def startup(self) -> SessionState:
        """Restore the saved session and pick the initial state."""
        restored = False
        if not self.config.fresh:
            session, restored = restore_session(self.store, self.config.store_key, self.log.error)
            self.ctx.session = session
        if not restored and self.config.boot_countdown > 0:
            self.ctx.session.current_state = BOOT
            self.ctx.countdown = self.config.boot_countdown
        self._validate_state()
        self.display.update_capacity(self.viewport())
        self.log.event(f"Shell started in state '{self.state}'")
        return self.ctx.session

    def persist(self) -> None:
        try:
            save_session(self.store, self.config.store_key, self.ctx.session)
        except OSError as exc:
            self.log.error(f"Failed to persist session: {exc}")

    def _validate_state(self) -> None:
        if not self.machine.has(self.state):
            self.log.warning(f"Unknown state '{self.state}', falling back to '{IDLE}'")
            self.ctx.session.current_state = IDLE

    # --- Tick ---------------------------------------------------------

    def tick(self) -> bool:
        """Run one tick.

        Returns:
            True if the surface received a write
        """
        self.tick_count += 1
        self.display.update_capacity(self.viewport())
        self._validate_state()
        before = self.state
        self.machine.step(self.ctx)
        if self.state != before:
            self.log.event(f"State {before} -> {self.state}")
            self.display.hard_clear()
        written = self.display.flush(self.surface)
        self.persist()
        return written

    def resize(self, height: Optional[int] = None) -> bool:
        """Out-of-band capacity recomputation."""
        return self.display.update_capacity(self.viewport() if height is None else height)

    # --- Input --------------------------------------------------------

    def is_reserved(self, key: str, ctrl: bool) -> bool:
        return ctrl and len(key) == 1 and key.lower() in RESERVED_CTRL_KEYS

    def dispatch(self, key: str, ctrl: bool = False) -> bool:
        """Route one key event to the active state.

        Returns:
            False if the key was left to the host
        """
        if self.is_reserved(key, ctrl):
            return False
        session = self.ctx.session
        before = session.current_state
        self.ctx.ctrl = ctrl
        try:
            category = session.category
            if category == IDLE:
                self.machine.handle_idle_input(self.ctx, key)
            elif category == "app":
                app = self.registry.get(session.app_id)
                if app is None:
                    self.log.debug(f"Key {key!r} for unregistered state {before!r} ignored")
                else:
                    app.handle_input(self.ctx, key)
        finally:
            self.ctx.ctrl = False
        if session.current_state != before:
            self.log.event(f"State {before} -> {session.current_state}")
            self.display.hard_clear()
        self.persist()
        return True
