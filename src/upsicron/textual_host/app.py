"""Textual host for the Upsicron shell.

The core is terminal-agnostic; this app supplies its collaborators:

- rendering surface: the ``ScreenView`` widget (via ``TextualSurface``)
- input source: key events on the focused ``ScreenView``
- viewport-size signal: the content height of ``ScreenView``
- persistent store: a JSON file (``ShellConfig.state_file``)

Ticks come from ``set_interval`` at ``ShellConfig.update_rate``.
"""

from __future__ import annotations

from importlib import metadata
from typing import Dict, Iterable, List, Optional

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.timer import Timer
from textual.widgets import Footer, Header, Log, Static

from ..apps import default_apps
from ..config import ShellConfig
from ..shell.base_app import AppDescriptor
from ..shell.log_manager import LogManager
from ..shell.scheduler import ShellCore
from ..shell.session import JsonFileStore, KeyValueStore
from ..shell.vfs import VFSError, VirtualFileSystem, load_seed
from .diagnostics import DiagnosticsManager
from .screen_view import ScreenView
from .surface import TextualSurface


MIRRORED_CATEGORIES = ("events", "warnings", "errors")


class UpsicronApp(App):
    TITLE = "UpsicronOS"

    CSS = """
    #title {
        height: 1;
        padding: 0 1;
        background: $panel;
    }
    #screen {
        height: 1fr;
        padding: 0 1;
    }
    #events-log {
        height: 8;
        border-top: solid $accent;
    }
    """

    BINDINGS = [
        Binding("ctrl+q", "quit", "Quit", priority=True),
        Binding("f9", "toggle_log", "Log"),
        Binding("f10", "export_diagnostics", "Snapshot"),
    ]

    def __init__(
        self,
        shell_config: Optional[ShellConfig] = None,
        store: Optional[KeyValueStore] = None,
        apps: Optional[Iterable[AppDescriptor]] = None,
        vfs: Optional[VirtualFileSystem] = None,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.shell_config = shell_config or ShellConfig()
        self.log_manager = LogManager()

        if store is None:
            store = JsonFileStore(self.shell_config.state_file, debug_logger=self.log_manager.debug)
        if vfs is None:
            vfs = self._build_vfs()

        self.core = ShellCore(
            config=self.shell_config,
            store=store,
            viewport=self._viewport_height,
            apps=default_apps() if apps is None else apps,
            vfs=vfs,
            log=self.log_manager,
        )

        self._version_info: Dict[str, str] = self._gather_version_info()
        self.diagnostics = DiagnosticsManager(
            core=self.core,
            log_manager=self.log_manager,
            version_info=self._version_info,
        )

        self.surface: Optional[TextualSurface] = None
        self._tick_timer: Optional[Timer] = None
        self._last_status: Optional[str] = None

    def compose(self) -> ComposeResult:
        yield Header(id="header")
        self.status_line = Static("UpsicronOS", id="title")
        yield self.status_line
        self.screen_view = ScreenView(id="screen")
        yield self.screen_view
        self.events_log = Log(id="events-log", max_lines=500)
        self.events_log.display = False
        yield self.events_log
        yield Footer(id="footer")

    async def on_mount(self) -> None:
        self.surface = TextualSurface(self.screen_view, debug_logger=self.log_manager.debug)
        self.core.surface = self.surface
        self.screen_view.set_key_handler(self._on_shell_key)
        self.screen_view.set_size_listener(self._on_screen_resize)
        self.screen_view.set_key_logger(self.diagnostics.record_key_event)
        self.log_manager.subscribe(self._mirror_log)
        self.core.startup()
        self.screen_view.focus()
        self._tick()
        self._tick_timer = self.set_interval(self.shell_config.tick_interval, self._tick)

    def on_resize(self, event) -> None:  # type: ignore[override]
        self.core.resize()

    # --- Collaborators --------------------------------------------------

    def _build_vfs(self) -> VirtualFileSystem:
        seed_file = self.shell_config.seed_file
        try:
            seed = load_seed(seed_file)
        except (OSError, ValueError, VFSError) as exc:
            self.log_manager.error(f"Seed file {seed_file} unusable ({exc}); using built-in tree")
            seed = load_seed()
        return VirtualFileSystem(seed, debug_logger=self.log_manager.debug)

    def _viewport_height(self) -> int:
        view = getattr(self, "screen_view", None)
        if view is None or not view.is_mounted:
            return 0
        content_region = getattr(view, "content_region", None)
        if content_region is not None:
            return content_region.height
        return view.content_size.height

    def _on_screen_resize(self) -> None:
        self.core.resize()

    # --- Loop -----------------------------------------------------------

    def _tick(self) -> None:
        try:
            self.core.tick()
        except Exception as exc:
            self.log_manager.error(f"Tick failed in state '{self.core.state}': {exc!r}")
            return
        self._update_status_line()

    def _on_shell_key(self, key: str, ctrl: bool) -> bool:
        try:
            handled = self.core.dispatch(key, ctrl)
        except Exception as exc:
            self.log_manager.error(f"Key {key!r} failed in state '{self.core.state}': {exc!r}")
            return True
        if handled:
            self._update_status_line()
        return handled

    # --- Status and logs ------------------------------------------------

    def _gather_version_info(self) -> Dict[str, str]:
        """Collect version metadata for the status line."""
        return {
            "upsicron": self._get_package_version(["upsicron-shell", "upsicron"], default="dev"),
            "textual": self._get_package_version(["textual"], default="unknown"),
        }

    def _get_package_version(self, names: List[str], default: str) -> str:
        for pkg in names:
            try:
                return metadata.version(pkg)
            except metadata.PackageNotFoundError:
                continue
        return default

    def _update_status_line(self) -> None:
        status = getattr(self, "status_line", None)
        if not status:
            return
        text = (
            f"state: {self.core.state}  |  "
            f"lines: {self.core.display.capacity or 0}  |  "
            f"upsicron {self._version_info.get('upsicron', 'dev')}  |  "
            f"textual {self._version_info.get('textual', 'unknown')}"
        )
        if text == self._last_status:
            return
        self._last_status = text
        status.update(text)

    def _mirror_log(self, category: str, message: str) -> None:
        if category not in MIRRORED_CATEGORIES:
            return
        log_widget = getattr(self, "events_log", None)
        if log_widget is not None and log_widget.is_mounted:
            log_widget.write_line(f"[{category}] {message}")
        if category == "warnings":
            self.notify(message, severity="warning")
        elif category == "errors":
            self.notify(message, severity="error")

    # --- Actions --------------------------------------------------------

    def action_toggle_log(self) -> None:
        self.events_log.display = not self.events_log.display
        self.core.resize()

    def action_export_diagnostics(self) -> None:
        result = self.diagnostics.export_to_file()
        if result:
            self.log_manager.event(f"Diagnostics snapshot saved → {result}")
        else:
            self.log_manager.event("Diagnostics snapshot export failed")
