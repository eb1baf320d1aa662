"""Named-state table, the built-in boot/idle states, and the app registry."""

from __future__ import annotations

from typing import Callable, Dict, List, Optional

from .base_app import AppDescriptor, ShellContext
from .log_manager import LogManager
from .session import BOOT, IDLE


APP_PREFIX = "app."

StepFunction = Callable[[ShellContext], None]


def app_state_name(app_id: str) -> str:
    return APP_PREFIX + app_id


class StateMachine:
    """Table of step functions keyed by state name.

    ``boot`` and ``idle`` are installed on construction; apps are added
    through ``AppRegistry.reg_app``. Insertion order is menu order.
    """

    def __init__(self, log: Optional[LogManager] = None):
        self.log = log or LogManager()
        self.states: Dict[str, StepFunction] = {
            BOOT: boot_step,
            IDLE: self.idle_step,
        }
        self.titles: Dict[str, str] = {}

    def register(self, name: str, step: StepFunction) -> None:
        self.states[name] = step

    def detach(self, name: str) -> None:
        self.states.pop(name, None)
        self.titles.pop(name, None)

    def has(self, name: str) -> bool:
        return name in self.states

    def app_states(self) -> List[str]:
        """Registered ``app.*`` state names, in registration order."""
        return [name for name in self.states if name.startswith(APP_PREFIX)]

    def menu_title(self, name: str) -> str:
        title = self.titles.get(name)
        if title:
            return title
        app_id = name[len(APP_PREFIX):]
        return app_id[:1].upper() + app_id[1:]

    def step(self, ctx: ShellContext) -> None:
        handler = self.states.get(ctx.session.current_state)
        if handler is None:
            self.log.debug(f"No handler for state {ctx.session.current_state!r}, tick skipped")
            return
        handler(ctx)

    # --- Built-in idle state --------------------------------------------

    def idle_step(self, ctx: ShellContext) -> None:
        display = ctx.display
        display.set_line(0, "Welcome to UpsicronOS!")
        display.set_line(1, "Please select from the following apps:")
        entries = self.app_states()
        for index, name in enumerate(entries):
            marker = "> " if ctx.session.selected_menu_index == index else "  "
            display.set_line(2 + index, f"{marker}{index + 1}. {self.menu_title(name)}")
        display.set_line(len(entries) + 3, "Use UP/DOWN arrows to select, ENTER to choose")

    def handle_idle_input(self, ctx: ShellContext, key: str) -> None:
        entries = self.app_states()
        session = ctx.session
        last = max(0, len(entries) - 1)
        if key == "ArrowUp":
            session.selected_menu_index = max(0, session.selected_menu_index - 1)
        elif key == "ArrowDown":
            session.selected_menu_index = min(last, session.selected_menu_index + 1)
        elif key == "Enter":
            session.input_buffer = ""
            if 0 <= session.selected_menu_index < len(entries):
                ctx.display.hard_clear()
                session.current_state = entries[session.selected_menu_index]


def boot_step(ctx: ShellContext) -> None:
    """Count down, then hand over to the menu."""
    ctx.display.set_line(0, "Please wait.")
    ctx.display.set_line(1, f"({ctx.countdown})")
    ctx.display.set_line(3, "We need a second to make sure everything works.")
    if ctx.countdown > 0:
        ctx.countdown -= 1
    else:
        ctx.countdown = 0
        ctx.session.current_state = IDLE


class AppRegistry:
    """Maps app ids to descriptors and wires them into the state machine."""

    def __init__(self, machine: StateMachine, log: Optional[LogManager] = None):
        self.machine = machine
        self.log = log or machine.log
        self.apps: Dict[str, AppDescriptor] = {}

    def reg_app(self, app: AppDescriptor) -> bool:
        """Register ``app``; duplicates are rejected with a warning.

        Returns:
            True if the app was installed
        """
        app_id = getattr(app, "id", "")
        if not app_id or "." in app_id:
            self.log.warning(f"Rejected app with malformed id {app_id!r}")
            return False
        name = app_state_name(app_id)
        if app_id in self.apps or self.machine.has(name):
            self.log.warning(f"App '{app_id}' is already registered; keeping the original")
            return False
        self.apps[app_id] = app
        self.machine.register(name, app.render)
        self.machine.titles[name] = app.title
        self.log.event(f"Registered app: {app.title} ({name})")
        return True

    def get(self, app_id: Optional[str]) -> Optional[AppDescriptor]:
        if not app_id:
            return None
        return self.apps.get(app_id)

    def ids(self) -> List[str]:
        return list(self.apps)
