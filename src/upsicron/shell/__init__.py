"""Upsicron shell core.

A fixed-rate control loop that owns one text buffer, dispatches keys to
pluggable apps and re-renders only when the buffer changed. Nothing in
this package imports Textual; hosts plug in through ``RenderSurface``,
a viewport callable and a ``KeyValueStore``.

Quick Start
-----------
```python
from upsicron.shell import ShellCore, MemoryStore
from upsicron.apps import default_apps

core = ShellCore(store=MemoryStore(), viewport=lambda: 24, apps=default_apps())
core.startup()
core.tick()
core.dispatch("Enter")
```

Core Components
---------------
- **Flags**: inline ``$@name=value$`` directives and their resolution
- **DisplayBuffer**: line slots, clear/hard clear, diffed flush
- **VirtualFileSystem**: in-memory tree with strict reads, lenient writes
- **LineEditor**: cursor-addressed text buffer
- **StateMachine / AppRegistry**: boot, idle and ``app.<id>`` states
- **ShellCore**: tick scheduler and input dispatcher
"""

from .base_app import AppDescriptor, BaseApp, ShellContext
from .display import DisplayBuffer, Line, RenderSurface, capacity_for
from .flags import FLAGS, FlagDef, ParsedFlags, RenderedLine, parse_flags, render_line, strip_flags
from .line_editor import LineEditor
from .log_manager import LogManager
from .scheduler import RESERVED_CTRL_KEYS, ShellCore
from .session import BOOT, IDLE, JsonFileStore, KeyValueStore, MemoryStore, SessionState
from .states import APP_PREFIX, AppRegistry, StateMachine
from .vfs import Directory, File, UpsicronError, VFSError, VirtualFileSystem, load_seed

__all__ = [
    "AppDescriptor",
    "BaseApp",
    "ShellContext",
    "DisplayBuffer",
    "Line",
    "RenderSurface",
    "capacity_for",
    "FLAGS",
    "FlagDef",
    "ParsedFlags",
    "RenderedLine",
    "parse_flags",
    "render_line",
    "strip_flags",
    "LineEditor",
    "LogManager",
    "RESERVED_CTRL_KEYS",
    "ShellCore",
    "BOOT",
    "IDLE",
    "JsonFileStore",
    "KeyValueStore",
    "MemoryStore",
    "SessionState",
    "APP_PREFIX",
    "AppRegistry",
    "StateMachine",
    "Directory",
    "File",
    "UpsicronError",
    "VFSError",
    "VirtualFileSystem",
    "load_seed",
]
