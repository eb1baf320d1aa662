"""Shell configuration.

All tunables live on one dataclass so the CLI, the Textual host and the
tests construct the core the same way.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional


def _default_state_file() -> Path:
    return Path.home() / ".upsicron" / "state.json"


@dataclass
class ShellConfig:
    """Constants and defaults for the text shell.

    Attributes:
        line_height: Height of one display line in viewport units. The
            Textual host measures the viewport in terminal cells, so 1.
        margin: Lines subtracted from the computed capacity.
        update_rate: Tick frequency in Hz.
        boot_countdown: Ticks spent in the ``boot`` state for a fresh
            session; 0 skips the boot screen.
        store_key: Key the session is persisted under.
        state_file: JSON file backing the persistent key-value store.
        seed_file: Optional JSON seed tree for the virtual file system.
        fresh: Ignore any saved session at startup.
    """

    line_height: int = 1
    margin: int = 2
    update_rate: float = 60.0
    boot_countdown: int = 20
    store_key: str = "upsicron.session"
    state_file: Path = field(default_factory=_default_state_file)
    seed_file: Optional[Path] = None
    fresh: bool = False

    @property
    def tick_interval(self) -> float:
        """Seconds between ticks."""
        return 1.0 / self.update_rate if self.update_rate > 0 else 1.0 / 60.0
