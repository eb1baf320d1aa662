"""Diagnostics snapshot generation.

Collects shell state, registered apps, file system counts, recent key
events and recent logs into a plain-text snapshot that can be exported
for troubleshooting.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from ..shell.log_manager import LogManager
    from ..shell.scheduler import ShellCore


class DiagnosticsManager:
    """Builds and exports troubleshooting snapshots.

    Responsibilities:
    - Record recent key events
    - Generate a snapshot of the running shell
    - Export snapshots to files
    """

    def __init__(
        self,
        core: ShellCore,
        log_manager: LogManager,
        version_info: Dict[str, str],
    ):
        """Initialize diagnostics manager.

        Args:
            core: The running shell core
            log_manager: LogManager instance for log access
            version_info: Dictionary of version information
        """
        self.core = core
        self.log_manager = log_manager
        self.version_info = version_info
        self.key_events: List[str] = []

    def record_key_event(self, key: str, character: Optional[str], ctrl: bool) -> None:
        """Record a key event for diagnostics.

        Args:
            key: Key name
            character: Character value (if printable)
            ctrl: Whether the control modifier was held
        """
        char_repr = repr(character) if character else "None"
        entry = f"{key} char={char_repr} ctrl={ctrl}"
        self.key_events.append(entry)
        # Keep last 100 events
        if len(self.key_events) > 100:
            self.key_events = self.key_events[-100:]

    def generate_snapshot(self) -> str:
        """Generate a complete troubleshooting snapshot.

        Returns:
            Formatted snapshot text
        """
        core = self.core
        session = core.session
        lines: List[str] = []

        lines.append(f"timestamp: {datetime.now(timezone.utc).isoformat()}")
        lines.append("versions:")
        lines.append(f"  upsicron: {self.version_info.get('upsicron', 'unknown')}")
        lines.append(f"  textual: {self.version_info.get('textual', 'unknown')}")

        lines.append(f"state: {session.current_state}")
        lines.append(f"selected_app: {session.selected_menu_index}")
        lines.append(f"input_buffer: {session.input_buffer!r}")
        lines.append(f"countdown: {core.ctx.countdown}")
        lines.append(f"capacity: {core.display.capacity}")
        lines.append(f"ticks: {core.tick_count}")
        lines.append(f"surface_writes: {core.display.writes}")

        lines.append("apps:")
        for app_id in core.registry.ids():
            app = core.registry.get(app_id)
            lines.append(f"  - {app_id}: {app.title}")

        dirs, files = core.ctx.vfs.stats()
        lines.append(f"vfs: {dirs} directories, {files} files")

        for category in ("events", "warnings", "errors", "debug"):
            lines.append(f"---- recent {category} ----")
            lines.append(self._recent_log_text(category))

        if self.key_events:
            lines.append("---- recent key events ----")
            lines.extend(self.key_events[-20:])

        return "\n".join(lines)

    def update_troubleshooting_log(self) -> str:
        """Generate snapshot and store it in the troubleshooting log.

        Returns:
            The generated snapshot text
        """
        snapshot = self.generate_snapshot()
        buf = self.log_manager.buffers.get("troubleshooting")
        if buf is not None:
            buf.clear()
        self.log_manager.add("troubleshooting", snapshot)
        return snapshot

    def export_to_file(self, target_dir: str = "upsicron-diagnostics") -> Optional[str]:
        """Export a snapshot to ``target_dir``.

        Returns:
            Path to saved file, or None if export failed
        """
        snapshot = self.update_troubleshooting_log()
        try:
            dir_path = Path(target_dir)
            dir_path.mkdir(parents=True, exist_ok=True)
            timestamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")
            target_file = dir_path / f"upsicron_snapshot_{timestamp}.txt"
            target_file.write_text(snapshot, encoding="utf-8")
            return str(target_file)
        except OSError as exc:
            self.log_manager.error(f"Snapshot export failed: {exc}")
            return None

    def _recent_log_text(self, category: str, limit: int = 50) -> str:
        recent = self.log_manager.recent(category, limit)
        if not recent:
            return f"(no {category})"
        return "\n".join(recent)
