"""Session state and its persistence."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, Optional, Protocol, Tuple, Union, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field, ValidationError


IDLE = "idle"
BOOT = "boot"


@runtime_checkable
class KeyValueStore(Protocol):
    """Persistent string store."""

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...


class MemoryStore:
    """Dict-backed store; used by tests and ``--no-persist`` runs."""

    def __init__(self, data: Optional[Dict[str, str]] = None):
        self.data: Dict[str, str] = dict(data or {})

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value


class JsonFileStore:
    """Store backed by a single JSON object file.

    A missing or unreadable file reads as empty; the next ``set`` rewrites it.
    """

    def __init__(self, path: Union[str, Path], debug_logger: Optional[Callable[[str], None]] = None):
        self.path = Path(path)
        self._debug_logger = debug_logger or (lambda msg: None)
        self._cache: Optional[Dict[str, str]] = None

    def _load(self) -> Dict[str, str]:
        if self._cache is not None:
            return self._cache
        data: Dict[str, str] = {}
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
            if isinstance(raw, dict):
                data = {str(k): v for k, v in raw.items() if isinstance(v, str)}
            else:
                self._debug_logger(f"Store {self.path}: not a JSON object, ignoring")
        except FileNotFoundError:
            pass
        except (OSError, ValueError) as exc:
            self._debug_logger(f"Store {self.path}: unreadable ({exc}), ignoring")
        self._cache = data
        return data

    def get(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._load()
        if data.get(key) == value:
            return
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")


class SessionRecord(BaseModel):
    """Wire shape of the persisted session."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    state: str = IDLE
    selected_app: int = Field(default=0, alias="selectedApp", ge=0)
    user_input: str = Field(default="", alias="userInput")


@dataclass
class SessionState:
    current_state: str = IDLE
    selected_menu_index: int = 0
    input_buffer: str = ""

    @property
    def category(self) -> str:
        return self.current_state.split(".", 1)[0]

    @property
    def app_id(self) -> Optional[str]:
        parts = self.current_state.split(".", 1)
        if parts[0] == "app" and len(parts) == 2 and parts[1]:
            return parts[1]
        return None

    def to_json(self) -> str:
        record = SessionRecord(
            state=self.current_state,
            selected_app=self.selected_menu_index,
            user_input=self.input_buffer,
        )
        return record.model_dump_json(by_alias=True)

    @classmethod
    def from_json(cls, raw: str) -> "SessionState":
        """Parse a persisted session.

        Raises:
            ValidationError: if ``raw`` is not a valid session record
        """
        record = SessionRecord.model_validate_json(raw)
        return cls(record.state or IDLE, record.selected_app, record.user_input)


def save_session(store: KeyValueStore, key: str, session: SessionState) -> None:
    store.set(key, session.to_json())


def restore_session(
    store: KeyValueStore,
    key: str,
    error_logger: Optional[Callable[[str], None]] = None,
) -> Tuple[SessionState, bool]:
    """Load the session saved under ``key``.

    Returns:
        ``(session, restored)``; defaults with ``restored=False`` when
        nothing usable was stored
    """
    log = error_logger or (lambda msg: None)
    try:
        raw = store.get(key)
    except Exception as exc:
        log(f"Failed to read saved session: {exc}")
        return SessionState(), False
    if raw is None:
        return SessionState(), False
    try:
        return SessionState.from_json(raw), True
    except ValidationError as exc:
        log(f"Failed to load saved session: {exc.error_count()} invalid field(s), using defaults")
        return SessionState(), False
