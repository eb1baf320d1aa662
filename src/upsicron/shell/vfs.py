"""In-memory virtual file system used by the Files and Notepad apps.

Reads are strict: a path that does not resolve sends navigation back to
the root. Writes are lenient: missing directories along a save path are
created on the way down.

Seed trees use the compact literal format::

    {"root": {"d": True, "c": {"readme.txt": {"d": False, "c": "hello"}}}}

where ``d`` marks a directory and ``c`` holds either the children map or
the file content.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple, Union


DEFAULT_FILE_NAME = "untitled.txt"

DEFAULT_SEED: Dict[str, Any] = {
    "root": {
        "d": True,
        "c": {
            "documents": {
                "d": True,
                "c": {
                    "welcome.txt": {
                        "d": False,
                        "c": (
                            "Welcome to UpsicronOS!\n"
                            "\n"
                            "Use the Files app to browse this tree and the\n"
                            "Notepad app to write new files into it.\n"
                            "Saved files live until the shell exits."
                        ),
                    },
                    "todo.txt": {
                        "d": False,
                        "c": "- try the calculator\n- style some text\n- save a note",
                    },
                },
            },
            "system": {
                "d": True,
                "c": {
                    "about.txt": {
                        "d": False,
                        "c": "UpsicronOS text shell\nRuns at 60 ticks per second.",
                    },
                    "flags.txt": {
                        "d": False,
                        "c": (
                            "Inline flags:\n"
                            "  Wrap each one in dollar signs, e.g. @bold becomes a directive.\n"
                            "  @color=VALUE  @background=VALUE\n"
                            "  @bold  @italic  @underline\n"
                            "  @dim  @reverse  @noclear"
                        ),
                    },
                },
            },
            "readme.txt": {
                "d": False,
                "c": "Press ESC in any app to return to the menu.",
            },
        },
    }
}


class UpsicronError(Exception):
    """Base class for shell errors."""


class VFSError(UpsicronError):
    """Raised when a write cannot be placed in the tree."""


@dataclass
class File:
    content: str = ""


@dataclass
class Directory:
    children: Dict[str, "Node"] = field(default_factory=dict)


Node = Union[Directory, File]


@dataclass
class Resolution:
    """Result of a lenient path walk."""

    path: List[str]
    node: Node
    reset: bool = False


def node_from_seed(entry: Mapping[str, Any]) -> Node:
    """Build an owned node from one seed literal entry."""
    if entry.get("d"):
        children = entry.get("c") or {}
        if not isinstance(children, Mapping):
            raise VFSError("directory seed entry must hold a children map")
        return Directory({name: node_from_seed(child) for name, child in children.items()})
    content = entry.get("c", "")
    return File(content if isinstance(content, str) else str(content))


def node_to_seed(node: Node) -> Dict[str, Any]:
    if isinstance(node, Directory):
        return {"d": True, "c": {name: node_to_seed(child) for name, child in node.children.items()}}
    return {"d": False, "c": node.content}


def load_seed(path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """Load a seed tree literal from ``path`` or return the built-in one."""
    if path is None:
        return DEFAULT_SEED
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, dict) or not data:
        raise VFSError(f"seed file {path} must hold a non-empty JSON object")
    return data


class VirtualFileSystem:
    """Directory/file tree rooted at a single named directory.

    Args:
        seed: Seed literal; deep-copied, never mutated
        root_name: Name used when the seed is empty
        debug_logger: Optional callback for debug messages
    """

    def __init__(
        self,
        seed: Optional[Mapping[str, Any]] = None,
        root_name: str = "root",
        debug_logger: Optional[Callable[[str], None]] = None,
    ):
        self._debug_logger = debug_logger or (lambda msg: None)
        if seed:
            self.root_name, entry = next(iter(seed.items()))
            root = node_from_seed(entry)
            if not isinstance(root, Directory):
                raise VFSError(f"seed root '{self.root_name}' is not a directory")
            self.root = root
        else:
            self.root_name = root_name
            self.root = Directory()

    @property
    def root_path(self) -> List[str]:
        return [self.root_name]

    def lookup(self, path: Sequence[str]) -> Optional[Node]:
        """Strict walk from the root; None if any segment is missing."""
        if not path or path[0] != self.root_name:
            return None
        node: Node = self.root
        for segment in path[1:]:
            if not isinstance(node, Directory):
                return None
            child = node.children.get(segment)
            if child is None:
                return None
            node = child
        return node

    def resolve(self, path: Sequence[str]) -> Resolution:
        """Walk ``path``; reset to the root when it does not resolve."""
        node = self.lookup(path)
        if node is None:
            self._debug_logger(f"VFS: unresolved path {'/'.join(path)!r}, reset to root")
            return Resolution(self.root_path, self.root, reset=True)
        return Resolution(list(path), node)

    def list_children(self, path: Sequence[str]) -> List[str]:
        node = self.resolve(path).node
        if isinstance(node, Directory):
            return list(node.children)
        return []

    def write_file(self, directories: Sequence[str], name: str, content: str) -> File:
        """Write a file below the root, creating missing directories."""
        current = self.root
        walked = [self.root_name]
        for segment in directories:
            walked.append(segment)
            child = current.children.get(segment)
            if child is None:
                child = Directory()
                current.children[segment] = child
                self._debug_logger(f"VFS: created directory {'/'.join(walked)}")
            elif not isinstance(child, Directory):
                raise VFSError(f"{'/'.join(walked)} is a file, not a directory")
            current = child
        existing = current.children.get(name)
        if isinstance(existing, Directory):
            raise VFSError(f"{'/'.join(walked + [name])} is a directory")
        new_file = File(content)
        current.children[name] = new_file
        return new_file

    def split_save_path(self, text: str) -> Tuple[List[str], str]:
        """Split a save path into ``(directories, file_name)``.

        A leading root segment is optional; empty segments are dropped.
        """
        parts = [part for part in text.strip().split("/") if part]
        if parts and parts[0] == self.root_name:
            parts = parts[1:]
        if not parts:
            return [], DEFAULT_FILE_NAME
        return parts[:-1], parts[-1]

    def save(self, text: str, content: str) -> List[str]:
        """Write ``content`` at save path ``text``; return the full path."""
        directories, name = self.split_save_path(text)
        self.write_file(directories, name, content)
        return [self.root_name, *directories, name]

    def stats(self) -> Tuple[int, int]:
        """Count ``(directories, files)`` including the root."""
        dirs, files = 0, 0
        pending: List[Node] = [self.root]
        while pending:
            node = pending.pop()
            if isinstance(node, Directory):
                dirs += 1
                pending.extend(node.children.values())
            else:
                files += 1
        return dirs, files

    def to_seed(self) -> Dict[str, Any]:
        return {self.root_name: node_to_seed(self.root)}
