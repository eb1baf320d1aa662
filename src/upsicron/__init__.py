"""UpsicronOS: a text-mode application shell for the terminal."""

__version__ = "0.1.0"

from .config import ShellConfig

__all__ = ["ShellConfig", "__version__"]
