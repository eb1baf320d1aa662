"""Built-in shell apps."""

from typing import List

from ..shell.base_app import AppDescriptor
from .calc import Calculator
from .colortext import ColorText
from .files import Files
from .notepad import Notepad


def default_apps() -> List[AppDescriptor]:
    """Fresh instances of the built-in apps, in menu order."""
    return [Calculator(), Notepad(), ColorText(), Files()]


__all__ = ["Calculator", "ColorText", "Files", "Notepad", "default_apps"]
