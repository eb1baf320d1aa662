"""Textual host for the Upsicron shell core."""

from .app import UpsicronApp
from .screen_view import ScreenView, translate_key
from .surface import TextualSurface

__all__ = ["UpsicronApp", "ScreenView", "TextualSurface", "translate_key"]
