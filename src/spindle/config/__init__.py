"""Configuration package."""

from spindle.config.settings import DialogueSettings, load_settings

__all__ = [
    "DialogueSettings",
    "load_settings",
]
