"""Application settings."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from spindle.runtime.dialogue import DEFAULT_START


class DialogueSettings(BaseSettings):
    """Settings for running dialogues from the command line."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="SPINDLE_",
        case_sensitive=False,
        extra="ignore",
    )

    start_node: str = Field(default=DEFAULT_START, min_length=1)
    show_commands: bool = Field(default=True)
    strict_functions: bool = Field(default=False)


def load_settings(**overrides: object) -> DialogueSettings:
    """Load settings from the environment, with explicit overrides winning."""
    values = {key: value for key, value in overrides.items() if value is not None}
    return DialogueSettings(**values)
