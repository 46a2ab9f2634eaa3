"""Logging setup for dialogue hosts.

Every record carries the node whose body was executing when it was logged in
``extra[node]`` ("-" outside a run), so a debug trace reads node by node::

    12:01:07.114 | DEBUG   | Shop         | spindle.runtime.engine:97 | engine.assign variable=$gold value=Value(5.0)
"""

from __future__ import annotations

import os
import sys
from typing import Literal

from loguru import logger
from rich import get_console
from rich.logging import RichHandler

from spindle.runtime.dialogue import current_node

LogProfile = Literal["default", "play"]
ModuleLevels = dict[str, str | bool]

_FORMATS: dict[LogProfile, str] = {
    "default": "{time:HH:mm:ss.SSS} | {level:<7} | {extra[node]:<12} | {name}:{line} | {message}",
    "play": "[{extra[node]}] {message}",
}
_CONFIGURED_PROFILE: LogProfile | None = None


def _inject_node(record) -> None:
    record["extra"]["node"] = current_node()


def parse_log_filter(text: str) -> tuple[str, ModuleLevels]:
    """Split a ``SPINDLE_LOG_FILTER`` value into a global level and per-module levels.

    A bare item sets the global level, ``module=level`` sets one module and
    ``module=false`` silences it, e.g. ``"info,spindle.runtime.engine=debug"``.
    """
    level = "INFO"
    modules: ModuleLevels = {}
    for item in filter(None, (part.strip() for part in text.split(","))):
        module, sep, module_level = item.partition("=")
        if not sep:
            level = item.upper()
        elif module_level.strip().lower() == "false":
            modules[module.strip()] = False
        else:
            modules[module.strip()] = module_level.strip().upper()
    return level, modules


def configure_logging(*, profile: LogProfile = "default") -> None:
    """Configure loguru once per profile.

    "play" renders through the shared rich console so records do not tear
    the dialogue output; "default" writes to stderr.
    """
    global _CONFIGURED_PROFILE
    if profile == _CONFIGURED_PROFILE:
        return

    level, modules = parse_log_filter(os.getenv("SPINDLE_LOG_FILTER", "info"))
    # the "" entry is the fallback for modules without their own level, which
    # lets a module be more verbose than the global level
    levels: dict[str | None, str | bool] = {"": level, **modules}

    sink = (
        RichHandler(console=get_console(), show_time=False, show_path=False, markup=False)
        if profile == "play"
        else sys.stderr
    )

    logger.remove()
    logger.configure(patcher=_inject_node)
    logger.add(sink, level=0, format=_FORMATS[profile], filter=levels, backtrace=False, diagnose=False)

    _CONFIGURED_PROFILE = profile
