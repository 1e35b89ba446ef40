"""Configuration helpers: environment overrides and ``.env`` loading.

Purpose
-------
Translate keyword arguments plus ``LOG_*`` environment variables into the
settings consumed by :func:`lib_log_console.console_sink`, and optionally load
those variables from the nearest ``.env`` file.

Contents
--------
* :class:`SinkSettings` - resolved colour and template settings.
* :func:`build_sink_settings` - merge arguments with environment overrides.
* :func:`should_use_dotenv` / :func:`enable_dotenv` - opt-in ``.env`` support.

System Role
-----------
Outer-layer configuration. Environment variables override colour flags, and
``LOG_CONSOLE_TEMPLATE`` replaces the built-in default template when the
caller chose no resolution mode, so it never conflicts with an explicit
template, selector, or formatter.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from threading import RLock
from typing import Any

from dotenv import find_dotenv, load_dotenv

logger = logging.getLogger(__name__)

DOTENV_ENV_VAR = "LIB_LOG_CONSOLE_USE_DOTENV"
TEMPLATE_ENV_VAR = "LOG_CONSOLE_TEMPLATE"
FORCE_COLOR_ENV_VAR = "LOG_FORCE_COLOR"
NO_COLOR_ENV_VAR = "LOG_NO_COLOR"

_TRUTHY = {"1", "true", "yes", "on"}

_DOTENV_LOCK = RLock()
_DOTENV_LOADED: Path | None = None
_DOTENV_ATTEMPTED = False


def _env_bool(name: str, default: bool) -> bool:
    """Return the boolean value of an environment variable with fallback.

    Examples
    --------
    >>> _ = os.environ.pop('LOG_EXAMPLE_BOOL', None)
    >>> _env_bool('LOG_EXAMPLE_BOOL', default=True)
    True
    >>> os.environ['LOG_EXAMPLE_BOOL'] = '0'
    >>> _env_bool('LOG_EXAMPLE_BOOL', default=True)
    False
    """
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip().lower() in _TRUTHY


@dataclass(frozen=True, slots=True)
class SinkSettings:
    """Resolved settings for one console sink."""

    default_template: str | None
    force_color: bool
    no_color: bool


def build_sink_settings(
    *,
    output_template: str | None = None,
    template_selector: Any = None,
    formatter: Any = None,
    force_color: bool = False,
    no_color: bool = False,
) -> SinkSettings:
    """Merge explicit arguments with ``LOG_*`` environment overrides.

    ``default_template`` carries ``LOG_CONSOLE_TEMPLATE`` only when none of
    ``output_template``, ``template_selector`` or ``formatter`` is set.
    """
    default_template: str | None = None
    if output_template is None and template_selector is None and formatter is None:
        env_template = os.getenv(TEMPLATE_ENV_VAR)
        if env_template:
            default_template = env_template
            logger.debug("using %s=%r as the default output template", TEMPLATE_ENV_VAR, env_template)
    return SinkSettings(
        default_template=default_template,
        force_color=_env_bool(FORCE_COLOR_ENV_VAR, force_color),
        no_color=_env_bool(NO_COLOR_ENV_VAR, no_color),
    )


def should_use_dotenv(*, explicit: bool | None = None, env_value: str | None = None) -> bool:
    """Decide whether ``.env`` loading is enabled; an explicit flag wins.

    Examples
    --------
    >>> should_use_dotenv(explicit=False, env_value="1")
    False
    >>> should_use_dotenv(env_value="yes")
    True
    >>> should_use_dotenv()
    False
    """
    if explicit is not None:
        return explicit
    if env_value is None:
        return False
    return env_value.strip().lower() in _TRUTHY


def _find_dotenv(start: Path) -> Path | None:
    for directory in (start, *start.parents):
        candidate = directory / ".env"
        if candidate.is_file():
            return candidate.resolve()
    return None


def enable_dotenv(search_from: Path | None = None) -> Path | None:
    """Load the nearest ``.env`` without overriding existing variables.

    Without ``search_from`` python-dotenv searches from the working directory
    upwards. An explicit ``search_from`` is walked up to the filesystem root.
    Loading happens at most once per process; later calls return the
    previously loaded path.

    Returns
    -------
    Path | None
        Path of the loaded file, or ``None`` when none was found.
    """
    global _DOTENV_LOADED, _DOTENV_ATTEMPTED
    with _DOTENV_LOCK:
        if _DOTENV_ATTEMPTED:
            return _DOTENV_LOADED
        if search_from is None:
            found = find_dotenv(usecwd=True)
            path = Path(found).resolve() if found else None
        else:
            path = _find_dotenv(search_from.resolve())
        if path is not None:
            load_dotenv(dotenv_path=path, override=False)
            logger.debug("loaded environment from %s", path)
        _DOTENV_LOADED = path
        _DOTENV_ATTEMPTED = True
        return path


def _reset_dotenv_state_for_testing() -> None:
    global _DOTENV_LOADED, _DOTENV_ATTEMPTED
    with _DOTENV_LOCK:
        _DOTENV_LOADED = None
        _DOTENV_ATTEMPTED = False


__all__ = [
    "DOTENV_ENV_VAR",
    "FORCE_COLOR_ENV_VAR",
    "NO_COLOR_ENV_VAR",
    "SinkSettings",
    "TEMPLATE_ENV_VAR",
    "build_sink_settings",
    "enable_dotenv",
    "should_use_dotenv",
]
