"""Optional ``.env`` support for runtime configuration.

Purpose
-------
Let operators keep ``LOG_*`` overrides in a ``.env`` file next to the
application. Loading is opt-in (``--use-dotenv`` or ``LOG_USE_DOTENV=1``) and
never overrides variables already present in the environment.
"""

from __future__ import annotations

import logging
from pathlib import Path

from dotenv import load_dotenv

LOGGER = logging.getLogger(__name__)

DOTENV_ENV_VAR = "LOG_USE_DOTENV"

_LOADED_PATH: Path | None = None
_LOADED = False


def should_use_dotenv(*, explicit: bool | None, env_value: str | None) -> bool:
    """Decide whether to load ``.env``; an explicit CLI flag beats the environment.

    Examples
    --------
    >>> should_use_dotenv(explicit=None, env_value="yes")
    True
    >>> should_use_dotenv(explicit=False, env_value="1")
    False
    >>> should_use_dotenv(explicit=None, env_value=None)
    False
    """
    if explicit is not None:
        return explicit
    if env_value is None:
        return False
    return env_value.strip().lower() in {"1", "true", "yes", "on"}


def enable_dotenv(search_from: Path | None = None) -> Path | None:
    """Load the nearest ``.env`` walking up from ``search_from`` (default: cwd).

    Returns the resolved path that was loaded, or ``None`` when no file exists.
    Subsequent calls return the first result without reloading.
    """
    global _LOADED, _LOADED_PATH
    if _LOADED:
        return _LOADED_PATH

    start = (search_from or Path.cwd()).resolve()
    for directory in (start, *start.parents):
        candidate = directory / ".env"
        if candidate.is_file():
            load_dotenv(dotenv_path=candidate, override=False)
            LOGGER.debug("Loaded environment overrides from %s", candidate)
            _LOADED_PATH = candidate
            break
    _LOADED = True
    return _LOADED_PATH


def _reset_dotenv_state_for_testing() -> None:
    global _LOADED, _LOADED_PATH
    _LOADED = False
    _LOADED_PATH = None


__all__ = ["DOTENV_ENV_VAR", "enable_dotenv", "should_use_dotenv"]
