"""Environment-driven configuration helpers.

Purpose
-------
Let hosts and the CLI pick up transport settings from environment variables
and an optional ``.env`` file, while explicit arguments keep precedence.

Contents
--------
* :data:`DOTENV_ENV_VAR` - toggle that enables ``.env`` loading.
* :func:`enable_dotenv` / :func:`should_use_dotenv`.
* :func:`severity_from_env` / :func:`severities_from_env` /
  :func:`file_options_from_env`.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

from lib_log_fanout.adapters.file import FileFormat, FileTransportOptions
from lib_log_fanout.domain import Severity

logger = logging.getLogger(__name__)

DOTENV_ENV_VAR = "LOG_USE_DOTENV"
MINIMUM_SEVERITY_ENV_VAR = "LOG_MINIMUM_SEVERITY"
SEVERITIES_ENV_VAR = "LOG_SEVERITIES"
FILE_PATH_ENV_VAR = "LOG_FILE_PATH"
FILE_FORMAT_ENV_VAR = "LOG_FILE_FORMAT"

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


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


def enable_dotenv(search_from: Path | None = None) -> Path | None:
    """Load the nearest ``.env`` without overriding existing variables.

    Returns the resolved path of the loaded file, or ``None`` when no file was
    found.
    """

    if search_from is None:
        found = find_dotenv(usecwd=True)
        candidate = Path(found).resolve() if found else None
    else:
        candidate = _find_dotenv_upwards(Path(search_from))
    if candidate is None:
        logger.debug("no .env found (search_from=%s)", search_from)
        return None
    load_dotenv(candidate, override=False)
    return candidate


def _find_dotenv_upwards(start: Path) -> Path | None:
    for directory in (start, *start.parents):
        candidate = directory / ".env"
        if candidate.is_file():
            return candidate.resolve()
    return None


def severity_from_env(name: str = MINIMUM_SEVERITY_ENV_VAR, default: Severity | None = None) -> Severity | None:
    """Parse a single severity name from the environment variable ``name``."""

    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return Severity.from_name(raw)


def severities_from_env(name: str = SEVERITIES_ENV_VAR) -> frozenset[Severity] | None:
    """Parse a comma-separated severity set from ``name``.

    Examples
    --------
    >>> import os
    >>> os.environ["DOC_SEVERITIES"] = "debug, error"
    >>> sorted(item.value for item in severities_from_env("DOC_SEVERITIES"))
    ['DEBUG', 'ERROR']
    """

    raw = os.getenv(name)
    if raw is None:
        return None
    names = [part for part in (chunk.strip() for chunk in raw.split(",")) if part]
    if not names:
        return None
    return frozenset(Severity.from_name(part) for part in names)


def env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    lowered = raw.strip().lower()
    if lowered in _TRUTHY:
        return True
    if lowered in _FALSY:
        return False
    return default


def file_options_from_env(base: FileTransportOptions | None = None) -> FileTransportOptions:
    """Overlay ``LOG_FILE_PATH``/``LOG_FILE_FORMAT`` and the filter variables on ``base``."""

    options = base if base is not None else FileTransportOptions()
    overrides: dict[str, object] = {}
    path = os.getenv(FILE_PATH_ENV_VAR)
    if path:
        overrides["file_path"] = path
    file_format = os.getenv(FILE_FORMAT_ENV_VAR)
    if file_format:
        overrides["file_format"] = FileFormat.from_name(file_format)
    minimum = severity_from_env()
    if minimum is not None:
        overrides["minimum_severity"] = minimum
    severities = severities_from_env()
    if severities is not None:
        overrides["severities"] = severities
    return options.merged(**overrides)


__all__ = [
    "DOTENV_ENV_VAR",
    "FILE_FORMAT_ENV_VAR",
    "FILE_PATH_ENV_VAR",
    "MINIMUM_SEVERITY_ENV_VAR",
    "SEVERITIES_ENV_VAR",
    "enable_dotenv",
    "env_flag",
    "file_options_from_env",
    "severities_from_env",
    "severity_from_env",
    "should_use_dotenv",
]
