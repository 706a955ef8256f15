"""Environment-driven configuration for the formatter and CLI.

Purpose
-------
Resolve formatter settings from explicit arguments, ``BUNYAN_VIEW_*``
environment variables, and defaults, in that order of precedence. Optional
``.env`` support lets operators pin their preferences per project.

Contents
--------
* :class:`FormatterSettings` - frozen settings consumed by
  :class:`~bunyan_view.application.use_cases.format_record.RecordFormatter`.
* :func:`load_settings` - precedence-aware resolver.
* :func:`enable_dotenv` / :func:`should_use_dotenv` - ``.env`` handling.

Environment
-----------
``BUNYAN_VIEW_OUTPUT``
    Default output mode name or id.
``BUNYAN_VIEW_COLOR``
    Force colour on (``1/true/yes/on``) or off (anything else).
``NO_COLOR``
    Disable colour when set to a non-empty value.
``BUNYAN_VIEW_JSON_INDENT``
    Indent width for ``json`` mode.
``BUNYAN_VIEW_USE_DOTENV``
    Load the nearest ``.env`` before resolving settings.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, TextIO

from dotenv import find_dotenv, load_dotenv

from bunyan_view.application.use_cases.format_record import RecordFormatter, coerce_json_indent
from bunyan_view.domain.modes import OutputMode

logger = logging.getLogger(__name__)

OUTPUT_ENV_VAR = "BUNYAN_VIEW_OUTPUT"
COLOR_ENV_VAR = "BUNYAN_VIEW_COLOR"
NO_COLOR_ENV_VAR = "NO_COLOR"
JSON_INDENT_ENV_VAR = "BUNYAN_VIEW_JSON_INDENT"
DOTENV_ENV_VAR = "BUNYAN_VIEW_USE_DOTENV"

_TRUTHY = {"1", "true", "yes", "on"}

_DOTENV_LOADED: Path | None = None


@dataclass(slots=True, frozen=True)
class FormatterSettings:
    """Resolved formatter configuration."""

    color: bool = False
    output_mode: OutputMode = OutputMode.LONG
    json_indent: int = 0

    def build_formatter(self) -> RecordFormatter:
        """Return a fresh formatter using these settings."""

        return RecordFormatter(color=self.color, output_mode=self.output_mode, json_indent=self.json_indent)


def _env_bool(value: str | None) -> bool | None:
    """Interpret ``1/true/yes/on`` style strings; ``None`` or blank means unset.

    Examples
    --------
    >>> _env_bool('ON'), _env_bool('0'), _env_bool('  ')
    (True, False, None)
    """

    if value is None or not value.strip():
        return None
    return value.strip().lower() in _TRUTHY


def _env_indent(env: Mapping[str, str]) -> int | None:
    value = env.get(JSON_INDENT_ENV_VAR)
    if value is None or not value.strip():
        return None
    try:
        return coerce_json_indent(int(value.strip()))
    except ValueError as exc:
        raise ValueError(f"{JSON_INDENT_ENV_VAR} must be a non-negative integer, got {value!r}") from exc


def resolve_color(explicit: bool | None, *, env: Mapping[str, str], stream: TextIO | None) -> bool:
    """Decide whether to colour output.

    Explicit choice wins, then ``BUNYAN_VIEW_COLOR``, then ``NO_COLOR``, then
    whether ``stream`` is a terminal.

    Examples
    --------
    >>> resolve_color(None, env={'BUNYAN_VIEW_COLOR': '1'}, stream=None)
    True
    >>> resolve_color(None, env={'NO_COLOR': 'x'}, stream=None)
    False
    >>> resolve_color(True, env={'NO_COLOR': 'x'}, stream=None)
    True
    """

    if explicit is not None:
        return explicit
    forced = _env_bool(env.get(COLOR_ENV_VAR))
    if forced is not None:
        return forced
    if env.get(NO_COLOR_ENV_VAR):
        return False
    if stream is None:
        return False
    isatty = getattr(stream, "isatty", None)
    try:
        return bool(isatty()) if callable(isatty) else False
    except ValueError:
        return False


def load_settings(
    *,
    color: bool | None = None,
    output_mode: Any = None,
    json_indent: Any = None,
    env: Mapping[str, str] | None = None,
    stream: TextIO | None = None,
) -> FormatterSettings:
    """Merge explicit arguments over environment values over defaults.

    Parameters
    ----------
    color, output_mode, json_indent:
        Explicit values; ``None`` defers to the environment.
    env:
        Environment mapping (defaults to :data:`os.environ`).
    stream:
        Destination stream used for terminal detection; ``None`` skips
        detection and leaves colour off unless the environment forces it.

    Raises
    ------
    ValueError
        When an indent setting is not a non-negative integer.

    Examples
    --------
    >>> load_settings(output_mode='short', env={}, stream=None)
    FormatterSettings(color=False, output_mode=<OutputMode.SHORT: 5>, json_indent=0)
    """

    environ = os.environ if env is None else env

    mode_source = output_mode if output_mode is not None else environ.get(OUTPUT_ENV_VAR)
    mode = OutputMode.resolve(mode_source)

    if json_indent is not None:
        indent = coerce_json_indent(json_indent)
    else:
        indent = _env_indent(environ) or 0

    settings = FormatterSettings(
        color=resolve_color(color, env=environ, stream=stream),
        output_mode=mode,
        json_indent=indent,
    )
    logger.debug("resolved formatter settings", extra={"settings": settings})
    return settings


def should_use_dotenv(*, explicit: bool | None = None, env_value: str | None = None) -> bool:
    """Return whether ``.env`` loading is requested; the CLI flag beats the env toggle.

    Examples
    --------
    >>> should_use_dotenv(explicit=False, env_value='1')
    False
    >>> should_use_dotenv(env_value='yes')
    True
    >>> should_use_dotenv()
    False
    """

    if explicit is not None:
        return explicit
    return bool(_env_bool(env_value))


def enable_dotenv(search_from: Path | None = None) -> Path | None:
    """Load the nearest ``.env`` without overriding variables already set.

    Returns
    -------
    Path | None
        Resolved path of the loaded file, or ``None`` when none was found.
    """

    global _DOTENV_LOADED
    if _DOTENV_LOADED is not None:
        return _DOTENV_LOADED

    if search_from is not None:
        candidate = _search_upwards(search_from)
    else:
        found = find_dotenv(usecwd=True)
        candidate = Path(found).resolve() if found else None
    if candidate is None:
        logger.debug("no .env file found")
        return None

    load_dotenv(candidate, override=False)
    _DOTENV_LOADED = candidate
    logger.debug("loaded environment from %s", candidate)
    return candidate


def _search_upwards(start: Path) -> Path | None:
    current = start.resolve()
    for directory in (current, *current.parents):
        candidate = directory / ".env"
        if candidate.is_file():
            return candidate
    return None


def _reset_dotenv_state_for_testing() -> None:
    global _DOTENV_LOADED
    _DOTENV_LOADED = None


__all__ = [
    "COLOR_ENV_VAR",
    "DOTENV_ENV_VAR",
    "FormatterSettings",
    "JSON_INDENT_ENV_VAR",
    "NO_COLOR_ENV_VAR",
    "OUTPUT_ENV_VAR",
    "enable_dotenv",
    "load_settings",
    "resolve_color",
    "should_use_dotenv",
]
