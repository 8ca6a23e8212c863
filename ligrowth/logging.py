"""femtologging glue for ligrowth.

Modules obtain a logger with :func:`get_logger` and hand the ``log_*``
helpers a percent-style template plus arguments. The helpers interpolate
eagerly, so the femtologging worker only ever receives finished strings.

Example:
>>> from ligrowth.logging import get_logger, log_info
>>> logger = get_logger(__name__)
>>> log_info(logger, "Fetched %d changelog events", 12)

"""

from __future__ import annotations

import enum
import os
import typing as typ

from femtologging import basicConfig, get_logger

LOG_LEVEL_ENV = "LIGROWTH_LOG_LEVEL"


class LogLevel(enum.StrEnum):
    """Level names femtologging understands."""

    TRACE = "TRACE"
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


_FALLBACK_LEVEL = LogLevel.INFO


def normalize_log_level(level: str | None) -> tuple[str, bool]:
    """Return ``(level_name, was_invalid)`` for a raw level string.

    Names are matched case-insensitively after trimming whitespace. Missing
    or unknown names resolve to ``INFO`` with ``was_invalid`` set so callers
    can warn about the substitution.
    """
    candidate = (level or "").strip().upper()
    try:
        return (LogLevel[candidate].value, False)
    except KeyError:
        return (_FALLBACK_LEVEL.value, True)


def configure_logging(level: str, *, force: bool = False) -> tuple[str, bool]:
    """Install the femtologging root handler at ``level``.

    Parameters
    ----------
    level : str
        Raw level name; see :func:`normalize_log_level`.
    force : bool, optional
        Replace handlers that are already configured.

    Returns
    -------
    tuple[str, bool]
        The level actually applied and whether ``level`` had to be replaced.

    """
    applied, invalid = normalize_log_level(level)
    basicConfig(level=applied, force=force)
    return (applied, invalid)


def configure_logging_from_env(env_var: str = LOG_LEVEL_ENV) -> str:
    """Configure logging from ``env_var`` and return the applied level.

    An unusable value is reported through the freshly configured logger.
    """
    raw = os.environ.get(env_var, _FALLBACK_LEVEL.value)
    applied, invalid = configure_logging(raw)
    if invalid:
        log_warning(
            get_logger(__name__),
            "Invalid %s %r, falling back to %s",
            env_var,
            raw,
            applied,
        )
    return applied


def format_log_message(template: str, *args: object) -> str:
    """Interpolate ``args`` into ``template``; no arguments leaves it as-is."""
    return template % args if args else template


class _SupportsLog(typ.Protocol):
    """Anything with femtologging's ``log`` signature."""

    def log(
        self,
        level: str,
        message: str,
        /,
        *,
        exc_info: object | None = None,
        stack_info: bool = False,
    ) -> str | None: ...


def _emit(
    logger: _SupportsLog,
    level: LogLevel,
    message: str,
    exc_info: object | None = None,
) -> None:
    logger.log(level.value, message, exc_info=exc_info, stack_info=False)


def log_debug(logger: _SupportsLog, template: str, *args: object) -> None:
    """Emit a DEBUG record."""
    _emit(logger, LogLevel.DEBUG, format_log_message(template, *args))


def log_info(
    logger: _SupportsLog,
    template: str,
    *args: object,
    exc_info: object | None = None,
) -> None:
    """Emit an INFO record built from ``template % args``.

    ``exc_info`` is attached to the record unchanged when given.
    """
    _emit(logger, LogLevel.INFO, format_log_message(template, *args), exc_info)


def log_warning(
    logger: _SupportsLog,
    template: str,
    *args: object,
    exc_info: object | None = None,
) -> None:
    """Emit a WARNING record."""
    _emit(logger, LogLevel.WARNING, format_log_message(template, *args), exc_info)


def log_error(
    logger: _SupportsLog,
    template: str,
    *args: object,
    exc_info: object | None = None,
) -> None:
    """Emit an ERROR record."""
    _emit(logger, LogLevel.ERROR, format_log_message(template, *args), exc_info)


def log_exception(logger: _SupportsLog, message: str, exc: BaseException) -> None:
    """Emit an ERROR record for ``exc``; ``message`` is used verbatim."""
    _emit(logger, LogLevel.ERROR, message, exc)


__all__ = [
    "LOG_LEVEL_ENV",
    "LogLevel",
    "configure_logging",
    "configure_logging_from_env",
    "format_log_message",
    "get_logger",
    "log_debug",
    "log_error",
    "log_exception",
    "log_info",
    "log_warning",
    "normalize_log_level",
]
