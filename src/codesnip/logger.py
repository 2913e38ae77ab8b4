"""
Logger configuration for the codesnip package.

structlog is bridged into the standard logging module so applications
embedding the extractor keep control over handlers, while ad-hoc scripts can
call :func:`configure_logging` for plain console output.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

import structlog
from structlog.stdlib import BoundLogger, ProcessorFormatter
from structlog.typing import Processor

_PRE_CHAIN: tuple[Processor, ...] = (
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.PositionalArgumentsFormatter(),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
    structlog.processors.TimeStamper(fmt="iso"),
)


def _configure_structlog(min_level: int) -> None:
    """Bridge structlog into the standard logging framework."""
    structlog.configure(
        processors=_PRE_CHAIN + (ProcessorFormatter.wrap_for_formatter,),
        wrapper_class=structlog.make_filtering_bound_logger(min_level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def _configure_library_default() -> None:
    """Route events through stdlib logging until the host configures logging."""
    structlog.configure(
        processors=(structlog.stdlib.filter_by_level,)
        + _PRE_CHAIN
        + (ProcessorFormatter.wrap_for_formatter,),
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


def _build_formatter(renderer: Processor) -> ProcessorFormatter:
    return ProcessorFormatter(processor=renderer, foreign_pre_chain=_PRE_CHAIN)


def _resolve_level(level: Union[int, str, None]) -> int:
    if level is None:
        from .settings import settings

        level = settings.log_level
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level: {level}")
        return resolved
    return level


def configure_logging(
    level: Union[int, str, None] = None,
    enable_console: bool = True,
) -> None:
    """
    Configure global logging.

    Parameters
    ----------
    level:
        Base logging level, as a number or a level name. Defaults to the
        ``log_level`` setting.
    enable_console:
        When False, suppress log emission to stderr.
    """
    resolved = _resolve_level(level)
    _configure_structlog(resolved)
    logging.captureWarnings(True)

    handlers: list[logging.Handler] = []
    if enable_console:
        handler = logging.StreamHandler()
        handler.setLevel(resolved)
        handler.setFormatter(
            _build_formatter(structlog.dev.ConsoleRenderer(colors=False))
        )
        handlers.append(handler)
    else:
        handlers.append(logging.NullHandler())

    logging.basicConfig(level=resolved, handlers=handlers, force=True)


def get_logger(name: Optional[str] = None) -> BoundLogger:
    """Retrieve a structlog logger with the provided name."""
    return structlog.get_logger(name)


if not structlog.is_configured():
    _configure_library_default()
