"""structlog setup for infinite-list.

Level and output format come from ``ListSettings`` (``INFINITE_LIST_LOG_LEVEL``
and ``INFINITE_LIST_LOG_JSON``) unless passed explicitly. Every record emitted
by a module of this package is tagged with a ``component`` field naming that
module (``pagination``, ``http_source``, ...), so one list screen's fetch
traffic can be filtered out of an application's logs.

Usage:
    from infinite_list.core.logging import configure_logging, get_logger

    configure_logging()  # once, at startup
    logger = get_logger(__name__)
    logger.info("fetch_started", limit=10, offset=20)
"""

import logging
import sys
from typing import cast

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from infinite_list.core.config import get_settings, parse_log_level

PACKAGE_LOGGER = "infinite_list"

# Libraries whose INFO chatter drowns out page fetches
QUIET_LOGGERS = ("aiohttp.access", "aiohttp.client", "aiohttp.internal", "asyncio")


def add_component(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Tag records from this package with the emitting module's short name.

    Must run after ``add_logger_name``. Records from other loggers pass
    through untouched, and an explicit ``component`` key is never replaced.
    """
    name = event_dict.get("logger")
    if isinstance(name, str) and name.startswith(PACKAGE_LOGGER + "."):
        event_dict.setdefault("component", name.rsplit(".", 1)[-1])
    return event_dict


def configure_logging(
    json_output: bool | None = None,
    log_level: str | None = None,
) -> None:
    """Configure structlog and the stdlib root logger.

    Args:
        json_output: Emit JSON lines instead of the colored console renderer.
            Defaults to the ``log_json`` setting.
        log_level: Level name such as ``"DEBUG"``. Defaults to the
            ``log_level`` setting.

    Raises:
        ValueError: If log_level is not a standard level name.
    """
    settings = get_settings()
    if json_output is None:
        json_output = settings.log_json
    level = parse_log_level(log_level) if log_level is not None else settings.log_level
    numeric_level = logging.getLevelNamesMapping()[level]

    processors: list[Processor] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        add_component,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if json_output:
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=numeric_level,
        force=True,
    )
    logging.getLogger().setLevel(numeric_level)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(numeric_level, logging.WARNING))


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger, normally ``get_logger(__name__)``."""
    return cast(structlog.stdlib.BoundLogger, structlog.get_logger(name))
