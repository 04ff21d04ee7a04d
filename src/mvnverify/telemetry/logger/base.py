# src/mvnverify/telemetry/logger/base.py

import logging

import structlog
from structlog.typing import FilteringBoundLogger

from mvnverify.telemetry.logger.processors import (
    add_emoji_processor,
    remove_extra_keys_processor,
)

BASE_LOGGER_NAME = "mvnverify"


def setup_logging(
    level: int = logging.WARNING,
    json_logs: bool = False,
    emoji: bool = True,
) -> None:
    """Configures structlog to render through the stdlib `mvnverify` logger.

    Handlers are left alone: pytest owns the root logger during a session
    and its capture handler picks the rendered records up from there.
    """
    log_level_name = logging.getLevelName(level)

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]
    if emoji and not json_logs:
        shared_processors.append(add_emoji_processor)
    shared_processors.append(remove_extra_keys_processor)

    if json_logs:
        final_renderer = structlog.processors.JSONRenderer(sort_keys=True)
    else:
        final_renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[*shared_processors, structlog.processors.format_exc_info, final_renderer],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.getLogger(BASE_LOGGER_NAME).setLevel(level)

    slog = structlog.get_logger(f"{BASE_LOGGER_NAME}.telemetry")
    slog.debug(
        "structlog logging initialization complete",
        log_level=log_level_name,
        json_format=json_logs,
    )


StructLogger = FilteringBoundLogger

# 🔼⚙️
