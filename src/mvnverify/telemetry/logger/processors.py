# src/mvnverify/telemetry/logger/processors.py

"""
Custom structlog processors for mvnverify log output.
"""

import logging
from typing import Any

from structlog.typing import EventDict, WrappedLogger

LOG_EMOJIS = {
    logging.DEBUG: "🐛",
    logging.INFO: "ℹ️",
    logging.WARNING: "⚠️",
    logging.ERROR: "❌",
    logging.CRITICAL: "💥",
    "extract": "📦",
    "build": "🔨",
    "goal": "🎯",
    "inject": "💉",
    "path": "📁",
    "success": "🎉",
    "fail": "🚫",
}

# Keys only meant to steer processors, never rendered.
_CONTROL_KEYS = ("emoji_key",)


def add_emoji_processor(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Prefixes the event with an emoji picked by `emoji_key` or the log level."""
    emoji_key: Any = event_dict.get("emoji_key")
    emoji = LOG_EMOJIS.get(emoji_key) if emoji_key else None
    if emoji is None:
        level = logging.getLevelName(method_name.upper())
        emoji = LOG_EMOJIS.get(level, "")
    if emoji:
        event_dict["event"] = f"{emoji} {event_dict.get('event', '')}"
    return event_dict


def remove_extra_keys_processor(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    for key in _CONTROL_KEYS:
        event_dict.pop(key, None)
    return event_dict


# 🔼⚙️
