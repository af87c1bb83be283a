"""
Structured logging for the bot and the signing endpoint.

Every record is one JSON line on stdout with event_type, level, timestamp and
the logger name, plus whatever keyword context the call site passes. Work done
on behalf of a Discord user is logged through bind_user(), so user_id and the
command travel with every event of that interaction.

Responsibilities:
  - configure structlog once, on first import
  - route stdlib logging (discord.py, uvicorn) to the same stream and level
  - keep the bot token out of log output

No backend_bundlebot imports here; everything else imports this package.
"""

from __future__ import annotations

import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any

import structlog

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_LEVEL_VALUE = getattr(logging, LOG_LEVEL, logging.INFO)

# json (default) or console
LOG_FORMAT = os.getenv("LOG_FORMAT", "json").strip().lower()

REDACTED = "[redacted]"

# discord.py logs every gateway heartbeat at INFO
NOISY_LOGGERS = ("discord.gateway", "discord.client")


# -----------------------------------------------------------------------------
# Processors
# -----------------------------------------------------------------------------


def _add_timestamp(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    event_dict.setdefault("timestamp", datetime.now(timezone.utc).isoformat())
    return event_dict


def _event_to_event_type(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """structlog's positional 'event' becomes event_type; message mirrors it unless given."""
    if "event" in event_dict and "event_type" not in event_dict:
        event_dict["event_type"] = event_dict.pop("event")
    if "event_type" in event_dict:
        event_dict.setdefault("message", str(event_dict["event_type"]))
    return event_dict


def _redact_bot_token(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Mask DISCORD_BOT_TOKEN wherever it shows up in a string value (error texts, URLs)."""
    token = os.getenv("DISCORD_BOT_TOKEN", "")
    if not token:
        return event_dict
    for key, value in event_dict.items():
        if isinstance(value, str) and token in value:
            event_dict[key] = value.replace(token, REDACTED)
    return event_dict


def build_processors(log_format: str = LOG_FORMAT) -> list[Any]:
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        _add_timestamp,
        _event_to_event_type,
        _redact_bot_token,
    ]
    if log_format == "console":
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()))
    else:
        processors.append(structlog.processors.JSONRenderer())
    return processors


# -----------------------------------------------------------------------------
# Configuration
# -----------------------------------------------------------------------------


def configure_structlog() -> None:
    structlog.configure(
        processors=build_processors(),
        wrapper_class=structlog.make_filtering_bound_logger(LOG_LEVEL_VALUE),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=True,
    )


def configure_stdlib_logging() -> None:
    """
    Send library logs (discord.py, uvicorn) to stdout at LOG_LEVEL.

    discord.Client.start() does not install a handler the way Client.run()
    does, so without this the gateway's connect/reconnect messages are lost.
    """
    logging.basicConfig(
        level=LOG_LEVEL_VALUE,
        stream=sys.stdout,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(LOG_LEVEL_VALUE, logging.WARNING))


if not structlog.is_configured():
    configure_structlog()


# -----------------------------------------------------------------------------
# Public API
# -----------------------------------------------------------------------------


def get_logger(name: str) -> structlog.BoundLogger:
    """
    Module logger:

        logger = get_logger(__name__)
        logger.info("session_created", session_id=sid)

    -> {"event_type": "session_created", "session_id": "...", "logger": "...",
        "level": "info", "timestamp": "...", "message": "session_created"}
    """
    return structlog.get_logger(name).bind(logger=name)


def bind_user(user_id: str, name: str = "backend_bundlebot", **context: Any) -> structlog.BoundLogger:
    """Logger for work done on behalf of one Discord user; extra context (command=...) is bound too."""
    return get_logger(name).bind(user_id=user_id, **context)
