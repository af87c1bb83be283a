"""
Structured logging for Backend BundleBot.

JSON logs with event_type and, for per-user work, user_id bound via bind_user().
"""

from backend_bundlebot.bundlebot_logging.logger import (
    bind_user,
    configure_stdlib_logging,
    get_logger,
)

__all__ = ["bind_user", "configure_stdlib_logging", "get_logger"]
