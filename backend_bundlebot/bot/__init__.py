"""
Chat front end: command dispatcher (transport-neutral) and the Discord adapter.
"""

from backend_bundlebot.bot.dispatcher import CommandDispatcher
from backend_bundlebot.bot.replies import EmbedField, EmbedSpec, Reply

__all__ = ["CommandDispatcher", "EmbedField", "EmbedSpec", "Reply"]
