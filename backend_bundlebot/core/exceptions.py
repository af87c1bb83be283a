"""
Application-level exceptions.

- ValidationError: bad user input (address, amount, empty bundle); reported to the user.
- NotFound: unknown session; 404 on the web tier, ephemeral message in chat.
- InvalidSession: signatures posted for an unknown session or in the wrong shape.
- ExternalServiceError: price API / RPC node unreachable or malformed; degrades the reply.
- PersistenceError: JSON store read/write failure; logged and swallowed.
- ConfigError: missing or invalid required configuration; fatal at startup only.
"""

from __future__ import annotations


class BundleBotError(Exception):
    """Base class for all application errors."""


class ValidationError(BundleBotError):
    """User input failed validation."""


class InvalidAddress(ValidationError):
    def __init__(self, address: str) -> None:
        super().__init__(f"Invalid Solana address: {address}")
        self.address = address


class InvalidAmount(ValidationError):
    def __init__(self, address: str, amount: str) -> None:
        super().__init__(f"Invalid amount for address {address}: {amount}")
        self.address = address
        self.amount = amount


class EmptyBundle(ValidationError):
    def __init__(self) -> None:
        super().__init__("Please provide at least one address and amount.")


class TooManyTransfers(ValidationError):
    def __init__(self, count: int, limit: int) -> None:
        super().__init__(f"A bundle holds at most {limit} transfers (got {count}).")
        self.count = count
        self.limit = limit


class NotFound(BundleBotError):
    """Requested record does not exist."""


class SessionNotFound(NotFound):
    def __init__(self, session_id: str | None) -> None:
        super().__init__("Session not found")
        self.session_id = session_id


class InvalidSession(BundleBotError):
    def __init__(self, session_id: str | None) -> None:
        super().__init__("Invalid session or signatures")
        self.session_id = session_id


class ExternalServiceError(BundleBotError):
    """Price API or Solana RPC call failed or returned something unusable."""


class PersistenceError(BundleBotError):
    """A JSON store could not be read or written."""


class ConfigError(BundleBotError):
    """Required configuration is missing or invalid."""
