"""
API server package — HTTP interface for the wallet signing page.

Serves the static Phantom pages, hands a session's bundle to the send page,
and records the signatures the wallet returns.
"""

from backend_bundlebot.api_server.server import create_app

__all__ = ["create_app"]
