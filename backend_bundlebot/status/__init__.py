"""
Status reporting for sent bundles (signature confirmation lookups).
"""

from backend_bundlebot.status.reporter import (
    EntryStatus,
    StatusReporter,
    TransferStatus,
    classify_signature_status,
)

__all__ = [
    "EntryStatus",
    "StatusReporter",
    "TransferStatus",
    "classify_signature_status",
]
