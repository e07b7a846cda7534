"""Translation sessions."""

from .tracker import SessionTracker, SubmissionReceipt

__all__ = ["SessionTracker", "SubmissionReceipt"]
