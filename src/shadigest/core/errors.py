"""Exception types raised by the digest engine and its byte sources"""

from pathlib import Path


class DigestError(Exception):
    """Base class for shadigest errors."""


class InvalidUseError(DigestError):
    """Engine used outside its Initialized -> Updating -> Finalized lifecycle."""


class DigestIOError(DigestError, OSError):
    """A byte source failed to open or read; no digest was produced."""

    def __init__(self, path: str | Path, reason: str):
        self.path = str(path)
        self.reason = reason
        super().__init__(f"Cannot read {self.path}: {reason}")

    def __reduce__(self):
        return type(self), (self.path, self.reason)
