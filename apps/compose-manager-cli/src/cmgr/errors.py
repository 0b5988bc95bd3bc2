"""Custom exceptions for the Compose Manager CLI."""

from __future__ import annotations


class CmError(Exception):
    """Base exception for all Compose Manager operations."""

    def __init__(self, message: str, *, exit_code: int = 1):
        super().__init__(message)
        self.exit_code = exit_code


class DockerError(CmError):
    """Docker/Compose operation failed."""


class StackNotFoundError(CmError):
    """Requested stack folder does not exist or has no compose file."""
