"""
Exception types raised by the stemcell builder.

Provides:
- InvalidVersionError: a requested version has no usable major component
- RemoteIOError: an object-store call failed
- CorruptArchiveError: a fetched archive could not be unpacked into a usable entry
"""

from typing import Optional


class StemcellBuilderError(Exception):
    """Base class for all stemcell builder errors."""


class InvalidVersionError(StemcellBuilderError, ValueError):
    """Raised when a version string's major component is not a non-negative integer."""

    def __init__(self, version: str):
        self.version = version
        super().__init__(f"Invalid version {version!r}: major component must be a non-negative integer")


class RemoteIOError(StemcellBuilderError):
    """Raised when a list, get or put against object storage fails."""

    def __init__(self, message: str, bucket: Optional[str] = None, key: Optional[str] = None):
        self.bucket = bucket
        self.key = key
        super().__init__(message)


class CorruptArchiveError(StemcellBuilderError):
    """Raised when a downloaded archive is unreadable or lacks the expected payload."""

    def __init__(self, message: str, archive_path: Optional[str] = None):
        self.archive_path = archive_path
        super().__init__(message)
