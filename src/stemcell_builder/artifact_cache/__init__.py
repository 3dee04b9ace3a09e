"""
Versioned artifact cache.

Provides:

    - VersionedArtifactCache: fetch-unpack-evict cache keyed by major version
    - parse_major_version: version string -> cache key
    - select_evictions: pure eviction policy over a cache-root listing
    - extract_tarball: safe gzip tarball extraction
"""

from .archive import extract_tarball
from .cache import VersionedArtifactCache
from .eviction import archive_name_pattern, select_evictions
from .version import parse_major_version

__all__ = [
    "VersionedArtifactCache",
    "archive_name_pattern",
    "extract_tarball",
    "parse_major_version",
    "select_evictions",
]
