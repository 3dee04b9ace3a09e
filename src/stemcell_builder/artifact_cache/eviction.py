"""
Eviction policy for the artifact cache.

The policy works on a snapshot of the cache root's directory and file
names, so it can be reasoned about (and tested) without a filesystem.
Deletion itself is done by the cache.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, List, Optional, Pattern

_DECIMAL_RE = re.compile(r"[0-9]+")


def archive_name_pattern(artifact_prefix: str, archive_ext: str) -> Pattern[str]:
    """Regex fully matching ``<prefix>-v<N>.<ext>`` and capturing ``N``."""
    return re.compile(
        rf"{re.escape(artifact_prefix)}-v([0-9]+)\.{re.escape(archive_ext)}"
    )


def _decimal_version(text: str) -> Optional[int]:
    # The cache writes str(major): ASCII digits, no leading zeros.
    if not _DECIMAL_RE.fullmatch(text):
        return None
    version = int(text)
    if str(version) != text:
        return None
    return version


def entry_dir_version(name: str) -> Optional[int]:
    """Version of a cache entry directory name, or None if it is not one."""
    return _decimal_version(name)


def archive_version(name: str, pattern: Pattern[str]) -> Optional[int]:
    """Version embedded in an archive file name, or None if it does not match."""
    match = pattern.fullmatch(name)
    if match:
        return _decimal_version(match.group(1))
    return None


@dataclass(frozen=True)
class Eviction:
    """A single cache-root entry scheduled for removal."""

    name: str
    version: int
    is_dir: bool


def select_evictions(
    directories: Iterable[str],
    files: Iterable[str],
    current_major: int,
    pattern: Pattern[str],
) -> List[Eviction]:
    """Return every entry whose version is strictly older than *current_major*.

    Entries at or above *current_major* are never selected, including
    newer versions fetched earlier by another build. Names that are not
    cache entries or archives are ignored.
    """
    evictions: List[Eviction] = []

    for name in sorted(directories):
        version = entry_dir_version(name)
        if version is not None and version < current_major:
            evictions.append(Eviction(name=name, version=version, is_dir=True))

    for name in sorted(files):
        version = archive_version(name, pattern)
        if version is not None and version < current_major:
            evictions.append(Eviction(name=name, version=version, is_dir=False))

    return evictions
