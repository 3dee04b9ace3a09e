"""Version string handling for the artifact cache."""

import re

from ..exceptions import InvalidVersionError

_MAJOR_RE = re.compile(r"[0-9]+")


def parse_major_version(version: str) -> int:
    """Return the major component of a semantic version string.

    Minor and patch components are accepted but not validated: the cache
    identifies entries by major version only, so ``"2.0.0"`` and
    ``"2.7.1"`` both map to ``2``.

    Raises InvalidVersionError if the major component is not a
    non-negative integer.
    """
    if not isinstance(version, str):
        raise InvalidVersionError(str(version))

    major = version.strip().split(".", 1)[0]
    if not _MAJOR_RE.fullmatch(major):
        raise InvalidVersionError(version)
    return int(major)
