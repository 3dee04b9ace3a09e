"""
Safe gzip tarball extraction for cached artifacts.

Only regular files and directories are extracted. Members with absolute
paths, members that would land outside the destination after
normalization, and links or device nodes are skipped.
"""

from __future__ import annotations

import logging
import os
import shutil
import tarfile
import zlib
from typing import List

log = logging.getLogger(__name__)


def extract_tarball(archive_path: str, dest_dir: str) -> List[str]:
    """Extract *archive_path* into *dest_dir*, preserving internal structure.

    The whole compressed stream is read, so a gzip CRC or length mismatch
    is reported even when the tar members themselves parse.

    Returns
    -------
    List[str]
        Relative paths of the extracted files.

    Raises
    ------
    tarfile.TarError
        If the archive cannot be read or its compressed stream is corrupt.
    OSError
        If a file cannot be written, or the gzip CRC or length check fails.
    """
    dest_dir = os.path.abspath(dest_dir)
    os.makedirs(dest_dir, exist_ok=True)

    try:
        with tarfile.open(archive_path, "r:*") as tf:
            extracted = _extract_members(tf, archive_path, dest_dir)
            # tarfile stops at the end-of-archive blocks; gzip checks its trailer only at EOF.
            while tf.fileobj.read(1 << 20):
                pass
    except zlib.error as e:
        raise tarfile.ReadError(f"Corrupt compressed stream in {archive_path}: {e}") from e

    return extracted


def _extract_members(tf: tarfile.TarFile, archive_path: str, dest_dir: str) -> List[str]:
    extracted: List[str] = []

    for member in tf.getmembers():
        name = member.name

        if not name or os.path.isabs(name):
            log.debug("Skipping absolute or empty member %r in %s", name, archive_path)
            continue

        dest_path = os.path.abspath(os.path.join(dest_dir, name))
        if dest_path != dest_dir and not dest_path.startswith(dest_dir + os.sep):
            log.warning("Skipping member %r escaping %s", name, dest_dir)
            continue

        if member.isdir():
            os.makedirs(dest_path, exist_ok=True)
            continue

        if not member.isfile():
            log.debug("Skipping non-regular member %r in %s", name, archive_path)
            continue

        os.makedirs(os.path.dirname(dest_path), exist_ok=True)
        src = tf.extractfile(member)
        if src is None:
            continue
        with src, open(dest_path, "wb") as dst:
            shutil.copyfileobj(src, dst)

        extracted.append(os.path.relpath(dest_path, dest_dir).replace("\\", "/"))

    return extracted
