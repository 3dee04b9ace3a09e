"""On-disk cache of a versioned build dependency fetched from object storage."""

import logging
import os
import shutil
import tarfile

from ..exceptions import CorruptArchiveError
from ..storage.base import ObjectStoreClient
from .archive import extract_tarball
from .eviction import archive_name_pattern, select_evictions
from .version import parse_major_version

log = logging.getLogger(__name__)


class VersionedArtifactCache:
    """Fetches, unpacks and evicts one artifact keyed by major version.

    The cache root holds ``<prefix>-v<N>.<ext>`` archives next to ``<N>/``
    directories with their unpacked contents. The cache owns that
    directory: nothing else may write into it.

    There is no locking. Callers must make sure only one process mutates a
    given cache root at a time (one build agent per cache directory, or an
    external lock); a concurrent fetch of a newer version can evict an
    entry that is still being unpacked.
    """

    def __init__(
        self,
        client: ObjectStoreClient,
        input_bucket: str,
        output_bucket: str,
        cache_dir: str,
        artifact_prefix: str = "vmx",
        archive_ext: str = "tgz",
        payload_name: str = "image.vmx",
    ):
        self._client = client
        self.input_bucket = input_bucket
        self.output_bucket = output_bucket
        self.cache_dir = os.path.abspath(cache_dir)
        self.artifact_prefix = artifact_prefix
        self.archive_ext = archive_ext
        self.payload_name = payload_name
        self._archive_pattern = archive_name_pattern(artifact_prefix, archive_ext)

    def archive_name(self, major: int) -> str:
        return f"{self.artifact_prefix}-v{major}.{self.archive_ext}"

    def entry_dir(self, major: int) -> str:
        return os.path.join(self.cache_dir, str(major))

    def payload_path(self, major: int) -> str:
        return os.path.join(self.entry_dir(major), self.payload_name)

    def fetch(self, version: str) -> str:
        """Return the absolute path of the payload file for *version*.

        Downloads and unpacks the archive if the entry is not already
        present, then evicts every entry older than this major version.

        Raises
        ------
        InvalidVersionError
            Before any I/O, if the major version cannot be parsed.
        RemoteIOError
            If the download fails. Propagated unchanged.
        CorruptArchiveError
            If the archive cannot be extracted or lacks the payload file.
        """
        major = parse_major_version(version)
        payload = self.payload_path(major)

        os.makedirs(self.cache_dir, exist_ok=True)

        if os.path.isfile(payload):
            log.debug("Cache hit for %s (major %d): %s", version, major, payload)
        else:
            log.info("Cache miss for %s (major %d), fetching", version, major)
            self._download_and_unpack(major)

        self.evict_older_than(major)
        return payload

    def publish(self, local_path: str, key: str) -> None:
        """Upload a built artifact to the output bucket."""
        self._client.put(self.output_bucket, key, local_path)

    def _download_and_unpack(self, major: int) -> None:
        archive_name = self.archive_name(major)
        archive_path = os.path.join(self.cache_dir, archive_name)
        entry_dir = self.entry_dir(major)

        # A directory without the payload is left over from an interrupted unpack.
        if os.path.isdir(entry_dir):
            shutil.rmtree(entry_dir)

        self._client.get(self.input_bucket, archive_name, archive_path)

        try:
            extracted = extract_tarball(archive_path, entry_dir)
        except (tarfile.TarError, EOFError, OSError) as e:
            self._discard(major)
            raise CorruptArchiveError(
                f"Failed to extract {archive_path}: {e}", archive_path=archive_path
            ) from e

        if not os.path.isfile(self.payload_path(major)):
            self._discard(major)
            raise CorruptArchiveError(
                f"Archive {archive_name} does not contain {self.payload_name}",
                archive_path=archive_path,
            )

        log.info("Unpacked %d files from %s into %s", len(extracted), archive_name, entry_dir)

    def _discard(self, major: int) -> None:
        shutil.rmtree(self.entry_dir(major), ignore_errors=True)
        try:
            os.remove(os.path.join(self.cache_dir, self.archive_name(major)))
        except FileNotFoundError:
            pass
        except OSError as e:
            log.warning("Could not remove corrupt archive for version %d: %s", major, e)

    def evict_older_than(self, major: int) -> None:
        """Remove every entry and archive with a version strictly below *major*.

        Best effort: deletion failures are logged and skipped.
        """
        directories = []
        files = []
        with os.scandir(self.cache_dir) as it:
            for entry in it:
                if entry.is_dir(follow_symlinks=False):
                    directories.append(entry.name)
                elif entry.is_file(follow_symlinks=False):
                    files.append(entry.name)

        for eviction in select_evictions(directories, files, major, self._archive_pattern):
            path = os.path.join(self.cache_dir, eviction.name)
            try:
                if eviction.is_dir:
                    shutil.rmtree(path)
                else:
                    os.remove(path)
                log.info("Evicted cached version %d: %s", eviction.version, path)
            except OSError as e:
                log.warning("Failed to evict %s: %s", path, e)
