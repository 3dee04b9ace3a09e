"""Object storage abstraction shared by the artifact cache and the CLI."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterator

SEPARATOR = "/"


@dataclass(frozen=True)
class ObjectAddress:
    """A bucket plus the key prefix every key in that bucket is stored under.

    Build pipelines pass buckets such as ``"stemcells/vsphere/2019"``; the
    part before the first separator is the real bucket and the remainder
    becomes a prefix prepended to every key.
    """

    bucket: str
    key_prefix: str = ""

    @classmethod
    def parse(cls, bucket_spec: str) -> "ObjectAddress":
        bucket, sep, rest = bucket_spec.partition(SEPARATOR)
        if not sep:
            return cls(bucket=bucket, key_prefix="")
        return cls(bucket=bucket, key_prefix=rest + SEPARATOR)

    def key(self, key: str) -> str:
        """Return the effective object key for *key* under this address."""
        return self.key_prefix + key


class ObjectStoreClient(ABC):
    """Three-operation interface over a bucket/key address space.

    Every operation takes a raw bucket specifier that may embed a key
    prefix (see :class:`ObjectAddress`). Implementations raise
    :class:`~stemcell_builder.exceptions.RemoteIOError` on failure and
    never retry.
    """

    @abstractmethod
    def list(self, bucket_spec: str) -> Iterator[str]:
        """Yield the keys of all objects under *bucket_spec*.

        The result is lazy; calling ``list`` again starts a fresh listing.
        """

    @abstractmethod
    def get(self, bucket_spec: str, key: str, local_path: str) -> str:
        """Download *key* to *local_path*, creating parent directories.

        Overwrites *local_path* if it exists and returns it.
        """

    @abstractmethod
    def put(self, bucket_spec: str, key: str, local_path: str) -> None:
        """Upload *local_path* to *key*."""
