"""Shared fixtures: an in-memory object store serving generated tarballs."""

import io
import os
import tarfile
from pathlib import Path
from typing import Iterator

import pytest

from stemcell_builder.exceptions import RemoteIOError
from stemcell_builder.storage.base import ObjectAddress, ObjectStoreClient

INPUT_BUCKET = "some-input-bucket"
OUTPUT_BUCKET = "some-output-bucket"


def make_tarball(files: dict[str, bytes]) -> bytes:
    """Build a gzip tarball in memory from ``{member name: content}``."""
    buf = io.BytesIO()
    with tarfile.open(fileobj=buf, mode="w:gz") as tf:
        for name, data in files.items():
            info = tarfile.TarInfo(name=name)
            info.size = len(data)
            tf.addfile(info, io.BytesIO(data))
    return buf.getvalue()


def vmx_tarball(major: int) -> bytes:
    return make_tarball(
        {
            "image.vmx": f'displayName = "stemcell-v{major}"\n'.encode(),
            "disk.vmdk": b"\x00" * 16,
        }
    )


class FakeObjectStore(ObjectStoreClient):
    """ObjectStoreClient keeping objects in a dict keyed by (bucket, key)."""

    def __init__(self):
        self.objects: dict[tuple[str, str], bytes] = {}
        self.get_calls: list[tuple[str, str, str]] = []
        self.put_calls: list[tuple[str, str, str]] = []

    def add(self, bucket_spec: str, key: str, data: bytes) -> None:
        address = ObjectAddress.parse(bucket_spec)
        self.objects[(address.bucket, address.key(key))] = data

    def list(self, bucket_spec: str) -> Iterator[str]:
        address = ObjectAddress.parse(bucket_spec)
        for bucket, key in sorted(self.objects):
            if bucket == address.bucket and key.startswith(address.key_prefix):
                yield key

    def get(self, bucket_spec: str, key: str, local_path: str) -> str:
        self.get_calls.append((bucket_spec, key, local_path))
        address = ObjectAddress.parse(bucket_spec)
        data = self.objects.get((address.bucket, address.key(key)))
        if data is None:
            raise RemoteIOError(f"Not found: {address.key(key)}", bucket=address.bucket, key=key)
        os.makedirs(os.path.dirname(os.path.abspath(local_path)), exist_ok=True)
        with open(local_path, "wb") as f:
            f.write(data)
        return local_path

    def put(self, bucket_spec: str, key: str, local_path: str) -> None:
        self.put_calls.append((bucket_spec, key, local_path))
        with open(local_path, "rb") as f:
            self.add(bucket_spec, key, f.read())


@pytest.fixture
def store() -> FakeObjectStore:
    store = FakeObjectStore()
    for major in (1, 2, 3, 4):
        store.add(INPUT_BUCKET, f"vmx-v{major}.tgz", vmx_tarball(major))
    return store


@pytest.fixture
def cache_dir(tmp_path: Path) -> Path:
    return tmp_path / "stemcell-builder-vmx-cache"
