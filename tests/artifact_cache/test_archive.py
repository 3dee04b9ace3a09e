"""Tests for safe tarball extraction."""

import io
import random
import tarfile
import zlib
from pathlib import Path

import pytest

from conftest import make_tarball
from stemcell_builder.artifact_cache.archive import extract_tarball


def _write(path: Path, data: bytes) -> str:
    path.write_bytes(data)
    return str(path)


class TestExtraction:
    def test_preserves_structure(self, tmp_path: Path):
        archive = _write(
            tmp_path / "a.tgz",
            make_tarball({"image.vmx": b"vmx", "disks/disk-0.vmdk": b"disk"}),
        )
        dest = tmp_path / "out"

        extracted = extract_tarball(archive, str(dest))

        assert sorted(extracted) == ["disks/disk-0.vmdk", "image.vmx"]
        assert (dest / "image.vmx").read_bytes() == b"vmx"
        assert (dest / "disks" / "disk-0.vmdk").read_bytes() == b"disk"

    def test_creates_destination(self, tmp_path: Path):
        archive = _write(tmp_path / "a.tgz", make_tarball({"image.vmx": b"vmx"}))
        dest = tmp_path / "missing" / "dest"
        extract_tarball(archive, str(dest))
        assert (dest / "image.vmx").is_file()


class TestUnsafeMembersSkipped:
    def test_parent_traversal(self, tmp_path: Path):
        archive = _write(
            tmp_path / "a.tgz",
            make_tarball({"../escaped.txt": b"evil", "image.vmx": b"vmx"}),
        )
        dest = tmp_path / "out"

        extracted = extract_tarball(archive, str(dest))

        assert extracted == ["image.vmx"]
        assert not (tmp_path / "escaped.txt").exists()

    def test_symlink(self, tmp_path: Path):
        buf = io.BytesIO()
        with tarfile.open(fileobj=buf, mode="w:gz") as tf:
            link = tarfile.TarInfo(name="image.vmx")
            link.type = tarfile.SYMTYPE
            link.linkname = "/etc/passwd"
            tf.addfile(link)
        archive = _write(tmp_path / "a.tgz", buf.getvalue())
        dest = tmp_path / "out"

        assert extract_tarball(archive, str(dest)) == []
        assert not (dest / "image.vmx").exists()


class TestUnreadableArchive:
    def test_garbage_raises_tar_error(self, tmp_path: Path):
        archive = _write(tmp_path / "a.tgz", b"this is not a tarball")
        with pytest.raises(tarfile.TarError):
            extract_tarball(archive, str(tmp_path / "out"))


def _text_heavy_tarball() -> bytes:
    rng = random.Random(7)
    words = ["scsi0", "ethernet0", "virtualHW", "memsize", "numvcpus", "guestOS", "present", "TRUE"]
    lines = [f'{rng.choice(words)}.{rng.randint(0, 999)} = "{rng.choice(words)}"' for _ in range(20000)]
    return make_tarball({"image.vmx": "\n".join(lines).encode()})


def _incompressible_tarball() -> bytes:
    return make_tarball({"image.vmx": b"vmx", "disk.vmdk": random.Random(11).randbytes(300000)})


def _flip(data: bytes, fraction: float, count: int) -> bytes:
    start = int(len(data) * fraction)
    corrupted = bytearray(data)
    for i in range(start, start + count):
        corrupted[i] ^= 0xFF
    return bytes(corrupted)


class TestCorruptCompressedStream:
    def test_deflate_corruption_raises_tar_error(self, tmp_path: Path):
        archive = _write(tmp_path / "a.tgz", _flip(_text_heavy_tarball(), 0.8, 16))
        with pytest.raises((tarfile.TarError, OSError, EOFError)) as exc_info:
            extract_tarball(archive, str(tmp_path / "out"))
        assert not isinstance(exc_info.value, zlib.error)

    @pytest.mark.parametrize("fraction", [0.3, 0.5, 0.7, 0.9])
    def test_stored_block_corruption_fails_crc(self, tmp_path: Path, fraction: float):
        archive = _write(tmp_path / "a.tgz", _flip(_incompressible_tarball(), fraction, 64))
        with pytest.raises((OSError, tarfile.TarError)):
            extract_tarball(archive, str(tmp_path / "out"))

    def test_intact_archive_passes_crc(self, tmp_path: Path):
        archive = _write(tmp_path / "a.tgz", _incompressible_tarball())
        extracted = extract_tarball(archive, str(tmp_path / "out"))
        assert sorted(extracted) == ["disk.vmdk", "image.vmx"]
