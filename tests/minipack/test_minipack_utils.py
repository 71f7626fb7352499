"""
Tests for the download, extraction and glob copy utilities.
"""

import pathlib

import pytest
import requests

from minipack.minipack_exceptions import CopyError, DownloadError, ExtractionError
from minipack.minipack_logger import MinipackLogger
from minipack.minipack_utils import FileUtils, keyed_name
from tests.minipack.helpers import make_tarball


@pytest.fixture
def logger():
    return MinipackLogger()


def _write(root: pathlib.Path, files):
    for rel_path, content in files.items():
        path = root / rel_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)


def _relative_files(root: pathlib.Path):
    return sorted(p.relative_to(root).as_posix() for p in root.rglob("*") if p.is_file())


class TestKeyedName:
    def test_with_key(self):
        assert keyed_name("vue", "3.4.1") == "vue@3.4.1"

    def test_without_key(self):
        assert keyed_name("vue") == "vue"
        assert keyed_name("vue", "") == "vue"


class TestExtractTarball:
    """Tests for FileUtils.extract_tarball (runs the system tar)."""

    @pytest.fixture
    def archive(self, tmp_path):
        path = tmp_path / "archive.tar.gz"
        path.write_bytes(
            make_tarball(
                {"LICENSE": "MIT", "dist/a.js": "a", "dist/nested/b.js": "b"},
                root="repo-1.0.0",
            )
        )
        return path

    def test_extract_keeps_wrapper_directory(self, logger, archive, tmp_path):
        dest = tmp_path / "out"
        dest.mkdir()
        FileUtils.extract_tarball(logger, str(archive), str(dest))

        assert _relative_files(dest) == [
            "repo-1.0.0/LICENSE",
            "repo-1.0.0/dist/a.js",
            "repo-1.0.0/dist/nested/b.js",
        ]

    def test_flatten_strips_leading_component(self, logger, archive, tmp_path):
        dest = tmp_path / "out"
        dest.mkdir()
        FileUtils.extract_tarball(logger, str(archive), str(dest), flatten=True)

        files = _relative_files(dest)
        assert files == ["LICENSE", "dist/a.js", "dist/nested/b.js"]
        assert not any(f.startswith("repo-1.0.0") for f in files)

    def test_invalid_archive_raises_with_tar_diagnostics(self, logger, tmp_path):
        bogus = tmp_path / "download"
        bogus.write_bytes(b"this is not a tarball")
        dest = tmp_path / "out"
        dest.mkdir()

        with pytest.raises(ExtractionError) as exc_info:
            FileUtils.extract_tarball(logger, str(bogus), str(dest))

        assert str(exc_info.value).strip() != ""

    def test_missing_tar_binary(self, logger, archive, tmp_path, monkeypatch):
        def raise_missing(*args, **kwargs):
            raise FileNotFoundError("tar")

        monkeypatch.setattr("minipack.minipack_utils.subprocess.run", raise_missing)

        with pytest.raises(ExtractionError):
            FileUtils.extract_tarball(logger, str(archive), str(tmp_path))


class TestGlobCopy:
    """Tests for FileUtils.glob_copy."""

    @pytest.fixture
    def source(self, tmp_path):
        root = tmp_path / "src"
        _write(
            root,
            {
                "LICENSE": "MIT",
                "README.md": "readme",
                "dist/a.js": "a",
                "dist/a.css": "css",
                "dist/nested/b.js": "b",
                "scripts/build.sh": "echo",
            },
        )
        return root

    def test_preserves_relative_structure(self, source, tmp_path):
        dest = tmp_path / "dest"
        FileUtils.glob_copy("dist/*.js", str(source), str(dest))

        assert _relative_files(dest) == ["dist/a.js"]
        assert (dest / "dist" / "a.js").read_text() == "a"

    def test_patterns_are_unioned(self, source, tmp_path):
        dest = tmp_path / "dest"
        FileUtils.glob_copy(["*LICENSE*", "scripts/*", "LICENSE"], str(source), str(dest))

        assert _relative_files(dest) == ["LICENSE", "scripts/build.sh"]

    def test_recursive_default_pattern_copies_everything(self, source, tmp_path):
        dest = tmp_path / "dest"
        FileUtils.glob_copy(["**/*"], str(source), str(dest))

        assert _relative_files(dest) == _relative_files(source)

    def test_directories_are_not_copied_as_entries(self, source, tmp_path):
        dest = tmp_path / "dest"
        (source / "empty").mkdir()
        copied = FileUtils.glob_copy("*", str(source), str(dest))

        assert all(p.is_file() for p in copied)
        assert not (dest / "empty").exists()
        assert not (dest / "dist").exists()

    def test_copy_is_repeatable(self, source, tmp_path):
        dest = tmp_path / "dest"
        FileUtils.glob_copy("dist/**/*.js", str(source), str(dest))
        FileUtils.glob_copy("dist/**/*.js", str(source), str(dest))

        assert _relative_files(dest) == ["dist/a.js", "dist/nested/b.js"]

    def test_filesystem_error_raises_copy_error(self, source, tmp_path):
        blocker = tmp_path / "dest"
        blocker.write_text("a file where a directory is expected")

        with pytest.raises(CopyError):
            FileUtils.glob_copy("LICENSE", str(source), str(blocker))

    def test_absolute_pattern_raises_copy_error(self, source, tmp_path):
        with pytest.raises(CopyError):
            FileUtils.glob_copy(str(source / "*"), str(source), str(tmp_path / "dest"))


class TestDownloadFile:
    """Tests for FileUtils.download_file."""

    def test_writes_body(self, logger, fake_http, tmp_path):
        fake_http.add("https://example.com/a.tgz", b"payload")
        target = tmp_path / "download"

        FileUtils.download_file(logger, "https://example.com/a.tgz", str(target))

        assert target.read_bytes() == b"payload"

    def test_non_success_status(self, logger, fake_http, tmp_path):
        with pytest.raises(DownloadError) as exc_info:
            FileUtils.download_file(
                logger, "https://example.com/missing.tgz", str(tmp_path / "download")
            )

        assert "Not Found" in str(exc_info.value)
        assert "https://example.com/missing.tgz" in str(exc_info.value)

    def test_transport_error(self, logger, fake_http, tmp_path):
        fake_http.fail("https://example.com/a.tgz", requests.ConnectionError("refused"))

        with pytest.raises(DownloadError) as exc_info:
            FileUtils.download_file(logger, "https://example.com/a.tgz", str(tmp_path / "d"))

        assert "refused" in str(exc_info.value)


class TestEmptyDir:
    def test_creates_missing_directory(self, tmp_path):
        target = tmp_path / "a" / "b"
        FileUtils.empty_dir(str(target))
        assert target.is_dir()

    def test_empties_existing_directory(self, tmp_path):
        _write(tmp_path / "d", {"x.txt": "x", "sub/y.txt": "y"})
        FileUtils.empty_dir(str(tmp_path / "d"))

        assert (tmp_path / "d").is_dir()
        assert list((tmp_path / "d").iterdir()) == []
