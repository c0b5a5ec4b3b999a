"""Unit tests for filesystem queries and glob resolution."""

import asyncio
import os
import tempfile
from pathlib import Path

import pytest

from filematch import file_utils
from filematch.exceptions import ResolutionError


@pytest.fixture
def temp_dir():
    """Create a small directory tree."""
    with tempfile.TemporaryDirectory() as tmpdir:
        root = Path(tmpdir)
        (root / "b.txt").write_text("bb")
        (root / "a.txt").write_text("a")
        (root / ".hidden.txt").write_text("h")
        (root / "nested" / "deep").mkdir(parents=True)
        (root / "nested" / "n.txt").write_text("n")
        (root / "nested" / "deep" / "d.txt").write_text("d")
        yield root


class TestQueries:
    """Tests for exists/is_file/is_folder and metadata."""

    def test_exists(self, temp_dir):
        assert file_utils.exists(str(temp_dir / "a.txt")) is True
        assert file_utils.exists(str(temp_dir / "nested")) is True
        assert file_utils.exists(str(temp_dir / "nope")) is False

    def test_is_file_and_folder(self, temp_dir):
        assert file_utils.is_file(str(temp_dir / "a.txt")) is True
        assert file_utils.is_folder(str(temp_dir / "a.txt")) is False
        assert file_utils.is_folder(str(temp_dir / "nested")) is True
        assert file_utils.is_file(str(temp_dir / "nested")) is False

    def test_size_and_last_modified(self, temp_dir):
        path = str(temp_dir / "b.txt")
        os.utime(path, (1_234_567, 1_234_567))

        assert file_utils.get_size(path) == 2
        assert file_utils.get_last_modified(path) == 1_234_567


class TestResolveGlob:
    """Tests for resolve_glob."""

    def test_paths_are_relative_and_sorted(self, temp_dir):
        assert file_utils.resolve_glob("*.txt", str(temp_dir)) == ["a.txt", "b.txt"]

    def test_recursive_pattern(self, temp_dir):
        paths = file_utils.resolve_glob("**/*.txt", str(temp_dir))

        assert paths == ["a.txt", "b.txt", "nested/deep/d.txt", "nested/n.txt"]

    def test_hidden_files_need_explicit_dot(self, temp_dir):
        assert ".hidden.txt" not in file_utils.resolve_glob("*", str(temp_dir))
        assert file_utils.resolve_glob(".*.txt", str(temp_dir)) == [".hidden.txt"]

    def test_folders_are_matched(self, temp_dir):
        assert file_utils.resolve_glob("nest*", str(temp_dir)) == ["nested"]

    def test_no_match(self, temp_dir):
        assert file_utils.resolve_glob("*.none", str(temp_dir)) == []

    def test_missing_root(self, temp_dir):
        with pytest.raises(ResolutionError, match="does not exist"):
            file_utils.resolve_glob("*", str(temp_dir / "missing"))

    def test_root_is_a_file(self, temp_dir):
        with pytest.raises(ResolutionError):
            file_utils.resolve_glob("*", str(temp_dir / "a.txt"))

    def test_empty_pattern(self, temp_dir):
        with pytest.raises(ResolutionError, match="empty"):
            file_utils.resolve_glob("", str(temp_dir))

    def test_async_variant(self, temp_dir):
        paths = asyncio.run(file_utils.resolve_glob_async("*.txt", str(temp_dir)))

        assert paths == ["a.txt", "b.txt"]

    def test_async_variant_propagates_errors(self, temp_dir):
        with pytest.raises(ResolutionError):
            asyncio.run(file_utils.resolve_glob_async("*", str(temp_dir / "missing")))
