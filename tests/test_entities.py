"""Unit tests for file and folder entities."""

import dataclasses
import os
import tempfile
from pathlib import Path

import pytest

from filematch.entities import EntityKind, File, FileEntity, Folder, create_entity


@pytest.fixture
def temp_dir():
    """Create a temporary directory with one file and one folder."""
    with tempfile.TemporaryDirectory() as tmpdir:
        root = Path(tmpdir)
        (root / "notes.txt").write_bytes(b"hello world")
        (root / "docs").mkdir()
        yield root


class TestFileEntity:
    """Tests for the FileEntity base class."""

    def test_full_path_joins_cwd(self, temp_dir):
        entity = FileEntity("notes.txt", str(temp_dir))

        assert entity.path == "notes.txt"
        assert entity.full_path == os.path.join(str(temp_dir), "notes.txt")

    def test_full_path_without_cwd(self, temp_dir):
        path = str(temp_dir / "notes.txt")

        assert FileEntity(path).full_path == path

    def test_state_queries(self, temp_dir):
        """Test exists/is_file/is_folder and their aliases."""
        file_entity = FileEntity("notes.txt", str(temp_dir))
        folder_entity = FileEntity("docs", str(temp_dir))

        assert file_entity.exists() is True
        assert file_entity.is_real() is True
        assert file_entity.is_file() is True
        assert file_entity.is_folder() is False
        assert folder_entity.is_folder() is True
        assert folder_entity.is_dir() is True
        assert folder_entity.is_directory() is True
        assert folder_entity.is_file() is False

    def test_missing_path(self, temp_dir):
        entity = FileEntity("missing.txt", str(temp_dir))

        assert entity.exists() is False
        assert entity.is_file() is False
        assert entity.is_folder() is False

    def test_state_is_not_cached(self, temp_dir):
        """Test that queries follow filesystem changes."""
        entity = FileEntity("later.txt", str(temp_dir))
        assert entity.exists() is False

        (temp_dir / "later.txt").write_text("now")

        assert entity.exists() is True

    def test_is_immutable(self, temp_dir):
        entity = FileEntity("notes.txt", str(temp_dir))

        with pytest.raises(dataclasses.FrozenInstanceError):
            entity.path = "other.txt"

    def test_actions_have_no_effect(self, temp_dir):
        """Test that the reserved actions leave the filesystem alone."""
        entity = File("notes.txt", str(temp_dir))

        assert entity.copy() is None
        assert entity.move() is None
        assert entity.delete() is None
        assert entity.remove() is None
        assert (temp_dir / "notes.txt").read_bytes() == b"hello world"

    def test_init_hook_runs_on_construction(self):
        """Test that subclasses can hook into construction."""
        created = []

        class TrackedFile(File):
            def _init(self):
                created.append(self.path)

        TrackedFile("a.txt")

        assert created == ["a.txt"]

    def test_base_has_no_kind(self):
        assert FileEntity("x").kind is None
        assert FileEntity("x").to_dict()["kind"] is None


class TestFileAndFolder:
    """Tests for the File and Folder variants."""

    def test_kinds(self):
        assert File("a").kind == EntityKind.FILE
        assert Folder("a").kind == EntityKind.FOLDER

    def test_variants_are_not_equal(self):
        """Test that the tag is part of the identity."""
        assert File("a", "/root") != Folder("a", "/root")
        assert File("a", "/root") == File("a", "/root")
        assert hash(File("a", "/root")) == hash(File("a", "/root"))

    def test_sync_mode_is_not_part_of_identity(self):
        """Test that the same path from sync and async matches is equal."""
        sync_file = File("a.txt", "/root", True)
        async_file = File("a.txt", "/root", False)

        assert sync_file == async_file
        assert hash(sync_file) == hash(async_file)
        assert len({sync_file, async_file}) == 1

    def test_file_metadata(self, temp_dir):
        entity = File("notes.txt", str(temp_dir))
        os.utime(temp_dir / "notes.txt", (1_500_000_000, 1_500_000_000))

        assert entity.size() == 11
        assert entity.last_modified() == 1_500_000_000

    def test_file_metadata_is_live(self, temp_dir):
        entity = File("notes.txt", str(temp_dir))

        (temp_dir / "notes.txt").write_bytes(b"x")

        assert entity.size() == 1

    def test_file_metadata_missing_file(self, temp_dir):
        with pytest.raises(FileNotFoundError):
            File("missing.txt", str(temp_dir)).size()

    def test_to_dict(self, temp_dir):
        data = File("notes.txt", str(temp_dir)).to_dict()

        assert data["path"] == "notes.txt"
        assert data["kind"] == "file"
        assert data["size"] == 11
        assert "last_modified" in data
        assert Folder("docs", str(temp_dir)).to_dict() == {
            "path": "docs",
            "full_path": os.path.join(str(temp_dir), "docs"),
            "kind": "folder",
        }


class TestCreateEntity:
    """Tests for create_entity classification."""

    def test_file_becomes_file(self, temp_dir):
        entity = create_entity("notes.txt", str(temp_dir), sync_mode=True)

        assert isinstance(entity, File)
        assert entity.sync_mode is True

    def test_folder_becomes_folder(self, temp_dir):
        assert isinstance(create_entity("docs", str(temp_dir)), Folder)

    def test_missing_path_becomes_folder(self, temp_dir):
        assert isinstance(create_entity("gone", str(temp_dir)), Folder)

    def test_absolute_path_without_cwd(self, temp_dir):
        entity = create_entity(str(temp_dir / "notes.txt"))

        assert isinstance(entity, File)
        assert entity.cwd is None
