"""Path-addressed file and folder entities."""

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Optional, Union

from . import file_utils


class EntityKind(str, Enum):
    """Discriminant of a matched path."""

    FILE = "file"
    FOLDER = "folder"


@dataclass(frozen=True)
class FileEntity:
    """A file or folder addressed by its path.

    Entities hold no filesystem state: every query goes to the filesystem
    again. Matches build fresh entities on each traversal and never keep
    them around.
    """

    path: str
    """Path as matched (relative to cwd when cwd is set)"""

    cwd: Optional[str] = None
    """Directory the path is relative to, None if path is used as-is"""

    sync_mode: bool = field(default=False, compare=False)
    """Whether filesystem actions on this entity run synchronously (not part
    of equality or hashing)"""

    kind: ClassVar[Optional[EntityKind]] = None

    def __post_init__(self) -> None:
        self._init()

    def _init(self) -> None:
        """Extension point run at the end of construction."""

    @property
    def full_path(self) -> str:
        """Path used for every filesystem query."""
        if self.cwd is None:
            return self.path
        return os.path.join(self.cwd, self.path)

    # ------------------------------------------------------------------
    # Filesystem state
    # ------------------------------------------------------------------

    def exists(self) -> bool:
        """Check if this file or folder exists.

        Can be False for an entity created ahead of its file, or for one
        removed since it was matched.
        """
        return file_utils.exists(self.full_path)

    def is_real(self) -> bool:
        return self.exists()

    def is_folder(self) -> bool:
        """Check if this entity currently is a folder."""
        return file_utils.is_folder(self.full_path)

    def is_dir(self) -> bool:
        return self.is_folder()

    def is_directory(self) -> bool:
        return self.is_folder()

    def is_file(self) -> bool:
        """Check if this entity currently is a file."""
        return file_utils.is_file(self.full_path)

    # ------------------------------------------------------------------
    # Filesystem actions
    # ------------------------------------------------------------------
    # Reserved for future filesystem mutation. They do nothing for now.

    def copy(self) -> None:
        """Copy this entity. Not implemented, does nothing."""

    def move(self) -> None:
        """Move this entity. Not implemented, does nothing."""

    def delete(self) -> None:
        """Delete this entity. Not implemented, does nothing."""

    def remove(self) -> None:
        self.delete()

    def to_dict(self) -> dict[str, Any]:
        """Convert entity to dictionary for JSON output."""
        return {
            "path": self.path,
            "full_path": self.full_path,
            "kind": self.kind.value if self.kind else None,
        }


@dataclass(frozen=True)
class File(FileEntity):
    """A matched file, with live size and modification time."""

    kind: ClassVar[Optional[EntityKind]] = EntityKind.FILE

    def size(self) -> int:
        """File size in bytes."""
        return file_utils.get_size(self.full_path)

    def last_modified(self) -> float:
        """Last modification time (Unix timestamp)."""
        return file_utils.get_last_modified(self.full_path)

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["size"] = self.size()
        data["last_modified"] = self.last_modified()
        return data


@dataclass(frozen=True)
class Folder(FileEntity):
    """A matched folder."""

    kind: ClassVar[Optional[EntityKind]] = EntityKind.FOLDER


def create_entity(
    path: str, cwd: Optional[str] = None, sync_mode: bool = False
) -> Union[File, Folder]:
    """Classify a path and wrap it in the matching entity type.

    Anything that is not a regular file right now (folders, but also paths
    that vanished since they were matched) becomes a Folder.

    Args:
        path: Path as matched
        cwd: Directory the path is relative to
        sync_mode: Passed through to the entity

    Returns:
        File or Folder instance
    """
    full_path = path if cwd is None else os.path.join(cwd, path)
    if file_utils.is_file(full_path):
        return File(path, cwd, sync_mode)
    return Folder(path, cwd, sync_mode)
