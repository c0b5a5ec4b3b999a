"""Match definitions loaded from dictionaries or JSON files.

A configuration file holds a list of match definitions:

    [
        {
            "pattern": "**/*.txt",
            "cwd": "/home/user/notes",
            "alias": "notes",
            "ignore": ["*.tmp", "drafts/*"],
            "excludeDotFiles": true,
            "includeLastModified": true,
            "includeSize": false
        }
    ]
"""

import json
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from fnmatch import fnmatch
from pathlib import Path
from typing import Any, Optional, Union

from .entities import File
from .exceptions import MatchConfigError
from .match import Match, PathFilter, hash_files

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("pattern",)


@dataclass
class MatchConfig:
    """A named glob match with its filter and hash options."""

    pattern: str
    """Glob pattern resolved relative to cwd"""

    cwd: Path = field(default_factory=lambda: Path("."))
    """Root directory of the match"""

    alias: Optional[str] = None
    """Optional display name"""

    ignore: list[str] = field(default_factory=list)
    """fnmatch patterns removing matched paths (tested on path and basename)"""

    exclude_dot_files: bool = False
    """Whether to drop paths containing a segment starting with a dot"""

    include_last_modified: bool = False
    """Hash option: include file modification times"""

    include_size: bool = False
    """Hash option: include file sizes"""

    def __post_init__(self) -> None:
        if not isinstance(self.pattern, str) or not self.pattern:
            raise MatchConfigError("'pattern' must be a non-empty string")
        if isinstance(self.cwd, str):
            self.cwd = Path(self.cwd)
        elif not isinstance(self.cwd, Path):
            raise MatchConfigError("'cwd' must be a path string")
        if not isinstance(self.ignore, list) or not all(
            isinstance(p, str) for p in self.ignore
        ):
            raise MatchConfigError("'ignore' must be a list of strings")

    @property
    def name(self) -> str:
        """Alias if set, pattern otherwise."""
        return self.alias or self.pattern

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MatchConfig":
        """Create a match configuration from a dictionary.

        Args:
            data: Dictionary with camelCase keys

        Returns:
            MatchConfig instance

        Raises:
            MatchConfigError: If required fields are missing or invalid
        """
        if not isinstance(data, dict):
            raise MatchConfigError(
                f"Match definition must be an object, got {type(data).__name__}"
            )

        missing = [key for key in REQUIRED_FIELDS if key not in data]
        if missing:
            raise MatchConfigError(f"Missing required fields: {', '.join(missing)}")

        return cls(
            pattern=data["pattern"],
            cwd=data.get("cwd", "."),
            alias=data.get("alias"),
            ignore=data.get("ignore", []),
            exclude_dot_files=bool(data.get("excludeDotFiles", False)),
            include_last_modified=bool(data.get("includeLastModified", False)),
            include_size=bool(data.get("includeSize", False)),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to a dictionary with camelCase keys."""
        return {
            "pattern": self.pattern,
            "cwd": self.cwd.as_posix(),
            "alias": self.alias,
            "ignore": list(self.ignore),
            "excludeDotFiles": self.exclude_dot_files,
            "includeLastModified": self.include_last_modified,
            "includeSize": self.include_size,
        }

    def build_filter(self) -> Optional[PathFilter]:
        """Build the path filter for this configuration.

        Returns:
            Predicate keeping the wanted paths, or None if nothing is filtered
        """
        if not self.ignore and not self.exclude_dot_files:
            return None

        ignore = tuple(self.ignore)
        exclude_dot_files = self.exclude_dot_files

        def path_filter(path: str) -> bool:
            parts = path.split("/")
            if exclude_dot_files and any(part.startswith(".") for part in parts):
                return False
            name = parts[-1]
            return not any(fnmatch(path, p) or fnmatch(name, p) for p in ignore)

        return path_filter

    def create_match(self, sync_mode: bool = True, **kwargs: Any) -> Match:
        """Create a Match for this configuration.

        Args:
            sync_mode: Resolve the match before returning
            **kwargs: Forwarded to :class:`Match`
        """
        return Match(
            self.pattern,
            self.cwd,
            self.build_filter(),
            sync_mode=sync_mode,
            **kwargs,
        )

    def hash_files(self, files: Sequence[File]) -> str:
        """Hash files from a match with this configuration's hash options."""
        return hash_files(files, self.include_last_modified, self.include_size)


def load_match_configs_from_json(path: Union[str, Path]) -> list[MatchConfig]:
    """Load match definitions from a JSON file.

    Relative ``cwd`` entries are resolved against the file's directory.

    Args:
        path: JSON file holding a list of definitions (or a single one)

    Returns:
        List of MatchConfig objects

    Raises:
        MatchConfigError: If the file cannot be read or is invalid
    """
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise MatchConfigError(f"Cannot read match config {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise MatchConfigError(f"Invalid JSON in match config {path}: {e}") from e

    if isinstance(data, dict):
        data = [data]
    if not isinstance(data, list):
        raise MatchConfigError(
            f"Match config {path} must contain a list of match definitions"
        )

    configs = []
    for i, item in enumerate(data):
        try:
            config = MatchConfig.from_dict(item)
        except MatchConfigError as e:
            raise MatchConfigError(f"Match definition #{i} in {path}: {e}") from e
        if not config.cwd.is_absolute():
            config.cwd = path.parent / config.cwd
        configs.append(config)

    logger.debug(f"Loaded {len(configs)} match definitions from {path}")
    return configs
