"""filematch - Glob matches with typed traversal and file list hashes."""

from .config import MatchConfig, load_match_configs_from_json
from .entities import EntityKind, File, FileEntity, Folder, create_entity
from .exceptions import (
    ConcurrentUpdateError,
    FileMatchError,
    MatchConfigError,
    ResolutionError,
    UninitializedStateError,
)
from .match import Match, hash_files, match_async, match_sync
from .utils import sha256_hex

__all__ = [
    "Match",
    "match_async",
    "match_sync",
    "hash_files",
    "FileEntity",
    "File",
    "Folder",
    "EntityKind",
    "create_entity",
    "MatchConfig",
    "load_match_configs_from_json",
    "FileMatchError",
    "ResolutionError",
    "ConcurrentUpdateError",
    "UninitializedStateError",
    "MatchConfigError",
    "sha256_hex",
]
