"""Filesystem queries and glob resolution used by matches and entities.

Every query hits the live filesystem; nothing is cached. The filesystem may
change between two calls and callers have to live with that.
"""

import asyncio
import glob
import logging
import os
import re

from .exceptions import ResolutionError

logger = logging.getLogger(__name__)


# =============================================================================
# Filesystem state
# =============================================================================


def exists(path: str) -> bool:
    """Check if a file or folder exists at path."""
    return os.path.exists(path)


def is_file(path: str) -> bool:
    """Check if path points to a regular file (symlinks are followed)."""
    return os.path.isfile(path)


def is_folder(path: str) -> bool:
    """Check if path points to a directory (symlinks are followed)."""
    return os.path.isdir(path)


# =============================================================================
# File metadata
# =============================================================================


def get_size(path: str) -> int:
    """Get file size in bytes.

    Raises:
        OSError: If the file cannot be stat'ed
    """
    return os.stat(path).st_size


def get_last_modified(path: str) -> float:
    """Get last modification time as a Unix timestamp.

    Raises:
        OSError: If the file cannot be stat'ed
    """
    return os.stat(path).st_mtime


# =============================================================================
# Glob resolution
# =============================================================================


def resolve_glob(pattern: str, root_dir: str) -> list[str]:
    """Resolve a glob pattern against a root directory.

    ``**`` matches any number of nested directories. Names starting with a
    dot are only matched when the pattern spells the dot out.

    Args:
        pattern: Glob pattern (e.g., "**/*.txt")
        root_dir: Directory the pattern is resolved from

    Returns:
        Sorted list of matching paths relative to root_dir, using forward
        slashes on all platforms

    Raises:
        ResolutionError: If the pattern is empty, the root is not a readable
            directory, or the resolution itself fails
    """
    if not pattern:
        raise ResolutionError("Glob pattern must not be empty")
    if not os.path.isdir(root_dir):
        raise ResolutionError(f"Root directory does not exist: {root_dir}")
    if not os.access(root_dir, os.R_OK | os.X_OK):
        raise ResolutionError(f"Root directory is not readable: {root_dir}")

    try:
        matches = glob.glob(pattern, root_dir=root_dir, recursive=True)
    except (OSError, re.error) as e:
        raise ResolutionError(
            f"Failed to resolve '{pattern}' in {root_dir}: {e}"
        ) from e

    paths = sorted(p.replace(os.sep, "/") for p in matches)
    logger.debug(f"Resolved '{pattern}' in {root_dir}: {len(paths)} paths")
    return paths


async def resolve_glob_async(pattern: str, root_dir: str) -> list[str]:
    """Resolve a glob pattern in a worker thread.

    Same contract as :func:`resolve_glob`, without blocking the event loop.
    """
    return await asyncio.to_thread(resolve_glob, pattern, root_dir)
