"""Glob matches over a directory, with typed traversal and file list hashes.

Examples:
    >>> m = match_sync("**/*.txt", "/data")
    >>> sizes = m.files(lambda f: f.size())
    >>> digest = m.generate_file_list_hash(include_size=True)

    From a coroutine:

    >>> m = await match_async("**/*.txt", "/data")
    >>> await m.update_async()
"""

import asyncio
import logging
import os
import threading
from collections.abc import Awaitable, Iterator, Sequence
from typing import Any, Callable, Optional, Union

from . import file_utils
from .entities import File, FileEntity, Folder, create_entity
from .exceptions import ConcurrentUpdateError, UninitializedStateError
from .utils import build_file_signature, hash_file_signatures

logger = logging.getLogger(__name__)

PathFilter = Callable[[str], bool]
Resolver = Callable[[str, str], Sequence[str]]
AsyncResolver = Callable[[str, str], Awaitable[Sequence[str]]]


class Match:
    """Files and folders targeted by a glob pattern.

    The matched paths are only read from disk by :meth:`update` or
    :meth:`update_async`. Until the first successful update, ``paths`` is
    ``None`` and every traversal raises :class:`UninitializedStateError`.

    Each update replaces ``paths`` with a new tuple, so snapshots handed out
    earlier never change under the caller. Only one update can run at a
    time; a second one raises :class:`ConcurrentUpdateError` instead of
    waiting.
    """

    def __init__(
        self,
        pattern: str,
        cwd: Optional[Union[str, os.PathLike]] = None,
        filter: Optional[PathFilter] = None,
        sync_mode: bool = False,
        resolver: Optional[Resolver] = None,
        async_resolver: Optional[AsyncResolver] = None,
    ):
        """Initialize a match.

        Args:
            pattern: Glob pattern, resolved relative to cwd
            cwd: Root directory to search from (default: current directory)
            filter: Predicate on each matched relative path, applied on every
                update. Paths for which it returns False are dropped.
            sync_mode: Resolve immediately in the constructor and hand the
                mode down to created entities
            resolver: Glob capability (pattern, root) -> paths. Defaults to
                :func:`file_utils.resolve_glob`.
            async_resolver: Coroutine version of the resolver. Defaults to
                :func:`file_utils.resolve_glob_async` when no resolver is
                given, otherwise to running ``resolver`` in a worker thread.
        """
        self._pattern = pattern
        self._cwd = os.fspath(cwd) if cwd is not None else os.getcwd()
        self._filter = filter
        self._sync_mode = sync_mode
        self._resolver: Resolver = resolver or file_utils.resolve_glob
        if async_resolver is None and resolver is None:
            async_resolver = file_utils.resolve_glob_async
        self._async_resolver: Optional[AsyncResolver] = async_resolver
        self._paths: Optional[tuple[str, ...]] = None
        self._update_lock = threading.Lock()

        if sync_mode:
            self.update()

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------

    @property
    def pattern(self) -> str:
        return self._pattern

    @property
    def cwd(self) -> str:
        return self._cwd

    @property
    def filter(self) -> Optional[PathFilter]:
        return self._filter

    @property
    def sync_mode(self) -> bool:
        return self._sync_mode

    @property
    def paths(self) -> Optional[tuple[str, ...]]:
        """Matched relative paths from the last successful update, or None."""
        return self._paths

    @property
    def is_updating(self) -> bool:
        """Whether an update is currently in flight."""
        return self._update_lock.locked()

    # ------------------------------------------------------------------
    # Update
    # ------------------------------------------------------------------

    def _acquire_update(self) -> None:
        if not self._update_lock.acquire(blocking=False):
            raise ConcurrentUpdateError(
                f"Update already in progress for '{self._pattern}' in {self._cwd}"
            )

    def _store(self, resolved: Sequence[str]) -> tuple[str, ...]:
        if self._filter is not None:
            paths = tuple(p for p in resolved if self._filter(p))
        else:
            paths = tuple(resolved)

        self._paths = paths
        logger.debug(
            f"Matched {len(paths)} of {len(resolved)} paths "
            f"for '{self._pattern}' in {self._cwd}"
        )
        return paths

    def update(self) -> tuple[str, ...]:
        """Resolve the pattern again, blocking until done.

        On failure the previous paths are kept.

        Returns:
            The new paths snapshot

        Raises:
            ConcurrentUpdateError: If another update is in flight
            ResolutionError: If the pattern cannot be resolved
        """
        self._acquire_update()
        try:
            resolved = self._resolver(self._pattern, self._cwd)
            return self._store(resolved)
        finally:
            self._update_lock.release()

    async def update_async(self) -> tuple[str, ...]:
        """Resolve the pattern again without blocking the event loop.

        The busy check happens before the first suspension point, so a
        concurrent call fails right away. On failure the previous paths are
        kept.

        Returns:
            The new paths snapshot

        Raises:
            ConcurrentUpdateError: If another update is in flight
            ResolutionError: If the pattern cannot be resolved
        """
        self._acquire_update()
        try:
            if self._async_resolver is not None:
                resolved = await self._async_resolver(self._pattern, self._cwd)
            else:
                resolved = await asyncio.to_thread(
                    self._resolver, self._pattern, self._cwd
                )
            return self._store(resolved)
        finally:
            self._update_lock.release()

    def check_paths(self) -> tuple[str, ...]:
        """Return the current paths, failing if no update has completed yet.

        Raises:
            UninitializedStateError: If paths were never resolved
        """
        paths = self._paths
        if paths is None:
            raise UninitializedStateError(
                f"Paths for '{self._pattern}' are not resolved yet. "
                "Call update() or await update_async() first."
            )
        return paths

    # ------------------------------------------------------------------
    # Browse
    # ------------------------------------------------------------------

    def _full_path(self, path: str) -> str:
        return os.path.join(self._cwd, path)

    def all(
        self, handler: Optional[Callable[[FileEntity], Any]] = None
    ) -> list[Any]:
        """Browse all matched files and folders.

        Every path is classified again on each call.

        Args:
            handler: Called with each File or Folder. When omitted the
                entities themselves are returned.

        Returns:
            Handler results in paths order
        """
        paths = self.check_paths()
        entities = [create_entity(p, self._cwd, self._sync_mode) for p in paths]
        if handler is None:
            return entities
        return [handler(entity) for entity in entities]

    def files(self, handler: Optional[Callable[[File], Any]] = None) -> list[Any]:
        """Browse matched files, skipping folders.

        Args:
            handler: Called with each File. When omitted the File objects
                are returned.

        Returns:
            Handler results in paths order
        """
        paths = self.check_paths()
        files = [
            File(p, self._cwd, self._sync_mode)
            for p in paths
            if file_utils.is_file(self._full_path(p))
        ]
        if handler is None:
            return files
        return [handler(f) for f in files]

    def folders(
        self, handler: Optional[Callable[[Folder], Any]] = None
    ) -> list[Any]:
        """Browse matched folders, skipping files.

        Args:
            handler: Called with each Folder. When omitted the Folder objects
                are returned.

        Returns:
            Handler results in paths order
        """
        paths = self.check_paths()
        folders = [
            Folder(p, self._cwd, self._sync_mode)
            for p in paths
            if file_utils.is_folder(self._full_path(p))
        ]
        if handler is None:
            return folders
        return [handler(f) for f in folders]

    # ------------------------------------------------------------------
    # Hash
    # ------------------------------------------------------------------

    def generate_file_list_hash(
        self, include_last_modified: bool = False, include_size: bool = False
    ) -> str:
        """Generate a hash from the current file list.

        Only files contribute, folders are skipped. The file path is always
        part of the hash, so adding or removing a file changes it even with
        both flags off. The hash follows paths order.

        Args:
            include_last_modified: Hash changes when any file's modification
                time changes
            include_size: Hash changes when any file's size changes

        Returns:
            SHA-256 hex digest (64 lowercase characters)
        """
        return hash_files(self.files(), include_last_modified, include_size)

    # ------------------------------------------------------------------
    # Container protocol
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self.check_paths())

    def __iter__(self) -> Iterator[str]:
        return iter(self.check_paths())

    def __repr__(self) -> str:
        count = "unresolved" if self._paths is None else len(self._paths)
        return f"Match(pattern={self._pattern!r}, cwd={self._cwd!r}, paths={count})"


def hash_files(
    files: Sequence[File],
    include_last_modified: bool = False,
    include_size: bool = False,
) -> str:
    """Hash a list of files the way :meth:`Match.generate_file_list_hash` does.

    Lets callers that already hold the result of :meth:`Match.files` hash
    exactly those files without classifying the paths again.
    """
    signatures = [
        build_file_signature(
            f.path,
            f.last_modified() if include_last_modified else None,
            f.size() if include_size else None,
        )
        for f in files
    ]
    return hash_file_signatures(signatures)


async def match_async(
    pattern: str,
    cwd: Optional[Union[str, os.PathLike]] = None,
    filter: Optional[PathFilter] = None,
    **kwargs: Any,
) -> Match:
    """Create an asynchronous match and resolve it once.

    Args:
        pattern: Glob pattern
        cwd: Root directory to search from (default: current directory)
        filter: Predicate on matched relative paths
        **kwargs: Forwarded to :class:`Match` (resolver, async_resolver)

    Returns:
        Resolved Match in asynchronous mode
    """
    match = Match(pattern, cwd, filter, sync_mode=False, **kwargs)
    await match.update_async()
    return match


def match_sync(
    pattern: str,
    cwd: Optional[Union[str, os.PathLike]] = None,
    filter: Optional[PathFilter] = None,
    **kwargs: Any,
) -> Match:
    """Create a synchronous match, resolved before returning."""
    return Match(pattern, cwd, filter, sync_mode=True, **kwargs)
