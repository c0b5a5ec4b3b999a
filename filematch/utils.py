"""Utility functions for filematch."""

import hashlib
from datetime import datetime
from typing import Optional, Union

# =============================================================================
# Constants for file list signatures
# =============================================================================

# Separates the path, last modified and size fields of one file signature
SIGNATURE_FIELD_SEPARATOR: str = "#"

# Separates the signatures of consecutive files
SIGNATURE_ENTRY_SEPARATOR: str = "_"


# =============================================================================
# Hash calculation utilities
# =============================================================================


def sha256_hex(data: str) -> str:
    """Calculate the SHA-256 digest of a string.

    Args:
        data: Text to hash (encoded as UTF-8)

    Returns:
        64 character lowercase hexadecimal digest

    Examples:
        >>> sha256_hex("")
        'e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855'
    """
    return hashlib.sha256(data.encode("utf-8")).hexdigest()


def build_file_signature(
    path: str,
    last_modified: Optional[float] = None,
    size: Optional[int] = None,
) -> str:
    """Build the signature of a single file for a file list hash.

    The path is always part of the signature, so adding or removing a file
    changes the list hash even when no metadata is included.

    Args:
        path: File path as stored in the match
        last_modified: Modification timestamp, or None to leave it out
        size: File size in bytes, or None to leave it out

    Returns:
        Signature string "path#last_modified#size"

    Examples:
        >>> build_file_signature("a.txt")
        'a.txt##'
        >>> build_file_signature("a.txt", size=10)
        'a.txt##10'
    """
    return SIGNATURE_FIELD_SEPARATOR.join(
        [
            path,
            "" if last_modified is None else str(last_modified),
            "" if size is None else str(size),
        ]
    )


def hash_file_signatures(signatures: list[str]) -> str:
    """Combine file signatures into a single list hash.

    Order matters: the same signatures in another order give another hash.
    """
    return sha256_hex(SIGNATURE_ENTRY_SEPARATOR.join(signatures))


# =============================================================================
# Formatting utilities
# =============================================================================


def format_size(size_bytes: int) -> str:
    """Format file size in human-readable format.

    Args:
        size_bytes: Size in bytes

    Returns:
        Formatted size string (e.g., "1.5 MB", "256 B")
    """
    if size_bytes < 1024:
        return f"{size_bytes} B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.1f} KB"
    elif size_bytes < 1024 * 1024 * 1024:
        return f"{size_bytes / 1024 / 1024:.1f} MB"
    else:
        return f"{size_bytes / 1024 / 1024 / 1024:.1f} GB"


def format_timestamp(timestamp: Union[int, float]) -> str:
    """Format a Unix timestamp as local ISO time (seconds precision)."""
    return datetime.fromtimestamp(timestamp).isoformat(timespec="seconds")
