"""Confirm duplicates inside each size bucket with a BLAKE2b-512 digest."""

import hashlib

from dedup import diagnostics
from dedup.errors import EngineInitError, HashIOError
from dedup.intake.grouper import hashable_buckets

CHUNK_SIZE = 64 * 1024
DIGEST_SIZE = 64


def new_engine():
    """Create a fresh BLAKE2b-512 hash object.

    Failing to build one means the process is out of resources, which is
    fatal for the whole run rather than for a single file.
    """
    try:
        return hashlib.blake2b(digest_size=DIGEST_SIZE)
    except (MemoryError, ValueError) as e:
        raise EngineInitError(f"cannot initialise BLAKE2b-512: {str(e) or type(e).__name__}") from e


def hash_file(path: str, chunk_size: int = CHUNK_SIZE) -> bytes:
    """Compute the raw BLAKE2b-512 digest of a file using chunked reads."""
    h = new_engine()
    try:
        with open(path, "rb") as f:
            while chunk := f.read(chunk_size):
                h.update(chunk)
    except OSError as e:
        raise HashIOError(e.strerror or str(e), path) from e
    return h.digest()


def group_by_digest(
    size_groups: dict[int, list[str]],
    sink,
    chunk_size: int = CHUNK_SIZE,
    groups: dict[bytes, list[str]] | None = None,
) -> dict[bytes, list[str]]:
    """Hash every member of every size bucket with two or more paths.

    A path that cannot be opened or read is reported and left out; the rest
    of its bucket is still grouped. EngineInitError propagates.
    """
    if groups is None:
        groups = {}
    for _size, paths in hashable_buckets(size_groups):
        for path in paths:
            try:
                digest = hash_file(path, chunk_size)
            except HashIOError as e:
                sink.emit(diagnostics.from_error(diagnostics.HASH_FAILED, e))
                continue
            groups.setdefault(digest, []).append(path)
    return groups
