"""Bucket candidate files by exact byte size."""

from collections.abc import Iterable, Iterator


def group_by_size(
    candidates: Iterable[tuple[str, int]],
    groups: dict[int, list[str]] | None = None,
) -> dict[int, list[str]]:
    """Accumulate (path, size) pairs into a size → paths mapping.

    Pass an existing mapping to keep adding to it (one call per root).
    """
    if groups is None:
        groups = {}
    for path, size in candidates:
        groups.setdefault(size, []).append(path)
    return groups


def hashable_buckets(groups: dict[int, list[str]]) -> Iterator[tuple[int, list[str]]]:
    """Yield only the size buckets that can hold a duplicate."""
    for size, paths in groups.items():
        if len(paths) > 1:
            yield size, paths
