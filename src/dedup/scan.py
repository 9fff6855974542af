"""Run the forward pipeline: collect → group by size → group by digest."""

from dedup import diagnostics
from dedup.config import DEFAULTS
from dedup.intake.collector import PathCollector
from dedup.intake.grouper import group_by_size, hashable_buckets
from dedup.intake.hasher import group_by_digest


def _info(sink, message: str) -> None:
    sink.emit(diagnostics.event(diagnostics.INFO, message=message))


def find_duplicates(roots, sink, config: dict | None = None) -> dict[bytes, list[str]]:
    """Scan every root, then hash the finished size buckets once.

    All roots are collected before hashing starts, so every size bucket is
    complete and no path is hashed twice. RootError and EngineInitError
    propagate to the caller.
    """
    config = config or DEFAULTS
    collector = PathCollector(sink, exclude=config.get("exclude", []))

    size_groups: dict[int, list[str]] = {}
    for root in roots:
        _info(sink, f"Scanning {root}")
        group_by_size(collector.collect(root), size_groups)

    total = sum(len(paths) for paths in size_groups.values())
    buckets = list(hashable_buckets(size_groups))
    to_hash = sum(len(paths) for _size, paths in buckets)
    _info(sink, f"Found {total} files in {len(size_groups)} size groups")
    _info(sink, f"Hashing {to_hash} files in {len(buckets)} size groups with more than one file")

    digest_groups = group_by_digest(
        size_groups, sink, chunk_size=config.get("chunk_size", DEFAULTS["chunk_size"])
    )

    dup_sets = sum(1 for paths in digest_groups.values() if len(paths) > 1)
    _info(sink, f"Found {dup_sets} duplicate sets across {len(digest_groups)} unique hashes")
    return digest_groups
