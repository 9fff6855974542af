"""Print confirmed duplicate groups to stdout."""

import sys


def digest_hex(digest: bytes) -> str:
    """Lowercase hex, two characters per byte, no separators."""
    return digest.hex()


def duplicate_groups(
    digest_groups: dict[bytes, list[str]], sort: bool = True
) -> list[tuple[bytes, list[str]]]:
    """Return the groups with two or more members.

    Sorted by digest, then path, unless sort is False, in which case the
    mapping's insertion order is kept.
    """
    groups = [(digest, list(paths)) for digest, paths in digest_groups.items() if len(paths) > 1]
    if sort:
        groups = sorted((digest, sorted(paths)) for digest, paths in groups)
    return groups


def _render(groups: list[tuple[bytes, list[str]]]) -> str:
    lines = []
    for digest, paths in groups:
        lines.append(digest_hex(digest))
        lines.extend(f"\t{path}" for path in paths)
    return "".join(f"{line}\n" for line in lines)


def format_duplicates(digest_groups: dict[bytes, list[str]], sort: bool = True) -> str:
    return _render(duplicate_groups(digest_groups, sort=sort))


def print_duplicates(digest_groups: dict[bytes, list[str]], stream=None, sort: bool = True) -> int:
    """Write every duplicate group and return how many were written."""
    stream = stream or sys.stdout
    groups = duplicate_groups(digest_groups, sort=sort)
    stream.write(_render(groups))
    stream.flush()
    return len(groups)
