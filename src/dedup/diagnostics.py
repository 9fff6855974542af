"""Diagnostic events and the sinks that receive them.

Stages never write to the console themselves. They emit plain dict events
into a sink, and the console sink renders them as text on stderr.
"""

import sys

ENTRY_SKIPPED = "entry-skipped"
ENTRY_FAILED = "entry-failed"
HASH_FAILED = "hash-failed"
ROOT_FAILED = "root-failed"
ENGINE_INIT_FAILED = "engine-init-failed"
CONFIG_FAILED = "config-failed"
INFO = "info"


def event(kind: str, path: str | None = None, reason: str = "", message: str = "") -> dict:
    """Build a diagnostic event."""
    return {"event": kind, "path": path, "reason": reason, "message": message}


def from_error(kind: str, err) -> dict:
    """Build an event from a DedupError."""
    return event(kind, path=err.path, reason=err.reason)


def format_event(ev: dict, verbose: bool = False) -> str | None:
    """Render an event as one line of text, or None if it is not shown."""
    kind = ev["event"]
    if kind == ENTRY_SKIPPED:
        return f'Skipping entry: "{ev["path"]}"'
    if kind in (ENTRY_FAILED, HASH_FAILED):
        return f'error: failed to process "{ev["path"]}": {ev["reason"]}'
    if kind == ROOT_FAILED:
        return f'error: cannot scan "{ev["path"]}": {ev["reason"]}'
    if kind in (ENGINE_INIT_FAILED, CONFIG_FAILED):
        return f"error: {ev['reason']}"
    if kind == INFO:
        return f"  {ev['message']}" if verbose else None
    return None


class ConsoleSink:
    """Print events to stderr, one whole line per print call."""

    def __init__(self, stream=None, verbose: bool = False):
        self.stream = stream
        self.verbose = verbose

    def emit(self, ev: dict) -> None:
        line = format_event(ev, verbose=self.verbose)
        if line is None:
            return
        print(line, file=self.stream or sys.stderr, flush=True)


class CollectingSink:
    """Keep events in memory."""

    def __init__(self):
        self.events: list[dict] = []

    def emit(self, ev: dict) -> None:
        self.events.append(ev)

    def of_kind(self, kind: str) -> list[dict]:
        return [e for e in self.events if e["event"] == kind]
