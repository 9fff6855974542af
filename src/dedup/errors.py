"""Error taxonomy for a dedup run.

Fatal errors stop the run: UsageError, ConfigError, RootError, EngineInitError.
Recoverable errors are caught by the stage that raised them and turned into
diagnostic events: TraversalEntryError, HashIOError.
"""


class DedupError(Exception):
    """Base class for every error raised by dedup."""

    def __init__(self, reason: str, path: str | None = None):
        super().__init__(reason)
        self.reason = reason
        self.path = path


class UsageError(DedupError):
    """No path arguments were supplied."""


class ConfigError(DedupError):
    """The configuration file is missing, unreadable or malformed."""


class RootError(DedupError):
    """A root argument is missing, not a directory, or cannot be listed."""


class EngineInitError(DedupError):
    """The BLAKE2b hash engine could not be created."""


class TraversalEntryError(DedupError):
    """A single filesystem entry could not be classified or sized."""


class HashIOError(DedupError):
    """A candidate file could not be opened or fully read while hashing."""
