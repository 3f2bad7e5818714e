"""
Exceptions raised by the ingest run.

Every fatal condition derives from IngestError so the CLI can report it and
exit non-zero. Per-file outcomes (skips, warnings) are never raised.
"""


class IngestError(RuntimeError):
    """Base class for errors that abort an ingest run."""


class ManifestError(IngestError):
    """The manifest is missing, unreadable, not JSON, or not a valid tree."""


class SourceDirError(IngestError):
    """The input directory cannot be listed."""


class ConfigError(IngestError):
    """A configuration value (flag or environment variable) is invalid."""
