from pathlib import Path
from typing import Optional


class MigrationError(Exception):
    """Base error for everything the migrator raises on purpose."""


class ConfigurationError(MigrationError):
    """Raised when input/output roots or other settings are missing or invalid."""


class TraversalError(MigrationError):
    """Raised when the input tree cannot be walked. Aborts the whole run."""


class FileMigrationError(MigrationError):
    """Error attributable to a single file of the export tree."""

    def __init__(self, path: Optional[Path], detail: str):
        self.path = path
        self.detail = detail
        where = str(path) if path is not None else "<graph>"
        super().__init__(f"{where}: {detail}")


class GraphParseError(FileMigrationError):
    """Raised when a description file cannot be parsed into a graph."""


class GraphSerializationError(FileMigrationError):
    """Raised when a rewritten graph cannot be serialized."""


class MalformedGraphError(FileMigrationError):
    """Raised when a graph holds a statement of an unexpected shape."""


class AmbiguousContainerError(MalformedGraphError):
    """Raised when more than one subject is typed as a base container."""
