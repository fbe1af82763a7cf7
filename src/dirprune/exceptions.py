from __future__ import annotations


class DirPruneError(Exception):
    """Base class for errors raised by dirprune."""


class RootPathError(DirPruneError):
    """Raised when the scan root is missing or is not a directory.

    Fatal: the run stops before anything is scanned.
    """


class TargetsError(DirPruneError):
    """Raised when the targets file cannot be read or names no directories.

    Fatal: the run stops before anything is scanned.
    """


class DeletionError(DirPruneError):
    """Raised when a directory tree could only be partially removed.

    Carries the first error seen and how many entries failed. The worker pool
    turns it into a failure outcome for that candidate only.
    """

    def __init__(self, path: str, first_error: str, failures: int) -> None:
        self.path = path
        self.first_error = first_error
        self.failures = failures
        message = first_error
        if failures > 1:
            message = f"{first_error} (and {failures - 1} more)"
        super().__init__(message)
