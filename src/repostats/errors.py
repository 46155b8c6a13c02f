"""Exceptions raised by repostats.

Everything the command line reports to the user derives from
:class:`RepoStatsError`; the CLI turns these into a message and an exit code.
"""

from __future__ import annotations

from pathlib import Path


class RepoStatsError(Exception):
    """Base class for all user-facing repostats failures."""


class NotAGitRepository(RepoStatsError):
    """The path does not hold a git repository."""

    def __init__(self, path: Path | str):
        self.path = path
        super().__init__(f"'{path}' is NOT a git repo! Check your path.")


class TagNotFound(RepoStatsError):
    """No reference exists under refs/tags for the name."""

    def __init__(self, tag: str):
        self.tag = tag
        super().__init__(f"Tag '{tag}' does not exist!")


class TagUnresolvable(RepoStatsError):
    """The tag exists but does not lead to a commit (tree/blob target, broken tag object)."""

    def __init__(self, tag: str):
        self.tag = tag
        super().__init__(f"Cannot resolve tag '{tag}' to a commit")


class RevisionWalkError(RepoStatsError):
    """The commit graph could not be walked (corrupt history, dangling reference)."""

    def __init__(self, start: str, reason: str = ""):
        self.start = start
        message = f"Failed to walk history from '{start}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class OutputWriteError(RepoStatsError):
    """The rendered report could not be written to its destination."""

    def __init__(self, path: Path | str, reason: str = ""):
        self.path = path
        super().__init__(f"Failed to write to file '{path}': {reason}".rstrip(": "))


class ConfigError(RepoStatsError):
    """Raised when a configuration file cannot be parsed or holds bad values."""
