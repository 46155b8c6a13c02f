"""Commit history traversal."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, Optional, Set, Tuple

from git import Commit, GitCommandError
from git.exc import BadName

from ..errors import RevisionWalkError
from .repository import GitRepo

logger = logging.getLogger(__name__)

UNKNOWN_AUTHOR = "Unknown"


def first_line(message: str) -> str:
    """Title line of a commit message. Only ``\\n`` separates lines."""
    return message.split("\n", 1)[0].rstrip("\r")


@dataclass(frozen=True, slots=True)
class CommitRecord:
    """Metadata about a single commit.

    ``timestamp`` is the committer time as ``(epoch_seconds, offset_minutes)``
    where the offset is minutes east of UTC.
    """

    id: str
    author_name: str
    timestamp: Tuple[int, int]
    message: str
    parent_ids: Tuple[str, ...] = ()

    @classmethod
    def from_commit(cls, commit: Commit, unknown_author: str = UNKNOWN_AUTHOR) -> "CommitRecord":
        # GitPython stores the offset in seconds *west* of UTC.
        offset_minutes = int(-commit.committer_tz_offset / 60)
        message = commit.message
        if isinstance(message, bytes):
            message = message.decode("utf-8", errors="replace")
        return cls(
            id=commit.hexsha,
            author_name=commit.author.name or unknown_author,
            timestamp=(commit.committed_date, offset_minutes),
            message=message,
            parent_ids=tuple(parent.hexsha for parent in commit.parents),
        )

    @property
    def short_id(self) -> str:
        return self.id[:7]

    @property
    def title(self) -> str:
        """First line of the commit message."""
        return first_line(self.message)

    @property
    def first_parent(self) -> Optional[str]:
        return self.parent_ids[0] if self.parent_ids else None


def walk(
    git_repo: GitRepo,
    start: str,
    exclude: Optional[str] = None,
    unknown_author: str = UNKNOWN_AUTHOR,
) -> Iterator[CommitRecord]:
    """Yield commits reachable from ``start``, most recent first.

    Parameters
    ----------
    git_repo:
        Repository to read from
    start:
        Commit id (or any revision git understands) to start from
    exclude:
        When given, every commit reachable from it, itself included, is left out
    unknown_author:
        Name used for commits whose author has no name

    Raises
    ------
    RevisionWalkError
        When git cannot build the revision list. Raised lazily, on iteration.
    """

    rev = f"{exclude}..{start}" if exclude else start
    logger.debug("Walking %s", rev)
    seen: Set[str] = set()
    try:
        for commit in git_repo.repo.iter_commits(rev):
            if commit.hexsha in seen:
                continue
            seen.add(commit.hexsha)
            yield CommitRecord.from_commit(commit, unknown_author)
    except (GitCommandError, BadName, ValueError) as e:
        raise RevisionWalkError(start, str(e).strip()) from e
    logger.debug("Walked %d commits from %s", len(seen), rev)


def walk_full_history(git_repo: GitRepo, unknown_author: str = UNKNOWN_AUTHOR) -> Iterator[CommitRecord]:
    """Yield every commit reachable from HEAD."""
    return walk(git_repo, git_repo.head_commit_id(), unknown_author=unknown_author)


def walk_range(
    git_repo: GitRepo,
    from_commit: str,
    to_commit: str,
    unknown_author: str = UNKNOWN_AUTHOR,
) -> Iterator[CommitRecord]:
    """Yield the commits in ``to_commit`` that are not in ``from_commit``."""
    return walk(git_repo, to_commit, exclude=from_commit, unknown_author=unknown_author)
