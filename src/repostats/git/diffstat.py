"""Diff statistics between tree snapshots."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from git import GitCommandError, Tree
from git.exc import BadName, BadObject

from .history import CommitRecord
from .repository import GitRepo

logger = logging.getLogger(__name__)

# Well-known id of the empty tree; git resolves it even when the object is
# not stored in the repository.
EMPTY_TREE_SHA = "4b825dc642cb6eb9a060e54bf8d69288fbee4904"


@dataclass(frozen=True, slots=True)
class DiffStat:
    files_changed: int = 0
    insertions: int = 0
    deletions: int = 0

    def __add__(self, other: "DiffStat") -> "DiffStat":
        return DiffStat(
            self.files_changed + other.files_changed,
            self.insertions + other.insertions,
            self.deletions + other.deletions,
        )

    @classmethod
    def from_numstat(cls, output: str) -> "DiffStat":
        """Parse ``git diff --numstat`` output.

        Binary files are listed as ``-\\t-\\tpath``; they count as a changed
        file but contribute no lines.
        """

        files = insertions = deletions = 0
        for line in output.splitlines():
            if not line.strip():
                continue
            added, deleted, _ = line.split("\t", 2)
            files += 1
            if added != "-":
                insertions += int(added)
            if deleted != "-":
                deletions += int(deleted)
        return cls(files, insertions, deletions)


def _tree_id(tree: Tree | str) -> str:
    return tree if isinstance(tree, str) else tree.hexsha


def diff_stats(git_repo: GitRepo, old_tree: Optional[Tree | str], new_tree: Tree | str) -> DiffStat:
    """Count changed files and lines between two trees.

    ``old_tree=None`` diffs against the empty tree, so everything in
    ``new_tree`` counts as inserted. Rename detection is off: a rename shows
    up as one deletion plus one addition. If git cannot produce the stats a
    zeroed :class:`DiffStat` is returned instead of raising.
    """

    old_id = EMPTY_TREE_SHA if old_tree is None else _tree_id(old_tree)
    new_id = _tree_id(new_tree)
    try:
        output = git_repo.repo.git.diff("--numstat", "--no-renames", "--no-ext-diff", old_id, new_id)
        return DiffStat.from_numstat(output)
    except (GitCommandError, ValueError) as e:
        logger.warning("Could not compute diff stats for %s..%s: %s", old_id[:7], new_id[:7], e)
        return DiffStat()


def commit_stats(git_repo: GitRepo, record: CommitRecord) -> DiffStat:
    """Diff stats of a commit against its first parent (or the empty tree).

    Merge commits are only compared with their first parent.
    """

    try:
        commit = git_repo.repo.commit(record.id)
        parent_tree = commit.parents[0].tree if commit.parents else None
        tree = commit.tree
    except (BadName, BadObject, ValueError) as e:
        logger.warning("Could not load trees for commit %s: %s", record.short_id, e)
        return DiffStat()
    stat = diff_stats(git_repo, parent_tree, tree)
    logger.debug("%s: %s", record.short_id, stat)
    return stat
