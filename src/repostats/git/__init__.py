"""Git integration: repository access, history traversal and diff statistics."""

from .diffstat import DiffStat, commit_stats, diff_stats
from .history import UNKNOWN_AUTHOR, CommitRecord, walk, walk_full_history, walk_range
from .repository import GitRepo, TagLookup, TagRange, TagStatus

__all__ = [
    "GitRepo",
    "TagLookup",
    "TagRange",
    "TagStatus",
    "CommitRecord",
    "UNKNOWN_AUTHOR",
    "walk",
    "walk_full_history",
    "walk_range",
    "DiffStat",
    "diff_stats",
    "commit_stats",
]
