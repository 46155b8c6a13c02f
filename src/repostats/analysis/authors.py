"""Per-author contribution statistics."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Tuple

from ..git.diffstat import DiffStat, commit_stats
from ..git.history import UNKNOWN_AUTHOR, CommitRecord, walk_full_history
from ..git.repository import GitRepo

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class AuthorStats:
    """Running totals for one author, updated once per commit."""

    commits: int = 0
    lines_added: int = 0
    lines_deleted: int = 0

    @property
    def total_lines(self) -> int:
        return self.lines_added + self.lines_deleted

    def record(self, stat: DiffStat) -> None:
        self.commits += 1
        self.lines_added += stat.insertions
        self.lines_deleted += stat.deletions


@dataclass(frozen=True, slots=True)
class AuthorContribution:
    """One row of the author report, with the percentage derived on demand."""

    author: str
    stats: AuthorStats
    total_contributions: int

    @property
    def percentage(self) -> float:
        if self.total_contributions <= 0:
            return 0.0
        return self.stats.total_lines / self.total_contributions * 100.0


def aggregate(
    commits: Iterable[Tuple[CommitRecord, DiffStat]],
    unknown_author: str = UNKNOWN_AUTHOR,
) -> Dict[str, AuthorStats]:
    """Fold ``(commit, stat)`` pairs into per-author totals.

    Authors are keyed by their exact display name. The returned mapping keeps
    the order in which authors were first seen.
    """

    totals: Dict[str, AuthorStats] = {}
    for record, stat in commits:
        name = record.author_name or unknown_author
        entry = totals.get(name)
        if entry is None:
            entry = totals[name] = AuthorStats()
        entry.record(stat)
    return totals


def contributions(totals: Dict[str, AuthorStats]) -> List[AuthorContribution]:
    """Rank authors by commit count, keeping first-seen order for ties."""

    total = sum(stats.total_lines for stats in totals.values())
    rows = [AuthorContribution(author, stats, total) for author, stats in totals.items()]
    return sorted(rows, key=lambda row: -row.stats.commits)


def collect_author_stats(git_repo: GitRepo, unknown_author: str = UNKNOWN_AUTHOR) -> List[AuthorContribution]:
    """Walk the full history from HEAD and return ranked author contributions."""

    pairs = (
        (record, commit_stats(git_repo, record))
        for record in walk_full_history(git_repo, unknown_author=unknown_author)
    )
    totals = aggregate(pairs, unknown_author=unknown_author)
    logger.debug("Aggregated %d authors", len(totals))
    return contributions(totals)
