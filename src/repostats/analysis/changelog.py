"""Changelog generation between two tags."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Sequence, Tuple

from ..errors import TagNotFound, TagUnresolvable
from ..git.diffstat import DiffStat, diff_stats
from ..git.history import UNKNOWN_AUTHOR, CommitRecord, first_line, walk_range
from ..git.repository import GitRepo, TagRange, TagStatus

logger = logging.getLogger(__name__)

HUMAN_DATE_FORMAT = "%d %b %Y %H:%M:%S"


class Bucket(enum.Enum):
    FEATURE = "feature"
    FIX = "fix"
    OTHER = "other"

    @property
    def title(self) -> str:
        return _BUCKET_TITLES[self]


_BUCKET_TITLES = {
    Bucket.FEATURE: "New Features",
    Bucket.FIX: "Bug Fixes",
    Bucket.OTHER: "Other Changes",
}


@dataclass(frozen=True, slots=True)
class PrefixRule:
    """Put a commit in ``bucket`` when its title starts with ``prefix`` (case-sensitive)."""

    prefix: str
    bucket: Bucket

    def matches(self, title: str) -> bool:
        return title.startswith(self.prefix)


DEFAULT_RULES: Tuple[PrefixRule, ...] = (
    PrefixRule("feat", Bucket.FEATURE),
    PrefixRule("feature", Bucket.FEATURE),
    PrefixRule("Merged PR", Bucket.FEATURE),
    PrefixRule("task", Bucket.FEATURE),
    PrefixRule("fix", Bucket.FIX),
    PrefixRule("bug", Bucket.FIX),
)


def classify_message(message: str, rules: Sequence[PrefixRule] = DEFAULT_RULES) -> Bucket:
    """Return the bucket of the first rule matching the message's first line."""

    title = first_line(message)
    for rule in rules:
        if rule.matches(title):
            return rule.bucket
    return Bucket.OTHER


def classify(
    commits: Iterable[CommitRecord],
    rules: Sequence[PrefixRule] = DEFAULT_RULES,
) -> Dict[Bucket, List[CommitRecord]]:
    """Split commits into buckets, keeping traversal order inside each one.

    All three buckets are always present in the result, in display order.
    """

    buckets: Dict[Bucket, List[CommitRecord]] = {bucket: [] for bucket in Bucket}
    for record in commits:
        buckets[classify_message(record.message, rules)].append(record)
    return buckets


def format_timestamp(timestamp: Tuple[int, int], style: str = "human") -> str:
    """Render a ``(seconds, offset_minutes)`` pair.

    ``human`` gives ``DD Mon YYYY HH:MM:SS`` in UTC; ``raw`` gives the epoch
    seconds shifted by the committer's UTC offset.
    """

    seconds, offset_minutes = timestamp
    if style == "raw":
        return str(seconds + offset_minutes * 60)
    return datetime.fromtimestamp(seconds, tz=timezone.utc).strftime(HUMAN_DATE_FORMAT)


@dataclass(frozen=True, slots=True)
class ChangelogEntry:
    short_id: str
    author_name: str
    formatted_date: str
    title: str

    @classmethod
    def from_record(cls, record: CommitRecord, date_style: str = "human") -> "ChangelogEntry":
        return cls(
            short_id=record.short_id,
            author_name=record.author_name,
            formatted_date=format_timestamp(record.timestamp, date_style),
            title=record.title,
        )


@dataclass(slots=True)
class Changelog:
    tag_range: TagRange
    stats: DiffStat
    total_commits: int
    sections: Dict[Bucket, List[ChangelogEntry]] = field(default_factory=dict)

    @property
    def title(self) -> str:
        return f"Changelog from {self.tag_range.from_tag} to {self.tag_range.to_tag}"

    def non_empty_sections(self) -> List[Tuple[Bucket, List[ChangelogEntry]]]:
        return [(bucket, entries) for bucket, entries in self.sections.items() if entries]


def _require_commit(git_repo: GitRepo, tag: str) -> str:
    lookup = git_repo.lookup_tag(tag)
    if lookup.status is TagStatus.UNRESOLVABLE or lookup.commit_id is None:
        raise TagUnresolvable(tag)
    return lookup.commit_id


def build_changelog(
    git_repo: GitRepo,
    tag_range: TagRange,
    rules: Sequence[PrefixRule] = DEFAULT_RULES,
    date_style: str = "human",
    unknown_author: str = UNKNOWN_AUTHOR,
) -> Changelog:
    """Collect and classify the commits between two tags.

    Both tags are checked for existence before either is resolved, so a
    missing ``to_tag`` is reported even when ``from_tag`` is broken.

    Raises
    ------
    TagNotFound
        A tag does not exist
    TagUnresolvable
        A tag exists but does not lead to a commit
    RevisionWalkError
        The commit graph between the tags cannot be walked
    """

    for tag in (tag_range.from_tag, tag_range.to_tag):
        if not git_repo.tag_exists(tag):
            raise TagNotFound(tag)
    from_commit = _require_commit(git_repo, tag_range.from_tag)
    to_commit = _require_commit(git_repo, tag_range.to_tag)

    commits = list(walk_range(git_repo, from_commit, to_commit, unknown_author=unknown_author))
    logger.debug("%d commits between %s and %s", len(commits), tag_range.from_tag, tag_range.to_tag)

    stats = diff_stats(
        git_repo,
        git_repo.repo.commit(from_commit).tree,
        git_repo.repo.commit(to_commit).tree,
    )
    buckets = classify(commits, rules)
    sections = {
        bucket: [ChangelogEntry.from_record(record, date_style) for record in records]
        for bucket, records in buckets.items()
    }
    return Changelog(tag_range=tag_range, stats=stats, total_commits=len(commits), sections=sections)
