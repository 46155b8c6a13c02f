"""Aggregation and classification built on top of the commit history."""

from .authors import AuthorContribution, AuthorStats, aggregate, collect_author_stats, contributions
from .changelog import (
    DEFAULT_RULES,
    Bucket,
    Changelog,
    ChangelogEntry,
    PrefixRule,
    build_changelog,
    classify,
    classify_message,
    format_timestamp,
)

__all__ = [
    "AuthorStats",
    "AuthorContribution",
    "aggregate",
    "contributions",
    "collect_author_stats",
    "Bucket",
    "PrefixRule",
    "DEFAULT_RULES",
    "classify_message",
    "classify",
    "format_timestamp",
    "ChangelogEntry",
    "Changelog",
    "build_changelog",
]
