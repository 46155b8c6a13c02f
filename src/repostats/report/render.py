"""Turn aggregated data into a rich table or Markdown text."""

from __future__ import annotations

from typing import List, Sequence

from rich.table import Table
from rich.text import Text

from ..analysis.authors import AuthorContribution
from ..analysis.changelog import Changelog

AUTHOR_COLUMNS = ("Author", "Commits", "Lines Added", "Lines Deleted", "Contribution %")


def _author_cells(row: AuthorContribution) -> List[str]:
    return [
        row.author,
        str(row.stats.commits),
        str(row.stats.lines_added),
        str(row.stats.lines_deleted),
        f"{row.percentage:.2f}%",
    ]


def render_author_table(rows: Sequence[AuthorContribution]) -> Table:
    table = Table(highlight=False)
    for index, column in enumerate(AUTHOR_COLUMNS):
        table.add_column(column, justify="left" if index == 0 else "right")
    for row in rows:
        author, *numbers = _author_cells(row)
        # Author names may contain brackets, e.g. "dependabot[bot]"; keep them out of markup.
        table.add_row(Text(author), *numbers)
    return table


def render_author_markdown(rows: Sequence[AuthorContribution]) -> str:
    lines = [
        "| " + " | ".join(AUTHOR_COLUMNS) + " |",
        "| --- | " + " | ".join("---:" for _ in AUTHOR_COLUMNS[1:]) + " |",
    ]
    for row in rows:
        lines.append("| " + " | ".join(_author_cells(row)) + " |")
    return "\n".join(lines) + "\n"


def render_changelog(changelog: Changelog) -> str:
    """Render a changelog as Markdown.

    Empty buckets are left out entirely. The statistics block is always
    present, even for a range without commits.
    """

    stats = changelog.stats
    parts = [
        f"# {changelog.title}\n\n",
        "## Statistics\n\n",
        f"- Files changed: {stats.files_changed}\n",
        f"- Lines added: {stats.insertions}\n",
        f"- Lines deleted: {stats.deletions}\n",
        f"- Total commits: {changelog.total_commits}\n\n",
    ]
    for bucket, entries in changelog.non_empty_sections():
        parts.append(f"## {bucket.title}\n\n")
        for entry in entries:
            parts.append(f"- {entry.title} ({entry.short_id})\n")
            parts.append(f"  _by {entry.author_name} on {entry.formatted_date}_\n")
        parts.append("\n")
    return "".join(parts).rstrip("\n") + "\n"
