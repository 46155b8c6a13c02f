"""Contribution statistics and changelogs for a local git repository."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Iterable

from rich.console import Console

from .analysis.authors import collect_author_stats
from .analysis.changelog import build_changelog
from .config import RepoStatsConfig, load_config
from .errors import OutputWriteError, RepoStatsError
from .git.repository import GitRepo, TagRange
from .report.render import render_author_markdown, render_author_table, render_changelog

logger = logging.getLogger(__name__)

console = Console()


def _say(message: str, style: str | None = None) -> None:
    console.print(message, style=style, markup=False, highlight=False, soft_wrap=True)


def _fail(message: str) -> int:
    _say(f"❌ {message}", style="red")
    return 1


def _resolve_config(args: argparse.Namespace, git_repo: GitRepo) -> RepoStatsConfig:
    root = Path(git_repo.repo.working_tree_dir) if git_repo.repo.working_tree_dir else None
    config = load_config(args.config, repo_root=root)
    if config.source is not None:
        logger.debug("Loaded configuration from %s", config.source)
    return config


def _author_stats(args: argparse.Namespace, git_repo: GitRepo) -> int:
    if git_repo.is_empty:
        _say("Repository is empty. No commits to analyze.", style="yellow")
        return 0

    config = _resolve_config(args, git_repo)
    rows = collect_author_stats(git_repo, unknown_author=config.unknown_author)

    _say(f"✅ Analyzing repository: {git_repo.name}", style="green")
    if args.format == "markdown":
        print(render_author_markdown(rows), end="")
    else:
        console.print(render_author_table(rows))
    return 0


def _write_output(path: Path, text: str) -> None:
    try:
        path.write_text(text, encoding="utf-8")
    except OSError as e:
        raise OutputWriteError(path, e.strerror or str(e)) from e


def _changelog(args: argparse.Namespace, git_repo: GitRepo) -> int:
    config = _resolve_config(args, git_repo)
    tag_range = TagRange(args.from_tag, args.to_tag)

    _say(f"Generating changelog from '{tag_range.from_tag}' to '{tag_range.to_tag}'...")
    changelog = build_changelog(
        git_repo,
        tag_range,
        rules=config.rules,
        date_style=config.date_style,
        unknown_author=config.unknown_author,
    )
    text = render_changelog(changelog)

    if args.output is None:
        print()
        print(text, end="")
        return 0

    _write_output(args.output, text)
    _say(f"✅ Changelog saved to '{args.output}'", style="green")
    return 0


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="repostats", description=__doc__)
    parser.add_argument(
        "-p",
        "--path",
        type=Path,
        default=Path("."),
        help="Path to the git repository (defaults to the current directory)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="YAML configuration file (defaults to <repo>/.repostats.yaml when present)",
    )
    parser.add_argument(
        "--format",
        choices=("table", "markdown"),
        default="table",
        help="Output format for the author statistics",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command")

    changelog_parser = subparsers.add_parser("changelog", help="Generate a changelog between two git tags")
    changelog_parser.add_argument("-f", "--from-tag", required=True, help="Starting tag")
    changelog_parser.add_argument("-t", "--to-tag", required=True, help="Ending tag")
    changelog_parser.add_argument("-o", "--output", type=Path, help="Write the changelog to this file")
    changelog_parser.set_defaults(func=_changelog)

    return parser


def main(argv: Iterable[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    handler = getattr(args, "func", _author_stats)
    try:
        git_repo = GitRepo(args.path)
        return handler(args, git_repo)
    except RepoStatsError as e:
        logger.debug("Command failed", exc_info=True)
        return _fail(str(e))


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    sys.exit(main())
