"""Report rendering."""

from .render import render_author_markdown, render_author_table, render_changelog

__all__ = ["render_author_table", "render_author_markdown", "render_changelog"]
