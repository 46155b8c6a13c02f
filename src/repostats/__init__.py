"""repostats package.

Reads a git repository's history and reports who contributed what, plus a
categorised changelog between two tags. Nothing in here writes to the
repository being inspected.
"""

__all__ = [
    "config",
    "errors",
    "git",
    "analysis",
    "report",
    "cli",
]

__version__ = "0.3.0"
