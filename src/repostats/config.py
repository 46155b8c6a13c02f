"""Configuration for a repostats run."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List

import yaml

from .analysis.changelog import DEFAULT_RULES, Bucket, PrefixRule
from .errors import ConfigError
from .git.history import UNKNOWN_AUTHOR

CONFIG_FILENAME = ".repostats.yaml"
DATE_STYLES = ("human", "raw")


@dataclass(slots=True)
class RepoStatsConfig:
    """Runtime configuration.

    Attributes
    ----------
    unknown_author:
        Name reported for commits whose author has no name.
    date_style:
        ``human`` renders changelog dates as ``DD Mon YYYY HH:MM:SS`` (UTC);
        ``raw`` renders the offset-adjusted epoch seconds.
    rules:
        Ordered prefix rules used to bucket changelog commits. The first
        matching rule wins.
    source:
        File the configuration was read from, if any.
    """

    unknown_author: str = UNKNOWN_AUTHOR
    date_style: str = "human"
    rules: List[PrefixRule] = field(default_factory=lambda: list(DEFAULT_RULES))
    source: Path | None = None

    @classmethod
    def from_mapping(cls, data: Dict[str, Any], source: Path | None = None) -> "RepoStatsConfig":
        config = cls(source=source)
        if "unknown_author" in data:
            config.unknown_author = str(data["unknown_author"])

        date_style = data.get("date_format", config.date_style)
        if date_style not in DATE_STYLES:
            raise ConfigError(f"date_format must be one of {', '.join(DATE_STYLES)}, got {date_style!r}")
        config.date_style = date_style

        changelog = data.get("changelog") or {}
        if not isinstance(changelog, dict):
            raise ConfigError("'changelog' must be a mapping")
        if "rules" in changelog:
            config.rules = _parse_rules(changelog["rules"])
        if "extra_rules" in changelog:
            config.rules.extend(_parse_rules(changelog["extra_rules"]))
        return config


def _parse_rules(raw: Any) -> List[PrefixRule]:
    if not isinstance(raw, list):
        raise ConfigError("changelog rules must be a list of {prefix, bucket} mappings")
    rules: List[PrefixRule] = []
    for item in raw:
        if not isinstance(item, dict) or "prefix" not in item or "bucket" not in item:
            raise ConfigError(f"Invalid changelog rule: {item!r}")
        try:
            bucket = Bucket(str(item["bucket"]).lower())
        except ValueError as e:
            names = ", ".join(b.value for b in Bucket)
            raise ConfigError(f"Unknown bucket {item['bucket']!r} (expected one of {names})") from e
        rules.append(PrefixRule(str(item["prefix"]), bucket))
    return rules


def load_config(path: Path | None = None, repo_root: Path | None = None) -> RepoStatsConfig:
    """Load configuration from ``path`` or ``<repo_root>/.repostats.yaml``.

    Falls back to the defaults when neither is given or the repository has
    no configuration file. An explicit ``path`` that does not exist is an
    error.
    """

    if path is None:
        if repo_root is None:
            return RepoStatsConfig()
        candidate = repo_root / CONFIG_FILENAME
        if not candidate.is_file():
            return RepoStatsConfig()
        path = candidate

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return RepoStatsConfig(source=path)
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")
    return RepoStatsConfig.from_mapping(data, source=path)

