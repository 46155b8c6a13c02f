"""Tests for loading .repostats.yaml configuration."""

from __future__ import annotations

import pytest

from repostats.analysis.changelog import DEFAULT_RULES, Bucket, PrefixRule
from repostats.config import RepoStatsConfig, load_config
from repostats.errors import ConfigError


def test_defaults_without_file(tmp_path) -> None:
    config = load_config(repo_root=tmp_path)

    assert config.unknown_author == "Unknown"
    assert config.date_style == "human"
    assert config.rules == list(DEFAULT_RULES)
    assert config.source is None


def test_repository_file_is_picked_up(tmp_path) -> None:
    (tmp_path / ".repostats.yaml").write_text(
        """
unknown_author: Anonymous
date_format: raw
changelog:
  extra_rules:
    - prefix: perf
      bucket: feature
    - prefix: hotfix
      bucket: FIX
""",
        encoding="utf-8",
    )

    config = load_config(repo_root=tmp_path)

    assert config.unknown_author == "Anonymous"
    assert config.date_style == "raw"
    assert config.rules[: len(DEFAULT_RULES)] == list(DEFAULT_RULES)
    assert config.rules[-2:] == [PrefixRule("perf", Bucket.FEATURE), PrefixRule("hotfix", Bucket.FIX)]
    assert config.source == tmp_path / ".repostats.yaml"


def test_rules_replace_the_default_table(tmp_path) -> None:
    path = tmp_path / "custom.yaml"
    path.write_text("changelog:\n  rules:\n    - {prefix: 'Added', bucket: feature}\n", encoding="utf-8")

    config = load_config(path)

    assert config.rules == [PrefixRule("Added", Bucket.FEATURE)]


def test_empty_file_gives_defaults(tmp_path) -> None:
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")

    assert load_config(path).rules == RepoStatsConfig().rules


@pytest.mark.parametrize(
    "content",
    [
        "date_format: iso\n",
        "changelog:\n  rules:\n    - {prefix: x, bucket: docs}\n",
        "changelog:\n  rules: nope\n",
        "- just\n- a list\n",
        "key: [unclosed\n",
    ],
)
def test_invalid_config_is_rejected(tmp_path, content) -> None:
    path = tmp_path / "bad.yaml"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(path)


def test_explicit_missing_file_is_an_error(tmp_path) -> None:
    with pytest.raises(ConfigError):
        load_config(tmp_path / "nope.yaml")
