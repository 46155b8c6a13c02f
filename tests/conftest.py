"""Shared fixtures: throw-away git repositories built with GitPython."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Dict, List, Optional

import pytest
from git import Actor, Commit, Repo

from repostats.git.repository import GitRepo

BASE_TIME = 1_700_000_000


class RepoBuilder:
    """Create commits with fixed authors and dates in a fresh repository."""

    def __init__(self, path: Path):
        self.path = path
        self.repo = Repo.init(path)
        with self.repo.config_writer() as writer:
            writer.set_value("user", "name", "Release Bot")
            writer.set_value("user", "email", "bot@example.com")
        self.clock = BASE_TIME

    def commit(
        self,
        message: str,
        files: Dict[str, str],
        author: str = "Alice",
        parents: Optional[List[Commit]] = None,
        head: bool = True,
    ) -> Commit:
        for name, content in files.items():
            target = self.path / name
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
            self.repo.index.add([str(target)])
        self.clock += 60
        email = re.sub(r"[^a-z0-9]+", "", author.lower()) or "nobody"
        actor = Actor(author, f"{email}@example.com")
        date = f"{self.clock} +0000"
        return self.repo.index.commit(
            message,
            parent_commits=parents,
            head=head,
            author=actor,
            committer=actor,
            author_date=date,
            commit_date=date,
        )

    def git_repo(self) -> GitRepo:
        return GitRepo(self.path)


def lines(count: int, prefix: str = "line") -> str:
    return "".join(f"{prefix} {i}\n" for i in range(count))


@pytest.fixture
def builder(tmp_path) -> RepoBuilder:
    return RepoBuilder(tmp_path / "project")


@pytest.fixture
def tagged_repo(builder) -> RepoBuilder:
    """``v1`` on a root commit adding 10 lines, ``v2`` on a fix changing +2/-1."""

    builder.commit("feat: init", {"app.py": lines(10)}, author="Alice")
    builder.repo.create_tag("v1")
    builder.commit(
        "fix: bug\n\nLonger description that must not show up.",
        {"app.py": lines(9) + "patched a\npatched b\n"},
        author="Bob",
    )
    builder.repo.create_tag("v2", message="Release v2")
    return builder


def write_dangling_tag(repo: Repo, name: str, target: str = "1" * 40) -> str:
    """Point ``refs/tags/<name>`` at an annotated tag whose commit does not exist."""

    payload = Path(repo.git_dir) / f"{name}.tag"
    payload.write_text(
        f"object {target}\n"
        "type commit\n"
        f"tag {name}\n"
        "tagger Release Bot <bot@example.com> 1700000000 +0000\n"
        "\n"
        f"{name}\n",
        encoding="utf-8",
    )
    sha = repo.git.hash_object("-t", "tag", "-w", "--literally", str(payload))
    repo.git.update_ref(f"refs/tags/{name}", sha)
    return sha


def delete_loose_object(repo: Repo, sha: str) -> None:
    (Path(repo.git_dir) / "objects" / sha[:2] / sha[2:]).unlink()
