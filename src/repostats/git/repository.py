"""Repository access: opening a repository and resolving tags to commits."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from git import Repo, TagReference
from git.exc import BadName, BadObject, InvalidGitRepositoryError, NoSuchPathError

from ..errors import NotAGitRepository

logger = logging.getLogger(__name__)


class TagStatus(enum.Enum):
    """Outcome of looking a tag up."""

    ABSENT = "absent"
    UNRESOLVABLE = "unresolvable"
    RESOLVED = "resolved"


@dataclass(frozen=True, slots=True)
class TagLookup:
    name: str
    status: TagStatus
    commit_id: Optional[str] = None


@dataclass(frozen=True, slots=True)
class TagRange:
    """Commits reachable from ``to_tag`` but not from ``from_tag``."""

    from_tag: str
    to_tag: str


class GitRepo:
    """Read-only wrapper around a GitPython :class:`~git.Repo`."""

    def __init__(self, repo_path: Path | str):
        self.repo_path = Path(repo_path)
        try:
            self.repo = Repo(self.repo_path)
        except (InvalidGitRepositoryError, NoSuchPathError) as e:
            raise NotAGitRepository(repo_path) from e
        logger.debug("Opened repository at %s", self.repo.git_dir)

    @property
    def name(self) -> str:
        """Directory name of the working tree (or of the git dir for bare repos)."""
        root = self.repo.working_tree_dir or self.repo.git_dir
        return Path(root).resolve().name

    @property
    def is_empty(self) -> bool:
        """True when HEAD does not point at any commit yet."""
        return not self.repo.head.is_valid()

    def head_commit_id(self) -> str:
        return self.repo.head.commit.hexsha

    def tag_exists(self, name: str) -> bool:
        """Return whether ``refs/tags/<name>`` exists, whatever it points at."""
        try:
            TagReference.dereference_recursive(self.repo, _tag_path(name))
        except ValueError:
            return False
        return True

    def lookup_tag(self, name: str) -> TagLookup:
        """Resolve a tag name to a commit, telling apart every way it can fail.

        Annotated tags are peeled down to the commit they wrap; lightweight
        tags are taken as-is. A tag that ends on a tree or blob, or whose tag
        object cannot be read, is reported as ``UNRESOLVABLE``.
        """

        if not self.tag_exists(name):
            return TagLookup(name, TagStatus.ABSENT)

        ref = TagReference(self.repo, _tag_path(name))
        try:
            target = ref.object
            while target.type == "tag":
                target = target.object
            # A tag object's target is built lazily from its header; make sure it exists.
            self.repo.odb.info(target.binsha)
        except (BadName, BadObject, ValueError) as e:
            logger.debug("Tag %s could not be dereferenced: %s", name, e)
            return TagLookup(name, TagStatus.UNRESOLVABLE)

        if target.type != "commit":
            logger.debug("Tag %s points at a %s, not a commit", name, target.type)
            return TagLookup(name, TagStatus.UNRESOLVABLE)
        return TagLookup(name, TagStatus.RESOLVED, target.hexsha)

    def resolve_tag(self, name: str) -> Optional[str]:
        """Return the commit id behind ``name`` or ``None`` if there is none."""
        return self.lookup_tag(name).commit_id


def _tag_path(name: str) -> str:
    return f"refs/tags/{name}"
