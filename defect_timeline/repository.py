"""
Git repository access through pydriller.
"""

import logging
from collections.abc import Iterator
from datetime import datetime

from git.exc import GitError
from pydriller import Git, Repository

from .errors import RepositoryAccessError
from .models import Commit

logger = logging.getLogger(__name__)


class GitRepository:
    """
    Scoped handle over a local git repository.

    Use as a context manager; the underlying git handle is opened on entry
    and released on exit, so nothing is held between pipeline runs.
    """

    def __init__(self, path: str, include_files: bool = False):
        self.path = path
        self.include_files = include_files
        self._git = None

    def __enter__(self):
        try:
            self._git = Git(self.path)
            # empty repositories have no HEAD commit
            self._git.repo.head.commit
        except (GitError, OSError, ValueError) as e:
            self.__exit__(None, None, None)
            logger.debug("Cannot open repository %s", self.path, exc_info=True)
            raise RepositoryAccessError(f"cannot open repository {self.path}: {e}") from e
        return self

    def __exit__(self, exc_type, exc, tb):
        if self._git is not None:
            self._git.clear()
            self._git = None
        return False

    def traverse_commits(self) -> Iterator[Commit]:
        """Yield every commit reachable from the default branch tip"""
        try:
            for commit in Repository(self.path, only_no_merge=False).traverse_commits():
                files = ()
                if self.include_files:
                    files = tuple(mod.new_path or mod.old_path for mod in commit.modified_files)
                yield Commit(hash=commit.hash, date=commit.author_date, msg=commit.msg, files=files)
        except (GitError, OSError, ValueError) as e:
            logger.debug("Failed reading commits from %s", self.path, exc_info=True)
            raise RepositoryAccessError(f"cannot read commits from {self.path}: {e}") from e

    def tags(self) -> list[tuple[str, datetime]]:
        """Tag names with the date of the commit each one points to"""
        if self._git is None:
            raise RepositoryAccessError("repository is not open; use it as a context manager")
        tags = []
        try:
            for tag in self._git.repo.tags:
                try:
                    tags.append((tag.name, tag.commit.committed_datetime))
                except ValueError:
                    # tag on a tree or blob
                    logger.debug("Skipping tag %s: not a commit", tag.name)
        except (GitError, OSError) as e:
            logger.debug("Failed reading tags from %s", self.path, exc_info=True)
            raise RepositoryAccessError(f"cannot read tags from {self.path}: {e}") from e
        return tags
