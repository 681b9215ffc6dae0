"""
Read commit timestamps from a local git repository.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Iterator

from git import Repo
from git.exc import GitError, InvalidGitRepositoryError, NoSuchPathError

from commit_heatmap.errors import RepositoryError

logger = logging.getLogger(__name__)


def open_repository(path: str | Path) -> Repo:
    """
    Open the git repository at path.

    Args:
        path: Repository root (working tree or bare repository)

    Returns:
        GitPython Repo object

    Raises:
        RepositoryError: If the path is missing, not a repository, or unreadable
    """
    try:
        repo = Repo(path)
    except NoSuchPathError as e:
        raise RepositoryError(f"Repository path does not exist: {path}") from e
    except InvalidGitRepositoryError as e:
        raise RepositoryError(f"Not a git repository: {path}") from e
    except OSError as e:
        raise RepositoryError(f"Cannot read repository at {path}: {e}") from e

    logger.debug("Opened repository at %s", repo.git_dir)
    return repo


class CommitHistory:
    """
    Committer timestamps of every commit reachable from a revision.

    Each iteration walks the history again, so the same object can be
    consumed more than once.
    """

    def __init__(self, repo: Repo, rev: str = "HEAD"):
        """
        Args:
            repo: Open repository
            rev: Revision whose ancestry is walked (default: current HEAD)
        """
        self.repo = repo
        self.rev = rev

    def _is_unborn(self) -> bool:
        """True when HEAD names a branch that has no commits yet."""
        head = self.repo.head
        if head.is_detached:
            return False
        target = head.reference.path
        return not any(ref.path == target for ref in self.repo.refs)

    def __iter__(self) -> Iterator[datetime]:
        if self.rev == "HEAD" and not self.repo.head.is_valid():
            if self._is_unborn():
                logger.debug("HEAD of %s has no commits", self.repo.git_dir)
                return
            # The branch exists but its commit cannot be read
            raise RepositoryError(
                f"Failed to read commit history: HEAD of {self.repo.git_dir} "
                "points at a missing or unreadable commit"
            )

        walked = 0
        try:
            for commit in self.repo.iter_commits(self.rev):
                walked += 1
                yield commit.committed_datetime
        except (GitError, ValueError) as e:
            raise RepositoryError(f"Failed to read commit history: {e}") from e

        logger.debug("Walked %d commits from %s", walked, self.rev)


def read_commit_timestamps(path: str | Path) -> CommitHistory:
    """Open the repository at path and return its commit history."""
    return CommitHistory(open_repository(path))
