"""
Shared fixtures for commit-heatmap tests.
"""

import shutil
from datetime import datetime
from pathlib import Path

import pytest
from git import Actor, Repo

TEST_ACTOR = Actor("Test User", "test@example.com")

requires_git = pytest.mark.skipif(
    shutil.which("git") is None, reason="git executable not available"
)


def add_commit(repo: Repo, when: datetime, message: str = "change") -> None:
    """Commit a one-line change with both author and committer date set to when."""
    path = Path(repo.working_tree_dir) / "activity.log"
    with path.open("a", encoding="utf-8") as f:
        f.write(f"{when.isoformat()} {message}\n")
    repo.index.add(["activity.log"])

    # git's internal "<unix seconds> <offset>" date format
    offset = when.strftime("%z") or "+0000"
    git_date = f"{int(when.timestamp())} {offset}"
    repo.index.commit(
        message,
        author=TEST_ACTOR,
        committer=TEST_ACTOR,
        author_date=git_date,
        commit_date=git_date,
    )


@pytest.fixture
def git_repo(tmp_path):
    """An empty git repository in a temporary directory."""
    repo = Repo.init(tmp_path / "repo")
    yield repo
    repo.close()


def drop_objects(repo: Repo) -> None:
    """Delete every loose object, leaving refs pointing at missing commits."""
    objects = Path(repo.git_dir) / "objects"
    for fanout in objects.iterdir():
        if fanout.is_dir() and len(fanout.name) == 2:
            shutil.rmtree(fanout)


def point_branch_at_missing_commit(repo: Repo) -> None:
    """Point the checked-out branch at a commit id that does not exist."""
    ref_file = Path(repo.git_dir) / repo.head.reference.path
    ref_file.parent.mkdir(parents=True, exist_ok=True)
    ref_file.write_text("1" * 40 + "\n", encoding="utf-8")
