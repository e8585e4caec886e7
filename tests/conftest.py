"""Pytest configuration for tests.

No sys.path hacks - tests should import from installed contractgate package.
"""

import json
import shutil
import subprocess
from pathlib import Path

import pytest


def _git(repo: Path, *args: str) -> str:
    result = subprocess.run(
        ["git", *args],
        cwd=str(repo),
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout


class GitRepo:
    """Throwaway git repository with a `main` branch as the base ref."""

    def __init__(self, root: Path):
        self.root = root

    def git(self, *args: str) -> str:
        return _git(self.root, *args)

    def write_json(self, rel_path: str, data) -> Path:
        path = self.root / rel_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
        return path

    def commit(self, message: str) -> None:
        self.git("add", "-A")
        self.git("commit", "-q", "--allow-empty", "-m", message)


@pytest.fixture
def git_repo(tmp_path):
    """Repository with one base commit on `main` and a checked-out `feature` branch.

    Skipped when no git binary is available.
    """
    if shutil.which("git") is None:
        pytest.skip("git binary not available")
    root = tmp_path / "repo"
    root.mkdir()
    _git(root, "init", "-q")
    _git(root, "config", "user.email", "ci@example.com")
    _git(root, "config", "user.name", "CI")
    _git(root, "config", "commit.gpgsign", "false")
    _git(root, "symbolic-ref", "HEAD", "refs/heads/main")
    return GitRepo(root)
