"""Shared fixtures: throwaway git repositories."""

import os
import shutil
import subprocess
from pathlib import Path

import pytest


@pytest.fixture
def git_env(tmp_path, monkeypatch):
    """Isolate git from the user's config and give commits a fixed identity."""
    if shutil.which("git") is None:
        pytest.skip("git not installed")
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home / ".config"))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.setenv("GIT_AUTHOR_NAME", "Test User")
    monkeypatch.setenv("GIT_AUTHOR_EMAIL", "test@example.com")
    monkeypatch.setenv("GIT_COMMITTER_NAME", "Test User")
    monkeypatch.setenv("GIT_COMMITTER_EMAIL", "test@example.com")
    monkeypatch.setenv("GIT_EDITOR", "true")
    for name in ("SHOW_GIT", "REVERT_BACKUPS", "DEFAULT_REMOTE", "PR_DRAFT"):
        monkeypatch.delenv("GG_" + name, raising=False)
    return home


@pytest.fixture
def git():
    """Run git in a directory and return its stdout."""
    def run(repo: Path, *args: str) -> str:
        result = subprocess.run(
            ["git", "-C", str(repo), *args],
            check=True,
            capture_output=True,
            text=True,
        )
        return result.stdout
    return run


@pytest.fixture
def repo(tmp_path, git_env, git):
    """An empty repository on branch main, with no commits."""
    path = tmp_path / "repo"
    path.mkdir()
    git(path, "init", "-q")
    git(path, "symbolic-ref", "HEAD", "refs/heads/main")
    return Path(os.path.realpath(path))


@pytest.fixture
def committed_repo(repo, git):
    """A repository with one commit containing foo.txt."""
    (repo / "foo.txt").write_text("Hello, World!\n")
    git(repo, "add", "foo.txt")
    git(repo, "commit", "-q", "-m", "first")
    return repo


@pytest.fixture
def remote_repo(tmp_path, committed_repo, git):
    """committed_repo with a bare "origin" that main tracks. Returns the bare repo path."""
    bare = tmp_path / "remote.git"
    git(tmp_path, "init", "-q", "--bare", str(bare))
    git(bare, "symbolic-ref", "HEAD", "refs/heads/main")
    git(committed_repo, "remote", "add", "origin", str(bare))
    git(committed_repo, "push", "-q", "origin", "main")
    git(committed_repo, "branch", "-q", "--set-upstream-to=origin/main", "main")
    return bare
