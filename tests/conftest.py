import os
import subprocess
import sys
from pathlib import Path

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'ddd' and tests/ importable for helpers
for p in (SRC_ROOT, TESTS_ROOT):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))


from ddd.core.config import clear_all_caches
from ddd.core.logging import reset_logging_for_tests
from ddd.core.utils.subprocess import run_with_timeout
from ddd.data import clear_caches as clear_data_caches


@pytest.fixture(autouse=True)
def _reset_ddd_state(monkeypatch: pytest.MonkeyPatch):
    """Drop cached config and installed log handlers around every test."""
    for key in list(os.environ):
        if key.startswith("DDD_"):
            monkeypatch.delenv(key, raising=False)
    clear_all_caches()
    clear_data_caches()
    yield
    clear_all_caches()
    clear_data_caches()
    reset_logging_for_tests()


@pytest.fixture
def isolated_repo(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """A fresh git repository on ``main`` with one empty commit, used as cwd."""
    repo = tmp_path / "repo"
    repo.mkdir()

    run_with_timeout(
        ["git", "init", "-b", "main"],
        cwd=repo,
        check=True,
        stdout=subprocess.DEVNULL,
        stderr=subprocess.DEVNULL,
    )
    for key, value in (
        ("user.email", "test@example.com"),
        ("user.name", "Test User"),
        ("commit.gpgsign", "false"),
        ("core.hooksPath", ".git/hooks"),
    ):
        run_with_timeout(
            ["git", "config", "--local", key, value],
            cwd=repo,
            check=True,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
        )
    run_with_timeout(
        ["git", "commit", "--allow-empty", "-m", "initial"],
        cwd=repo,
        check=True,
        stdout=subprocess.DEVNULL,
        stderr=subprocess.DEVNULL,
    )

    monkeypatch.chdir(repo)
    return repo


@pytest.fixture
def unborn_repo(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """A git repository with no commits yet."""
    repo = tmp_path / "unborn"
    repo.mkdir()
    run_with_timeout(
        ["git", "init", "-b", "main"],
        cwd=repo,
        check=True,
        stdout=subprocess.DEVNULL,
        stderr=subprocess.DEVNULL,
    )
    run_with_timeout(
        ["git", "config", "--local", "user.email", "test@example.com"],
        cwd=repo,
        check=True,
        stdout=subprocess.DEVNULL,
        stderr=subprocess.DEVNULL,
    )
    run_with_timeout(
        ["git", "config", "--local", "user.name", "Test User"],
        cwd=repo,
        check=True,
        stdout=subprocess.DEVNULL,
        stderr=subprocess.DEVNULL,
    )
    monkeypatch.chdir(repo)
    return repo
