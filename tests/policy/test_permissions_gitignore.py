from __future__ import annotations

import os
from pathlib import Path

from ddd.core.git.snapshot import MappingSnapshot, WorkingTreeSnapshot
from ddd.core.policy.gitignore import (
    check_gitignore_files,
    check_gitignore_policy,
    iter_worktree_gitignores,
    offending_lines,
)
from ddd.core.policy.models import ViolationKind
from ddd.core.policy.permissions import (
    PermissionGuard,
    check_repository_permissions,
    iter_decision_documents,
    normalize_mode,
)


def _write(root: Path, rel: str, content: str = "", mode: int = 0o644) -> Path:
    path = root / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    os.chmod(path, mode)
    return path


class TestPermissionGuard:
    def test_accepted_modes(self) -> None:
        snap = MappingSnapshot({"a.md": "", "b.md": ""}, modes={"a.md": 0o444, "b.md": 0o555})
        guard = PermissionGuard()
        assert guard.check(snap, "a.md") is None
        assert guard.check(snap, "b.md") is None

    def test_custom_modes_in_message(self) -> None:
        snap = MappingSnapshot({"a.md": ""}, modes={"a.md": 0o600})
        violation = PermissionGuard({0o400}).check(snap, "a.md")
        assert violation is not None
        assert violation.kind is ViolationKind.WRONG_PERMISSION_MODE
        assert violation.message == "wrong permissions 600 (expected 400)"

    def test_symlink(self) -> None:
        violation = PermissionGuard().check(MappingSnapshot(symlinks=["x/.decision/a.md"]), "x/.decision/a.md")
        assert violation is not None
        assert violation.message == "decision documents must be regular files, not symbolic links"


def test_normalize_mode_leaves_symlinks_alone(tmp_path: Path) -> None:
    real = _write(tmp_path, "real.md", "x")
    link = tmp_path / "link.md"
    link.symlink_to(real)
    assert normalize_mode(link) is False
    assert real.stat().st_mode & 0o777 == 0o644


def test_iter_decision_documents_skips_vcs_and_non_documents(tmp_path: Path) -> None:
    _write(tmp_path, "README.md")
    _write(tmp_path, ".decision/README.md")
    _write(tmp_path, "src/.decision/20240101-1200-a.md")
    _write(tmp_path, "src/.decision/ignore")
    _write(tmp_path, ".git/.decision/x.md")

    assert list(iter_decision_documents(tmp_path)) == [
        ".decision/README.md",
        "src/.decision/20240101-1200-a.md",
    ]


def test_check_repository_permissions(tmp_path: Path) -> None:
    _write(tmp_path, "src/.decision/ok.md", mode=0o444)
    _write(tmp_path, "src/.decision/bad.md", mode=0o644)

    report = check_repository_permissions(WorkingTreeSnapshot(tmp_path, prefer_index=False), tmp_path)
    assert report.format_lines() == ["src/.decision/bad.md ➜ wrong permissions 644 (expected 444 or 555)"]


class TestGitignorePolicy:
    def test_offending_lines_skip_comments(self) -> None:
        content = "node_modules\n# .decision is tracked\n.decision/\n  **/.decision  \n"
        assert offending_lines(content) == [".decision/", "  **/.decision  "]

    def test_check_files_skips_missing_content(self) -> None:
        violations = check_gitignore_files([("a/.gitignore", "x/.decision\n"), ("b/.gitignore", None)])
        assert [v.format() for v in violations] == [
            "a/.gitignore ➜ .gitignore contains forbidden '.decision' pattern: x/.decision"
        ]

    def test_policy_reads_only_gitignore_paths(self) -> None:
        snapshot = MappingSnapshot({".gitignore": ".decision\n", "notes.txt": ".decision"})
        violations = check_gitignore_policy(snapshot, [".gitignore", "notes.txt", "gone/.gitignore"])
        assert [v.path for v in violations] == [".gitignore"]
        assert violations[0].kind is ViolationKind.GITIGNORE_POLICY

    def test_iter_worktree_gitignores(self, tmp_path: Path) -> None:
        _write(tmp_path, ".gitignore")
        _write(tmp_path, "web/.gitignore")
        _write(tmp_path, ".git/info/.gitignore")
        assert list(iter_worktree_gitignores(tmp_path)) == [".gitignore", "web/.gitignore"]
