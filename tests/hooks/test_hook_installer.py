from __future__ import annotations

import os
from pathlib import Path

import pytest

from ddd.core.git.repository import EMPTY_TREE, ZERO_SHA
from ddd.core.hooks.installer import (
    HOOK_MARKER,
    HookState,
    WORKFLOW_PATH,
    hook_status,
    install_hooks,
    render_hook,
    uninstall_hooks,
    write_github_workflow,
)
from ddd.core.hooks.refs import RefUpdate, parse_ref_updates, range_for_update
from helpers.git_helpers import git, git_add, git_commit, write_file

ALL_HOOKS = ["pre-commit", "pre-push", "pre-receive"]


def test_render_hook() -> None:
    script = render_hook("pre-push", python="/opt/py/bin/python3")
    assert script.startswith("#!/bin/sh\n")
    assert f"# {HOOK_MARKER}: pre-push" in script
    assert 'exec "/opt/py/bin/python3" -m ddd hooks pre-push "$@"' in script


@pytest.mark.requires_git
class TestInstaller:
    def test_install_then_update(self, isolated_repo: Path) -> None:
        assert install_hooks(isolated_repo, ALL_HOOKS) == [(name, "installed") for name in ALL_HOOKS]

        hook = isolated_repo / ".git" / "hooks" / "pre-commit"
        assert os.access(hook, os.X_OK)
        assert HOOK_MARKER in hook.read_text(encoding="utf-8")

        assert install_hooks(isolated_repo, ["pre-commit"]) == [("pre-commit", "updated")]
        assert hook_status(isolated_repo, ALL_HOOKS) == {name: HookState.INSTALLED for name in ALL_HOOKS}

    def test_foreign_hook_needs_force(self, isolated_repo: Path) -> None:
        hooks_dir = isolated_repo / ".git" / "hooks"
        hooks_dir.mkdir(parents=True, exist_ok=True)
        foreign = hooks_dir / "pre-push"
        foreign.write_text("#!/bin/sh\necho custom\n", encoding="utf-8")

        assert hook_status(isolated_repo, ["pre-push"]) == {"pre-push": HookState.FOREIGN}
        assert install_hooks(isolated_repo, ["pre-push"]) == [("pre-push", "skipped")]
        assert "echo custom" in foreign.read_text(encoding="utf-8")

        assert install_hooks(isolated_repo, ["pre-push"], force=True) == [("pre-push", "replaced")]
        assert HOOK_MARKER in foreign.read_text(encoding="utf-8")

    def test_uninstall_leaves_foreign_hooks(self, isolated_repo: Path) -> None:
        install_hooks(isolated_repo, ["pre-commit"])
        hooks_dir = isolated_repo / ".git" / "hooks"
        (hooks_dir / "pre-push").write_text("#!/bin/sh\nexit 0\n", encoding="utf-8")
        (hooks_dir / "pre-receive").unlink(missing_ok=True)

        assert uninstall_hooks(isolated_repo, ALL_HOOKS) == [
            ("pre-commit", "removed"),
            ("pre-push", "skipped"),
            ("pre-receive", "absent"),
        ]
        assert not (hooks_dir / "pre-commit").exists()
        assert (hooks_dir / "pre-push").exists()

    def test_github_workflow(self, isolated_repo: Path) -> None:
        path, written = write_github_workflow(isolated_repo)
        assert written
        assert path == isolated_repo / WORKFLOW_PATH
        assert "ddd validate --range" in path.read_text(encoding="utf-8")

        path.write_text("custom\n", encoding="utf-8")
        assert write_github_workflow(isolated_repo) == (path, False)
        assert path.read_text(encoding="utf-8") == "custom\n"
        assert write_github_workflow(isolated_repo, force=True)[1]


class TestRefUpdates:
    def test_pre_push_lines(self) -> None:
        lines = ["refs/heads/feature abc123 refs/heads/feature def456\n", "\n", "garbage\n"]
        assert parse_ref_updates(lines, "pre-push") == [
            RefUpdate(ref="refs/heads/feature", old="def456", new="abc123")
        ]

    def test_pre_receive_lines(self) -> None:
        updates = parse_ref_updates([f"{ZERO_SHA} abc refs/heads/new", f"abc {ZERO_SHA} refs/heads/old"], "pre-receive")
        assert updates[0].is_creation and not updates[0].is_deletion
        assert updates[1].is_deletion

    def test_deletion_is_skipped(self, tmp_path: Path) -> None:
        assert range_for_update(tmp_path, RefUpdate("refs/heads/x", "abc", ZERO_SHA), "main") is None

    def test_update_uses_old_sha(self, tmp_path: Path) -> None:
        assert range_for_update(tmp_path, RefUpdate("refs/heads/x", "old", "new"), "main") == ("old", "new")

    @pytest.mark.requires_git
    def test_new_branch_uses_merge_base(self, isolated_repo: Path) -> None:
        base = git(isolated_repo, "rev-parse", "HEAD")
        git(isolated_repo, "checkout", "-q", "-b", "feature")
        write_file(isolated_repo, "f.txt", "f\n")
        git_add(isolated_repo)
        tip = git_commit(isolated_repo, "feature work")

        update = RefUpdate("refs/heads/feature", ZERO_SHA, tip)
        assert range_for_update(isolated_repo, update, "main") == (base, tip)
        assert range_for_update(isolated_repo, update, "origin/main") == (EMPTY_TREE, tip)
