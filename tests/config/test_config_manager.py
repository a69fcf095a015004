from __future__ import annotations

import os
import time
from pathlib import Path

import pytest

from ddd.core.config import ConfigManager, clear_all_caches, get_cached_config, is_cached
from ddd.core.config.domains import (
    DecisionConfig,
    HooksConfig,
    LoggingConfig,
    PolicyConfig,
    SearchConfig,
    TimeoutsConfig,
)
from ddd.core.config.domains.policy import parse_mode
from ddd.core.exceptions import ConfigError


def _write_config(root: Path, layer: str, name: str, content: str) -> Path:
    path = root / ".ddd" / layer / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


class TestDefaults:
    def test_bundled_defaults(self, tmp_path: Path) -> None:
        policy = PolicyConfig(repo_root=tmp_path)
        assert policy.decision_dir == ".decision"
        assert policy.readonly_modes == frozenset({0o444, 0o555})
        assert policy.normalized_mode == 0o444
        assert policy.normalize_permissions is True
        assert policy.check_gitignore is True
        assert policy.layout.ignore_file == "ignore"

        search = SearchConfig(repo_root=tmp_path)
        assert (search.max_workers, search.context_lines, search.max_lines_per_file) == (4, 2, 10)

        hooks = HooksConfig(repo_root=tmp_path)
        assert hooks.names == ["pre-commit", "pre-push", "pre-receive"]
        assert hooks.push_base_ref == "origin/main"

        timeouts = TimeoutsConfig(repo_root=tmp_path)
        assert timeouts.git_operations_seconds == 60
        assert set(timeouts.get_all_settings()) >= {"git_operations_seconds", "editor_seconds"}

    def test_editor_falls_back_to_environment(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("EDITOR", "nano")
        assert DecisionConfig(repo_root=tmp_path).editor == "nano"
        monkeypatch.delenv("EDITOR")
        clear_all_caches()
        assert DecisionConfig(repo_root=tmp_path).editor == "vim"


class TestLayers:
    def test_project_then_local_layer(self, tmp_path: Path) -> None:
        _write_config(tmp_path, "config", "policy.yaml", "policy:\n  normalized_mode: '555'\n  check_gitignore: false\n")
        _write_config(tmp_path, "config.local", "policy.yaml", "policy:\n  check_gitignore: true\n")

        policy = PolicyConfig(repo_root=tmp_path)
        assert policy.normalized_mode == 0o555
        assert policy.check_gitignore is True
        # Untouched keys keep their bundled defaults.
        assert policy.readonly_modes == frozenset({0o444, 0o555})

    def test_env_overrides_win(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        _write_config(tmp_path, "config", "search.yaml", "search:\n  max_workers: 2\n")
        monkeypatch.setenv("DDD_search__max_workers", "8")
        monkeypatch.setenv("DDD_policy__normalize_permissions", "false")

        assert SearchConfig(repo_root=tmp_path).max_workers == 8
        assert PolicyConfig(repo_root=tmp_path).normalize_permissions is False

    def test_env_integer_mode_is_octal(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DDD_policy__normalized_mode", "555")
        assert PolicyConfig(repo_root=tmp_path).normalized_mode == 0o555

    def test_legacy_logging_aliases(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DDD_LOG_LEVEL", "warn")
        monkeypatch.setenv("DDD_LOG_FILE", "logs/ddd.log")
        cfg = LoggingConfig(repo_root=tmp_path)
        assert cfg.level == "WARNING"
        assert cfg.resolve_log_path() == (tmp_path / "logs" / "ddd.log").resolve()


class TestValidation:
    def test_schema_violation(self, tmp_path: Path) -> None:
        _write_config(tmp_path, "config", "search.yaml", "search:\n  max_workers: 0\n")
        with pytest.raises(ConfigError) as exc:
            SearchConfig(repo_root=tmp_path)
        assert "search.max_workers" in str(exc.value)

    def test_unknown_key(self, tmp_path: Path) -> None:
        _write_config(tmp_path, "config", "policy.yaml", "policy:\n  bogus: 1\n")
        with pytest.raises(ConfigError):
            ConfigManager(repo_root=tmp_path).load_config()

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        _write_config(tmp_path, "config", "broken.yaml", "policy: [unclosed\n")
        with pytest.raises(ConfigError):
            ConfigManager(repo_root=tmp_path).load_config()

    def test_non_mapping_file(self, tmp_path: Path) -> None:
        _write_config(tmp_path, "config", "list.yaml", "- a\n- b\n")
        with pytest.raises(ConfigError):
            ConfigManager(repo_root=tmp_path).load_config(validate=False)

    def test_malformed_env_key(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DDD_search____max_workers", "3")
        with pytest.raises(ConfigError):
            ConfigManager(repo_root=tmp_path).load_config()

    def test_parse_mode(self) -> None:
        assert parse_mode("0444") == 0o444
        with pytest.raises(ValueError):
            parse_mode("999")


class TestCache:
    def test_same_inputs_share_one_dict(self, tmp_path: Path) -> None:
        assert not is_cached(tmp_path)
        first = get_cached_config(tmp_path)
        assert is_cached(tmp_path)
        assert get_cached_config(tmp_path) is first

    def test_project_file_change_invalidates(self, tmp_path: Path) -> None:
        path = _write_config(tmp_path, "config", "search.yaml", "search:\n  max_workers: 2\n")
        assert get_cached_config(tmp_path)["search"]["max_workers"] == 2

        path.write_text("search:\n  max_workers: 6\n", encoding="utf-8")
        later = time.time() + 5
        os.utime(path, (later, later))
        assert get_cached_config(tmp_path)["search"]["max_workers"] == 6
