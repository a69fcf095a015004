from __future__ import annotations

from typing import Optional

from ddd.core.git.snapshot import MappingSnapshot
from ddd.core.policy.ignore import (
    EMPTY_RULES,
    DirectRule,
    IgnoreRuleLoader,
    IgnoreRuleSet,
    RecursiveRule,
    compile_rules,
    parse_rule,
)


def test_parse_rule_skips_blanks_and_comments() -> None:
    assert parse_rule("") is None
    assert parse_rule("   ") is None
    assert parse_rule("# generated") is None
    assert parse_rule("**/") is None


def test_parse_rule_kinds() -> None:
    assert parse_rule("**/build.gradle.kts") == RecursiveRule("build.gradle.kts")
    assert parse_rule("  dist/*  ", parent="web") == DirectRule("dist/*", "web")


def test_direct_rule_is_anchored_to_parent() -> None:
    rule = DirectRule("*.py", "src")
    assert rule.candidate == "src/*.py"
    assert rule.matches("src/a.py")
    assert not rule.matches("src/sub/a.py")
    assert not rule.matches("a.py")


def test_direct_rule_at_root() -> None:
    rule = DirectRule("Makefile")
    assert rule.matches("Makefile")
    assert not rule.matches("src/Makefile")


def test_double_star_segment_spans_directories() -> None:
    rule = DirectRule("docs/**/*.md")
    assert rule.matches("docs/a.md")
    assert rule.matches("docs/x/y/z.md")
    assert not rule.matches("docs/x/y/z.txt")


def test_recursive_rule_matches_any_trailing_segments() -> None:
    rule = RecursiveRule("build.gradle.kts")
    assert rule.matches("build.gradle.kts")
    assert rule.matches("app/feature/build.gradle.kts")
    assert not rule.matches("app/build.gradle")

    nested = RecursiveRule("node_modules/**")
    assert nested.matches("web/node_modules/react/index.js")


def test_rule_set_returns_first_match() -> None:
    rules = IgnoreRuleSet.parse("# header\n*.lock\n\n**/*.lock\n")
    assert len(rules) == 2
    assert rules.match("yarn.lock") == DirectRule("*.lock")
    assert rules.match("web/yarn.lock") == RecursiveRule("*.lock")
    assert rules.match("web/app.js") is None
    assert not rules.matches("web/app.js")


def test_compile_rules() -> None:
    rules = compile_rules(["gen.py", "**/*.pb.go"], parent="api")
    assert rules.matches("api/gen.py")
    assert rules.matches("api/v1/x.pb.go")


class _CountingSnapshot(MappingSnapshot):
    def __init__(self, files: dict[str, str]) -> None:
        super().__init__(files)
        self.reads: list[str] = []

    def read_text(self, path: str) -> Optional[str]:
        self.reads.append(path)
        return super().read_text(path)


def test_loader_reads_each_ignore_file_once() -> None:
    snapshot = _CountingSnapshot({"src/.decision/ignore": "gen.py\n"})
    loader = IgnoreRuleLoader(snapshot)

    rules = loader("src/.decision")
    assert loader("src/.decision") is rules
    assert rules.matches("src/gen.py")
    assert snapshot.reads == ["src/.decision/ignore"]


def test_loader_missing_file_yields_empty_rules() -> None:
    loader = IgnoreRuleLoader(MappingSnapshot({}))
    assert loader("lib/.decision") is EMPTY_RULES
