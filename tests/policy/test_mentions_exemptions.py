from __future__ import annotations

from ddd.core.git.snapshot import EMPTY_SNAPSHOT, MappingSnapshot
from ddd.core.policy.exemptions import ExemptionResolver, ExemptionSet
from ddd.core.policy.mentions import first_mentioning, mentions
from ddd.core.policy.models import Change, ChangeKind


class TestMentions:
    def test_full_path_or_basename(self) -> None:
        assert mentions("src/api/handler.py", "- src/api/handler.py")
        assert mentions("src/api/handler.py", "We rewrote handler.py")
        assert not mentions("src/api/handler.py", "We rewrote the router")

    def test_missing_content(self) -> None:
        assert not mentions("a.py", None)
        assert not mentions("a.py", "")

    def test_first_mentioning_keeps_document_order(self) -> None:
        docs = [("d1.md", "nothing"), ("d2.md", "app.py"), ("d3.md", "src/app.py")]
        assert first_mentioning("src/app.py", docs) == "d2.md"
        assert first_mentioning("src/other.py", docs) is None


def _added(path: str) -> Change:
    return Change(path=path, kind=ChangeKind.ADDED)


class TestExemptions:
    def test_new_decision_dir_exempts_its_parent_only(self) -> None:
        exemptions = ExemptionResolver(EMPTY_SNAPSHOT).resolve([_added("src/new/.decision/a.md")])
        assert exemptions.directories == frozenset({"src/new"})
        assert exemptions.covers("src/new/x.py")
        assert exemptions.covers("src/new/deep/y.py")
        assert not exemptions.covers("src/newer/x.py")
        assert not exemptions.covers("src/x.py")

    def test_root_document_exempts_everything(self) -> None:
        baseline = MappingSnapshot({".decision/README.md": "# root"})
        exemptions = ExemptionResolver(baseline).resolve([_added(".decision/20240101-0000-x.md")])
        assert exemptions.everything
        assert exemptions.covers("anything/at/all.py")

    def test_existing_decision_dir_grants_nothing(self) -> None:
        baseline = MappingSnapshot({"src/.decision/README.md": "# src"})
        exemptions = ExemptionResolver(baseline).resolve([_added("src/.decision/b.md")])
        assert not exemptions
        assert not exemptions.covers("src/x.py")

    def test_only_additions_count(self) -> None:
        modified = Change(path="lib/.decision/a.md", kind=ChangeKind.MODIFIED)
        assert ExemptionResolver(EMPTY_SNAPSHOT).resolve([modified]) == ExemptionSet()

    def test_renamed_document_counts_as_addition(self) -> None:
        renamed = Change(path="lib/.decision/a.md", kind=ChangeKind.RENAMED, source="old/.decision/a.md")
        assert ExemptionResolver(EMPTY_SNAPSHOT).resolve([renamed]).covers("lib/x.py")
