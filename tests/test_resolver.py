"""Tests for the type index builder and the extension resolver."""

import itertools
from typing import Dict, List

from docsite.models.members import Function, Property
from docsite.models.page import LegacyPage
from docsite.services.resolver import DanglingExtension, resolve_extensions
from docsite.services.type_index import build_type_index


def _page(route: str, type: str = "", extends: str = "", functions=(), properties=()) -> LegacyPage:
    return LegacyPage(
        resource_path=route,
        type=type,
        extends=extends,
        functions=[Function(name=n) for n in functions],
        properties=[Property(name=n, type=t) for n, t in properties],
    )


def _index(pages: List[LegacyPage]) -> Dict[str, LegacyPage]:
    return {p.resource_path: p for p in pages}


def _resolve(pages: Dict[str, LegacyPage]):
    return resolve_extensions(pages, build_type_index(pages))


class TestBuildTypeIndex:
    def test_maps_type_to_route(self):
        pages = _index([_page("/object", "Object"), _page("/guide")])
        assert build_type_index(pages) == {"Object": "/object"}

    def test_duplicate_type_last_wins(self):
        pages = _index([_page("/a", "Object"), _page("/b", "Object")])
        assert build_type_index(pages) == {"Object": "/b"}

    def test_empty(self):
        assert build_type_index({}) == {}


class TestSingleLevel:
    def _pages(self):
        base = _page(
            "/object",
            "Object",
            functions=["Destroy"],
            properties=[("Position", "Number3"), ("Name", "string")],
        )
        player = _page(
            "/player",
            "Player",
            extends="Object",
            functions=["Jump"],
            properties=[("Position", "Number2")],
        )
        return _index([player, base])

    def test_marks_applied(self):
        pages = self._pages()
        report = _resolve(pages)
        assert pages["/player"].extension_base_applied is True
        assert report.resolved == ["/player"]

    def test_inherits_members(self):
        pages = self._pages()
        _resolve(pages)
        player = pages["/player"]
        assert {f.name for f in player.functions} == {"Jump", "Destroy"}
        assert {p.name for p in player.properties} == {"Position", "Name"}

    def test_local_members_win(self):
        pages = self._pages()
        _resolve(pages)
        positions = [p for p in pages["/player"].properties if p.name == "Position"]
        assert len(positions) == 1
        assert positions[0].type == "Number2"
        assert positions[0].extended_from == ""

    def test_inherited_members_tagged(self):
        pages = self._pages()
        _resolve(pages)
        destroy = next(f for f in pages["/player"].functions if f.name == "Destroy")
        assert destroy.extended_from == "Object"

    def test_base_untouched(self):
        pages = self._pages()
        _resolve(pages)
        base = pages["/object"]
        assert [f.name for f in base.functions] == ["Destroy"]
        assert base.extension_base_applied is False

    def test_inherited_members_are_copies(self):
        pages = self._pages()
        _resolve(pages)
        inherited = next(f for f in pages["/player"].functions if f.name == "Destroy")
        assert inherited is not pages["/object"].functions[0]


class TestChains:
    def _chain(self) -> List[LegacyPage]:
        return [
            _page("/a", "A", functions=["FromA"]),
            _page("/b", "B", extends="A", functions=["FromB"]),
            _page("/c", "C", extends="B", functions=["FromC"]),
            _page("/d", "D", extends="C", functions=["FromD"]),
        ]

    def test_deep_chain_resolves_in_any_order(self):
        outcomes = set()
        for ordering in itertools.permutations(self._chain()):
            pages = _index([p.model_copy(deep=True) for p in ordering])
            report = _resolve(pages)
            assert report.unresolved == []
            assert all(pages[r].extension_base_applied for r in ("/b", "/c", "/d"))
            outcomes.add(
                tuple(sorted((f.name, f.extended_from) for f in pages["/d"].functions))
            )
        assert outcomes == {
            (("FromA", "A"), ("FromB", "B"), ("FromC", "C"), ("FromD", ""))
        }

    def test_derived_before_base_is_deferred(self):
        chain = self._chain()
        pages = _index(list(reversed(chain)))
        report = _resolve(pages)
        assert report.resolved[-1] == "/d"
        assert report.attempts > 3


class TestDanglingExtension:
    def test_unknown_base_left_unresolved(self):
        pages = _index([_page("/p", "P", extends="Ghost", functions=["Own"])])
        report = _resolve(pages)
        assert pages["/p"].extension_base_applied is False
        assert [f.name for f in pages["/p"].functions] == ["Own"]
        assert report.dangling == [DanglingExtension("/p", "Ghost")]

    def test_page_above_dangling_base_left_unresolved(self):
        pages = _index([_page("/c", "C", extends="B"), _page("/b", "B", extends="Ghost")])
        report = _resolve(pages)
        assert pages["/b"].extension_base_applied is False
        assert pages["/c"].extension_base_applied is False
        assert report.unresolved == ["/c"]

    def test_extends_without_type_ignored(self):
        pages = _index([_page("/x", extends="Object"), _page("/object", "Object")])
        report = _resolve(pages)
        assert pages["/x"].extension_base_applied is False
        assert report.dangling == []
        assert report.resolved == []


class TestCycles:
    def test_two_cycle_terminates(self):
        pages = _index([_page("/a", "A", extends="B"), _page("/b", "B", extends="A")])
        report = _resolve(pages)
        assert pages["/a"].extension_base_applied is False
        assert pages["/b"].extension_base_applied is False
        assert report.unresolved == ["/a", "/b"]
        assert report.attempts <= 4

    def test_self_extension_terminates(self):
        pages = _index([_page("/a", "A", extends="A")])
        report = _resolve(pages)
        assert report.unresolved == ["/a"]

    def test_cycle_does_not_block_independent_chain(self):
        pages = _index(
            [
                _page("/a", "A", extends="B"),
                _page("/b", "B", extends="A"),
                _page("/x", "X", extends="Object"),
                _page("/object", "Object", functions=["Destroy"]),
            ]
        )
        report = _resolve(pages)
        assert pages["/x"].extension_base_applied is True
        assert report.unresolved == ["/a", "/b"]

    def test_page_on_top_of_cycle_left_unresolved(self):
        pages = _index(
            [
                _page("/top", "Top", extends="A"),
                _page("/a", "A", extends="B"),
                _page("/b", "B", extends="A"),
            ]
        )
        report = _resolve(pages)
        assert report.unresolved == ["/a", "/b", "/top"]
