"""Tests for glob compilation and candidate search."""

from pathlib import Path

import pytest

from lodestar.workspace.roots import Workspace
from lodestar.workspace.search import (
    SEARCH_PATTERNS,
    FileCandidate,
    SearchQuery,
    compile_glob,
    search,
    search_candidates,
)

DEFAULT_EXCLUDE = "**/{node_modules,.git}/**"


class TestCompileGlob:
    """Tests for compile_glob()."""

    def test_double_star_prefix_matches_any_depth(self) -> None:
        pattern = compile_glob("**/format.ts")
        assert pattern.fullmatch("format.ts")
        assert pattern.fullmatch("src/utils/format.ts")
        assert not pattern.fullmatch("src/utils/format.tsx")

    def test_single_star_stays_in_segment(self) -> None:
        pattern = compile_glob("*.ts")
        assert pattern.fullmatch("app.ts")
        assert not pattern.fullmatch("src/app.ts")

    def test_question_mark(self) -> None:
        assert compile_glob("src/a?p.ts").fullmatch("src/app.ts")
        assert not compile_glob("src/a?p.ts").fullmatch("src/a/p.ts")

    def test_case_insensitive(self) -> None:
        assert compile_glob("**/readme.*").fullmatch("README.md")

    def test_brace_alternation_with_trailing_tree(self) -> None:
        pattern = compile_glob(DEFAULT_EXCLUDE)
        assert pattern.fullmatch("node_modules/pkg/index.js")
        assert pattern.fullmatch("a/.git/")
        assert pattern.fullmatch("deep/nested/node_modules/")
        assert not pattern.fullmatch("src/node_modules_helper.ts")

    def test_regex_metacharacters_are_literal(self) -> None:
        pattern = compile_glob("**/a+b.ts")
        assert pattern.fullmatch("x/a+b.ts")
        assert not pattern.fullmatch("x/aab.ts")


class TestFileCandidate:
    """Tests for FileCandidate construction."""

    def test_from_path_top_level(self) -> None:
        c = FileCandidate.from_path(Path("/ws"), "README.md")
        assert c.name == "README.md"
        assert c.directory == "."
        assert c.extension == ".md"
        assert c.absolute_path == str(Path("/ws") / "README.md")

    def test_from_path_nested_image(self) -> None:
        c = FileCandidate.from_path(Path("/ws"), "assets/Logo.PNG")
        assert c.directory == "assets"
        assert c.extension == ".png"
        assert c.is_image

    def test_to_record(self) -> None:
        c = FileCandidate.from_path(Path("/ws"), "src/app.ts")
        assert c.to_record() == {
            "path": "src/app.ts",
            "fullPath": str(Path("/ws") / "src" / "app.ts"),
            "name": "app.ts",
            "directory": "src",
        }


class TestSearch:
    """Tests for search()."""

    @pytest.mark.asyncio
    async def test_walk_order_is_sorted_and_excludes_trees(self, workspace: Workspace) -> None:
        hits = await search(workspace, "**/format.*", DEFAULT_EXCLUDE)

        assert [h.relative_path for h in hits] == [
            "lib/format.py",
            "src/utils/format.test.ts",
            "src/utils/format.ts",
        ]

    @pytest.mark.asyncio
    async def test_without_exclude_includes_dependencies(self, workspace: Workspace) -> None:
        hits = await search(workspace, "**/format.*")

        assert "node_modules/pkg/format.js" in [h.relative_path for h in hits]

    @pytest.mark.asyncio
    async def test_limit(self, workspace: Workspace) -> None:
        hits = await search(workspace, "**/*", DEFAULT_EXCLUDE, limit=2)
        assert len(hits) == 2

    @pytest.mark.asyncio
    async def test_no_workspace_returns_empty(self) -> None:
        assert await search(Workspace(), "**/*") == []

    @pytest.mark.asyncio
    async def test_multi_root_in_root_order(self, tmp_path: Path) -> None:
        first, second = tmp_path / "b", tmp_path / "a"
        for root in (first, second):
            root.mkdir()
            (root / "x.ts").write_text("x")

        hits = await search(Workspace.from_paths([first, second]), "**/x.ts")

        assert [h.absolute_path for h in hits] == [str(first / "x.ts"), str(second / "x.ts")]


class TestSearchCandidates:
    """Tests for the resolution pattern family."""

    def test_query_normalization(self) -> None:
        q = SearchQuery.parse("Src\\Utils\\Format")
        assert q.path == "src/utils/format"
        assert q.filename == "format"

    def test_pattern_family(self) -> None:
        q = SearchQuery.parse("utils/format")
        assert [p.build(q) for p in SEARCH_PATTERNS] == [
            "**/utils/format",
            "**/format",
            "**/*format*",
            "**/format.*",
            "**/*format.*",
        ]

    @pytest.mark.asyncio
    async def test_hits_are_concatenated_without_dedupe(self, workspace: Workspace) -> None:
        hits = await search_candidates(workspace, "format", exclude_glob=DEFAULT_EXCLUDE)

        # Three files, each matched by three of the five patterns
        assert len(hits) == 9
        assert {h.relative_path for h in hits} == {
            "lib/format.py",
            "src/utils/format.test.ts",
            "src/utils/format.ts",
        }

    @pytest.mark.asyncio
    async def test_pattern_limit_applies_per_pattern(self, workspace: Workspace) -> None:
        hits = await search_candidates(
            workspace, "format", exclude_glob=DEFAULT_EXCLUDE, pattern_limit=1,
        )
        assert len(hits) == 3

    @pytest.mark.asyncio
    async def test_no_workspace(self) -> None:
        assert await search_candidates(Workspace(), "format") == []
