"""Tests for candidate deduplication and ranking."""

from pathlib import Path

from lodestar.workspace.ranking import dedupe, rank, score_candidate
from lodestar.workspace.search import FileCandidate

ROOT = Path("/ws")


def _c(rel: str, root: Path = ROOT) -> FileCandidate:
    return FileCandidate.from_path(root, rel)


class TestScoreCandidate:
    """Tests for score_candidate()."""

    def test_exact_path_scores_at_least_1000(self) -> None:
        """An exact relative-path match dominates everything else."""
        score = score_candidate(_c("src/utils/format.ts"), "src/utils/format.ts")
        # exact + contains + name exact + prefix + contains + common ext
        assert score == 1000 + 500 + 200 + 100 + 50 + 20

    def test_partial_path(self) -> None:
        score = score_candidate(_c("src/utils/format.ts"), "utils/format")
        # path contains + name prefix + name contains + common ext
        assert score == 500 + 100 + 50 + 20

    def test_directory_match(self) -> None:
        score = score_candidate(_c("src/utils/index.md"), "utils")
        # path contains + directory contains
        assert score == 500 + 300

    def test_case_insensitive(self) -> None:
        assert score_candidate(_c("README.md"), "readme") == 500 + 100 + 50

    def test_backslashes_in_query(self) -> None:
        assert score_candidate(_c("src/app.ts"), "src\\app.ts") >= 1000


class TestDedupe:
    """Tests for dedupe()."""

    def test_keeps_first_instance_per_absolute_path(self) -> None:
        a, b = _c("a.ts"), _c("b.ts")
        assert dedupe([a, b, a, b, a]) == [a, b]


class TestRank:
    """Tests for rank()."""

    def test_exact_match_ranks_first(self) -> None:
        candidates = [_c("lib/app.ts.bak"), _c("src/app.ts"), _c("app.tsx")]
        assert rank(candidates, "src/app.ts")[0].relative_path == "src/app.ts"

    def test_equal_scores_prefer_shorter_path(self) -> None:
        ranked = rank([_c("lib/format.py"), _c("a/format.py")], "format")
        assert ranked[0].score == ranked[1].score
        assert [c.relative_path for c in ranked] == ["a/format.py", "lib/format.py"]

    def test_equal_scores_and_length_sort_lexicographically(self) -> None:
        ranked = rank([_c("b/format.py"), _c("a/format.py")], "format")
        assert [c.relative_path for c in ranked] == ["a/format.py", "b/format.py"]

    def test_same_relative_path_in_two_roots_is_total_order(self) -> None:
        x = _c("x.ts", Path("/b"))
        y = _c("x.ts", Path("/a"))
        assert rank([x, y], "x.ts") == rank([y, x], "x.ts")

    def test_duplicates_collapse(self) -> None:
        a = _c("src/app.ts")
        ranked = rank([a, a, a], "app")
        assert len(ranked) == 1
        assert ranked[0].score > 0

    def test_limit_applies_after_ranking(self) -> None:
        candidates = [_c("docs/appendix.md"), _c("tools/app_helper.sh"), _c("app.ts")]
        ranked = rank(candidates, "app.ts", limit=1)
        assert [c.relative_path for c in ranked] == ["app.ts"]

    def test_input_order_does_not_matter(self) -> None:
        candidates = [_c("lib/format.py"), _c("src/utils/format.ts"), _c("src/utils/format.test.ts")]
        forward = rank(candidates, "format")
        backward = rank(list(reversed(candidates)), "format")
        assert forward == backward
        assert [c.relative_path for c in forward] == [
            "lib/format.py",
            "src/utils/format.ts",
            "src/utils/format.test.ts",
        ]
