"""Tests for @mention extraction."""

from lodestar.context.reference import extract_mentions, has_mentions


class TestExtractMentions:
    """Tests for extract_mentions()."""

    def test_duplicates_collapse_to_first_occurrence(self) -> None:
        """Repeated mentions appear once."""
        assert extract_mentions("fix @a.ts and @a.ts again") == ["a.ts"]

    def test_preserves_first_occurrence_order(self) -> None:
        """Order follows where each token first appears."""
        text = "compare @b.ts with @a.ts, then @b.ts"
        assert extract_mentions(text) == ["b.ts", "a.ts"]

    def test_no_at_sign(self) -> None:
        """Text without @ yields nothing."""
        assert extract_mentions("just a question") == []

    def test_trailing_punctuation_stripped(self) -> None:
        """Sentence punctuation is not part of the token."""
        assert extract_mentions("what does @utils.js? do") == ["utils.js"]
        assert extract_mentions("see @src/app.ts, @lib/x.py.") == ["src/app.ts", "lib/x.py"]
        assert extract_mentions("wow @main.c!") == ["main.c"]

    def test_paths_with_directories_and_dashes(self) -> None:
        """Slashes, dashes and underscores are path characters."""
        assert extract_mentions("@src/my-app/file_name.tsx") == ["src/my-app/file_name.tsx"]

    def test_bare_name(self) -> None:
        """A mention without extension is kept as-is."""
        assert extract_mentions("@readme summarize this") == ["readme"]

    def test_punctuation_only_token_dropped(self) -> None:
        """A token that is empty after stripping is discarded."""
        assert extract_mentions("hmm @... ok") == []

    def test_lone_at_sign(self) -> None:
        """An @ with no path characters is not a mention."""
        assert extract_mentions("email me @ home") == []


class TestHasMentions:
    """Tests for has_mentions()."""

    def test_true_when_mention_present(self) -> None:
        assert has_mentions("look at @app.ts")

    def test_false_without_mentions(self) -> None:
        assert not has_mentions("look at app.ts")
        assert not has_mentions("@ ?")
