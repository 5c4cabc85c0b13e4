"""
Property-based tests for primary candidate extraction.

The primary candidate is the deterministic guess shown at the top of the
list: an explicitly named product ("call it X") or a one or two word prompt.
"""

import string

import pytest
from hypothesis import assume, given, settings
from hypothesis import strategies as st

from name_bender.name_normalizer import normalize
from name_bender.primary_extractor import (
    extract_primary_candidate,
    extract_primary_name,
)


word_strategy = st.text(alphabet=string.ascii_letters, min_size=1, max_size=12)


def _mentions_naming(words: list[str]) -> bool:
    return any("call" in w.lower() for w in words)


class TestExplicitNamingProperty:
    """Prompts that name the product explicitly."""

    @given(
        lead=st.lists(word_strategy, min_size=0, max_size=6),
        name_words=st.lists(word_strategy, min_size=1, max_size=3),
        quote=st.sampled_from(["", "'", '"']),
        verb=st.sampled_from(["call it", "called", "Call", "CALLED it"]),
        tail=st.sampled_from(["", " or something", " or something like that"]),
    )
    @settings(max_examples=200)
    def test_named_product_becomes_primary(
        self,
        lead: list[str],
        name_words: list[str],
        quote: str,
        verb: str,
        tail: str,
    ) -> None:
        """
        Property 1: "call it 'X'" yields normalize(X).

        *For any* prompt ending in a naming phrase, the primary name is the
        normalized name with any trailing "or something like that" removed.
        """
        assume(not _mentions_naming(lead + name_words))
        assume(name_words[-1].lower() not in ("it", "or", "something", "that"))
        assume(name_words[0].lower() != "it")

        name = " ".join(name_words)
        prompt = " ".join(lead + [verb]) + f" {quote}{name}{quote}{tail}"

        assert extract_primary_name(prompt) == normalize(name)

    @pytest.mark.parametrize("prompt,expected", [
        ("I want to call it 'Bottom Up' or something like that", "bottomup"),
        ("A bakery called Sweet Crumbs", "sweetcrumbs"),
        ('an app we call "Loop"', "loop"),
        ("A podcast called Night Shift or something", "nightshift"),
    ])
    def test_examples(self, prompt: str, expected: str) -> None:
        assert extract_primary_name(prompt) == expected


class TestShortPromptProperty:
    """Prompts of one or two words."""

    @given(words=st.lists(word_strategy, min_size=1, max_size=2))
    @settings(max_examples=200)
    def test_short_prompt_is_used_verbatim(self, words: list[str]) -> None:
        """
        Property 2: One or two word prompts are their own primary candidate.

        *For any* prompt of one or two tokens without a naming phrase, the
        primary name equals normalize(prompt).
        """
        assume(not _mentions_naming(words))
        prompt = " ".join(words)
        assert extract_primary_name(prompt) == normalize(prompt)

    def test_future_memories(self) -> None:
        assert extract_primary_name("Future Memories") == "futurememories"
        assert extract_primary_candidate("  Future Memories ") == "Future Memories"


class TestNoPrimaryProperty:
    """Prompts that produce no primary candidate."""

    @given(words=st.lists(word_strategy, min_size=3, max_size=12))
    @settings(max_examples=200)
    def test_long_prompt_without_naming_has_no_primary(self, words: list[str]) -> None:
        """
        Property 3: Three or more words without a naming phrase give nothing.

        *For any* prompt of three or more tokens that never says "call", no
        primary candidate is produced.
        """
        assume(not _mentions_naming(words))
        assert extract_primary_candidate(" ".join(words)) is None
        assert extract_primary_name(" ".join(words)) is None

    @pytest.mark.parametrize("prompt", [
        "a tool to recall things quickly",
        "an app that recalled my old notes",
        "a phone that blocks robocalled numbers",
    ])
    def test_call_inside_a_word_is_not_a_naming_phrase(self, prompt: str) -> None:
        assert extract_primary_candidate(prompt) is None
        assert extract_primary_name(prompt) is None

    @pytest.mark.parametrize("prompt", ["", "   ", "...", ". ."])
    def test_blank_prompts(self, prompt: str) -> None:
        assert extract_primary_name(prompt) is None
