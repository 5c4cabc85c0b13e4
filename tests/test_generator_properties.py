"""
Property-based tests for the suggestion generator.

The Gemini client is replaced with unittest.mock, and simulation mode is
used for the offline name derivation.
"""

import asyncio
import io
import json
import string
from types import SimpleNamespace
from unittest.mock import AsyncMock, patch

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from name_bender.audit_logger import AuditLogger
from name_bender.config import GeneratorConfig
from name_bender.enums import LogLevel
from name_bender.exceptions import GenerationError
from name_bender.generator import (
    ALTERNATIVES_FAILED_MESSAGE,
    NAMES_FAILED_MESSAGE,
    SuggestionGenerator,
    build_names_prompt,
)
from name_bender.name_normalizer import normalize


prompt_strategy = st.text(alphabet=string.ascii_letters + " ", min_size=1, max_size=40)


def _mock_model(mock_genai, text=None, error=None) -> AsyncMock:
    """Make every GenerativeModel answer with text or raise error."""
    call = AsyncMock()
    if error is not None:
        call.side_effect = error
    else:
        call.return_value = SimpleNamespace(text=text)
    mock_genai.GenerativeModel.return_value.generate_content_async = call
    return call


class TestSimulatedGenerationProperty:
    """Offline generation used in simulation mode."""

    @given(prompt=prompt_strategy)
    @settings(max_examples=50, deadline=None)
    def test_simulation_is_deterministic(self, prompt: str) -> None:
        """
        Property 1: The same prompt always gives the same names.
        """
        generator = SuggestionGenerator(simulation_mode=True)
        first = asyncio.run(generator.generate(prompt))
        second = asyncio.run(generator.generate(prompt))

        assert first == second
        assert 0 < len(first) <= generator.config.suggestion_count
        assert all(name == normalize(name) for name in first)
        assert len(first) == len(set(first))

    @given(prompt=prompt_strategy, drop=st.integers(min_value=0, max_value=5))
    @settings(max_examples=50, deadline=None)
    def test_excluded_names_never_come_back(self, prompt: str, drop: int) -> None:
        """
        Property 2: Excluded names are never returned.

        *For any* prompt and any subset of a previous answer passed as
        exclusions, none of the excluded names appear again.
        """
        generator = SuggestionGenerator(simulation_mode=True)
        previous = asyncio.run(generator.generate(prompt))
        excluded = previous[:drop]

        again = asyncio.run(generator.generate(prompt, exclude_names=excluded))
        assert not set(again) & set(excluded)

    def test_simulated_alternatives_skip_the_name_itself(self) -> None:
        generator = SuggestionGenerator(simulation_mode=True)
        alternatives = asyncio.run(generator.generate_alternatives("Brew Nest"))

        assert "brewnest" not in alternatives
        assert len(alternatives) == generator.config.alternative_count

    def test_simulated_quote_is_the_fallback(self) -> None:
        config = GeneratorConfig(api_key="k", fallback_quote="Q\n- A")
        generator = SuggestionGenerator(config, simulation_mode=True)
        assert asyncio.run(generator.generate_quote("anything")) == "Q\n- A"


class TestPromptBuilding:
    """Request text sent to the model."""

    def test_prompt_lists_exclusions(self) -> None:
        prompt = build_names_prompt("a coffee shop", 10, ["brewnest", "beanly"])
        assert '"a coffee shop"' in prompt
        assert "brewnest, beanly" in prompt
        assert '"domains"' in prompt

    def test_prompt_without_exclusions(self) -> None:
        assert "not on this list" not in build_names_prompt("a coffee shop", 10)


class TestModelGeneration:
    """Generation through the (mocked) Gemini client."""

    def test_names_are_parsed_and_filtered(self) -> None:
        answer = json.dumps({"domains": ["Brew Nest", "beanly", "Cup.ly"]})
        generator = SuggestionGenerator(GeneratorConfig(api_key="k", suggestion_count=3))

        with patch("name_bender.generator.genai") as mock_genai:
            call = _mock_model(mock_genai, text=answer)
            names = asyncio.run(generator.generate("coffee", exclude_names=["Beanly"]))

        assert names == ["brewnest", "cuply"]
        mock_genai.configure.assert_called_once_with(api_key="k")
        request = call.call_args.args[0]
        assert "Beanly" in request

    def test_configure_happens_once(self) -> None:
        generator = SuggestionGenerator(GeneratorConfig(api_key="k"))

        with patch("name_bender.generator.genai") as mock_genai:
            _mock_model(mock_genai, text='{"domains": ["a"]}')
            asyncio.run(generator.generate("x"))
            asyncio.run(generator.generate("y"))

        assert mock_genai.configure.call_count == 1

    def test_request_failure_has_user_message(self) -> None:
        logger = AuditLogger(output_stream=io.StringIO(), min_level=LogLevel.DEBUG)
        generator = SuggestionGenerator(GeneratorConfig(api_key="k"), logger=logger)

        with patch("name_bender.generator.genai") as mock_genai:
            _mock_model(mock_genai, error=RuntimeError("quota exceeded"))
            with pytest.raises(GenerationError) as exc_info:
                asyncio.run(generator.generate("coffee"))

        assert exc_info.value.code == "request_failed"
        assert exc_info.value.message == NAMES_FAILED_MESSAGE
        assert any(e.level == LogLevel.ERROR for e in logger.entries)

    def test_garbage_answer_has_user_message(self) -> None:
        generator = SuggestionGenerator(GeneratorConfig(api_key="k"))

        with patch("name_bender.generator.genai") as mock_genai:
            _mock_model(mock_genai, text="Sure! Here are some names: ...")
            with pytest.raises(GenerationError) as exc_info:
                asyncio.run(generator.generate_alternatives("loop"))

        assert exc_info.value.code == "parse_error"
        assert exc_info.value.message == ALTERNATIVES_FAILED_MESSAGE

    def test_missing_key_is_not_configured(self) -> None:
        generator = SuggestionGenerator(GeneratorConfig(api_key=None))

        with patch("name_bender.generator.genai") as mock_genai:
            with pytest.raises(GenerationError) as exc_info:
                asyncio.run(generator.generate("coffee"))
            mock_genai.GenerativeModel.assert_not_called()

        assert exc_info.value.code == "not_configured"

    def test_alternatives_drop_the_original_name(self) -> None:
        generator = SuggestionGenerator(GeneratorConfig(api_key="k"))

        with patch("name_bender.generator.genai") as mock_genai:
            _mock_model(mock_genai, text='{"domains": ["loop", "loophq", "getloop"]}')
            alternatives = asyncio.run(generator.generate_alternatives("Loop"))

        assert alternatives == ["loophq", "getloop"]


class TestQuoteGeneration:
    """Quotes never fail."""

    def test_quote_from_model(self) -> None:
        generator = SuggestionGenerator(GeneratorConfig(api_key="k"))

        with patch("name_bender.generator.genai") as mock_genai:
            _mock_model(mock_genai, text="Stay hungry, stay foolish.\n\n- Stewart Brand\n")
            quote = asyncio.run(generator.generate_quote("a startup"))

        assert quote == "Stay hungry, stay foolish.\n- Stewart Brand"

    @pytest.mark.parametrize("text,error", [
        ("only one line", None),
        ("", None),
        (None, RuntimeError("offline")),
    ])
    def test_quote_falls_back(self, text, error) -> None:
        config = GeneratorConfig(api_key="k")
        generator = SuggestionGenerator(config)

        with patch("name_bender.generator.genai") as mock_genai:
            _mock_model(mock_genai, text=text, error=error)
            quote = asyncio.run(generator.generate_quote("a startup"))

        assert quote == config.fallback_quote

    def test_unconfigured_quote_is_fallback(self) -> None:
        config = GeneratorConfig(api_key=None)
        assert asyncio.run(SuggestionGenerator(config).generate_quote("x")) == config.fallback_quote
