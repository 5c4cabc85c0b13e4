"""
Property-based tests for configuration loading and saving.

The configuration file written by 'config init' must load back into the
same SystemConfig, and partial or broken files must be handled.
"""

import json
import os
import string
import tempfile
from pathlib import Path
from unittest.mock import patch

from hypothesis import given, settings
from hypothesis import strategies as st

from name_bender.cli import load_config_from_file, save_config_to_file, validate_config
from name_bender.config import (
    DNSConfig,
    GeneratorConfig,
    LoggingConfig,
    PreferenceConfig,
    SweepConfig,
    SystemConfig,
    TrademarkConfig,
    create_default_config,
)


CREDENTIAL_VARIABLES = ("GEMINI_API_KEY", "API_KEY", "EUIPO_API_KEY")

token_strategy = st.text(alphabet=string.ascii_letters + string.digits, min_size=1, max_size=30)


def _without_credentials() -> None:
    for variable in CREDENTIAL_VARIABLES:
        os.environ.pop(variable, None)


# Strategies for generating valid configuration objects

@st.composite
def generator_config_strategy(draw) -> GeneratorConfig:
    return GeneratorConfig(
        api_key=draw(st.one_of(st.none(), token_strategy)),
        model=draw(st.sampled_from(["gemini-2.5-flash", "gemini-2.5-pro", "gemini-2.0-flash"])),
        suggestion_count=draw(st.integers(min_value=1, max_value=50)),
        alternative_count=draw(st.integers(min_value=1, max_value=10)),
        fallback_quote=draw(st.text(min_size=1, max_size=80)),
    )


@st.composite
def system_config_strategy(draw) -> SystemConfig:
    """Generate valid SystemConfig objects."""
    host = draw(token_strategy)
    return SystemConfig(
        generator=draw(generator_config_strategy()),
        dns=DNSConfig(
            endpoint=f"https://{host}.example/dns-query",
            timeout_seconds=draw(st.floats(min_value=0.5, max_value=120.0)),
        ),
        trademark=TrademarkConfig(
            api_key=draw(st.one_of(st.none(), token_strategy)),
            endpoint=f"https://tm.{host}.example/search",
            timeout_seconds=draw(st.floats(min_value=0.5, max_value=120.0)),
        ),
        sweep=SweepConfig(batch_size=draw(st.integers(min_value=1, max_value=100))),
        preferences=PreferenceConfig(file_path=Path("/tmp") / f"{draw(token_strategy)}.json"),
        logging=LoggingConfig(
            level=draw(st.sampled_from(["debug", "info", "warn", "error"])),
            output_format=draw(st.sampled_from(["json", "text", "both"])),
        ),
        language=draw(st.sampled_from(["de", "en"])),
        simulation_mode=draw(st.booleans()),
    )


class TestConfigurationRoundTripProperty:
    """Saved configurations load back unchanged."""

    @given(config=system_config_strategy())
    @settings(max_examples=100, deadline=None)
    def test_config_round_trip_preserves_data(self, config: SystemConfig) -> None:
        """
        Property 1: Configuration round-trips without data loss.

        *For any* valid SystemConfig, saving it to a file and loading it
        back produces an equal SystemConfig.
        """
        with tempfile.TemporaryDirectory() as tmpdir, patch.dict(os.environ):
            _without_credentials()
            path = Path(tmpdir) / "nested" / "config.json"

            assert save_config_to_file(config, path)
            loaded = load_config_from_file(path)

        assert loaded == config

    @given(config=system_config_strategy())
    @settings(max_examples=50, deadline=None)
    def test_saved_file_is_json_with_all_sections(self, config: SystemConfig) -> None:
        """
        Property 2: The saved file is plain JSON with every section.
        """
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "config.json"
            save_config_to_file(config, path)
            with open(path, "r", encoding="utf-8") as f:
                parsed = json.load(f)

        assert set(parsed) == {
            "generator", "dns", "trademark", "sweep",
            "preferences", "logging", "language", "simulation_mode",
        }
        assert parsed["preferences"]["file_path"] == str(config.preferences.file_path)

    @given(config=system_config_strategy())
    @settings(max_examples=50, deadline=None)
    def test_config_round_trip_is_idempotent(self, config: SystemConfig) -> None:
        """
        Property 3: Saving a loaded configuration writes the same file.
        """
        with tempfile.TemporaryDirectory() as tmpdir, patch.dict(os.environ):
            _without_credentials()
            first, second = Path(tmpdir) / "a.json", Path(tmpdir) / "b.json"

            save_config_to_file(config, first)
            save_config_to_file(load_config_from_file(first), second)

            assert first.read_text(encoding="utf-8") == second.read_text(encoding="utf-8")


class TestConfigurationLoading:
    """Partial, missing and broken configuration files."""

    def test_missing_file_returns_none(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            assert load_config_from_file(Path(tmpdir) / "absent.json") is None

    def test_invalid_json_returns_none(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "config.json"
            path.write_text("{not json", encoding="utf-8")
            assert load_config_from_file(path) is None

    def test_wrong_types_return_none(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "config.json"
            path.write_text(json.dumps({"sweep": {"batch_size": "many"}}), encoding="utf-8")
            assert load_config_from_file(path) is None

    def test_partial_file_keeps_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "config.json"
            path.write_text(
                json.dumps({"language": "de", "sweep": {"batch_size": 5}}), encoding="utf-8"
            )
            config = load_config_from_file(path)

        defaults = create_default_config()
        assert config.language == "de"
        assert config.sweep.batch_size == 5
        assert config.dns == defaults.dns
        assert config.generator.model == defaults.generator.model
        assert config.logging == defaults.logging

    def test_missing_keys_come_from_environment(self) -> None:
        environment = {"GEMINI_API_KEY": "gemini-from-env", "EUIPO_API_KEY": "euipo-from-env"}
        with tempfile.TemporaryDirectory() as tmpdir, patch.dict(os.environ, environment):
            path = Path(tmpdir) / "config.json"
            path.write_text(
                json.dumps({"generator": {"api_key": None}, "trademark": {}}),
                encoding="utf-8",
            )
            config = load_config_from_file(path)

        assert config.generator.api_key == "gemini-from-env"
        assert config.trademark.api_key == "euipo-from-env"

    def test_keys_in_file_win_over_environment(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir, patch.dict(
            os.environ, {"GEMINI_API_KEY": "from-env"}
        ):
            path = Path(tmpdir) / "config.json"
            path.write_text(json.dumps({"generator": {"api_key": "from-file"}}), encoding="utf-8")
            config = load_config_from_file(path)

        assert config.generator.api_key == "from-file"


class TestDefaultConfiguration:
    """create_default_config() and validate_config()."""

    def test_credentials_from_environment(self) -> None:
        with patch.dict(os.environ, {"API_KEY": "fallback", "EUIPO_API_KEY": "tm"}):
            os.environ.pop("GEMINI_API_KEY", None)
            config = create_default_config()

        assert config.generator.api_key == "fallback"
        assert config.trademark.api_key == "tm"

    def test_gemini_key_preferred(self) -> None:
        with patch.dict(os.environ, {"API_KEY": "fallback", "GEMINI_API_KEY": "gemini"}):
            assert create_default_config().generator.api_key == "gemini"

    def test_no_credentials(self) -> None:
        with patch.dict(os.environ):
            _without_credentials()
            config = create_default_config(simulation_mode=True, language="de")

        assert config.generator.api_key is None
        assert config.trademark.api_key is None
        assert config.simulation_mode
        assert config.language == "de"

    def test_preference_file_override(self) -> None:
        config = create_default_config(preference_file=Path("/tmp/prefs.json"))
        assert config.preferences.file_path == Path("/tmp/prefs.json")

    def test_defaults(self) -> None:
        config = create_default_config()
        assert config.sweep.batch_size == 20
        assert config.dns.endpoint.startswith("https://")
        assert "{name}" in config.trademark.manual_search_url
        assert validate_config(config) == []

    @given(config=system_config_strategy())
    @settings(max_examples=50)
    def test_generated_configs_are_valid(self, config: SystemConfig) -> None:
        """
        Property 4: Every well-formed configuration validates cleanly.
        """
        assert validate_config(config) == []

    def test_problems_are_reported(self) -> None:
        config = create_default_config(language="fr")
        config.sweep.batch_size = 0
        config.generator.suggestion_count = 0
        config.dns.endpoint = "http://dns.example/dns-query"
        config.logging.output_format = "xml"

        problems = validate_config(config)

        assert len(problems) == 5
        assert any("language" in problem for problem in problems)
        assert any("HTTPS" in problem for problem in problems)
