"""
Configuration dataclasses for Name Bender.

This module defines all configuration structures used throughout the package,
including the name generator, the DNS and trademark oracles, the check-all
sweep, preference persistence, and logging.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional


DEFAULT_FALLBACK_QUOTE = (
    "The beginning is the most important part of the work.\n- Plato"
)


@dataclass
class GeneratorConfig:
    """Configuration for the generative text backend."""

    api_key: Optional[str] = None
    model: str = "gemini-2.5-flash"
    suggestion_count: int = 10
    alternative_count: int = 3
    fallback_quote: str = DEFAULT_FALLBACK_QUOTE


@dataclass
class DNSConfig:
    """DNS-over-HTTPS endpoint used as the availability oracle."""

    endpoint: str = "https://cloudflare-dns.com/dns-query"
    timeout_seconds: float = 10.0


@dataclass
class TrademarkConfig:
    """Trademark registry configuration. No api_key means unconfigured."""

    api_key: Optional[str] = None
    endpoint: str = (
        "https://api.euipo.europa.eu/tunnel-web/secure/webapi/service/tm/search"
    )
    manual_search_url: str = (
        "https://www.tmdn.org/tmview/#/tmview/results"
        "?page=1&pageSize=30&criteria=C&basicSearch={name}"
    )
    timeout_seconds: float = 10.0


@dataclass
class SweepConfig:
    """Check-all sweep settings."""

    batch_size: int = 20


@dataclass
class PreferenceConfig:
    """Where the selected TLD preference is persisted."""

    file_path: Path = field(
        default_factory=lambda: Path.home() / ".name_bender" / "preferences.json"
    )


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "warn"
    output_format: str = "text"  # 'json', 'text', 'both'


@dataclass
class SystemConfig:
    """Main configuration combining all sub-configurations."""

    generator: GeneratorConfig
    dns: DNSConfig
    trademark: TrademarkConfig
    sweep: SweepConfig
    preferences: PreferenceConfig
    logging: LoggingConfig
    language: str = "en"  # 'en' or 'de'
    simulation_mode: bool = False


def create_default_config(
    simulation_mode: bool = False,
    language: str = "en",
    preference_file: Optional[Path] = None,
) -> SystemConfig:
    """
    Create a default configuration, taking credentials from the environment.

    Args:
        simulation_mode: Answer every oracle and generator call locally
        language: Output language ('en' or 'de')
        preference_file: Path to the TLD preference file

    Returns:
        SystemConfig with default settings
    """
    preferences = PreferenceConfig()
    if preference_file is not None:
        preferences = PreferenceConfig(file_path=preference_file)

    return SystemConfig(
        generator=GeneratorConfig(
            api_key=os.environ.get("GEMINI_API_KEY") or os.environ.get("API_KEY"),
        ),
        dns=DNSConfig(),
        trademark=TrademarkConfig(api_key=os.environ.get("EUIPO_API_KEY")),
        sweep=SweepConfig(),
        preferences=preferences,
        logging=LoggingConfig(),
        language=language,
        simulation_mode=simulation_mode,
    )
