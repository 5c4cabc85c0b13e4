"""
Command-line interface for Name Bender.

This module provides the main CLI entry point with commands for:
- generate: Brainstorm names for a description and check their availability
- check-all: Check one name against every known TLD
- alternatives: Ask for alternatives to a taken name
- trademark: Check a name against the trademark register
- quote: Print an inspirational quote
- tlds: Show, set or list TLDs
- config: Configuration management
"""

import argparse
import asyncio
import json
import sys
from dataclasses import replace
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from . import __version__
from .audit_logger import AuditLogger
from .candidate_store import CandidateStore
from .config import (
    DNSConfig,
    GeneratorConfig,
    LoggingConfig,
    PreferenceConfig,
    SweepConfig,
    SystemConfig,
    TrademarkConfig,
    create_default_config,
)
from .enums import AvailabilityStatus
from .exceptions import NameBenderError
from .i18n import DEFAULT_LANGUAGE, SUPPORTED_LANGUAGES, get_message
from .models import CandidateSuggestion, SweepProgress
from .preferences import PreferenceStore
from .session import NameBenderSession
from .tld_registry import ALL_TLDS, MAX_SELECTED_TLDS, is_known_tld, parse_tld_token
from .tld_selection import TldSelectionManager


DEFAULT_CONFIG_PATH = Path.home() / ".name_bender" / "config.json"

NAME_COLUMN_WIDTH = 24


def load_config_from_file(config_path: Path) -> Optional[SystemConfig]:
    """
    Load configuration from a JSON file.

    Values missing from the file keep their defaults; API keys missing from
    the file are taken from the environment.

    Args:
        config_path: Path to the configuration file

    Returns:
        SystemConfig if successful, None otherwise
    """
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)

        defaults = create_default_config()

        generator_data = data.get("generator", {})
        generator = GeneratorConfig(
            api_key=generator_data.get("api_key") or defaults.generator.api_key,
            model=generator_data.get("model", defaults.generator.model),
            suggestion_count=int(
                generator_data.get("suggestion_count", defaults.generator.suggestion_count)
            ),
            alternative_count=int(
                generator_data.get("alternative_count", defaults.generator.alternative_count)
            ),
            fallback_quote=generator_data.get(
                "fallback_quote", defaults.generator.fallback_quote
            ),
        )

        dns_data = data.get("dns", {})
        dns = DNSConfig(
            endpoint=dns_data.get("endpoint", defaults.dns.endpoint),
            timeout_seconds=float(
                dns_data.get("timeout_seconds", defaults.dns.timeout_seconds)
            ),
        )

        trademark_data = data.get("trademark", {})
        trademark = TrademarkConfig(
            api_key=trademark_data.get("api_key") or defaults.trademark.api_key,
            endpoint=trademark_data.get("endpoint", defaults.trademark.endpoint),
            manual_search_url=trademark_data.get(
                "manual_search_url", defaults.trademark.manual_search_url
            ),
            timeout_seconds=float(
                trademark_data.get("timeout_seconds", defaults.trademark.timeout_seconds)
            ),
        )

        sweep_data = data.get("sweep", {})
        sweep = SweepConfig(
            batch_size=int(sweep_data.get("batch_size", defaults.sweep.batch_size)),
        )

        preferences_data = data.get("preferences", {})
        preference_file = preferences_data.get("file_path")
        preferences = PreferenceConfig(
            file_path=Path(preference_file) if preference_file
            else defaults.preferences.file_path,
        )

        logging_data = data.get("logging", {})
        logging_config = LoggingConfig(
            level=logging_data.get("level", defaults.logging.level),
            output_format=logging_data.get("output_format", defaults.logging.output_format),
        )

        return SystemConfig(
            generator=generator,
            dns=dns,
            trademark=trademark,
            sweep=sweep,
            preferences=preferences,
            logging=logging_config,
            language=data.get("language", DEFAULT_LANGUAGE),
            simulation_mode=data.get("simulation_mode", False),
        )

    except (json.JSONDecodeError, KeyError, TypeError, ValueError, AttributeError) as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return None
    except FileNotFoundError:
        return None


def save_config_to_file(config: SystemConfig, config_path: Path) -> bool:
    """
    Save configuration to a JSON file.

    Args:
        config: SystemConfig to save
        config_path: Path to save the configuration

    Returns:
        True if successful, False otherwise
    """
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)

        data = {
            "generator": {
                "api_key": config.generator.api_key,
                "model": config.generator.model,
                "suggestion_count": config.generator.suggestion_count,
                "alternative_count": config.generator.alternative_count,
                "fallback_quote": config.generator.fallback_quote,
            },
            "dns": {
                "endpoint": config.dns.endpoint,
                "timeout_seconds": config.dns.timeout_seconds,
            },
            "trademark": {
                "api_key": config.trademark.api_key,
                "endpoint": config.trademark.endpoint,
                "manual_search_url": config.trademark.manual_search_url,
                "timeout_seconds": config.trademark.timeout_seconds,
            },
            "sweep": {
                "batch_size": config.sweep.batch_size,
            },
            "preferences": {
                "file_path": str(config.preferences.file_path),
            },
            "logging": {
                "level": config.logging.level,
                "output_format": config.logging.output_format,
            },
            "language": config.language,
            "simulation_mode": config.simulation_mode,
        }

        with open(config_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)

        return True

    except (OSError, TypeError) as e:
        print(f"Error saving config: {e}", file=sys.stderr)
        return False


def resolve_config(args: argparse.Namespace) -> Optional[SystemConfig]:
    """Build the effective configuration from --config, --language and --dry-run."""
    dry_run = getattr(args, "dry_run", False)
    config = None
    if args.config:
        config = load_config_from_file(Path(args.config))
        if config is None:
            print(f"Error: Could not load config from {args.config}", file=sys.stderr)
            return None

    if config is None:
        return create_default_config(
            simulation_mode=dry_run,
            language=args.language or DEFAULT_LANGUAGE,
        )

    if dry_run:
        config = replace(config, simulation_mode=True)
    if args.language:
        config = replace(config, language=args.language)
    return config


def create_logger(config: SystemConfig, verbose: bool) -> AuditLogger:
    """Logger writing to stderr; --verbose lowers the threshold to debug."""
    level = "debug" if verbose else config.logging.level
    return AuditLogger.from_level_name(level, config.logging.output_format)


def status_label(status: Optional[AvailabilityStatus], language: str) -> str:
    if status is None:
        status = AvailabilityStatus.UNKNOWN
    return get_message(f"status.{status.value}", language)


def format_candidate(
    candidate: CandidateSuggestion,
    language: str,
    show_trademark: bool = False,
) -> str:
    """One table row: name, then the status of every selected TLD."""
    indent = "  - " if candidate.is_alternative else ""
    name = f"{indent}{candidate.name}"
    cells = [
        f"{entry.tld} {status_label(entry.status, language)}"
        for entry in candidate.availability
    ]
    line = f"{name:<{NAME_COLUMN_WIDTH}} {'  '.join(cells)}"
    if show_trademark:
        trademark = status_label(candidate.trademark_status, language)
        line += "  " + get_message("cli.trademark_column", language, status=trademark)
    return line


def print_candidates(
    candidates: list[CandidateSuggestion],
    language: str,
    show_trademark: bool = False,
) -> None:
    for candidate in candidates:
        print(format_candidate(candidate, language, show_trademark))
        for alternative in candidate.alternatives or ():
            print(format_candidate(alternative, language, show_trademark))


def sweep_to_dict(progress: SweepProgress) -> dict:
    """JSON-ready form of a finished sweep."""
    return {
        "name": progress.name,
        "checked": progress.checked_count,
        "total": progress.total_count,
        "available": [
            {"tld": e.tld, "domain": e.domain, "registration_url": e.registration_url}
            for e in progress.available
        ],
        "taken": [
            {"tld": e.tld, "domain": e.domain, "site_url": e.site_url}
            for e in progress.taken
        ],
    }


def parse_tld_list(raw: str) -> list[str]:
    """Parse ".com,io, .ai" into TLD tokens."""
    return [parse_tld_token(token) for token in raw.split(",") if token.strip()]


async def run_generate(
    prompt: str,
    config: SystemConfig,
    logger: AuditLogger,
    tlds: Optional[list[str]] = None,
    more: int = 0,
    trademark: bool = False,
) -> int:
    """
    Generate names, check them against the selected TLDs and print a table.

    Returns:
        Exit code (0 on success, 1 if generation failed)
    """
    language = config.language

    async with NameBenderSession(config, logger=logger) as session:
        if tlds and not session.set_tlds(tlds, persist=False):
            print(
                get_message("cli.tlds_rejected", language, max=MAX_SELECTED_TLDS),
                file=sys.stderr,
            )
            return 2

        print(get_message("cli.generating", language, prompt=prompt))
        outcome = await session.generate(prompt)
        if not outcome.succeeded:
            print(get_message("cli.error", language, error=outcome.error), file=sys.stderr)
            return 1

        for _ in range(more):
            print(get_message("cli.showing_more", language))
            more_outcome = await session.show_more()
            if not more_outcome.succeeded:
                print(
                    get_message("cli.error", language, error=more_outcome.error),
                    file=sys.stderr,
                )
                break

        await session.wait_for_checks()

        if trademark:
            await asyncio.gather(
                *(session.check_trademark(c.id) for c in session.candidates)
            )

        candidates = session.candidates
        if not candidates:
            print(get_message("cli.no_candidates", language))
            return 0

        print(get_message(
            "cli.candidate_count",
            language,
            count=len(candidates),
            tlds=", ".join(session.selected_tlds),
        ))
        print_candidates(candidates, language, show_trademark=trademark)

    return 0


async def run_check_all(
    name: str,
    config: SystemConfig,
    logger: AuditLogger,
    output_file: Optional[Path] = None,
) -> int:
    """
    Sweep a name over the whole TLD universe, printing progress per batch.

    Returns:
        Exit code (0 if any TLD is available, 1 otherwise)
    """
    language = config.language
    final: Optional[SweepProgress] = None

    async with NameBenderSession(config, logger=logger) as session:
        print(get_message(
            "cli.sweep_start", language, name=name, total=len(session.engine.universe)
        ))
        async for progress in session.check_all_tlds(name):
            final = progress
            print(get_message(
                "cli.sweep_progress",
                language,
                checked=progress.checked_count,
                total=progress.total_count,
                percent=int(progress.fraction * 100),
            ))

    if final is None:
        return 1

    available = final.available
    taken = final.taken
    print(get_message("cli.sweep_available", language, count=len(available)))
    for entry in available:
        print(f"  {entry.domain:<{NAME_COLUMN_WIDTH}} {entry.registration_url}")
    print(get_message("cli.sweep_taken", language, count=len(taken)))
    for entry in taken:
        print(f"  {entry.domain:<{NAME_COLUMN_WIDTH}} {entry.site_url}")

    if output_file:
        try:
            output_file.parent.mkdir(parents=True, exist_ok=True)
            with open(output_file, "w", encoding="utf-8") as f:
                json.dump(sweep_to_dict(final), f, indent=2, ensure_ascii=False)
            print(get_message("cli.results_written", language, path=output_file))
        except OSError as e:
            print(f"Error writing results: {e}", file=sys.stderr)

    return 0 if available else 1


async def run_alternatives(name: str, config: SystemConfig, logger: AuditLogger) -> int:
    """Generate alternatives for a name and check them like any candidate."""
    language = config.language

    async with NameBenderSession(config, logger=logger) as session:
        candidate = session.add_candidate(name)
        if candidate is None:
            print(get_message("cli.no_candidates", language), file=sys.stderr)
            return 2

        outcome = await session.generate_alternatives(candidate.id)
        if not outcome.succeeded:
            print(get_message("cli.error", language, error=outcome.error), file=sys.stderr)
            return 1

        await session.wait_for_checks()

        print(get_message("cli.alternatives_for", language, name=candidate.name))
        if not outcome.suggestions:
            print(get_message("cli.no_alternatives", language))
        print_candidates(session.candidates, language)

    return 0


async def run_trademark(name: str, config: SystemConfig, logger: AuditLogger) -> int:
    """Check a name against the trademark register, with manual fallback."""
    language = config.language

    async with NameBenderSession(config, logger=logger) as session:
        outcome = await session.check_trademark_name(name)

    print(get_message(
        "cli.trademark_result",
        language,
        name=outcome.name,
        status=status_label(outcome.status, language),
    ))
    if outcome.needs_manual_search:
        print(get_message("cli.trademark_manual", language, url=outcome.manual_search_url))
    return 0


async def run_quote(prompt: str, config: SystemConfig, logger: AuditLogger) -> int:
    async with NameBenderSession(config, logger=logger) as session:
        print(await session.generate_quote(prompt))
    return 0


def cmd_generate(args: argparse.Namespace) -> int:
    """Handle the 'generate' command."""
    config = resolve_config(args)
    if config is None:
        return 1

    tlds = parse_tld_list(args.tlds) if args.tlds else None
    if config.simulation_mode:
        print(get_message("simulation.enabled", config.language))

    return asyncio.run(run_generate(
        prompt=args.prompt,
        config=config,
        logger=create_logger(config, args.verbose),
        tlds=tlds,
        more=args.more,
        trademark=args.trademark,
    ))


def cmd_check_all(args: argparse.Namespace) -> int:
    """Handle the 'check-all' command."""
    config = resolve_config(args)
    if config is None:
        return 1

    if config.simulation_mode:
        print(get_message("simulation.enabled", config.language))

    output_file = Path(args.output) if args.output else None

    return asyncio.run(run_check_all(
        name=args.name,
        config=config,
        logger=create_logger(config, args.verbose),
        output_file=output_file,
    ))


def cmd_alternatives(args: argparse.Namespace) -> int:
    """Handle the 'alternatives' command."""
    config = resolve_config(args)
    if config is None:
        return 1

    if config.simulation_mode:
        print(get_message("simulation.enabled", config.language))

    return asyncio.run(run_alternatives(
        args.name, config, create_logger(config, args.verbose)
    ))


def cmd_trademark(args: argparse.Namespace) -> int:
    """Handle the 'trademark' command."""
    config = resolve_config(args)
    if config is None:
        return 1

    return asyncio.run(run_trademark(
        args.name, config, create_logger(config, args.verbose)
    ))


def cmd_quote(args: argparse.Namespace) -> int:
    """Handle the 'quote' command."""
    config = resolve_config(args)
    if config is None:
        return 1

    return asyncio.run(run_quote(
        args.prompt, config, create_logger(config, args.verbose)
    ))


def cmd_tlds(args: argparse.Namespace) -> int:
    """Handle the 'tlds' command."""
    config = resolve_config(args)
    if config is None:
        return 1

    language = config.language

    if args.action == "list":
        print(get_message("cli.tld_universe", language, count=len(ALL_TLDS)))
        for start in range(0, len(ALL_TLDS), 10):
            print("  " + " ".join(ALL_TLDS[start:start + 10]))
        return 0

    selection = TldSelectionManager(
        CandidateStore(),
        preferences=PreferenceStore(config.preferences.file_path),
        logger=create_logger(config, args.verbose),
    )

    if args.action == "show":
        print(get_message("cli.selected_tlds", language, tlds=", ".join(selection.selected)))
        return 0

    elif args.action == "set":
        tlds = [parse_tld_token(token) for token in args.tlds]
        for tld in tlds:
            if not is_known_tld(tld):
                print(get_message("cli.tld_unknown", language, tld=tld), file=sys.stderr)

        if not selection.set_selection(tlds):
            print(
                get_message("cli.tlds_rejected", language, max=selection.max_selected),
                file=sys.stderr,
            )
            return 1

        print(get_message("cli.tlds_saved", language, tlds=", ".join(selection.selected)))
        return 0

    return 1


def cmd_config(args: argparse.Namespace) -> int:
    """Handle the 'config' command."""
    config_path = Path(args.path) if args.path else DEFAULT_CONFIG_PATH

    if args.action == "show":
        config = load_config_from_file(config_path)
        if config is None:
            print(f"No configuration found at: {config_path}")
            print("Use 'config init' to create a default configuration.")
            return 1

        print(f"Configuration from: {config_path}")
        print(f"  Language: {config.language}")
        print(f"  Simulation mode: {config.simulation_mode}")
        print(f"  Model: {config.generator.model}")
        print(f"  Generator API key: {'set' if config.generator.api_key else 'not set'}")
        print(f"  Trademark API key: {'set' if config.trademark.api_key else 'not set'}")
        print(f"  DNS endpoint: {config.dns.endpoint}")
        print(f"  Sweep batch size: {config.sweep.batch_size}")
        print(f"  Preference file: {config.preferences.file_path}")
        print(f"  Log level: {config.logging.level}")
        return 0

    elif args.action == "init":
        if config_path.exists() and not args.force:
            print(f"Configuration already exists at: {config_path}")
            print("Use --force to overwrite.")
            return 1

        config = create_default_config(language=args.language or DEFAULT_LANGUAGE)
        # Keys stay in the environment unless written to the file by hand
        config = replace(
            config,
            generator=replace(config.generator, api_key=None),
            trademark=replace(config.trademark, api_key=None),
        )
        if save_config_to_file(config, config_path):
            print(f"Configuration created at: {config_path}")
            return 0
        return 1

    elif args.action == "validate":
        config = load_config_from_file(config_path)
        if config is None:
            print(f"Error: Could not load config from {config_path}", file=sys.stderr)
            return 1

        problems = validate_config(config)
        if problems:
            for problem in problems:
                print(f"  - {problem}", file=sys.stderr)
            return 1

        print(f"Configuration at {config_path} is valid.")
        return 0

    return 1


def validate_config(config: SystemConfig) -> list[str]:
    """Return a list of human-readable problems with a configuration."""
    problems = []
    if config.language not in SUPPORTED_LANGUAGES:
        problems.append(f"Unsupported language: {config.language}")
    if config.sweep.batch_size < 1:
        problems.append("sweep.batch_size must be at least 1")
    if config.generator.suggestion_count < 1:
        problems.append("generator.suggestion_count must be at least 1")
    if config.generator.alternative_count < 1:
        problems.append("generator.alternative_count must be at least 1")
    if not config.dns.endpoint.lower().startswith("https://"):
        problems.append("dns.endpoint must use HTTPS")
    if config.logging.output_format not in ("json", "text", "both"):
        problems.append(f"Invalid logging.output_format: {config.logging.output_format}")
    return problems


def _add_common_arguments(parser: argparse.ArgumentParser, dry_run: bool = True) -> None:
    parser.add_argument(
        "--config", "-c",
        help="Path to configuration file",
    )
    parser.add_argument(
        "--language", "-l",
        choices=sorted(SUPPORTED_LANGUAGES),
        default=None,
        help=f"Output language (default: {DEFAULT_LANGUAGE})",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose output",
    )
    if dry_run:
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Simulation mode - no real network requests",
        )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="name-bender",
        description="Brainstorm domain names and check their availability",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # 'generate' command
    generate_parser = subparsers.add_parser(
        "generate",
        help="Generate names for a description and check them",
    )
    generate_parser.add_argument(
        "prompt",
        help='Description of the product, e.g. "a cozy coffee shop"',
    )
    generate_parser.add_argument(
        "--more", "-m",
        type=int,
        default=0,
        help="Ask for more names this many times",
    )
    generate_parser.add_argument(
        "--tlds", "-t",
        help="Comma-separated TLDs for this run (e.g. .com,.io)",
    )
    generate_parser.add_argument(
        "--trademark",
        action="store_true",
        help="Also check every name against the trademark register",
    )
    _add_common_arguments(generate_parser)
    generate_parser.set_defaults(func=cmd_generate)

    # 'check-all' command
    check_all_parser = subparsers.add_parser(
        "check-all",
        help="Check one name against every known TLD",
    )
    check_all_parser.add_argument(
        "name",
        help="Name to check, without TLD",
    )
    check_all_parser.add_argument(
        "--output", "-o",
        help="Path to write results as JSON",
    )
    _add_common_arguments(check_all_parser)
    check_all_parser.set_defaults(func=cmd_check_all)

    # 'alternatives' command
    alternatives_parser = subparsers.add_parser(
        "alternatives",
        help="Generate and check alternatives for a name",
    )
    alternatives_parser.add_argument(
        "name",
        help="Name to find alternatives for",
    )
    _add_common_arguments(alternatives_parser)
    alternatives_parser.set_defaults(func=cmd_alternatives)

    # 'trademark' command
    trademark_parser = subparsers.add_parser(
        "trademark",
        help="Check a name against the trademark register",
    )
    trademark_parser.add_argument(
        "name",
        help="Name to check",
    )
    _add_common_arguments(trademark_parser)
    trademark_parser.set_defaults(func=cmd_trademark)

    # 'quote' command
    quote_parser = subparsers.add_parser(
        "quote",
        help="Print an inspirational quote for a description",
    )
    quote_parser.add_argument(
        "prompt",
        help="Description of the product",
    )
    _add_common_arguments(quote_parser)
    quote_parser.set_defaults(func=cmd_quote)

    # 'tlds' command
    tlds_parser = subparsers.add_parser(
        "tlds",
        help="Show, set or list TLDs",
    )
    tlds_parser.add_argument(
        "action",
        choices=["show", "set", "list"],
        help="TLD action",
    )
    tlds_parser.add_argument(
        "tlds",
        nargs="*",
        help=f"TLDs to select with 'set' (at most {MAX_SELECTED_TLDS})",
    )
    _add_common_arguments(tlds_parser, dry_run=False)
    tlds_parser.set_defaults(func=cmd_tlds)

    # 'config' command
    config_parser = subparsers.add_parser(
        "config",
        help="Configuration management",
    )
    config_parser.add_argument(
        "action",
        choices=["show", "init", "validate"],
        help="Configuration action",
    )
    config_parser.add_argument(
        "--path", "-p",
        help="Path to configuration file",
    )
    config_parser.add_argument(
        "--force", "-f",
        action="store_true",
        help="Force overwrite existing configuration",
    )
    config_parser.add_argument(
        "--language", "-l",
        choices=sorted(SUPPORTED_LANGUAGES),
        default=None,
        help="Default language for new configuration",
    )
    config_parser.set_defaults(func=cmd_config)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code
    """
    # GEMINI_API_KEY / EUIPO_API_KEY may live in a .env file
    load_dotenv()

    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    try:
        return args.func(args)
    except NameBenderError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
