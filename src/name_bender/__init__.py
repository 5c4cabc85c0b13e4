"""
Name Bender - domain name brainstorming with live availability checks.

This package turns a free-text description into candidate domain names,
checks every candidate against a small set of selected TLDs over
DNS-over-HTTPS, and offers alternatives, trademark checks and a sweep of a
single name over every known TLD.
"""

__version__ = "0.1.0"
__author__ = "Name Bender Team"

from name_bender.exceptions import (
    NameBenderError,
    ValidationError,
    GenerationError,
    NetworkError,
    ProtocolError,
    PersistenceError,
)
from name_bender.enums import (
    AvailabilityStatus,
    LogLevel,
    DNSErrorCode,
    TrademarkErrorCode,
    GenerationErrorCode,
)
from name_bender.config import (
    GeneratorConfig,
    DNSConfig,
    TrademarkConfig,
    SweepConfig,
    PreferenceConfig,
    LoggingConfig,
    SystemConfig,
    create_default_config,
)
from name_bender.models import (
    DomainAvailability,
    CandidateSuggestion,
    SweepEntry,
    SweepProgress,
    GenerationOutcome,
    TrademarkOutcome,
)
from name_bender.name_normalizer import (
    normalize,
    parse_generated_names,
)
from name_bender.primary_extractor import (
    extract_primary_candidate,
    extract_primary_name,
)
from name_bender.tld_registry import (
    ALL_TLDS,
    DEFAULT_SELECTED_TLDS,
    MAX_SELECTED_TLDS,
    parse_tld_token,
)
from name_bender.candidate_store import (
    CandidateStore,
    new_candidate,
)
from name_bender.dns_client import (
    DNSClient,
    DNSResponse,
    DNSError,
)
from name_bender.availability_engine import (
    AvailabilityEngine,
)
from name_bender.trademark_client import (
    TrademarkClient,
    TrademarkResponse,
    TrademarkError,
)
from name_bender.trademark_resolver import (
    TrademarkResolver,
)
from name_bender.generator import (
    SuggestionGenerator,
)
from name_bender.preferences import (
    PreferenceStore,
)
from name_bender.tld_selection import (
    TldSelectionManager,
)
from name_bender.audit_logger import (
    AuditLogger,
    LogEntry,
)
from name_bender.i18n import (
    get_message,
    get_all_message_keys,
    get_missing_translations,
    TRANSLATIONS,
    SUPPORTED_LANGUAGES,
    DEFAULT_LANGUAGE,
)
from name_bender.session import (
    NameBenderSession,
)
from name_bender.cli import (
    main as cli_main,
    create_parser,
    load_config_from_file,
    save_config_to_file,
)

__all__ = [
    # Exceptions
    "NameBenderError",
    "ValidationError",
    "GenerationError",
    "NetworkError",
    "ProtocolError",
    "PersistenceError",
    # Enums
    "AvailabilityStatus",
    "LogLevel",
    "DNSErrorCode",
    "TrademarkErrorCode",
    "GenerationErrorCode",
    # Configuration
    "GeneratorConfig",
    "DNSConfig",
    "TrademarkConfig",
    "SweepConfig",
    "PreferenceConfig",
    "LoggingConfig",
    "SystemConfig",
    "create_default_config",
    # Models
    "DomainAvailability",
    "CandidateSuggestion",
    "SweepEntry",
    "SweepProgress",
    "GenerationOutcome",
    "TrademarkOutcome",
    # Names
    "normalize",
    "parse_generated_names",
    "extract_primary_candidate",
    "extract_primary_name",
    # TLDs
    "ALL_TLDS",
    "DEFAULT_SELECTED_TLDS",
    "MAX_SELECTED_TLDS",
    "parse_tld_token",
    "TldSelectionManager",
    "PreferenceStore",
    # Candidate Store
    "CandidateStore",
    "new_candidate",
    # Availability
    "DNSClient",
    "DNSResponse",
    "DNSError",
    "AvailabilityEngine",
    # Trademarks
    "TrademarkClient",
    "TrademarkResponse",
    "TrademarkError",
    "TrademarkResolver",
    # Generation
    "SuggestionGenerator",
    # Audit Logger
    "AuditLogger",
    "LogEntry",
    # I18n
    "get_message",
    "get_all_message_keys",
    "get_missing_translations",
    "TRANSLATIONS",
    "SUPPORTED_LANGUAGES",
    "DEFAULT_LANGUAGE",
    # Session
    "NameBenderSession",
    # CLI
    "cli_main",
    "create_parser",
    "load_config_from_file",
    "save_config_to_file",
]
