"""
Internationalization (i18n) module for Name Bender.

Provides translations for all user-facing CLI messages in English (en) and
German (de).
"""

from typing import Optional


# Supported languages
SUPPORTED_LANGUAGES = frozenset({"en", "de"})
DEFAULT_LANGUAGE = "en"


# Translation dictionary with all messages
# Structure: {message_key: {language_code: translated_message}}
TRANSLATIONS: dict[str, dict[str, str]] = {
    # Availability status labels
    "status.unknown": {
        "en": "Unknown",
        "de": "Unbekannt",
    },
    "status.checking": {
        "en": "Checking",
        "de": "Wird geprüft",
    },
    "status.available": {
        "en": "Available",
        "de": "Verfügbar",
    },
    "status.taken": {
        "en": "Taken",
        "de": "Belegt",
    },

    # Generation
    "cli.generating": {
        "en": "Generating names for: {prompt}",
        "de": "Erzeuge Namen für: {prompt}",
    },
    "cli.showing_more": {
        "en": "Asking for more names...",
        "de": "Frage weitere Namen an...",
    },
    "cli.no_candidates": {
        "en": "No names were generated.",
        "de": "Es wurden keine Namen erzeugt.",
    },
    "cli.error": {
        "en": "Error: {error}",
        "de": "Fehler: {error}",
    },
    "cli.candidate_count": {
        "en": "{count} name(s), checked against {tlds}",
        "de": "{count} Name(n), geprüft gegen {tlds}",
    },
    "cli.trademark_column": {
        "en": "trademark: {status}",
        "de": "Marke: {status}",
    },

    # Alternatives
    "cli.alternatives_for": {
        "en": "Alternatives for {name}:",
        "de": "Alternativen für {name}:",
    },
    "cli.no_alternatives": {
        "en": "No new alternatives found.",
        "de": "Keine neuen Alternativen gefunden.",
    },

    # Check-all sweep
    "cli.sweep_start": {
        "en": "Checking {name} against {total} TLDs...",
        "de": "Prüfe {name} gegen {total} TLDs...",
    },
    "cli.sweep_progress": {
        "en": "  {checked}/{total} checked ({percent}%)",
        "de": "  {checked}/{total} geprüft ({percent}%)",
    },
    "cli.sweep_available": {
        "en": "Available ({count}):",
        "de": "Verfügbar ({count}):",
    },
    "cli.sweep_taken": {
        "en": "Taken ({count}):",
        "de": "Belegt ({count}):",
    },
    "cli.results_written": {
        "en": "Results written to: {path}",
        "de": "Ergebnisse geschrieben nach: {path}",
    },

    # Trademark
    "cli.trademark_result": {
        "en": "Trademark status of {name}: {status}",
        "de": "Markenstatus von {name}: {status}",
    },
    "cli.trademark_manual": {
        "en": "Automatic trademark check not possible. Search manually: {url}",
        "de": "Automatische Markenprüfung nicht möglich. Manuell suchen: {url}",
    },

    # TLD selection
    "cli.selected_tlds": {
        "en": "Selected TLDs: {tlds}",
        "de": "Ausgewählte TLDs: {tlds}",
    },
    "cli.tlds_saved": {
        "en": "TLD selection saved: {tlds}",
        "de": "TLD-Auswahl gespeichert: {tlds}",
    },
    "cli.tlds_rejected": {
        "en": "Selection rejected: choose between 1 and {max} TLDs.",
        "de": "Auswahl abgelehnt: zwischen 1 und {max} TLDs wählen.",
    },
    "cli.tld_unknown": {
        "en": "Warning: {tld} is not in the list of checkable TLDs",
        "de": "Warnung: {tld} ist nicht in der Liste prüfbarer TLDs",
    },
    "cli.tld_universe": {
        "en": "{count} TLDs available for checking:",
        "de": "{count} TLDs können geprüft werden:",
    },

    # Simulation mode
    "simulation.enabled": {
        "en": "Simulation mode: no real network requests are made",
        "de": "Simulationsmodus: Es werden keine echten Netzwerkanfragen gesendet",
    },

    # CLI general
    "cli.version": {
        "en": "Version: {version}",
        "de": "Version: {version}",
    },
}


def get_message(
    key: str,
    language: Optional[str] = None,
    **kwargs,
) -> str:
    """
    Get a translated message by key.

    Args:
        key: The message key (e.g., 'status.available')
        language: Language code ('en' or 'de'). Defaults to DEFAULT_LANGUAGE.
        **kwargs: Format arguments for the message template

    Returns:
        The translated and formatted message string.
        If the key is not found, returns the key itself.
        If the language is not found, falls back to DEFAULT_LANGUAGE.

    Examples:
        >>> get_message('status.available', 'de')
        'Verfügbar'
        >>> get_message('cli.selected_tlds', 'en', tlds='.com, .io')
        'Selected TLDs: .com, .io'
    """
    if language is None or language not in SUPPORTED_LANGUAGES:
        language = DEFAULT_LANGUAGE

    translations = TRANSLATIONS.get(key)
    if translations is None:
        return key

    message = translations.get(language) or translations.get(DEFAULT_LANGUAGE)
    if message is None:
        return key

    if kwargs:
        try:
            message = message.format(**kwargs)
        except KeyError:
            # Missing format arguments leave the template as is
            pass

    return message


def get_all_message_keys() -> set[str]:
    """Get all available message keys."""
    return set(TRANSLATIONS.keys())


def get_missing_translations(language: str) -> set[str]:
    """
    Get all message keys that are missing translations for a language.

    Args:
        language: The language code to check

    Returns:
        Set of message keys missing translations for the specified language.
    """
    return {
        key for key, translations in TRANSLATIONS.items()
        if language not in translations
    }
