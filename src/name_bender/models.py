"""
Data models for Name Bender.

This module defines the candidate suggestion tree, per-TLD availability
records, check-all sweep snapshots and the outcome records returned to
callers of the session.
"""

from dataclasses import dataclass, field
from typing import Optional

from .enums import AvailabilityStatus


# Top-level candidates live at depth 1, their alternatives at depth 2.
TOP_LEVEL_DEPTH = 1
MAX_DEPTH = 2

REGISTRAR_SEARCH_URL = (
    "https://www.godaddy.com/domainsearch/find?checkAvail=1&domainToCheck={domain}"
)


@dataclass(frozen=True)
class DomainAvailability:
    """Status of one candidate under one TLD."""

    tld: str
    status: AvailabilityStatus = AvailabilityStatus.UNKNOWN


@dataclass(frozen=True)
class CandidateSuggestion:
    """
    A proposed root domain name under evaluation.

    Instances are immutable; the candidate store swaps in updated copies.
    """

    id: str
    name: str  # Normalized root label, no TLD
    availability: tuple[DomainAvailability, ...] = ()
    alternatives: Optional[tuple["CandidateSuggestion", ...]] = None
    trademark_status: Optional[AvailabilityStatus] = None
    is_generating_alternatives: bool = False
    depth: int = TOP_LEVEL_DEPTH

    def status_for(self, tld: str) -> Optional[AvailabilityStatus]:
        """Return the status recorded for a TLD, or None if it is not tracked."""
        for entry in self.availability:
            if entry.tld == tld:
                return entry.status
        return None

    @property
    def tlds(self) -> list[str]:
        return [entry.tld for entry in self.availability]

    @property
    def is_alternative(self) -> bool:
        return self.depth > TOP_LEVEL_DEPTH


@dataclass(frozen=True)
class SweepEntry:
    """Result of checking one name under one TLD during a sweep."""

    name: str
    tld: str
    status: AvailabilityStatus

    @property
    def domain(self) -> str:
        return f"{self.name}{self.tld}"

    @property
    def registration_url(self) -> str:
        return REGISTRAR_SEARCH_URL.format(domain=self.domain)

    @property
    def site_url(self) -> str:
        return f"https://{self.domain}"


@dataclass
class SweepProgress:
    """
    Snapshot of a check-all sweep after a batch completed.

    Anything that is not AVAILABLE counts as taken for the partition.
    """

    name: str
    checked_count: int
    total_count: int
    results: list[SweepEntry] = field(default_factory=list)

    @property
    def fraction(self) -> float:
        if self.total_count == 0:
            return 1.0
        if self.checked_count >= self.total_count:
            return 1.0
        return self.checked_count / self.total_count

    @property
    def is_complete(self) -> bool:
        return self.checked_count >= self.total_count

    @property
    def available(self) -> list[SweepEntry]:
        return sorted(
            (r for r in self.results if r.status == AvailabilityStatus.AVAILABLE),
            key=lambda r: r.tld,
        )

    @property
    def taken(self) -> list[SweepEntry]:
        return sorted(
            (r for r in self.results if r.status != AvailabilityStatus.AVAILABLE),
            key=lambda r: r.tld,
        )


@dataclass
class GenerationOutcome:
    """What a top-level generation, show-more or alternatives call produced."""

    suggestions: list[CandidateSuggestion]
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.error is None


@dataclass
class TrademarkOutcome:
    """Result of a trademark check, with the manual search hand-off if needed."""

    name: str
    status: AvailabilityStatus
    manual_search_url: Optional[str] = None

    @property
    def needs_manual_search(self) -> bool:
        return self.manual_search_url is not None
