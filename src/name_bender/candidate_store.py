"""
Candidate Store - the authoritative in-memory collection of suggestions.

Holds the ordered top-level candidates and, one level down, each
candidate's alternatives. Every mutation swaps in a new immutable
CandidateSuggestion, so updates arriving in any order stay consistent.
"""

from dataclasses import replace
from typing import Iterable, Iterator, Optional, Sequence

from .enums import AvailabilityStatus
from .models import (
    MAX_DEPTH,
    TOP_LEVEL_DEPTH,
    CandidateSuggestion,
    DomainAvailability,
)
from .name_normalizer import mint_id, normalize


def new_candidate(
    name: str,
    tlds: Sequence[str],
    depth: int = TOP_LEVEL_DEPTH,
    with_trademark: bool = True,
) -> CandidateSuggestion:
    """
    Create a fresh candidate with every selected TLD in UNKNOWN state.

    Args:
        name: Candidate name; normalized here
        tlds: Currently selected TLDs
        depth: 1 for top-level candidates, 2 for alternatives
        with_trademark: Track a trademark status for this candidate
    """
    name = normalize(name)
    return CandidateSuggestion(
        id=mint_id(name),
        name=name,
        availability=_project(None, tlds),
        alternatives=None,
        trademark_status=AvailabilityStatus.UNKNOWN if with_trademark else None,
        is_generating_alternatives=False,
        depth=depth,
    )


def _project(
    availability: Optional[tuple[DomainAvailability, ...]],
    tlds: Iterable[str],
) -> tuple[DomainAvailability, ...]:
    """Rebuild availability for a TLD set, keeping statuses already known."""
    known = {entry.tld: entry for entry in availability or ()}
    projected = []
    seen: set[str] = set()
    for tld in tlds:
        if tld in seen:
            continue
        seen.add(tld)
        projected.append(known.get(tld) or DomainAvailability(tld=tld))
    return tuple(projected)


class CandidateStore:
    """
    Ordered store of candidate suggestions, keyed by opaque id.

    Lookups cover top-level candidates and their alternatives. Updates for
    ids that are no longer present are silent no-ops, since results may
    arrive after a new generation has cleared the store.
    """

    def __init__(self) -> None:
        self._candidates: list[CandidateSuggestion] = []

    def __len__(self) -> int:
        return len(self._candidates)

    def __iter__(self) -> Iterator[CandidateSuggestion]:
        return iter(list(self._candidates))

    @property
    def candidates(self) -> list[CandidateSuggestion]:
        """Top-level candidates in display order."""
        return list(self._candidates)

    def walk(self) -> Iterator[CandidateSuggestion]:
        """Yield every candidate, each parent followed by its alternatives."""
        for candidate in list(self._candidates):
            yield candidate
            for alternative in candidate.alternatives or ():
                yield alternative

    def names(self) -> set[str]:
        """All names present, top-level and nested."""
        return {candidate.name for candidate in self.walk()}

    def find(self, candidate_id: str) -> Optional[CandidateSuggestion]:
        """Locate a candidate by id at either level."""
        for candidate in self.walk():
            if candidate.id == candidate_id:
                return candidate
        return None

    def find_by_name(self, name: str) -> Optional[CandidateSuggestion]:
        """Locate the first candidate with the given (normalized) name."""
        name = normalize(name)
        for candidate in self.walk():
            if candidate.name == name:
                return candidate
        return None

    def replace_all(self, new_list: Sequence[CandidateSuggestion]) -> None:
        """Discard everything and start over with a fresh generation."""
        self._candidates = [self._as_top_level(c) for c in new_list]

    def clear(self) -> None:
        self._candidates = []

    def append(
        self, new_list: Sequence[CandidateSuggestion]
    ) -> list[CandidateSuggestion]:
        """
        Append candidates whose names are not yet present anywhere.

        Args:
            new_list: Incoming batch, e.g. from "show more"

        Returns:
            The candidates that were actually appended
        """
        present = self.names()
        added = []
        for candidate in new_list:
            name = normalize(candidate.name)
            if not name or name in present:
                continue
            present.add(name)
            added.append(self._as_top_level(replace(candidate, name=name)))
        self._candidates.extend(added)
        return added

    def merge(self, candidate_id: str, **updates) -> Optional[CandidateSuggestion]:
        """
        Shallow-merge fields into the candidate with the given id.

        Returns:
            The updated candidate, or None when the id is unknown
        """
        return self._update(candidate_id, lambda c: replace(c, **updates))

    def set_availability(
        self,
        candidate_id: str,
        tld: str,
        status: AvailabilityStatus,
    ) -> Optional[CandidateSuggestion]:
        """
        Record the status of one (candidate, TLD) pair.

        No-op when the candidate is gone or the TLD is no longer tracked.
        """
        def apply(candidate: CandidateSuggestion) -> CandidateSuggestion:
            if candidate.status_for(tld) is None:
                return candidate
            return replace(
                candidate,
                availability=tuple(
                    DomainAvailability(tld=e.tld, status=status) if e.tld == tld else e
                    for e in candidate.availability
                ),
            )

        return self._update(candidate_id, apply)

    def set_alternatives(
        self,
        candidate_id: str,
        alternatives: Sequence[CandidateSuggestion],
    ) -> list[CandidateSuggestion]:
        """
        Attach alternatives to a top-level candidate.

        Alternatives whose names already exist anywhere in the store are
        dropped. Alternatives never own alternatives themselves.

        Returns:
            The alternatives that were attached
        """
        parent = self.find(candidate_id)
        if parent is None or parent.depth != TOP_LEVEL_DEPTH:
            return []

        present = self.names()
        for existing in parent.alternatives or ():
            present.discard(existing.name)

        attached = []
        for alternative in alternatives:
            name = normalize(alternative.name)
            if not name or name in present:
                continue
            present.add(name)
            attached.append(
                replace(alternative, name=name, depth=MAX_DEPTH, alternatives=None)
            )

        self.merge(candidate_id, alternatives=tuple(attached))
        return attached

    def reproject_tlds(self, tlds: Sequence[str]) -> None:
        """
        Rebuild every candidate's availability against a new TLD selection.

        Statuses of TLDs that stay selected are kept, new TLDs start as
        UNKNOWN and deselected TLDs are dropped. Applying the same selection
        twice changes nothing.
        """
        tlds = list(tlds)

        def project(candidate: CandidateSuggestion) -> CandidateSuggestion:
            alternatives = candidate.alternatives
            if alternatives is not None:
                alternatives = tuple(project(a) for a in alternatives)
            return replace(
                candidate,
                availability=_project(candidate.availability, tlds),
                alternatives=alternatives,
            )

        self._candidates = [project(c) for c in self._candidates]

    def _update(self, candidate_id: str, change) -> Optional[CandidateSuggestion]:
        for index, candidate in enumerate(self._candidates):
            if candidate.id == candidate_id:
                updated = change(candidate)
                self._candidates[index] = updated
                return updated

            if not candidate.alternatives:
                continue
            for alt_index, alternative in enumerate(candidate.alternatives):
                if alternative.id == candidate_id:
                    updated = replace(change(alternative), alternatives=None)
                    alternatives = list(candidate.alternatives)
                    alternatives[alt_index] = updated
                    self._candidates[index] = replace(
                        candidate, alternatives=tuple(alternatives)
                    )
                    return updated
        return None

    @staticmethod
    def _as_top_level(candidate: CandidateSuggestion) -> CandidateSuggestion:
        alternatives = candidate.alternatives
        if alternatives is not None:
            alternatives = tuple(
                replace(a, depth=MAX_DEPTH, alternatives=None) for a in alternatives
            )
        return replace(candidate, depth=TOP_LEVEL_DEPTH, alternatives=alternatives)
