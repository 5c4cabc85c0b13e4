"""
Property-based tests for the Candidate Store.

Covers de-duplicating appends, TLD re-projection, id-based merges that
tolerate stale ids, and the two-level alternative tree.
"""

import string

from hypothesis import given, settings
from hypothesis import strategies as st

from name_bender.candidate_store import CandidateStore, new_candidate
from name_bender.enums import AvailabilityStatus
from name_bender.models import MAX_DEPTH, TOP_LEVEL_DEPTH
from name_bender.name_normalizer import normalize


TLD_POOL = [".com", ".ai", ".co", ".io", ".dev", ".app", ".net", ".org"]

name_strategy = st.text(alphabet=string.ascii_lowercase + " ", min_size=1, max_size=10)

tld_selection_strategy = st.lists(
    st.sampled_from(TLD_POOL), min_size=1, max_size=6, unique=True
)

status_strategy = st.sampled_from(list(AvailabilityStatus))


@st.composite
def populated_store_strategy(draw) -> CandidateStore:
    """A store with top-level candidates, some alternatives and mixed statuses."""
    tlds = draw(tld_selection_strategy)
    store = CandidateStore()
    store.append([new_candidate(n, tlds) for n in draw(st.lists(name_strategy, max_size=6))])

    for candidate in store.candidates:
        if draw(st.booleans()):
            alternatives = [
                new_candidate(n, tlds, depth=MAX_DEPTH)
                for n in draw(st.lists(name_strategy, max_size=3))
            ]
            store.set_alternatives(candidate.id, alternatives)

    for candidate in list(store.walk()):
        for tld in candidate.tlds:
            store.set_availability(candidate.id, tld, draw(status_strategy))
    return store


def _all_names(store: CandidateStore) -> list[str]:
    return [c.name for c in store.walk()]


class TestAppendDeduplicationProperty:
    """append() never introduces a name that is already present."""

    @given(
        store=populated_store_strategy(),
        incoming=st.lists(name_strategy, max_size=10),
        tlds=tld_selection_strategy,
    )
    @settings(max_examples=100)
    def test_append_never_duplicates_names(
        self, store: CandidateStore, incoming: list[str], tlds: list[str]
    ) -> None:
        """
        Property 1: Names stay unique across both levels.

        *For any* store state and any incoming batch, after append() every
        name in the store, top-level or nested, appears exactly once.
        """
        before = set(_all_names(store))
        added = store.append([new_candidate(n, tlds) for n in incoming])

        names = _all_names(store)
        assert len(names) == len(set(names))
        assert not ({c.name for c in added} & before)

    @given(store=populated_store_strategy(), tlds=tld_selection_strategy)
    @settings(max_examples=50)
    def test_append_of_existing_names_is_a_no_op(
        self, store: CandidateStore, tlds: list[str]
    ) -> None:
        """
        Property 2: Re-appending existing names changes nothing.
        """
        snapshot = store.candidates
        added = store.append([new_candidate(n, tlds) for n in _all_names(store)])
        assert added == []
        assert store.candidates == snapshot

    def test_append_skips_empty_names(self) -> None:
        store = CandidateStore()
        added = store.append([new_candidate("  ", [".com"]), new_candidate("a b", [".com"])])
        assert [c.name for c in added] == ["ab"]


class TestReprojectTldsProperty:
    """reproject_tlds() keeps known statuses and is idempotent."""

    @given(store=populated_store_strategy(), tlds=tld_selection_strategy)
    @settings(max_examples=100)
    def test_reproject_is_idempotent(self, store: CandidateStore, tlds: list[str]) -> None:
        """
        Property 3: Re-projecting twice equals re-projecting once.
        """
        store.reproject_tlds(tlds)
        once = store.candidates
        store.reproject_tlds(tlds)
        assert store.candidates == once

    @given(store=populated_store_strategy(), tlds=tld_selection_strategy)
    @settings(max_examples=100)
    def test_reproject_preserves_kept_and_resets_new(
        self, store: CandidateStore, tlds: list[str]
    ) -> None:
        """
        Property 4: Kept TLDs keep their status, new TLDs start UNKNOWN.

        *For any* store and new selection, every candidate's availability
        follows the new selection order; statuses of TLDs present before
        are unchanged and all other TLDs are UNKNOWN.
        """
        before = {c.id: {e.tld: e.status for e in c.availability} for c in store.walk()}
        store.reproject_tlds(tlds)

        for candidate in store.walk():
            assert candidate.tlds == tlds
            old = before[candidate.id]
            for entry in candidate.availability:
                if entry.tld in old:
                    assert entry.status == old[entry.tld]
                else:
                    assert entry.status == AvailabilityStatus.UNKNOWN

    def test_dropped_then_reselected_tld_starts_over(self) -> None:
        store = CandidateStore()
        (candidate,) = store.append([new_candidate("loop", [".com", ".io"])])
        store.set_availability(candidate.id, ".io", AvailabilityStatus.TAKEN)

        store.reproject_tlds([".com"])
        store.reproject_tlds([".com", ".io"])

        assert store.find(candidate.id).status_for(".io") == AvailabilityStatus.UNKNOWN


class TestMergeProperty:
    """merge() and set_availability() by id at either level."""

    @given(store=populated_store_strategy(), flag=st.booleans())
    @settings(max_examples=50)
    def test_merge_reaches_every_candidate(self, store: CandidateStore, flag: bool) -> None:
        """
        Property 5: Every id in the store can be merged into.
        """
        for candidate in list(store.walk()):
            updated = store.merge(candidate.id, is_generating_alternatives=flag)
            assert updated is not None
            assert store.find(candidate.id).is_generating_alternatives is flag

    @given(store=populated_store_strategy())
    @settings(max_examples=50)
    def test_unknown_id_is_a_silent_no_op(self, store: CandidateStore) -> None:
        """
        Property 6: Updates for ids that are gone change nothing.
        """
        snapshot = store.candidates
        assert store.merge("gone-1-abc", trademark_status=AvailabilityStatus.TAKEN) is None
        assert store.set_availability("gone-1-abc", ".com", AvailabilityStatus.TAKEN) is None
        assert store.candidates == snapshot

    def test_untracked_tld_is_ignored(self) -> None:
        store = CandidateStore()
        (candidate,) = store.append([new_candidate("loop", [".com"])])
        store.set_availability(candidate.id, ".io", AvailabilityStatus.AVAILABLE)
        assert store.find(candidate.id).tlds == [".com"]

    def test_late_result_after_clear_is_ignored(self) -> None:
        store = CandidateStore()
        (candidate,) = store.append([new_candidate("loop", [".com"])])
        store.clear()
        assert store.set_availability(candidate.id, ".com", AvailabilityStatus.TAKEN) is None
        assert len(store) == 0


class TestAlternativesTreeProperty:
    """The candidate tree never grows deeper than two levels."""

    @given(store=populated_store_strategy())
    @settings(max_examples=100)
    def test_depth_is_bounded(self, store: CandidateStore) -> None:
        """
        Property 7: Top-level candidates have depth 1, alternatives depth 2
        and alternatives own no alternatives.
        """
        for candidate in store.candidates:
            assert candidate.depth == TOP_LEVEL_DEPTH
            for alternative in candidate.alternatives or ():
                assert alternative.depth == MAX_DEPTH
                assert alternative.alternatives is None

    def test_alternatives_cannot_be_nested(self) -> None:
        store = CandidateStore()
        (parent,) = store.append([new_candidate("loop", [".com"])])
        (child,) = store.set_alternatives(parent.id, [new_candidate("loopy", [".com"])])

        assert store.set_alternatives(child.id, [new_candidate("loopier", [".com"])]) == []
        assert store.find_by_name("loopier") is None

    def test_alternatives_already_present_are_dropped(self) -> None:
        store = CandidateStore()
        parent, other = store.append([
            new_candidate("loop", [".com"]),
            new_candidate("orbit", [".com"]),
        ])
        attached = store.set_alternatives(parent.id, [
            new_candidate("Orbit", [".com"]),
            new_candidate("loop hq", [".com"]),
            new_candidate("loop", [".com"]),
        ])
        assert [a.name for a in attached] == ["loophq"]

    def test_regenerating_alternatives_replaces_them(self) -> None:
        store = CandidateStore()
        (parent,) = store.append([new_candidate("loop", [".com"])])
        store.set_alternatives(parent.id, [new_candidate("loophq", [".com"])])
        attached = store.set_alternatives(parent.id, [
            new_candidate("loophq", [".com"]),
            new_candidate("getloop", [".com"]),
        ])
        assert [a.name for a in attached] == ["loophq", "getloop"]
        assert [a.name for a in store.find(parent.id).alternatives] == ["loophq", "getloop"]

    def test_new_candidates_start_unknown(self) -> None:
        candidate = new_candidate(" Brew Nest ", [".com", ".ai", ".com"])
        assert candidate.name == normalize("Brew Nest")
        assert candidate.tlds == [".com", ".ai"]
        assert all(e.status == AvailabilityStatus.UNKNOWN for e in candidate.availability)
        assert candidate.trademark_status == AvailabilityStatus.UNKNOWN
