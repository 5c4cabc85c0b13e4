"""
Name Bender session - the orchestration layer.

Wires the whole pipeline together:
- prompt -> primary candidate extraction + name generation
- candidate store (dedup, merge) -> availability engine -> candidate store
- TLD selection changes re-project the store before the engine fills gaps
- alternatives, trademark checks, check-all sweeps and quotes on demand

Every operation that changes the store ends with a reconcile, so new
(candidate, TLD) pairs are picked up without any explicit diffing.
"""

from typing import AsyncIterator, Optional, Sequence

from .audit_logger import AuditLogger
from .availability_engine import AvailabilityEngine
from .candidate_store import CandidateStore, new_candidate
from .config import SystemConfig, create_default_config
from .dns_client import DNSClient
from .enums import LogLevel
from .exceptions import GenerationError, ValidationError
from .generator import SuggestionGenerator
from .models import (
    TOP_LEVEL_DEPTH,
    MAX_DEPTH,
    CandidateSuggestion,
    GenerationOutcome,
    SweepProgress,
    TrademarkOutcome,
)
from .preferences import PreferenceStore
from .primary_extractor import extract_primary_name
from .tld_selection import TldSelectionManager
from .trademark_client import TrademarkClient
from .trademark_resolver import TrademarkResolver


class NameBenderSession:
    """
    One brainstorming session: a candidate list and everything acting on it.

    Must be used from a single event loop. Late results of superseded
    work are dropped silently.
    """

    def __init__(
        self,
        config: Optional[SystemConfig] = None,
        generator: Optional[SuggestionGenerator] = None,
        dns_client: Optional[DNSClient] = None,
        trademark_client: Optional[TrademarkClient] = None,
        preferences: Optional[PreferenceStore] = None,
        logger: Optional[AuditLogger] = None,
    ) -> None:
        """
        Initialize the session.

        Components not passed in are built from the configuration.

        Args:
            config: System configuration
            generator: Optional name generator
            dns_client: Optional availability oracle client
            trademark_client: Optional trademark oracle client
            preferences: Optional TLD preference persistence
            logger: Optional audit logger for logging
        """
        self._config = config or create_default_config()
        self._logger = logger
        simulation = self._config.simulation_mode

        self._generator = generator or SuggestionGenerator(
            self._config.generator, simulation_mode=simulation, logger=logger
        )
        self._dns_client = dns_client or DNSClient(
            endpoint=self._config.dns.endpoint,
            timeout=self._config.dns.timeout_seconds,
            simulation_mode=simulation,
            logger=logger,
        )
        self._trademark_client = trademark_client or TrademarkClient(
            self._config.trademark, simulation_mode=simulation, logger=logger
        )
        if preferences is None:
            preferences = PreferenceStore(self._config.preferences.file_path)

        self._store = CandidateStore()
        self._engine = AvailabilityEngine(
            oracle=self._dns_client.check_availability,
            store=self._store,
            batch_size=self._config.sweep.batch_size,
            logger=logger,
        )
        self._selection = TldSelectionManager(
            self._store, preferences=preferences, logger=logger
        )
        self._trademarks = TrademarkResolver(
            self._trademark_client, self._store, logger=logger
        )

        self._last_prompt: Optional[str] = None
        self._error: Optional[str] = None
        self._is_loading = False
        self._is_loading_more = False
        self._generation = 0

    async def __aenter__(self) -> "NameBenderSession":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()

    # ------------------------------------------------------------------
    # Generation
    # ------------------------------------------------------------------

    async def generate(self, prompt: str) -> GenerationOutcome:
        """
        Start a fresh generation, discarding the candidates of earlier ones.

        The primary candidate extracted from the prompt leads the list
        unless the generator returned the same name. On failure the error
        is recorded and the store stays empty.

        Raises:
            ValidationError: If the prompt is blank
        """
        prompt = (prompt or "").strip()
        if not prompt:
            raise ValidationError(
                code="empty_prompt",
                message="Please describe what you want to name",
            )

        self._generation += 1
        generation = self._generation
        self._store.clear()
        self._last_prompt = prompt
        self._error = None
        self._is_loading = True

        primary = extract_primary_name(prompt)
        self._log_info(
            "NameBenderSession",
            "Starting generation",
            {"prompt": prompt, "primary": primary, "tlds": self._selection.selected},
        )

        try:
            names = await self._generator.generate(prompt, [primary] if primary else [])
        except GenerationError as e:
            if generation == self._generation:
                self._error = e.message
                self._is_loading = False
            self._log_error("NameBenderSession", e.message, e.details)
            return GenerationOutcome(suggestions=[], error=e.message)

        if generation != self._generation:
            return GenerationOutcome(suggestions=[])

        tlds = self._selection.selected
        suggestions = [new_candidate(name, tlds) for name in names]
        if primary and primary not in names:
            suggestions.insert(0, new_candidate(primary, tlds))

        # "Show more" results that landed while this call was in flight stay,
        # after the fresh suggestions
        landed_meanwhile = self._store.candidates
        self._store.clear()
        added = self._store.append(suggestions)
        self._store.append(landed_meanwhile)
        self._is_loading = False
        self.reconcile()
        return GenerationOutcome(suggestions=added)

    async def show_more(self) -> GenerationOutcome:
        """
        Append more candidates for the last prompt.

        Every name already in the store is sent as an exclusion and any
        repeat is dropped. Without a previous prompt this does nothing.
        """
        if not self._last_prompt:
            return GenerationOutcome(suggestions=[])

        generation = self._generation
        self._error = None
        self._is_loading_more = True
        existing = [c.name for c in self._store.walk()]

        try:
            names = await self._generator.generate(self._last_prompt, existing)
        except GenerationError as e:
            self._is_loading_more = False
            if generation == self._generation:
                self._error = e.message
            self._log_error("NameBenderSession", e.message, e.details)
            return GenerationOutcome(suggestions=[], error=e.message)

        self._is_loading_more = False
        if generation != self._generation:
            return GenerationOutcome(suggestions=[])

        tlds = self._selection.selected
        added = self._store.append([new_candidate(name, tlds) for name in names])
        self.reconcile()
        return GenerationOutcome(suggestions=added)

    async def generate_alternatives(self, candidate_id: str) -> GenerationOutcome:
        """
        Generate alternatives for a top-level candidate and nest them under it.

        Raises:
            ValidationError: If the candidate is itself an alternative
        """
        candidate = self._store.find(candidate_id)
        if candidate is None:
            return GenerationOutcome(suggestions=[])
        if candidate.depth != TOP_LEVEL_DEPTH:
            raise ValidationError(
                code="nested_alternatives",
                message="Alternatives can only be generated for top-level candidates",
                details={"name": candidate.name, "max_depth": MAX_DEPTH},
            )

        self._store.merge(candidate_id, is_generating_alternatives=True)
        try:
            names = await self._generator.generate_alternatives(candidate.name)
        except GenerationError as e:
            self._error = e.message
            self._log_error(
                "NameBenderSession", e.message, {"name": candidate.name, **e.details}
            )
            return GenerationOutcome(suggestions=[], error=e.message)
        finally:
            self._store.merge(candidate_id, is_generating_alternatives=False)

        tlds = self._selection.selected
        attached = self._store.set_alternatives(
            candidate_id,
            [new_candidate(name, tlds, depth=MAX_DEPTH) for name in names],
        )
        self.reconcile()
        return GenerationOutcome(suggestions=attached)

    def add_candidate(self, name: str) -> Optional[CandidateSuggestion]:
        """
        Add a single name typed by the user as a top-level candidate.

        Returns:
            The new candidate, or None if the name is empty or already present
        """
        added = self._store.append([new_candidate(name, self._selection.selected)])
        if not added:
            return None
        self.reconcile()
        return added[0]

    async def generate_quote(self, prompt: str) -> str:
        """Inspirational quote for the prompt; never fails."""
        return await self._generator.generate_quote(prompt)

    # ------------------------------------------------------------------
    # Availability and trademarks
    # ------------------------------------------------------------------

    def set_tlds(self, tlds: Sequence[str], persist: bool = True) -> bool:
        """
        Change the TLD selection and check the newly added TLDs.

        Args:
            tlds: New selection, at most the selection limit
            persist: Save the selection as the user preference

        Returns:
            True if the selection was accepted
        """
        if not self._selection.set_selection(tlds, persist=persist):
            return False
        self.reconcile()
        return True

    def reconcile(self) -> None:
        """Dispatch checks for every UNKNOWN pair in the store."""
        self._engine.reconcile()

    async def wait_for_checks(self) -> None:
        """Wait until every dispatched availability check has resolved."""
        await self._engine.wait_idle()

    async def check_trademark(self, candidate_id: str) -> Optional[TrademarkOutcome]:
        return await self._trademarks.check_trademark(candidate_id)

    async def check_trademark_name(self, name: str) -> TrademarkOutcome:
        return await self._trademarks.check_name(name)

    def check_all_tlds(
        self, name: str, tlds: Optional[Sequence[str]] = None
    ) -> AsyncIterator[SweepProgress]:
        """Sweep one name over the TLD universe; yields progress per batch."""
        return self._engine.check_all_tlds(name, tlds)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def candidates(self) -> list[CandidateSuggestion]:
        return self._store.candidates

    @property
    def store(self) -> CandidateStore:
        return self._store

    @property
    def engine(self) -> AvailabilityEngine:
        return self._engine

    @property
    def selection(self) -> TldSelectionManager:
        return self._selection

    @property
    def selected_tlds(self) -> list[str]:
        return self._selection.selected

    @property
    def last_prompt(self) -> Optional[str]:
        return self._last_prompt

    @property
    def error(self) -> Optional[str]:
        """Message of the last failed generation, cleared by the next attempt."""
        return self._error

    @property
    def is_loading(self) -> bool:
        return self._is_loading

    @property
    def is_loading_more(self) -> bool:
        return self._is_loading_more

    @property
    def config(self) -> SystemConfig:
        return self._config

    async def close(self) -> None:
        """Wait for outstanding checks and close the oracle clients."""
        await self._engine.wait_idle()
        await self._dns_client.close()
        await self._trademark_client.close()

    def _log_info(self, component: str, message: str, data: dict) -> None:
        """Log an info message if logger is available."""
        if self._logger:
            self._logger.log(LogLevel.INFO, component, message, data)

    def _log_error(self, component: str, message: str, data: dict) -> None:
        """Log an error message if logger is available."""
        if self._logger:
            self._logger.log(LogLevel.ERROR, component, message, data)
