"""
Trademark Resolution Adapter.

Runs a single trademark check for a candidate and records the outcome in
the candidate store. An UNKNOWN result comes with the manual search URL so
the caller can hand the user off to the public register.
"""

from typing import Optional

from .audit_logger import AuditLogger
from .candidate_store import CandidateStore
from .enums import AvailabilityStatus, LogLevel
from .models import TrademarkOutcome
from .trademark_client import TrademarkClient


class TrademarkResolver:
    """Resolves the trademark status of candidates in the store."""

    def __init__(
        self,
        client: TrademarkClient,
        store: CandidateStore,
        logger: Optional[AuditLogger] = None,
    ) -> None:
        self._client = client
        self._store = store
        self._logger = logger

    async def check_trademark(self, candidate_id: str) -> Optional[TrademarkOutcome]:
        """
        Check the trademark status of a stored candidate.

        The candidate moves to CHECKING before the oracle is called and to
        the returned status afterwards. Never raises.

        Returns:
            The outcome, or None if no candidate has this id
        """
        candidate = self._store.find(candidate_id)
        if candidate is None:
            return None

        self._store.merge(candidate_id, trademark_status=AvailabilityStatus.CHECKING)
        status = await self.resolve(candidate.name)
        self._store.merge(candidate_id, trademark_status=status)
        return self._outcome(candidate.name, status)

    async def check_name(self, name: str) -> TrademarkOutcome:
        """Check a bare name without touching the store."""
        status = await self.resolve(name)
        return self._outcome(name, status)

    async def resolve(self, name: str) -> AvailabilityStatus:
        """Ask the oracle, turning any failure into UNKNOWN."""
        try:
            status = await self._client.check_trademark(name)
        except Exception as e:
            if self._logger:
                self._logger.log_error(
                    "TrademarkResolver",
                    f"Trademark check failed for {name}",
                    e,
                    {"name": name},
                )
            return AvailabilityStatus.UNKNOWN

        if status not in (AvailabilityStatus.AVAILABLE, AvailabilityStatus.TAKEN):
            return AvailabilityStatus.UNKNOWN
        return status

    def _outcome(self, name: str, status: AvailabilityStatus) -> TrademarkOutcome:
        manual_url = None
        if status == AvailabilityStatus.UNKNOWN:
            manual_url = self._client.manual_search_url(name)
            if self._logger:
                self._logger.log(
                    LogLevel.INFO,
                    "TrademarkResolver",
                    f"Falling back to manual trademark search for {name}",
                    {"name": name, "url": manual_url},
                )
        return TrademarkOutcome(name=name, status=status, manual_search_url=manual_url)
