"""
Availability Resolution Engine.

Drives the availability oracle for every (candidate, TLD) pair in the
candidate store and runs the check-all sweep over the whole TLD universe.

Checks are triggered by reconcile(), which is idempotent: a pair is only
dispatched while it is UNKNOWN, and it is moved to CHECKING before the task
that awaits the oracle is created. Nothing awaits between the test and the
write, so on a single event loop the CHECKING state is an atomic dedup guard.

Oracle failures never escape: the pair resolves to TAKEN and is not retried.
"""

import asyncio
from typing import AsyncIterator, Awaitable, Callable, Optional, Sequence

from .audit_logger import AuditLogger
from .candidate_store import CandidateStore
from .enums import AvailabilityStatus, LogLevel
from .exceptions import ValidationError
from .models import SweepEntry, SweepProgress
from .name_normalizer import normalize
from .tld_registry import ALL_TLDS


# Anything with the shape of DNSClient.check_availability
AvailabilityOracle = Callable[[str, str], Awaitable[AvailabilityStatus]]

DEFAULT_BATCH_SIZE = 20


class AvailabilityEngine:
    """
    Orchestrates availability checks; the checking itself is the oracle's job.

    All state lives in the candidate store, except the progress of the
    current sweep, which is independent of the store.
    """

    def __init__(
        self,
        oracle: AvailabilityOracle,
        store: CandidateStore,
        batch_size: int = DEFAULT_BATCH_SIZE,
        universe: Sequence[str] = ALL_TLDS,
        logger: Optional[AuditLogger] = None,
    ) -> None:
        """
        Initialize the engine.

        Args:
            oracle: Async callable answering (name, tld) -> AVAILABLE | TAKEN
            store: Candidate store the results are written into
            batch_size: Concurrent lookups per sweep batch
            universe: TLDs covered by the check-all sweep
            logger: Optional audit logger
        """
        if batch_size < 1:
            raise ValueError(f"batch_size must be positive, got {batch_size}")

        self._oracle = oracle
        self._store = store
        self._batch_size = batch_size
        self._universe = tuple(dict.fromkeys(universe))
        self._logger = logger
        self._tasks: set[asyncio.Task] = set()
        # Latest dispatch per (candidate id, tld); only it may write a result
        self._dispatched: dict[tuple[str, str], asyncio.Task] = {}
        self._sweep: Optional[SweepProgress] = None
        self._sweep_generation = 0

    @property
    def batch_size(self) -> int:
        return self._batch_size

    @property
    def universe(self) -> tuple[str, ...]:
        return self._universe

    @property
    def pending_count(self) -> int:
        """Number of pair checks still in flight."""
        return len(self._tasks)

    @property
    def sweep_progress(self) -> Optional[SweepProgress]:
        """Snapshot of the most recent sweep, or None if none ran yet."""
        if self._sweep is None:
            return None
        return self._snapshot(self._sweep)

    # ------------------------------------------------------------------
    # Per-pair checks
    # ------------------------------------------------------------------

    def reconcile(self) -> list[asyncio.Task]:
        """
        Start a check for every UNKNOWN pair in the store.

        Must be called from within a running event loop. Calling it again
        while checks are in flight starts nothing new for those pairs.

        Returns:
            The tasks started by this call
        """
        started = []
        for candidate in self._store.walk():
            for entry in candidate.availability:
                task = self.start_check(candidate.id, entry.tld)
                if task is not None:
                    started.append(task)

        if started:
            self._log(
                LogLevel.DEBUG,
                f"Dispatched {len(started)} availability checks",
                {"dispatched": len(started), "in_flight": len(self._tasks)},
            )
        return started

    def start_check(self, candidate_id: str, tld: str) -> Optional[asyncio.Task]:
        """
        Dispatch one pair if, and only if, it is currently UNKNOWN.

        Returns:
            The task awaiting the oracle, or None if nothing was dispatched
        """
        candidate = self._store.find(candidate_id)
        if candidate is None:
            return None
        if candidate.status_for(tld) != AvailabilityStatus.UNKNOWN:
            return None

        self._store.set_availability(candidate_id, tld, AvailabilityStatus.CHECKING)

        key = (candidate_id, tld)
        task = asyncio.create_task(self._resolve_pair(candidate_id, candidate.name, tld))
        self._dispatched[key] = task
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        task.add_done_callback(lambda done: self._forget_dispatch(key, done))
        return task

    def _forget_dispatch(self, key: tuple[str, str], task: asyncio.Task) -> None:
        if self._dispatched.get(key) is task:
            del self._dispatched[key]

    async def _resolve_pair(
        self, candidate_id: str, name: str, tld: str
    ) -> AvailabilityStatus:
        status = await self.check_one(name, tld)

        # A newer dispatch for the same pair supersedes this one
        if self._dispatched.get((candidate_id, tld)) is not asyncio.current_task():
            return status

        # The store may have been reset or the TLD dropped in the meantime
        candidate = self._store.find(candidate_id)
        if candidate is not None and candidate.status_for(tld) == AvailabilityStatus.CHECKING:
            self._store.set_availability(candidate_id, tld, status)
        return status

    async def check_one(self, name: str, tld: str) -> AvailabilityStatus:
        """
        Ask the oracle about one domain, failing closed.

        Never raises. Exceptions and answers other than AVAILABLE or TAKEN
        resolve to TAKEN.
        """
        try:
            status = await self._oracle(name, tld)
        except Exception as e:
            if self._logger:
                self._logger.log_error(
                    "AvailabilityEngine",
                    f"Availability check failed for {name}{tld}, treating as taken",
                    e,
                    {"name": name, "tld": tld},
                )
            return AvailabilityStatus.TAKEN

        if status not in (AvailabilityStatus.AVAILABLE, AvailabilityStatus.TAKEN):
            self._log(
                LogLevel.WARN,
                f"Oracle answered {status!r} for {name}{tld}, treating as taken",
                {"name": name, "tld": tld},
            )
            return AvailabilityStatus.TAKEN
        return status

    async def wait_idle(self) -> None:
        """Wait until every dispatched pair check has completed."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks))

    async def resolve_all(self) -> None:
        """Reconcile the store and wait for the resulting checks."""
        self.reconcile()
        await self.wait_idle()

    # ------------------------------------------------------------------
    # Check-all sweep
    # ------------------------------------------------------------------

    async def check_all_tlds(
        self,
        name: str,
        tlds: Optional[Sequence[str]] = None,
    ) -> AsyncIterator[SweepProgress]:
        """
        Check one name against every TLD of the universe, batch by batch.

        Each batch is awaited in full before the next one is dispatched, and
        a snapshot of the cumulative progress is yielded after every batch.
        Starting a new sweep resets the progress; an older sweep still being
        iterated stops at its next batch boundary.

        Args:
            name: Candidate name; normalized here
            tlds: TLDs to sweep (defaults to the whole universe)

        Raises:
            ValidationError: If the name is empty after normalization
        """
        normalized = normalize(name)
        if not normalized:
            raise ValidationError(
                code="empty_name",
                message="A name is required for a check-all sweep",
                details={"raw_input": name},
            )

        targets = tuple(dict.fromkeys(tlds)) if tlds is not None else self._universe

        self._sweep_generation += 1
        generation = self._sweep_generation
        sweep = SweepProgress(name=normalized, checked_count=0, total_count=len(targets))
        self._sweep = sweep

        self._log(
            LogLevel.INFO,
            f"Starting check-all sweep for {normalized}",
            {"name": normalized, "total": len(targets), "batch_size": self._batch_size},
        )

        for start in range(0, len(targets), self._batch_size):
            batch = targets[start:start + self._batch_size]
            statuses = await asyncio.gather(
                *(self.check_one(normalized, tld) for tld in batch)
            )

            if generation != self._sweep_generation:
                self._log(
                    LogLevel.DEBUG,
                    f"Sweep for {normalized} superseded, stopping",
                    {"name": normalized, "checked": sweep.checked_count},
                )
                return

            sweep.results.extend(
                SweepEntry(name=normalized, tld=tld, status=status)
                for tld, status in zip(batch, statuses)
            )
            sweep.checked_count += len(batch)

            self._log(
                LogLevel.DEBUG,
                f"Sweep batch done: {sweep.checked_count}/{sweep.total_count}",
                {"name": normalized, "checked": sweep.checked_count, "total": sweep.total_count},
            )
            yield self._snapshot(sweep)

        if not targets:
            yield self._snapshot(sweep)

    async def run_sweep(
        self,
        name: str,
        tlds: Optional[Sequence[str]] = None,
        on_progress: Optional[Callable[[SweepProgress], None]] = None,
    ) -> SweepProgress:
        """Run a complete sweep and return its final snapshot."""
        final = SweepProgress(name=normalize(name), checked_count=0, total_count=0)
        async for progress in self.check_all_tlds(name, tlds):
            final = progress
            if on_progress:
                on_progress(progress)
        return final

    @staticmethod
    def _snapshot(sweep: SweepProgress) -> SweepProgress:
        return SweepProgress(
            name=sweep.name,
            checked_count=sweep.checked_count,
            total_count=sweep.total_count,
            results=list(sweep.results),
        )

    def _log(self, level: LogLevel, message: str, data: dict) -> None:
        if self._logger:
            self._logger.log(level, "AvailabilityEngine", message, data)
