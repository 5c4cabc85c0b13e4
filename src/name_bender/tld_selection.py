"""
TLD Selection Manager.

Owns the set of TLDs every candidate is checked against. A change of the
selection re-projects the candidate store, after which the availability
engine's next reconcile picks up exactly the newly added TLDs.
"""

from typing import Optional, Sequence

from .audit_logger import AuditLogger
from .candidate_store import CandidateStore
from .enums import LogLevel
from .exceptions import PersistenceError
from .preferences import PreferenceStore
from .tld_registry import DEFAULT_SELECTED_TLDS, MAX_SELECTED_TLDS


class TldSelectionManager:
    """Selected TLD set with a size cap, persisted between runs."""

    def __init__(
        self,
        store: CandidateStore,
        preferences: Optional[PreferenceStore] = None,
        max_selected: int = MAX_SELECTED_TLDS,
        logger: Optional[AuditLogger] = None,
    ) -> None:
        """
        Initialize the manager and load the stored selection.

        Args:
            store: Candidate store to re-project on every change
            preferences: Optional persistence for the selection
            max_selected: Largest allowed selection
            logger: Optional audit logger
        """
        self._store = store
        self._preferences = preferences
        self._max_selected = max_selected
        self._logger = logger
        self._selected: list[str] = self._load()

    @property
    def selected(self) -> list[str]:
        """Currently selected TLDs, in selection order."""
        return list(self._selected)

    @property
    def max_selected(self) -> int:
        return self._max_selected

    @property
    def is_full(self) -> bool:
        return len(self._selected) >= self._max_selected

    def is_selected(self, tld: str) -> bool:
        return tld in self._selected

    def set_selection(self, tlds: Sequence[str], persist: bool = True) -> bool:
        """
        Replace the selection.

        Rejected without any change when the de-duplicated selection is
        empty, larger than the cap, or holds a token not starting with ".".
        With persist=False the change only lasts for this session.

        Returns:
            True if the selection was applied
        """
        selection = list(dict.fromkeys(tlds))
        if not self._is_acceptable(selection):
            self._log(
                LogLevel.WARN,
                "TLD selection rejected",
                {"tlds": selection, "max_selected": self._max_selected},
            )
            return False

        self._selected = selection
        self._store.reproject_tlds(selection)
        if persist:
            self._save(selection)
        self._log(LogLevel.INFO, "TLD selection changed", {"tlds": selection})
        return True

    def toggle(self, tld: str) -> bool:
        """
        Add or remove a single TLD.

        Adding beyond the cap and removing the last TLD are refused.

        Returns:
            True if the selection changed
        """
        if tld in self._selected:
            return self.set_selection([t for t in self._selected if t != tld])
        if self.is_full:
            return False
        return self.set_selection(self._selected + [tld])

    def _is_acceptable(self, selection: list[str]) -> bool:
        return (
            0 < len(selection) <= self._max_selected
            and all(isinstance(t, str) and t.startswith(".") for t in selection)
        )

    def _load(self) -> list[str]:
        """Stored selection, or the defaults if there is none or it is unusable."""
        if self._preferences is None:
            return list(DEFAULT_SELECTED_TLDS)

        try:
            stored = self._preferences.load_selected_tlds()
        except PersistenceError as e:
            if self._logger:
                self._logger.log_error(
                    "TldSelectionManager",
                    "Could not load TLD preference, using defaults",
                    e,
                    e.details,
                )
            return list(DEFAULT_SELECTED_TLDS)

        if stored is None:
            return list(DEFAULT_SELECTED_TLDS)

        selection = list(dict.fromkeys(stored))
        if not self._is_acceptable(selection):
            self._log(
                LogLevel.WARN,
                "Stored TLD preference exceeds the selection limit, using defaults",
                {"tlds": selection, "max_selected": self._max_selected},
            )
            return list(DEFAULT_SELECTED_TLDS)
        return selection

    def _save(self, selection: list[str]) -> None:
        if self._preferences is None:
            return
        try:
            self._preferences.save_selected_tlds(selection)
        except PersistenceError as e:
            if self._logger:
                self._logger.log_error(
                    "TldSelectionManager", "Could not save TLD preference", e, e.details
                )

    def _log(self, level: LogLevel, message: str, data: dict) -> None:
        if self._logger:
            self._logger.log(level, "TldSelectionManager", message, data)
