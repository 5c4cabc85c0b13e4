"""
Preference Store for the user's selected TLDs.

The selection is kept in a small JSON file so it survives between runs.
Reading never guesses: a missing file means "no preference", anything
unreadable or malformed raises PersistenceError and the caller decides
what to fall back to.
"""

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Sequence

from .exceptions import PersistenceError


class PreferenceStore:
    """JSON-file persistence of the selected TLD set."""

    VERSION = 1

    def __init__(self, file_path: Path) -> None:
        """
        Initialize the preference store.

        Args:
            file_path: Path to the preference file (JSON format)
        """
        self._file_path = Path(file_path)

    @property
    def file_path(self) -> Path:
        return self._file_path

    def load_selected_tlds(self) -> Optional[list[str]]:
        """
        Load the stored TLD selection.

        Returns:
            The stored TLDs, or None if no preference was saved yet

        Raises:
            PersistenceError: If the file cannot be read, parsed or holds
                anything but a non-empty list of TLD strings
        """
        if not self._file_path.exists():
            return None

        try:
            with open(self._file_path, "r", encoding="utf-8") as f:
                raw_data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise PersistenceError(
                code="parse_error",
                message=f"Failed to parse preference file: {e}",
                details={"file_path": str(self._file_path)},
            )
        except OSError as e:
            raise PersistenceError(
                code="io_error",
                message=f"Failed to read preference file: {e}",
                details={"file_path": str(self._file_path)},
            )

        tlds = raw_data.get("selected_tlds") if isinstance(raw_data, dict) else None
        if not self.is_valid_selection(tlds):
            raise PersistenceError(
                code="invalid_data",
                message="Preference file does not hold a valid TLD selection",
                details={"file_path": str(self._file_path), "selected_tlds": tlds},
            )
        return list(tlds)

    def save_selected_tlds(self, tlds: Sequence[str]) -> None:
        """
        Persist a TLD selection.

        Raises:
            PersistenceError: If the file cannot be written
        """
        output_data = {
            "version": self.VERSION,
            "selected_tlds": list(tlds),
            "last_updated": datetime.now(timezone.utc).isoformat(),
        }

        try:
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self._file_path, "w", encoding="utf-8") as f:
                json.dump(output_data, f, indent=2, sort_keys=True)
        except OSError as e:
            raise PersistenceError(
                code="io_error",
                message=f"Failed to write preference file: {e}",
                details={"file_path": str(self._file_path)},
            )

    @staticmethod
    def is_valid_selection(tlds) -> bool:
        """A stored selection must be a non-empty list of '.'-prefixed strings."""
        return (
            isinstance(tlds, list)
            and len(tlds) > 0
            and all(isinstance(t, str) and t.startswith(".") for t in tlds)
        )
