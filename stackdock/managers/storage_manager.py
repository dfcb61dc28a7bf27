"""
Storage manager for stackdock.

Mirrors the engine snapshot to a JSON file in the data directory.
Saving is best effort: failures are logged and never reach the caller.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import ValidationError

from stackdock.constants import DEFAULT_DATA_DIR, SNAPSHOT_FILE_NAME
from stackdock.exceptions import StorageError
from stackdock.models.files import Snapshot

logger = logging.getLogger(__name__)


class StorageManager:
    """
    Manages persistence of the stack/card snapshot to a JSON file.

    Handles atomic writes to prevent data corruption.
    """

    def __init__(self, data_dir: Optional[Path] = None) -> None:
        """
        Initialize the StorageManager with a data directory path.

        Args:
            data_dir: Path to the data directory. Defaults to .stackdock/ in current directory.
        """
        self.data_dir = data_dir if data_dir else DEFAULT_DATA_DIR
        self.snapshot_path = self.data_dir / SNAPSHOT_FILE_NAME

    def _atomic_write(self, file_path: Path, data: Dict[str, Any]) -> None:
        """Write data to a JSON file atomically to prevent corruption.

        Args:
            file_path: Path to the file to write.
            data: Dictionary data to write as JSON.

        Raises:
            StorageError: If writing to file fails.
        """
        try:
            file_path.parent.mkdir(parents=True, exist_ok=True)
            temp_fd, temp_path = tempfile.mkstemp(
                dir=file_path.parent, prefix=".tmp_stackdock_", suffix=".json"
            )
        except OSError as e:
            raise StorageError(f"Failed to write to {file_path}: {e}")

        try:
            with os.fdopen(temp_fd, "w", encoding="utf-8") as temp_file:
                json.dump(data, temp_file, indent=2)
            os.replace(temp_path, file_path)
        except Exception as e:
            try:
                os.unlink(temp_path)
            except OSError:
                pass
            raise StorageError(f"Failed to write to {file_path}: {e}")

    def save(self, snapshot: Snapshot) -> bool:
        """Overwrite the stored snapshot.

        Args:
            snapshot: Snapshot to persist.

        Returns:
            True if the write succeeded, False if it failed (and was logged).
        """
        try:
            self._atomic_write(self.snapshot_path, snapshot.model_dump(mode="json"))
        except StorageError as e:
            logger.error("Failed to save snapshot: %s", e)
            return False
        logger.debug(
            "Saved snapshot: %d stacks, %d cards", len(snapshot.stacks), len(snapshot.cards)
        )
        return True

    def load(self) -> Optional[Snapshot]:
        """Load the stored snapshot.

        Returns:
            The snapshot, or None if the file is missing or corrupt.
        """
        if not self.snapshot_path.exists():
            return None

        try:
            return Snapshot.model_validate_json(self.snapshot_path.read_bytes())
        except (OSError, UnicodeDecodeError, ValidationError) as e:
            logger.error("Failed to load %s: %s", self.snapshot_path, e)
            return None

    def clear(self) -> None:
        """Remove the stored snapshot, if any."""
        try:
            self.snapshot_path.unlink(missing_ok=True)
        except OSError as e:
            logger.error("Failed to clear %s: %s", self.snapshot_path, e)
