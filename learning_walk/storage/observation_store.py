"""
Persistence adapter for the observation collection.

The whole collection lives in one durable slot as a JSON array of
records in the stored (camelCase) layout. Saves overwrite the slot; a
slot that is missing, unreadable or malformed loads as an empty
collection.
"""

import json
import logging
import re
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from ..models.constants import STORAGE_KEY
from ..models.observation import Observation
from ..models.result import FailureKind, Result
from ..utils.file_utils import read_text, write_text_atomic
from .interfaces import KeyValueStorage, ObservationRepository


logger = logging.getLogger(__name__)

_SAFE_KEY = re.compile(r'^[A-Za-z0-9_.-]+$')


class FileSlotStorage(KeyValueStorage):
    """
    Key-value slots stored as one file per key.

    Examples:
        >>> storage = FileSlotStorage(Path("output/learning_walk_data"))
        >>> storage.set_item("learningWalks", "[]")
        >>> storage.get_item("learningWalks")
        '[]'
    """

    def __init__(self, directory: Path):
        self.directory = Path(directory)

    def path_for(self, key: str) -> Path:
        """Return the file backing a slot."""
        if not _SAFE_KEY.match(key):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.directory / f"{key}.json"

    def get_item(self, key: str) -> Optional[str]:
        return read_text(self.path_for(key))

    def set_item(self, key: str, value: str):
        write_text_atomic(value, self.path_for(key))


class InMemoryStorage(KeyValueStorage):
    """Slots kept in a dictionary, for tests and throwaway sessions."""

    def __init__(self, items: Optional[Dict[str, str]] = None):
        self.items: Dict[str, str] = dict(items or {})

    def get_item(self, key: str) -> Optional[str]:
        return self.items.get(key)

    def set_item(self, key: str, value: str):
        self.items[key] = value


class ObservationStore(ObservationRepository):
    """
    Observation repository backed by a single storage slot.

    Attributes:
        storage: Slot storage implementation
        key: Slot name (default: "learningWalks")

    Examples:
        >>> store = ObservationStore(FileSlotStorage(Path("data")))
        >>> observations = store.load()
        >>> result = store.save([new_observation] + observations)
        >>> if result.is_failure:
        ...     print(result.message)
    """

    def __init__(self, storage: KeyValueStorage, key: str = STORAGE_KEY):
        self.storage = storage
        self.key = key

    def load(self) -> List[Observation]:
        try:
            raw = self.storage.get_item(self.key)
            if raw is None:
                logger.debug(f"No stored observations under '{self.key}'")
                return []

            return self.deserialize(raw)

        except (OSError, ValueError) as e:
            logger.error(
                f"Failed to load observations from storage slot '{self.key}': {e}",
                exc_info=True
            )
            return []

    def save(self, observations: Sequence[Observation]) -> Result[None]:
        try:
            self.storage.set_item(self.key, self.serialize(observations))

        except (OSError, ValueError) as e:
            logger.error(
                f"Failed to save observations to storage slot '{self.key}': {e}",
                exc_info=True
            )
            return Result.failure(
                f"Could not save observations to storage: {e}",
                e,
                FailureKind.STORAGE_WRITE
            )

        logger.debug(f"Saved {len(observations)} observations to '{self.key}'")
        return Result.success(None)

    @staticmethod
    def serialize(observations: Sequence[Observation]) -> str:
        """Serialize a collection to the stored JSON text."""
        return json.dumps(
            [observation.to_dict() for observation in observations],
            ensure_ascii=False,
            indent=2
        )

    @staticmethod
    def deserialize(raw: str) -> List[Observation]:
        """
        Parse stored JSON text into observations.

        Raises:
            ValueError: If the text is not a JSON array of valid records
        """
        data = json.loads(raw)
        if not isinstance(data, list):
            raise ValueError(f"Stored observations must be a JSON array, got {type(data).__name__}")
        return [Observation.from_dict(item) for item in data]
