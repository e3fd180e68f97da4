"""
Abstract interfaces for persistence components.

This module defines abstract base classes that enable dependency inversion
and make testing easier through in-memory or mocked implementations.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from ..models.observation import Observation
from ..models.result import Result


class KeyValueStorage(ABC):
    """
    Durable string slots addressed by key.

    Implementations raise OSError (or a subclass) when a slot cannot
    be read or written; callers decide how to recover.
    """

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        """
        Read a slot.

        Args:
            key: Slot name

        Returns:
            Stored text, or None if the slot does not exist
        """
        pass

    @abstractmethod
    def set_item(self, key: str, value: str):
        """
        Replace a slot's contents entirely.

        Args:
            key: Slot name
            value: Text to store
        """
        pass


class ObservationRepository(ABC):
    """
    Load/save capability injected into the presentation layer.

    Both operations tolerate storage failures: load() falls back to an
    empty collection and save() reports the failure through its Result.
    """

    @abstractmethod
    def load(self) -> List[Observation]:
        """
        Load the full observation collection, newest first.

        Returns:
            Stored observations, or an empty list if none can be read
        """
        pass

    @abstractmethod
    def save(self, observations: Sequence[Observation]) -> Result[None]:
        """
        Overwrite the stored collection with the given observations.

        Returns:
            Result with None on success, STORAGE_WRITE failure otherwise
        """
        pass
