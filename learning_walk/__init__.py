"""
Learning Walk observation recorder.

Record classroom learning-walk observations, keep them in durable
storage, export them to CSV and compose feedback emails.

Usage:
    >>> from learning_walk import LearningWalkSession, ObservationStore, InMemoryStorage
    >>>
    >>> session = LearningWalkSession(ObservationStore(InMemoryStorage()))
    >>> session.form.set_field("dateTime", "2024-03-01T09:00")
    >>> session.form.set_field("yearGroup", "Year 8")
    >>> session.form.set_field("teacherName", "J. Smith")
    >>> result = session.save()
"""

from .models.observation import Observation, ObservationForm, create_observation
from .session import LearningWalkSession
from .storage.observation_store import FileSlotStorage, InMemoryStorage, ObservationStore

__all__ = [
    "Observation",
    "ObservationForm",
    "create_observation",
    "LearningWalkSession",
    "FileSlotStorage",
    "InMemoryStorage",
    "ObservationStore",
]

__version__ = "0.1.0"
