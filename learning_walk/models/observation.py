"""
Observation record model.

This module provides:
- ObservationForm: the mutable, not-yet-saved observation edited field by field
- Observation: the immutable saved record
- create_observation(): snapshot a form into a new saved record
- Conversion to and from the stored (camelCase) dictionary layout
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from types import MappingProxyType
from typing import Any, Callable, Dict, List, Mapping, Optional

from .constants import STRATEGY_KEYS


# Python attribute name -> stored key name
WIRE_FIELDS: Dict[str, str] = {
    "id": "id",
    "date_time": "dateTime",
    "year_group": "yearGroup",
    "teacher_name": "teacherName",
    "observation_notes": "observationNotes",
    "strategies": "strategies",
}

# Fields a user edits directly (strategies are toggled separately)
EDITABLE_FIELDS = ("date_time", "year_group", "teacher_name", "observation_notes")

_ATTRIBUTE_BY_WIRE = {wire: attr for attr, wire in WIRE_FIELDS.items()}


def empty_strategies() -> Dict[str, bool]:
    """Return a strategy set with every strategy switched off."""
    return {key: False for key in STRATEGY_KEYS}


def normalize_strategies(raw: Optional[Mapping[str, Any]]) -> Dict[str, bool]:
    """
    Build a total strategy set from a possibly partial mapping.

    Missing keys default to False. Keys outside the fixed strategy
    enumeration are rejected so the key set never drifts.

    Args:
        raw: Mapping of strategy key to flag (may be None)

    Returns:
        New dictionary with exactly the fixed strategy keys, in order

    Raises:
        ValueError: If raw is not a mapping or holds an unknown key
    """
    strategies = empty_strategies()
    if raw is None:
        return strategies

    if not isinstance(raw, Mapping):
        raise ValueError(f"strategies must be a mapping, got {type(raw).__name__}")

    unknown = [key for key in raw if key not in strategies]
    if unknown:
        raise ValueError(f"Unknown strategy keys: {', '.join(sorted(map(str, unknown)))}")

    for key, value in raw.items():
        if not isinstance(value, bool):
            raise ValueError(f"Strategy flag {key} must be a boolean, got {type(value).__name__}")
        strategies[key] = value

    return strategies


def selected_strategies(strategies: Mapping[str, bool]) -> List[str]:
    """Return the switched-on strategy keys in fixed display order."""
    return [key for key in STRATEGY_KEYS if strategies.get(key)]


@dataclass
class ObservationForm:
    """
    In-progress observation edited by the user.

    The id stays empty and year_group may be empty until the form is
    saved. Saving never mutates the form; callers reset it afterwards.

    Examples:
        >>> form = ObservationForm()
        >>> form.set_field("teacherName", "J. Smith")
        >>> form.set_strategy("coldCalling", True)
        >>> form.reset()
    """

    id: str = ""
    date_time: str = ""
    year_group: str = ""
    teacher_name: str = ""
    observation_notes: str = ""
    strategies: Dict[str, bool] = field(default_factory=empty_strategies)

    def set_field(self, name: str, value: str):
        """
        Set one editable text field.

        Args:
            name: Attribute name (``teacher_name``) or stored key (``teacherName``)
            value: New field value

        Raises:
            ValueError: If the field is not user editable
        """
        attribute = _ATTRIBUTE_BY_WIRE.get(name, name)
        if attribute not in EDITABLE_FIELDS:
            raise ValueError(f"Unknown form field: {name}")
        setattr(self, attribute, "" if value is None else str(value))

    def set_strategy(self, key: str, checked: bool):
        """
        Switch one teaching strategy on or off.

        Raises:
            ValueError: If key is not a known strategy
        """
        if key not in self.strategies:
            raise ValueError(f"Unknown strategy: {key}")
        self.strategies[key] = bool(checked)

    def reset(self):
        """Clear every field back to the empty form."""
        self.id = ""
        self.date_time = ""
        self.year_group = ""
        self.teacher_name = ""
        self.observation_notes = ""
        self.strategies = empty_strategies()


@dataclass(frozen=True)
class Observation:
    """
    Saved learning-walk observation.

    Attributes:
        id: Opaque unique identifier assigned at save time
        date_time: Local ISO-8601 date-time (e.g. "2024-03-01T09:00")
        year_group: One of the fixed year groups
        teacher_name: Observed teacher
        observation_notes: Free-text notes (may be empty)
        strategies: Read-only snapshot of all four strategy flags

    Examples:
        >>> observation = Observation.from_dict({
        ...     "id": "2024-03-01T09:05:12.000000Z",
        ...     "dateTime": "2024-03-01T09:00",
        ...     "yearGroup": "Year 8",
        ...     "teacherName": "J. Smith",
        ...     "observationNotes": "Good pacing.",
        ...     "strategies": {"coldCalling": True}
        ... })
        >>> observation.strategies["coldCalling"]
        True
    """

    id: str
    date_time: str
    year_group: str
    teacher_name: str
    observation_notes: str
    strategies: Mapping[str, bool]

    def __post_init__(self):
        # Total over the fixed keys and read-only, whatever the caller passed
        frozen = MappingProxyType(normalize_strategies(self.strategies))
        object.__setattr__(self, "strategies", frozen)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to the stored dictionary layout.

        Returns:
            Dictionary with camelCase keys and a copy of the strategy set
        """
        return {
            "id": self.id,
            "dateTime": self.date_time,
            "yearGroup": self.year_group,
            "teacherName": self.teacher_name,
            "observationNotes": self.observation_notes,
            "strategies": {key: self.strategies[key] for key in STRATEGY_KEYS},
        }

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> 'Observation':
        """
        Create a saved observation from its stored dictionary.

        Args:
            d: Dictionary in the stored (camelCase) layout

        Returns:
            Observation instance

        Raises:
            ValueError: If the dictionary is not a valid saved record
        """
        if not isinstance(d, Mapping):
            raise ValueError(f"Observation record must be an object, got {type(d).__name__}")

        values = {}
        for attribute, wire in WIRE_FIELDS.items():
            if attribute == "strategies":
                continue
            value = d.get(wire, "" if attribute == "observation_notes" else None)
            if not isinstance(value, str):
                raise ValueError(f"Observation field {wire} must be a string")
            values[attribute] = value

        for required in ("id", "date_time", "year_group", "teacher_name"):
            if not values[required]:
                raise ValueError(f"Saved observation is missing {WIRE_FIELDS[required]}")

        return cls(strategies=d.get("strategies"), **values)


class TimestampIdGenerator:
    """
    Issue observation ids derived from the current UTC instant.

    Ids are strictly increasing within one generator: when the clock has
    not moved past the previous id, the previous instant plus one
    microsecond is used instead.
    """

    def __init__(self, clock: Optional[Callable[[], datetime]] = None):
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._last: Optional[datetime] = None

    def __call__(self) -> str:
        instant = self._clock().astimezone(timezone.utc)
        if self._last is not None and instant <= self._last:
            instant = self._last + timedelta(microseconds=1)
        self._last = instant
        return instant.strftime("%Y-%m-%dT%H:%M:%S.%fZ")


generate_observation_id = TimestampIdGenerator()


def create_observation(
    form: ObservationForm,
    observation_id: Optional[str] = None
) -> Observation:
    """
    Snapshot a form into a new saved observation.

    The caller is expected to have checked is_saveable(form); no
    validation happens here. The form itself is left untouched.

    Args:
        form: Form state to copy
        observation_id: Explicit id (a fresh timestamp id when omitted)

    Returns:
        New Observation with its own copy of the strategy flags
    """
    return Observation(
        id=observation_id or generate_observation_id(),
        date_time=form.date_time,
        year_group=form.year_group,
        teacher_name=form.teacher_name,
        observation_notes=form.observation_notes,
        strategies=form.strategies,
    )
