"""
Observation validators.

Saving only requires date/time, teacher name and year group to be
present; composing feedback only requires teacher name and date/time.
Notes and strategy flags are always valid by construction.
"""

from typing import Any

from ..models.constants import YEAR_GROUPS
from .validators import Validator, ValidationResult


SAVE_REQUIRED_FIELDS = ("date_time", "teacher_name", "year_group")
FEEDBACK_REQUIRED_FIELDS = ("teacher_name", "date_time")


class ObservationValidator(Validator):
    """
    Validator gating the save action.

    Errors only for missing required fields. An unparseable date-time
    or a year group outside the fixed list is reported as a warning and
    does not block saving.

    Examples:
        >>> validator = ObservationValidator()
        >>> result = validator.validate(form)
        >>> if not result.is_valid:
        ...     print(result.get_summary())
    """

    def validate(self, data: Any) -> ValidationResult:
        result = ValidationResult(is_valid=True)

        for error in self.validate_required_fields(data, SAVE_REQUIRED_FIELDS):
            result.add_error(error)

        if not result.is_valid:
            return result

        warning = self.validate_date_time_format(data.date_time)
        if warning:
            result.add_warning(warning)

        warning = self.validate_choice(data.year_group, YEAR_GROUPS, "year_group")
        if warning:
            result.add_warning(warning)

        return result


class FeedbackValidator(Validator):
    """Validator gating feedback composition (teacher name and date/time)."""

    def validate(self, data: Any) -> ValidationResult:
        result = ValidationResult(is_valid=True)
        for error in self.validate_required_fields(data, FEEDBACK_REQUIRED_FIELDS):
            result.add_error(error)
        return result


_observation_validator = ObservationValidator()
_feedback_validator = FeedbackValidator()


def is_saveable(observation: Any) -> bool:
    """True iff date_time, teacher_name and year_group are non-empty strings."""
    return _observation_validator.validate(observation).is_valid


def can_compose_feedback(observation: Any) -> bool:
    """True iff teacher_name and date_time are non-empty strings."""
    return _feedback_validator.validate(observation).is_valid
