"""
Learning-walk session state.

LearningWalkSession is what the presentation layer talks to. It holds
the saved collection (newest first) and the in-progress form, and runs
the save, export and feedback actions. Each action returns a Result;
failures never change the in-memory collection.
"""

import logging
from datetime import date
from pathlib import Path
from typing import Any, List, Optional, Tuple

from .export.csv_export import EmptyExportError, export_filename, to_csv
from .export.feedback import FeedbackMessage, build_compose_uri, compose_feedback
from .models.observation import Observation, ObservationForm, create_observation
from .models.result import FailureKind, Result
from .storage.interfaces import ObservationRepository
from .utils.file_utils import save_text
from .utils.logger import mask_email
from .validation.observation_validator import (
    FeedbackValidator,
    ObservationValidator,
    can_compose_feedback,
    is_saveable,
)


logger = logging.getLogger(__name__)

SAVE_REQUIRED_MESSAGE = "Please fill in Date/Time, Teacher Name, and Year Group."
FEEDBACK_REQUIRED_MESSAGE = "Please provide a Teacher Name and Date before sending an email."
EMPTY_EXPORT_MESSAGE = "No observations to export."


class LearningWalkSession:
    """
    One user's working session.

    Examples:
        >>> session = LearningWalkSession(ObservationStore(storage))
        >>> session.form.set_field("teacherName", "J. Smith")
        >>> session.form.set_field("yearGroup", "Year 8")
        >>> session.form.set_field("dateTime", "2024-03-01T09:00")
        >>> result = session.save()
        >>> if result.is_failure:
        ...     print(result.message)
    """

    def __init__(
        self,
        repository: ObservationRepository,
        export_dir: Path = Path("output/exports"),
        compose_scheme: str = "ms-outlook"
    ):
        """
        Initialize the session and load the stored collection.

        Args:
            repository: Persistence adapter (load/save)
            export_dir: Directory CSV exports are written to
            compose_scheme: Mail-compose URI scheme
        """
        self.repository = repository
        self.export_dir = Path(export_dir)
        self.compose_scheme = compose_scheme
        self.form = ObservationForm()
        self.save_validator = ObservationValidator()
        self.feedback_validator = FeedbackValidator()
        self._observations: Tuple[Observation, ...] = tuple(repository.load())

        logger.debug(f"Session started with {len(self._observations)} stored observations")

    @property
    def observations(self) -> List[Observation]:
        """Saved observations, newest first (a copy)."""
        return list(self._observations)

    @property
    def can_save(self) -> bool:
        return is_saveable(self.form)

    @property
    def can_send_feedback(self) -> bool:
        return can_compose_feedback(self.form)

    @property
    def can_export(self) -> bool:
        return len(self._observations) > 0

    def find(self, reference: str) -> Optional[Observation]:
        """
        Look up a saved observation by id or 1-based list position.

        Args:
            reference: Observation id, or its position in the list ("1" is newest)

        Returns:
            Matching observation, or None
        """
        for observation in self._observations:
            if observation.id == reference:
                return observation

        if reference.isdigit():
            index = int(reference) - 1
            if 0 <= index < len(self._observations):
                return self._observations[index]

        return None

    def save(self) -> Result[Observation]:
        """
        Save the form as a new observation and reset the form.

        The new record is prepended and the whole collection written back.
        A storage write failure keeps the record in memory; the result is
        still a success, with the storage problem as its message.

        Returns:
            Result containing the new Observation, or a VALIDATION failure
        """
        validation = self.save_validator.validate(self.form)
        if not validation.is_valid:
            logger.info(f"Save rejected: {'; '.join(validation.errors)}")
            return Result.failure(
                SAVE_REQUIRED_MESSAGE,
                ValueError(validation.get_summary()),
                FailureKind.VALIDATION
            )

        for warning in validation.warnings:
            logger.warning(warning)

        observation = create_observation(self.form)
        self._observations = (observation,) + self._observations
        self.form.reset()

        logger.info(
            f"Saved observation {observation.id} for {observation.teacher_name} "
            f"({observation.year_group})"
        )

        persisted = self.repository.save(self._observations)
        if persisted.is_failure:
            return Result.success(observation, persisted.message)

        return Result.success(observation)

    def export_csv(
        self,
        output_dir: Optional[Path] = None,
        today: Optional[date] = None
    ) -> Result[Path]:
        """
        Write all saved observations to a date-stamped CSV file.

        Args:
            output_dir: Target directory (defaults to the session export dir)
            today: Date used in the file name (defaults to today)

        Returns:
            Result containing the written file path
        """
        try:
            content = to_csv(self._observations)
        except EmptyExportError as e:
            logger.info("Export requested with no observations")
            return Result.failure(EMPTY_EXPORT_MESSAGE, e, FailureKind.EMPTY_EXPORT)

        filepath = Path(output_dir or self.export_dir) / export_filename(today)
        if not save_text(content, filepath):
            return Result.failure(
                f"Could not write export file: {filepath}",
                kind=FailureKind.EXPORT_WRITE
            )

        logger.info(f"Exported {len(self._observations)} observations to {filepath}")
        return Result.success(filepath)

    def compose_feedback(self, observation: Optional[Any] = None) -> Result[FeedbackMessage]:
        """
        Compose feedback for the form (default) or a saved observation.

        Returns:
            Result containing the FeedbackMessage, or a VALIDATION failure
        """
        source = self.form if observation is None else observation

        validation = self.feedback_validator.validate(source)
        if not validation.is_valid:
            return Result.failure(
                FEEDBACK_REQUIRED_MESSAGE,
                ValueError(validation.get_summary()),
                FailureKind.VALIDATION
            )

        return Result.success(compose_feedback(source))

    def feedback_uri(
        self,
        observation: Optional[Any] = None,
        recipient: Optional[str] = None
    ) -> Result[str]:
        """
        Build the mail-compose URI for a feedback email.

        Returns:
            Result containing the URI, or the compose failure
        """
        composed = self.compose_feedback(observation)
        if composed.is_failure:
            return Result.failure(composed.message, composed.error, composed.kind)

        return Result.success(self.compose_uri(composed.value, recipient))

    def compose_uri(self, message: FeedbackMessage, recipient: Optional[str] = None) -> str:
        """Build the mail-compose URI for an already composed message."""
        if recipient:
            logger.info(f"Composing feedback for {mask_email(recipient)}")

        return build_compose_uri(message, self.compose_scheme, recipient)
