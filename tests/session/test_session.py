"""
Unit tests for LearningWalkSession.

Tests the save, export and feedback actions against in-memory and
failing storage.
"""

from datetime import date
from unittest.mock import Mock

import pytest

from learning_walk.models.result import FailureKind, Result
from learning_walk.session import LearningWalkSession
from learning_walk.storage.observation_store import InMemoryStorage, ObservationStore


def fill(session: LearningWalkSession, **fields):
    """Fill the session form with stored-key field names."""
    defaults = {
        "dateTime": "2024-03-01T09:00",
        "yearGroup": "Year 8",
        "teacherName": "J. Smith",
        "observationNotes": "Good pacing.",
    }
    defaults.update(fields)
    for name, value in defaults.items():
        session.form.set_field(name, value)


class TestLearningWalkSession:
    """Test suite for LearningWalkSession."""

    @pytest.fixture
    def storage(self):
        """Create empty in-memory storage."""
        return InMemoryStorage()

    @pytest.fixture
    def session(self, storage, tmp_path):
        """Create a session exporting into a temporary directory."""
        return LearningWalkSession(ObservationStore(storage), export_dir=tmp_path)

    def test_initial_state(self, session):
        """Test a fresh session has nothing saved and disabled actions."""
        assert session.observations == []
        assert not session.can_save
        assert not session.can_send_feedback
        assert not session.can_export

    def test_end_to_end(self, session, tmp_path):
        """Test save one observation then export it."""
        fill(session)
        assert session.can_save

        saved = session.save()

        assert saved.is_success
        assert len(session.observations) == 1
        observation = session.observations[0]
        assert observation.id
        assert observation.date_time == "2024-03-01T09:00"
        assert observation.year_group == "Year 8"
        assert observation.teacher_name == "J. Smith"
        assert observation.observation_notes == "Good pacing."
        assert not any(observation.strategies.values())

        exported = session.export_csv(today=date(2024, 3, 1))

        assert exported.is_success
        assert exported.value == tmp_path / "learning_walks_2024-03-01.csv"
        lines = exported.value.read_text(encoding="utf-8").split("\n")
        assert len(lines) == 2
        assert lines[1].endswith(",N,N,N,N")

    def test_save_resets_form(self, session):
        """Test the form is cleared after a successful save."""
        fill(session)
        session.form.set_strategy("dumtums", True)

        session.save()

        assert session.form.teacher_name == ""
        assert not any(session.form.strategies.values())
        assert session.observations[0].strategies["dumtums"] is True

    def test_newest_first(self, session):
        """Test new observations are prepended."""
        fill(session, teacherName="First")
        session.save()
        fill(session, teacherName="Second")
        session.save()

        assert [o.teacher_name for o in session.observations] == ["Second", "First"]

    def test_save_persists(self, session, storage):
        """Test saving writes the whole collection to storage."""
        fill(session)
        session.save()

        reloaded = LearningWalkSession(ObservationStore(storage))

        assert reloaded.observations == session.observations

    def test_save_missing_year_group(self, session, storage):
        """Test an empty year group blocks saving without side effects."""
        fill(session, yearGroup="")

        result = session.save()

        assert result.is_failure
        assert result.kind == FailureKind.VALIDATION
        assert result.message == "Please fill in Date/Time, Teacher Name, and Year Group."
        assert session.observations == []
        assert storage.items == {}
        assert session.form.teacher_name == "J. Smith"

    def test_save_with_write_failure(self, tmp_path):
        """Test a storage write failure keeps the record in memory."""
        repository = Mock()
        repository.load.return_value = []
        repository.save.return_value = Result.failure(
            "Could not save observations to storage: quota exceeded",
            kind=FailureKind.STORAGE_WRITE
        )
        session = LearningWalkSession(repository, export_dir=tmp_path)
        fill(session)

        result = session.save()

        assert result.is_success
        assert "quota exceeded" in result.message
        assert len(session.observations) == 1

    def test_observations_is_copy(self, session):
        """Test callers cannot mutate the collection through the property."""
        fill(session)
        session.save()

        session.observations.clear()

        assert len(session.observations) == 1

    def test_saved_strategies_cannot_be_changed(self, session, storage):
        """Test a caller cannot alter a saved record's strategy flags."""
        fill(session)
        session.save()

        with pytest.raises(TypeError):
            session.observations[0].strategies["dumtums"] = True

        assert session.observations[0].strategies["dumtums"] is False
        assert LearningWalkSession(ObservationStore(storage)).observations == session.observations

    def test_export_empty(self, session, tmp_path):
        """Test exporting nothing fails and writes no file."""
        result = session.export_csv()

        assert result.is_failure
        assert result.kind == FailureKind.EMPTY_EXPORT
        assert result.message == "No observations to export."
        assert list(tmp_path.iterdir()) == []

    def test_export_write_failure(self, session, tmp_path):
        """Test an unwritable export directory is reported."""
        fill(session)
        session.save()
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory", encoding="utf-8")

        result = session.export_csv(output_dir=blocker / "exports")

        assert result.is_failure
        assert result.kind == FailureKind.EXPORT_WRITE

    def test_find(self, session):
        """Test lookup by id and by list position."""
        fill(session, teacherName="First")
        session.save()
        fill(session, teacherName="Second")
        session.save()
        first = session.observations[1]

        assert session.find(first.id) == first
        assert session.find("1").teacher_name == "Second"
        assert session.find("3") is None
        assert session.find("0") is None
        assert session.find("unknown") is None

    def test_compose_feedback_from_form(self, session):
        """Test feedback from the in-progress form."""
        fill(session, yearGroup="")

        result = session.compose_feedback()

        assert session.can_send_feedback
        assert result.is_success
        assert result.value.subject == "Learning Walk Feedback – J. Smith – 2024-03-01"

    def test_compose_feedback_missing_teacher(self, session):
        """Test feedback without a teacher fails with the user message."""
        fill(session, teacherName="")

        result = session.compose_feedback()

        assert result.is_failure
        assert result.kind == FailureKind.VALIDATION
        assert result.message == "Please provide a Teacher Name and Date before sending an email."

    def test_feedback_uri_from_saved(self, session):
        """Test the compose URI for a saved observation."""
        fill(session)
        session.save()

        result = session.feedback_uri(session.observations[0], recipient="head@school.org")

        assert result.is_success
        assert result.value.startswith("ms-outlook://compose?to=head%40school.org&subject=")

    def test_compose_uri_from_message(self, session):
        """Test the URI is built from an already composed message."""
        fill(session)
        message = session.compose_feedback().value

        uri = session.compose_uri(message)

        assert uri.startswith("ms-outlook://compose?subject=Learning%20Walk%20Feedback")
        assert uri == session.feedback_uri().value

    def test_feedback_uri_failure(self, session):
        """Test the URI is not built when composition fails."""
        result = session.feedback_uri()

        assert result.is_failure
        assert result.kind == FailureKind.VALIDATION


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
