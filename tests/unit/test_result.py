"""
Unit tests for Result<T> pattern.
"""

import pytest

from learning_walk.models.result import FailureKind, Result, ResultStatus


class TestResult:
    """Test cases for Result class."""

    def test_success_creation(self):
        """Test creating a successful result."""
        result = Result.success(42, "Operation completed")

        assert result.is_success
        assert not result.is_failure
        assert result.status == ResultStatus.SUCCESS
        assert result.value == 42
        assert result.message == "Operation completed"
        assert result.error is None
        assert result.kind is None

    def test_failure_creation(self):
        """Test creating a failure result with a kind."""
        error = ValueError("Missing teacher")
        result = Result.failure("Save failed", error, FailureKind.VALIDATION)

        assert result.is_failure
        assert not result.is_success
        assert result.status == ResultStatus.FAILURE
        assert result.value is None
        assert result.message == "Save failed"
        assert result.error == error
        assert result.kind == FailureKind.VALIDATION

    def test_failure_without_exception(self):
        """Test failure without exception object."""
        result = Result.failure("No observations to export.", kind=FailureKind.EMPTY_EXPORT)

        assert result.is_failure
        assert result.error is None
        assert result.kind == FailureKind.EMPTY_EXPORT

    def test_unwrap_success(self):
        """Test unwrapping successful result."""
        assert Result.success("data").unwrap() == "data"

    def test_unwrap_failure_raises(self):
        """Test unwrapping failure raises exception."""
        result = Result.failure("Error occurred")

        with pytest.raises(ValueError, match="Cannot unwrap failure result"):
            result.unwrap()

    def test_unwrap_or(self):
        """Test unwrap_or with success and failure."""
        assert Result.success(42).unwrap_or(0) == 42
        assert Result.failure("Error").unwrap_or(0) == 0

    def test_result_with_none_value(self):
        """Test result with None as valid value."""
        result = Result.success(None, "Saved with storage warning")

        assert result.is_success
        assert result.value is None


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
