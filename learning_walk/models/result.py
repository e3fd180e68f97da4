"""
Result<T> pattern for user-action outcomes.

Every action the presentation layer triggers (save, export, compose
feedback) returns a Result instead of raising, so a failure can be shown
to the user without touching the in-memory collection.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar


T = TypeVar('T')


class ResultStatus(Enum):
    """Status of a Result."""
    SUCCESS = "success"
    FAILURE = "failure"


class FailureKind(Enum):
    """Why an action failed."""
    VALIDATION = "validation"
    EMPTY_EXPORT = "empty_export"
    STORAGE_WRITE = "storage_write"
    EXPORT_WRITE = "export_write"


@dataclass
class Result(Generic[T]):
    """
    Success or failure of one action.

    Attributes:
        status: Result status (SUCCESS or FAILURE)
        value: The produced value if successful (None on failure)
        error: The exception that caused failure, if any
        message: User-facing message (also used for success warnings)
        kind: Failure category (None on success)

    Examples:
        >>> result = session.save()
        >>> if result.is_failure and result.kind == FailureKind.VALIDATION:
        ...     print(result.message)
    """

    status: ResultStatus
    value: Optional[T] = None
    error: Optional[Exception] = None
    message: Optional[str] = None
    kind: Optional[FailureKind] = None

    @property
    def is_success(self) -> bool:
        """Check if the result represents success."""
        return self.status == ResultStatus.SUCCESS

    @property
    def is_failure(self) -> bool:
        """Check if the result represents failure."""
        return self.status == ResultStatus.FAILURE

    @classmethod
    def success(cls, value: T, message: Optional[str] = None) -> 'Result[T]':
        """Create a successful result."""
        return cls(status=ResultStatus.SUCCESS, value=value, message=message)

    @classmethod
    def failure(
        cls,
        message: str,
        error: Optional[Exception] = None,
        kind: Optional[FailureKind] = None
    ) -> 'Result[T]':
        """
        Create a failure result.

        Args:
            message: Message describing the failure
            error: Optional exception that caused the failure
            kind: Failure category

        Returns:
            Result instance with FAILURE status
        """
        return cls(
            status=ResultStatus.FAILURE,
            message=message,
            error=error,
            kind=kind
        )

    def unwrap(self) -> T:
        """
        Unwrap the result value.

        Raises:
            ValueError: If the result is a failure
        """
        if self.is_failure:
            raise ValueError(
                f"Cannot unwrap failure result: {self.message}"
            )
        return self.value

    def unwrap_or(self, default: T) -> T:
        """Return the value if successful, otherwise the default."""
        return self.value if self.is_success else default
