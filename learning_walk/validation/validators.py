"""
Validation framework with Strategy pattern.

This module provides:
- Abstract Validator interface
- ValidationResult for consistent validation reporting
- Reusable presence and format checks for form-like objects
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence

from ..utils.date_format import parse_date_time


@dataclass
class ValidationResult:
    """
    Result of data validation.

    Attributes:
        is_valid: Whether validation passed
        errors: List of error messages
        warnings: List of warning messages (non-fatal)
    """

    is_valid: bool
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def add_error(self, message: str) -> 'ValidationResult':
        """
        Add an error message.

        Args:
            message: Error message to add

        Returns:
            Self for method chaining
        """
        self.errors.append(message)
        self.is_valid = False
        return self

    def add_warning(self, message: str) -> 'ValidationResult':
        """
        Add a warning message.

        Args:
            message: Warning message to add

        Returns:
            Self for method chaining
        """
        self.warnings.append(message)
        return self

    @property
    def has_errors(self) -> bool:
        """Check if there are errors."""
        return len(self.errors) > 0

    @property
    def has_warnings(self) -> bool:
        """Check if there are warnings."""
        return len(self.warnings) > 0

    def get_summary(self) -> str:
        """
        Get validation summary.

        Returns:
            Human-readable summary of validation results
        """
        if self.is_valid and not self.has_warnings:
            return "Validation passed"

        parts = []

        if self.has_errors:
            parts.append(f"Errors ({len(self.errors)}):")
            for error in self.errors:
                parts.append(f"  - {error}")

        if self.has_warnings:
            parts.append(f"Warnings ({len(self.warnings)}):")
            for warning in self.warnings:
                parts.append(f"  - {warning}")

        return "\n".join(parts)


class Validator(ABC):
    """
    Abstract base class for validators.

    Subclasses implement validate() for one kind of check. Data is read
    by attribute, so forms and saved observations validate alike.
    """

    @abstractmethod
    def validate(self, data: Any) -> ValidationResult:
        """
        Validate data.

        Args:
            data: Object to validate

        Returns:
            ValidationResult with errors and warnings
        """
        pass

    def validate_required_fields(
        self,
        data: Any,
        required_fields: Sequence[str]
    ) -> List[str]:
        """
        Validate that required text fields are present and non-empty.

        Args:
            data: Object to check
            required_fields: Attribute names that must hold non-empty strings

        Returns:
            List of error messages for missing fields
        """
        errors = []
        for name in required_fields:
            value = getattr(data, name, None)
            if not isinstance(value, str) or not value:
                errors.append(f"Missing required field: {name}")
        return errors

    def validate_date_time_format(
        self,
        value: str,
        field_name: str = "date_time"
    ) -> Optional[str]:
        """
        Validate an ISO-8601 local date-time string.

        Args:
            value: Date-time string to validate
            field_name: Name of the field (for error message)

        Returns:
            Error message if invalid, None if valid
        """
        if parse_date_time(value) is None:
            return f"Invalid {field_name} format: {value} (expected YYYY-MM-DDTHH:MM)"
        return None

    def validate_choice(
        self,
        value: str,
        choices: Sequence[str],
        field_name: str
    ) -> Optional[str]:
        """
        Validate that a value is one of a fixed set.

        Returns:
            Error message if invalid, None if valid
        """
        if value not in choices:
            return f"Invalid {field_name}: {value} (must be one of: {', '.join(choices)})"
        return None
