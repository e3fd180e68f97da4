"""
CSV export of saved observations.

Layout:
    Date,Time,Year Group,Teacher Name,Observation Notes,<strategy labels...>

One row per observation in collection order (newest first). Notes are
always wrapped in double quotes with embedded quotes doubled; strategy
columns hold Y or N in the fixed strategy order. Lines are joined by a
single newline with no trailing newline.
"""

from datetime import date
from typing import List, Optional, Sequence

from ..models.constants import EXPORT_FILENAME_PREFIX, STRATEGY_KEYS, STRATEGY_LABELS
from ..models.observation import Observation
from ..utils.date_format import format_date, format_time
from ..utils.file_utils import generate_filename


BASE_HEADERS = ["Date", "Time", "Year Group", "Teacher Name", "Observation Notes"]


class EmptyExportError(ValueError):
    """Raised when an export is requested for an empty collection."""


def csv_headers() -> List[str]:
    """Return the header row, strategy labels in fixed order."""
    return BASE_HEADERS + [STRATEGY_LABELS[key] for key in STRATEGY_KEYS]


def quote_field(value: str) -> str:
    """
    Wrap a value in double quotes, doubling embedded quotes.

    Examples:
        >>> quote_field('say "hi" now')
        '"say ""hi"" now"'
    """
    return '"' + value.replace('"', '""') + '"'


def csv_row(observation: Observation) -> str:
    """Render one observation as a CSV line."""
    fields = [
        format_date(observation.date_time),
        format_time(observation.date_time),
        observation.year_group,
        observation.teacher_name,
        quote_field(observation.observation_notes),
    ]
    fields.extend("Y" if observation.strategies.get(key) else "N" for key in STRATEGY_KEYS)
    return ",".join(fields)


def to_csv(observations: Sequence[Observation]) -> str:
    """
    Serialize observations to CSV text.

    Args:
        observations: Collection to export, in display order

    Returns:
        CSV text with a header line and one line per observation

    Raises:
        EmptyExportError: If there is nothing to export
    """
    if not observations:
        raise EmptyExportError("No observations to export.")

    lines = [",".join(csv_headers())]
    lines.extend(csv_row(observation) for observation in observations)
    return "\n".join(lines)


def export_filename(today: Optional[date] = None) -> str:
    """Return the artifact name, e.g. learning_walks_2024-03-01.csv."""
    return generate_filename(EXPORT_FILENAME_PREFIX, "csv", today)
