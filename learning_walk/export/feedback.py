"""
Feedback email composition.

compose_feedback() turns an observation (saved or in progress) into a
subject and body; build_compose_uri() hands them to a mail client via a
URI scheme. Opening the URI is left to the presentation layer.
"""

from dataclasses import dataclass
from typing import Any, Optional
from urllib.parse import quote

from ..models.constants import STRATEGY_LABELS
from ..models.observation import selected_strategies
from ..utils.date_format import format_date


SUPPORTED_SCHEMES = ("ms-outlook", "mailto")

NO_STRATEGIES_TEXT = "None specified"

# Characters encodeURIComponent leaves untouched besides alphanumerics and "_.-~"
_URI_SAFE = "!*'()"


@dataclass(frozen=True)
class FeedbackMessage:
    """
    Composed feedback email.

    Attributes:
        subject: Email subject line
        body: Plain-text email body
    """

    subject: str
    body: str


def compose_feedback(observation: Any) -> FeedbackMessage:
    """
    Compose the feedback email for one observation.

    Args:
        observation: Observation or ObservationForm

    Returns:
        FeedbackMessage with subject and body

    Raises:
        ValueError: If teacher name or date/time is missing

    Examples:
        >>> message = compose_feedback(observation)
        >>> message.subject
        'Learning Walk Feedback – J. Smith – 2024-03-01'
    """
    teacher_name = observation.teacher_name
    date_time = observation.date_time
    if not teacher_name or not date_time:
        raise ValueError("Please provide a Teacher Name and Date before sending an email.")

    subject = f"Learning Walk Feedback – {teacher_name} – {format_date(date_time)}"

    strategies_list = "\n".join(
        f"- {STRATEGY_LABELS[key]}" for key in selected_strategies(observation.strategies)
    )

    body = (
        f"Hi {teacher_name},\n\n"
        "Here is some feedback from a recent learning walk.\n\n"
        "Observation Notes:\n"
        f"{observation.observation_notes}\n\n"
        "Teaching Strategies Observed:\n"
        f"{strategies_list or NO_STRATEGIES_TEXT}\n\n"
        "Best regards,"
    )

    return FeedbackMessage(subject=subject, body=body)


def encode_uri_component(value: str) -> str:
    """Percent-encode a value the way JavaScript's encodeURIComponent does."""
    return quote(value, safe=_URI_SAFE)


def build_compose_uri(
    message: FeedbackMessage,
    scheme: str = "ms-outlook",
    recipient: Optional[str] = None
) -> str:
    """
    Build a mail-compose URI with subject and body pre-filled.

    Args:
        message: Composed feedback
        scheme: "ms-outlook" or "mailto"
        recipient: Optional recipient address

    Returns:
        URI such as ms-outlook://compose?subject=...&body=...

    Raises:
        ValueError: If the scheme is not supported
    """
    query = f"subject={encode_uri_component(message.subject)}&body={encode_uri_component(message.body)}"

    if scheme == "ms-outlook":
        if recipient:
            query = f"to={encode_uri_component(recipient)}&{query}"
        return f"ms-outlook://compose?{query}"

    if scheme == "mailto":
        return f"mailto:{quote(recipient or '', safe='@')}?{query}"

    raise ValueError(
        f"Unsupported mail compose scheme: {scheme} "
        f"(must be one of: {', '.join(SUPPORTED_SCHEMES)})"
    )
