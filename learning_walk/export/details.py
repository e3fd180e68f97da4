"""
Text renderings of saved observations for the presentation layer.
"""

from typing import List

from ..models.constants import STRATEGY_LABELS
from ..models.observation import Observation, selected_strategies
from ..utils.date_format import format_date, format_display


NO_STRATEGIES_OBSERVED = "None observed"


def strategy_labels(observation: Observation) -> List[str]:
    """Return labels of the strategies seen, or ["None observed"]."""
    labels = [STRATEGY_LABELS[key] for key in selected_strategies(observation.strategies)]
    return labels or [NO_STRATEGIES_OBSERVED]


def render_summary(observation: Observation) -> str:
    """One-line list entry: teacher, year group and date."""
    return f"{observation.teacher_name} | {observation.year_group} - {format_date(observation.date_time)}"


def render_details(observation: Observation) -> str:
    """
    Render the full details view of one observation.

    Examples:
        >>> print(render_details(observation))
        Observation Details
        Date & Time: 1 Mar 2024, 09:00
        Teacher: J. Smith
        Year Group: Year 8
        Observation Notes:
        Good pacing.
        Strategies Observed:
        - None observed
    """
    lines = [
        "Observation Details",
        f"Date & Time: {format_display(observation.date_time)}",
        f"Teacher: {observation.teacher_name}",
        f"Year Group: {observation.year_group}",
        "Observation Notes:",
        observation.observation_notes,
        "Strategies Observed:",
    ]
    lines.extend(f"- {label}" for label in strategy_labels(observation))
    return "\n".join(lines)
