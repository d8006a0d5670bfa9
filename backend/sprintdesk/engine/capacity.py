"""Sprint capacity in story points.

Capacity = Duration (days) x Daily hours x Allocation / Hours per story point.
"""
from typing import Iterable, Protocol


class Allocation(Protocol):
    allocation_percent: int


def individual_capacity(
    duration_days: float,
    daily_hours: float,
    allocation_percent: float,
    story_point_hours: float,
) -> float:
    """Story points one developer can absorb in a sprint."""
    if story_point_hours <= 0:
        raise ValueError("story_point_hours must be positive")
    return duration_days * daily_hours * (allocation_percent / 100) / story_point_hours


def team_capacity(
    duration_days: float,
    daily_hours: float,
    story_point_hours: float,
    members: Iterable[Allocation],
) -> float:
    """Sum of individual capacities; an empty team has no capacity."""
    return sum(
        (
            individual_capacity(duration_days, daily_hours, m.allocation_percent, story_point_hours)
            for m in members
        ),
        0.0,
    )
