"""Analytics module for milestone progress and upcoming-milestone ranking."""

from .progress import ProgressSummary, aggregate_progress
from .upcoming import UpcomingMilestone, UpcomingMilestones, rank_upcoming

__all__ = [
    "ProgressSummary",
    "aggregate_progress",
    "UpcomingMilestone",
    "UpcomingMilestones",
    "rank_upcoming",
]
