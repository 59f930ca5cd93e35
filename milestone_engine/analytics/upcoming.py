"""Ranking of milestones the child has not reached the age for yet."""

import json
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from ..age_adaptation.age_calculator import round_tenth
from ..config import IMMINENT_HORIZON_MONTHS
from ..milestones.achievements import AchievementRecord
from ..milestones.catalog import MilestoneDefinition, display_sort_key


@dataclass
class UpcomingMilestone:
    """A not-yet-due milestone and how far away it is."""
    definition: MilestoneDefinition
    months_until_expected: float
    is_imminent: bool

    def to_dict(self) -> dict:
        return {
            "definition": self.definition.to_dict(),
            "monthsUntilExpected": self.months_until_expected,
            "isImminent": self.is_imminent,
        }


@dataclass
class UpcomingMilestones:
    """Ranked upcoming list with its count."""
    baby_age_months: float
    upcoming_milestones: List[UpcomingMilestone] = field(default_factory=list)
    baby_id: Optional[str] = None

    @property
    def total(self) -> int:
        return len(self.upcoming_milestones)

    def to_dict(self) -> dict:
        return {
            "babyId": self.baby_id,
            "babyAgeMonths": self.baby_age_months,
            "upcomingMilestones": [m.to_dict() for m in self.upcoming_milestones],
            "total": self.total,
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)


def rank_upcoming(
    definitions: Iterable[MilestoneDefinition],
    achievements_by_milestone_id: Dict[str, AchievementRecord],
    baby_age_months: float,
    imminent_horizon_months: float = IMMINENT_HORIZON_MONTHS,
) -> List[UpcomingMilestone]:
    """
    Rank unachieved milestones whose window has not started, soonest first.

    Args:
        definitions: Catalog definitions
        achievements_by_milestone_id: Live achievements keyed by milestone id
        baby_age_months: Child's current age in fractional months
        imminent_horizon_months: Rounded distance at or below which a
            milestone is flagged imminent

    Returns:
        Upcoming milestones sorted by months until expected; ties fall back
        to display order (window start, category, name).
    """
    upcoming = []
    for definition in definitions:
        if definition.id in achievements_by_milestone_id:
            continue
        if baby_age_months >= definition.expected_age_months_min:
            continue

        months_until = round_tenth(definition.expected_age_months_min - baby_age_months)
        upcoming.append(UpcomingMilestone(
            definition=definition,
            months_until_expected=months_until,
            is_imminent=months_until <= imminent_horizon_months,
        ))

    upcoming.sort(key=lambda m: (m.months_until_expected, display_sort_key(m.definition)))
    return upcoming
