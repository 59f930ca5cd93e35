"""Milestone progress percentages, overall and per category.

Only age-appropriate milestones count: those whose window has started
(child's age >= window start). Achieved-early milestones whose window has
not started yet are left out of both numerator and denominator.
"""

import json
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from ..age_adaptation.age_calculator import round_tenth
from ..milestones.achievements import AchievementRecord
from ..milestones.catalog import CATEGORIES, MilestoneDefinition


@dataclass
class ProgressSummary:
    """Progress over age-appropriate milestones."""
    baby_age_months: float
    total_milestones: int
    achieved_milestones: int
    progress_percentage: float
    progress_by_category: Dict[str, float] = field(default_factory=dict)
    baby_id: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "babyId": self.baby_id,
            "babyAgeMonths": self.baby_age_months,
            "totalMilestones": self.total_milestones,
            "achievedMilestones": self.achieved_milestones,
            "progressPercentage": self.progress_percentage,
            "progressByCategory": dict(self.progress_by_category),
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)


def _percentage(achieved: int, total: int) -> float:
    if total == 0:
        return 0.0
    return round_tenth(achieved / total * 100)


def is_age_appropriate(definition: MilestoneDefinition, baby_age_months: float) -> bool:
    """True once the child has reached the milestone's window start."""
    return baby_age_months >= definition.expected_age_months_min


def aggregate_progress(
    definitions: Iterable[MilestoneDefinition],
    achievements_by_milestone_id: Dict[str, AchievementRecord],
    baby_age_months: float,
    baby_id: Optional[str] = None,
) -> ProgressSummary:
    """
    Fold definitions into overall and per-category progress.

    Args:
        definitions: All catalog definitions
        achievements_by_milestone_id: Live achievements keyed by milestone id
        baby_age_months: Child's current age in fractional months
        baby_id: Optional id echoed in the summary

    Returns:
        ProgressSummary with percentages rounded to one decimal place.
        A category with no age-appropriate milestones reports 0.
    """
    age_appropriate: List[MilestoneDefinition] = [
        d for d in definitions if is_age_appropriate(d, baby_age_months)
    ]

    total = len(age_appropriate)
    achieved = sum(1 for d in age_appropriate if d.id in achievements_by_milestone_id)

    by_category = {}
    for category in CATEGORIES:
        in_category = [d for d in age_appropriate if d.category == category]
        category_achieved = sum(1 for d in in_category if d.id in achievements_by_milestone_id)
        by_category[category.value] = _percentage(category_achieved, len(in_category))

    return ProgressSummary(
        baby_id=baby_id,
        baby_age_months=baby_age_months,
        total_milestones=total,
        achieved_milestones=achieved,
        progress_percentage=_percentage(achieved, total),
        progress_by_category=by_category,
    )
