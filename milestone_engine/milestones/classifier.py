"""Per-milestone status classification.

A milestone is in exactly one of four states for a child:

- ACHIEVED: a live achievement record exists
- UPCOMING: not achieved, child younger than the window start
- DELAYED: not achieved, child older than the window end
- ON_TRACK: not achieved, child's age inside the window (inclusive)

Both comparisons are strict, so a child exactly at the window's start or
end is on track.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from ..age_adaptation.age_calculator import DateLike, age_in_months
from .achievements import AchievementRecord
from .catalog import MilestoneDefinition


class MilestoneStatus(Enum):
    """Achievement status of one milestone for one child."""
    ACHIEVED = "achieved"
    ON_TRACK = "on_track"
    UPCOMING = "upcoming"
    DELAYED = "delayed"


@dataclass
class ClassifiedMilestone:
    """A definition paired with its status for a specific child."""
    definition: MilestoneDefinition
    status: MilestoneStatus
    achievement: Optional[AchievementRecord] = None
    achieved_age_months: Optional[float] = None

    @property
    def is_achieved(self) -> bool:
        return self.status is MilestoneStatus.ACHIEVED

    @property
    def is_upcoming(self) -> bool:
        return self.status is MilestoneStatus.UPCOMING

    @property
    def is_delayed(self) -> bool:
        return self.status is MilestoneStatus.DELAYED

    @property
    def is_on_track(self) -> bool:
        return self.status is MilestoneStatus.ON_TRACK

    def to_dict(self) -> dict:
        return {
            "definition": self.definition.to_dict(),
            "status": self.status.value,
            "isAchieved": self.is_achieved,
            "achievement": self.achievement.to_dict() if self.achievement else None,
            "isUpcoming": self.is_upcoming,
            "isDelayed": self.is_delayed,
            "achievedAgeMonths": self.achieved_age_months,
        }


def classify_status(
    definition: MilestoneDefinition,
    is_achieved: bool,
    baby_age_months: float,
) -> MilestoneStatus:
    """Status for a definition given achievement and current age."""
    if is_achieved:
        return MilestoneStatus.ACHIEVED
    if baby_age_months < definition.expected_age_months_min:
        return MilestoneStatus.UPCOMING
    if baby_age_months > definition.expected_age_months_max:
        return MilestoneStatus.DELAYED
    return MilestoneStatus.ON_TRACK


def classify_milestone(
    definition: MilestoneDefinition,
    achievements_by_milestone_id: Dict[str, AchievementRecord],
    baby_age_months: float,
    birth_date: DateLike,
) -> ClassifiedMilestone:
    """
    Classify one milestone for a child.

    Args:
        definition: Catalog definition
        achievements_by_milestone_id: Live (non-deleted) achievements keyed
            by milestone id
        baby_age_months: Child's current age in fractional months
        birth_date: Child's birth date, used for the age at achievement

    Returns:
        ClassifiedMilestone
    """
    achievement = achievements_by_milestone_id.get(definition.id)
    status = classify_status(definition, achievement is not None, baby_age_months)

    achieved_age = None
    if achievement is not None:
        achieved_age = age_in_months(birth_date, achievement.achieved_date)

    return ClassifiedMilestone(
        definition=definition,
        status=status,
        achievement=achievement,
        achieved_age_months=achieved_age,
    )
