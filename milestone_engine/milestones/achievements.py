"""Achievement records logged by caregivers.

Records are persisted elsewhere; the engine only reads them. This module
holds the record shape, the soft-delete filter that turns a child's
records into a lookup map, and the precondition check a persistence layer
runs before storing a new achievement.
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, Iterable, Optional, Union

from ..age_adaptation.age_calculator import to_date
from ..exceptions import MilestoneAlreadyAchievedError
from ..logging_config import get_logger
from .catalog import MilestoneCatalog

logger = get_logger(__name__)


def _pick(data: Dict[str, Any], snake: str, camel: str, default: Any = None) -> Any:
    """Read a key in either snake_case or camelCase form."""
    if snake in data:
        return data[snake]
    return data.get(camel, default)


@dataclass
class AchievementRecord:
    """A caregiver-logged event: this child reached this milestone on this date."""
    id: str
    baby_id: str
    caregiver_id: str
    milestone_id: str
    achieved_date: Union[date, datetime]
    notes: Optional[str] = None
    photo_url: Optional[str] = None
    is_deleted: bool = False

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "babyId": self.baby_id,
            "caregiverId": self.caregiver_id,
            "milestoneId": self.milestone_id,
            "achievedDate": self.achieved_date.isoformat(),
            "notes": self.notes,
            "photoUrl": self.photo_url,
            "isDeleted": self.is_deleted,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "AchievementRecord":
        """
        Create a record from a dictionary (snake_case or camelCase keys).

        Raises:
            KeyError: If ``milestone_id`` or ``achieved_date`` is missing
            ValueError: If ``achieved_date`` is not a valid ISO date
        """
        milestone_id = _pick(data, "milestone_id", "milestoneId")
        if milestone_id is None:
            raise KeyError("milestone_id")

        achieved = _pick(data, "achieved_date", "achievedDate")
        if achieved is None:
            raise KeyError("achieved_date")

        return cls(
            id=str(data.get("id", "")),
            baby_id=str(_pick(data, "baby_id", "babyId", "")),
            caregiver_id=str(_pick(data, "caregiver_id", "caregiverId", "")),
            milestone_id=milestone_id,
            achieved_date=to_date(achieved),
            notes=data.get("notes"),
            photo_url=_pick(data, "photo_url", "photoUrl"),
            is_deleted=bool(_pick(data, "is_deleted", "isDeleted", False)),
        )


def build_achievement_map(records: Iterable[AchievementRecord]) -> Dict[str, AchievementRecord]:
    """
    Index a child's live achievements by milestone id.

    Soft-deleted records are dropped. At most one live record per milestone
    is expected; if that is violated the earliest achieved date is kept.

    Args:
        records: Achievement records for one child

    Returns:
        Dictionary of milestone_id -> AchievementRecord
    """
    achievements: Dict[str, AchievementRecord] = {}

    for record in records:
        if record.is_deleted:
            continue

        existing = achievements.get(record.milestone_id)
        if existing is None:
            achievements[record.milestone_id] = record
            continue

        logger.warning(
            "duplicate_achievement",
            milestone_id=record.milestone_id,
            kept=existing.id,
            other=record.id,
        )
        if to_date(record.achieved_date) < to_date(existing.achieved_date):
            achievements[record.milestone_id] = record

    return achievements


def validate_new_achievement(
    catalog: MilestoneCatalog,
    existing_records: Iterable[AchievementRecord],
    milestone_id: str,
) -> None:
    """
    Check that a new achievement may be recorded for a child.

    Args:
        catalog: Milestone catalog
        existing_records: The child's current achievement records
        milestone_id: Milestone the caregiver wants to mark achieved

    Raises:
        MilestoneNotFoundError: If the milestone id is not in the catalog
        MilestoneAlreadyAchievedError: If a live record already exists
    """
    catalog.get(milestone_id)

    for record in existing_records:
        if record.milestone_id == milestone_id and not record.is_deleted:
            raise MilestoneAlreadyAchievedError(milestone_id, record.id)
