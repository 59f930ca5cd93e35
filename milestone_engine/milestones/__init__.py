"""Milestone catalog, achievement records and status classification."""

from .identifiers import generate_milestone_id
from .catalog import (
    CATEGORIES,
    MilestoneCatalog,
    MilestoneCategory,
    MilestoneDefinition,
    get_default_catalog,
    sort_for_display,
)
from .achievements import AchievementRecord, build_achievement_map, validate_new_achievement
from .classifier import ClassifiedMilestone, MilestoneStatus, classify_milestone

__all__ = [
    "generate_milestone_id",
    "CATEGORIES",
    "MilestoneCatalog",
    "MilestoneCategory",
    "MilestoneDefinition",
    "get_default_catalog",
    "sort_for_display",
    "AchievementRecord",
    "build_achievement_map",
    "validate_new_achievement",
    "ClassifiedMilestone",
    "MilestoneStatus",
    "classify_milestone",
]
