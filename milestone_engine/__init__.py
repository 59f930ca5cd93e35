# Developmental Milestone Engine
from .age_adaptation import age_in_months, calculate_age, format_age
from .config import EngineConfig
from .exceptions import (
    CatalogError,
    MilestoneAlreadyAchievedError,
    MilestoneEngineError,
    MilestoneNotFoundError,
)
from .milestones import (
    AchievementRecord,
    MilestoneCatalog,
    MilestoneCategory,
    MilestoneDefinition,
    MilestoneStatus,
    generate_milestone_id,
    get_default_catalog,
)
from .tracker import MilestoneQuery, MilestoneTracker

__version__ = "0.1.0"

__all__ = [
    "age_in_months",
    "calculate_age",
    "format_age",
    "EngineConfig",
    "CatalogError",
    "MilestoneAlreadyAchievedError",
    "MilestoneEngineError",
    "MilestoneNotFoundError",
    "AchievementRecord",
    "MilestoneCatalog",
    "MilestoneCategory",
    "MilestoneDefinition",
    "MilestoneStatus",
    "generate_milestone_id",
    "get_default_catalog",
    "MilestoneQuery",
    "MilestoneTracker",
]
