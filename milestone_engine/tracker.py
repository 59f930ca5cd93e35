"""Milestone tracking views for a child.

Ties the catalog, age calculation, classification, progress and upcoming
ranking together into the three response shapes a client consumes:
milestones grouped by category, overall progress, and upcoming milestones.
"""

import json
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from .age_adaptation.age_calculator import DateLike, age_in_months
from .analytics.progress import ProgressSummary, aggregate_progress
from .analytics.upcoming import UpcomingMilestones, rank_upcoming
from .config import DEFAULT_CATALOG_PATH, EngineConfig
from .logging_config import get_logger
from .milestones.achievements import AchievementRecord, build_achievement_map
from .milestones.catalog import (
    CATEGORIES,
    MilestoneCatalog,
    MilestoneCategory,
    MilestoneDefinition,
    get_default_catalog,
    parse_category,
    sort_for_display,
)
from .milestones.classifier import ClassifiedMilestone, classify_milestone

logger = get_logger(__name__)


@dataclass
class MilestoneQuery:
    """Display filters for the by-category view. They never affect progress."""
    category: Optional[MilestoneCategory] = None
    include_achieved: bool = True
    include_upcoming: bool = True
    age_appropriate: bool = False

    def accepts(self, milestone: ClassifiedMilestone) -> bool:
        if not self.include_achieved and milestone.is_achieved:
            return False
        if not self.include_upcoming and milestone.is_upcoming:
            return False
        if self.age_appropriate and milestone.is_upcoming:
            return False
        return True


@dataclass
class MilestoneSummary:
    """Counts over the displayed (filtered) milestones."""
    total_milestones: int = 0
    achieved_count: int = 0
    upcoming_count: int = 0
    delayed_count: int = 0

    def to_dict(self) -> dict:
        return {
            "totalMilestones": self.total_milestones,
            "achievedCount": self.achieved_count,
            "upcomingCount": self.upcoming_count,
            "delayedCount": self.delayed_count,
        }


@dataclass
class MilestonesByCategory:
    """Classified milestones grouped by category, with a summary."""
    baby_age_months: float
    by_category: Dict[str, List[ClassifiedMilestone]] = field(default_factory=dict)
    summary: MilestoneSummary = field(default_factory=MilestoneSummary)
    baby_id: Optional[str] = None

    @property
    def milestones(self) -> List[ClassifiedMilestone]:
        """All displayed milestones, category by category."""
        return [m for c in CATEGORIES for m in self.by_category.get(c.value, [])]

    def to_dict(self) -> dict:
        data = {
            "babyId": self.baby_id,
            "babyAgeMonths": self.baby_age_months,
        }
        for category in CATEGORIES:
            data[category.value] = [m.to_dict() for m in self.by_category.get(category.value, [])]
        data["summary"] = self.summary.to_dict()
        return data

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)


class MilestoneTracker:
    """
    Builds milestone views for a child from their achievement records.

    The tracker holds no per-child state; every call takes the birth date,
    the achievement records and the reference date it should measure at.
    """

    def __init__(
        self,
        catalog: Optional[MilestoneCatalog] = None,
        config: Optional[EngineConfig] = None,
    ):
        """
        Initialize milestone tracker.

        Args:
            catalog: Milestone catalog. If None, it is loaded from
                ``config.catalog_path`` (the packaged catalog by default).
            config: Engine configuration
        """
        self.config = config or EngineConfig()
        self._catalog = catalog

    @property
    def catalog(self) -> MilestoneCatalog:
        """Lazy-load catalog."""
        if self._catalog is None:
            if Path(self.config.catalog_path) == DEFAULT_CATALOG_PATH:
                self._catalog = get_default_catalog()
            else:
                self._catalog = MilestoneCatalog.from_file(self.config.catalog_path)
        return self._catalog

    def _prepare(
        self,
        birth_date: DateLike,
        achievements: Iterable[AchievementRecord],
        reference_date: Optional[DateLike],
    ):
        """Compute current age and the live achievement map."""
        if reference_date is None:
            reference_date = date.today()

        baby_age = age_in_months(birth_date, reference_date)
        achievement_map = build_achievement_map(achievements)

        for milestone_id in achievement_map:
            if milestone_id not in self.catalog:
                logger.warning("achievement_for_unknown_milestone", milestone_id=milestone_id)

        return baby_age, achievement_map

    # ============ DEFINITIONS ============

    def list_definitions(
        self,
        category: Optional[MilestoneCategory] = None,
        min_age: Optional[int] = None,
        max_age: Optional[int] = None,
    ) -> List[MilestoneDefinition]:
        """
        Catalog definitions matching the filters, in display order.

        Args:
            category: Restrict to one category
            min_age: Keep definitions whose window starts at or after this
            max_age: Keep definitions whose window ends at or before this

        Returns:
            Definitions sorted by window start, category, name
        """
        return sort_for_display(self.catalog.filter(category, min_age, max_age))

    def get_definition(self, milestone_id: str) -> MilestoneDefinition:
        """
        Get a single definition.

        Raises:
            MilestoneNotFoundError: If the id is not in the catalog
        """
        return self.catalog.get(milestone_id)

    # ============ CHILD VIEWS ============

    def get_milestones_by_category(
        self,
        birth_date: DateLike,
        achievements: Iterable[AchievementRecord],
        query: Optional[MilestoneQuery] = None,
        reference_date: Optional[DateLike] = None,
        baby_id: Optional[str] = None,
    ) -> MilestonesByCategory:
        """
        Classify milestones for a child and group them by category.

        Args:
            birth_date: Child's birth date
            achievements: Child's achievement records (deleted ones ignored)
            query: Display filters
            reference_date: Date to measure at (default: today)
            baby_id: Optional id echoed in the response

        Returns:
            MilestonesByCategory with summary counts over displayed items
        """
        query = query or MilestoneQuery()
        baby_age, achievement_map = self._prepare(birth_date, achievements, reference_date)

        definitions = self.catalog.all()
        if query.category is not None:
            category = parse_category(query.category)
            definitions = [d for d in definitions if d.category == category]

        displayed = []
        for definition in sort_for_display(definitions):
            milestone = classify_milestone(definition, achievement_map, baby_age, birth_date)
            if query.accepts(milestone):
                displayed.append(milestone)

        by_category = {c.value: [] for c in CATEGORIES}
        for milestone in displayed:
            by_category[milestone.definition.category.value].append(milestone)

        summary = MilestoneSummary(
            total_milestones=len(displayed),
            achieved_count=sum(1 for m in displayed if m.is_achieved),
            upcoming_count=sum(1 for m in displayed if m.is_upcoming),
            delayed_count=sum(1 for m in displayed if m.is_delayed),
        )

        logger.debug(
            "milestones_classified",
            baby_id=baby_id,
            baby_age_months=baby_age,
            displayed=summary.total_milestones,
        )

        return MilestonesByCategory(
            baby_id=baby_id,
            baby_age_months=baby_age,
            by_category=by_category,
            summary=summary,
        )

    def get_progress(
        self,
        birth_date: DateLike,
        achievements: Iterable[AchievementRecord],
        reference_date: Optional[DateLike] = None,
        baby_id: Optional[str] = None,
    ) -> ProgressSummary:
        """
        Progress percentage over age-appropriate milestones.

        Args:
            birth_date: Child's birth date
            achievements: Child's achievement records
            reference_date: Date to measure at (default: today)
            baby_id: Optional id echoed in the response

        Returns:
            ProgressSummary
        """
        baby_age, achievement_map = self._prepare(birth_date, achievements, reference_date)
        return aggregate_progress(self.catalog.all(), achievement_map, baby_age, baby_id=baby_id)

    def get_upcoming(
        self,
        birth_date: DateLike,
        achievements: Iterable[AchievementRecord],
        reference_date: Optional[DateLike] = None,
        baby_id: Optional[str] = None,
    ) -> UpcomingMilestones:
        """
        Milestones not yet due, soonest first.

        Args:
            birth_date: Child's birth date
            achievements: Child's achievement records
            reference_date: Date to measure at (default: today)
            baby_id: Optional id echoed in the response

        Returns:
            UpcomingMilestones with ranked entries and total
        """
        baby_age, achievement_map = self._prepare(birth_date, achievements, reference_date)
        ranked = rank_upcoming(
            self.catalog.all(),
            achievement_map,
            baby_age,
            imminent_horizon_months=self.config.imminent_horizon_months,
        )
        return UpcomingMilestones(
            baby_id=baby_id,
            baby_age_months=baby_age,
            upcoming_milestones=ranked,
        )
