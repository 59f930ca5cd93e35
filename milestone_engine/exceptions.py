"""Exceptions raised by the milestone engine.

The core computations (identifiers, ages, classification, progress and
ranking) never raise on well-typed input. These errors cover the edges:
malformed catalog data and precondition checks run before an achievement
is recorded.
"""


class MilestoneEngineError(Exception):
    """Base class for all milestone engine errors."""


class CatalogError(MilestoneEngineError):
    """Catalog source data is malformed."""


class MilestoneNotFoundError(MilestoneEngineError, KeyError):
    """A milestone id does not reference any catalog definition."""

    def __init__(self, milestone_id: str):
        self.milestone_id = milestone_id
        super().__init__(f"Milestone definition not found: {milestone_id}")

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return self.args[0]


class MilestoneAlreadyAchievedError(MilestoneEngineError):
    """A non-deleted achievement already exists for this milestone."""

    def __init__(self, milestone_id: str, existing_id: str):
        self.milestone_id = milestone_id
        self.existing_id = existing_id
        super().__init__(
            f"This milestone has already been achieved: {milestone_id} "
            f"(record {existing_id})"
        )
