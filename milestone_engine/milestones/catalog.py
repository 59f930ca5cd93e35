"""Milestone catalog: the static developmental milestone reference data.

The catalog is built once from a fixed source list, indexed by identifier,
and never mutated afterwards, so it can be shared freely between requests.
"""

import json
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple

from ..config import DEFAULT_CATALOG_PATH
from ..exceptions import CatalogError, MilestoneNotFoundError
from ..logging_config import get_logger
from .identifiers import generate_milestone_id

logger = get_logger(__name__)


class MilestoneCategory(str, Enum):
    """Developmental areas a milestone belongs to."""
    MOTOR = "motor"
    COGNITIVE = "cognitive"
    SOCIAL = "social"
    LANGUAGE = "language"


# Fixed order used for per-category output
CATEGORIES: Tuple[MilestoneCategory, ...] = (
    MilestoneCategory.MOTOR,
    MilestoneCategory.COGNITIVE,
    MilestoneCategory.SOCIAL,
    MilestoneCategory.LANGUAGE,
)


def parse_category(value: Any) -> MilestoneCategory:
    """
    Convert a string to a MilestoneCategory.

    Raises:
        ValueError: If the value is not one of the four categories
    """
    if isinstance(value, MilestoneCategory):
        return value
    try:
        return MilestoneCategory(str(value).strip().lower())
    except ValueError:
        valid = ", ".join(c.value for c in CATEGORIES)
        raise ValueError(f"Unknown milestone category {value!r} (expected one of: {valid})")


@dataclass(frozen=True)
class MilestoneDefinition:
    """A catalog entry: one milestone and its typical age window (inclusive)."""
    id: str
    category: MilestoneCategory
    name: str
    description: str
    expected_age_months_min: int
    expected_age_months_max: int

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "category": self.category.value,
            "name": self.name,
            "description": self.description,
            "expectedAgeMonthsMin": self.expected_age_months_min,
            "expectedAgeMonthsMax": self.expected_age_months_max,
        }

    @classmethod
    def from_raw(cls, data: Dict[str, Any]) -> "MilestoneDefinition":
        """
        Build a definition from a raw source entry, deriving its id.

        Accepts snake_case or camelCase age keys. Any ``id`` in the entry is
        ignored: identity always comes from (category, name).

        Raises:
            CatalogError: If the entry is malformed
        """
        name = data.get("name")
        if not isinstance(name, str) or not name.strip():
            raise CatalogError(f"Milestone entry has no name: {data!r}")

        try:
            category = parse_category(data.get("category"))
        except ValueError as e:
            raise CatalogError(f"{name}: {e}") from e

        age_min = data.get("expected_age_months_min", data.get("expectedAgeMonthsMin"))
        age_max = data.get("expected_age_months_max", data.get("expectedAgeMonthsMax"))

        for label, value in (("minimum", age_min), ("maximum", age_max)):
            if not isinstance(value, int) or isinstance(value, bool):
                raise CatalogError(f"{name}: expected age {label} must be an integer, got {value!r}")
            if value < 0:
                raise CatalogError(f"{name}: expected age {label} must be >= 0, got {value}")

        if age_min > age_max:
            raise CatalogError(f"{name}: expected age range is inverted ({age_min} > {age_max})")

        return cls(
            id=generate_milestone_id(category.value, name),
            category=category,
            name=name,
            description=data.get("description", ""),
            expected_age_months_min=age_min,
            expected_age_months_max=age_max,
        )


def display_sort_key(definition: MilestoneDefinition) -> Tuple[int, str, str]:
    """Sort key for display: min expected age, then category, then name."""
    return (
        definition.expected_age_months_min,
        definition.category.value,
        definition.name,
    )


def sort_for_display(definitions: Iterable[MilestoneDefinition]) -> List[MilestoneDefinition]:
    """Return definitions in deterministic display order."""
    return sorted(definitions, key=display_sort_key)


class MilestoneCatalog:
    """
    Immutable table of milestone definitions with an id index.

    Insertion order is preserved by ``all()``; lookups by id are O(1).
    """

    def __init__(self, definitions: Iterable[MilestoneDefinition]):
        """
        Initialize catalog.

        Args:
            definitions: Definitions in source order

        Raises:
            CatalogError: If two definitions share a (category, name) pair
        """
        self._definitions: Tuple[MilestoneDefinition, ...] = tuple(definitions)
        self._index: Dict[str, MilestoneDefinition] = {}

        for definition in self._definitions:
            existing = self._index.get(definition.id)
            if existing is not None:
                raise CatalogError(
                    f"Duplicate milestone {definition.category.value}:{definition.name} "
                    f"(id {definition.id})"
                )
            self._index[definition.id] = definition

        logger.debug("catalog_built", definitions=len(self._definitions))

    @classmethod
    def from_raw(cls, entries: Iterable[Dict[str, Any]]) -> "MilestoneCatalog":
        """Build a catalog from raw source entries (no ids)."""
        return cls(MilestoneDefinition.from_raw(entry) for entry in entries)

    @classmethod
    def from_file(cls, path: Path) -> "MilestoneCatalog":
        """
        Load a catalog from a JSON content file.

        The file holds either a list of entries or an object with a
        ``milestones`` list.

        Raises:
            OSError: If the file cannot be read
            CatalogError: If the content is malformed
        """
        path = Path(path)
        with open(path, "r", encoding="utf-8") as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise CatalogError(f"Invalid catalog JSON in {path}: {e}") from e

        entries = data.get("milestones") if isinstance(data, dict) else data
        if not isinstance(entries, list):
            raise CatalogError(f"Catalog file {path} has no milestone list")

        logger.debug("catalog_loading", path=str(path), entries=len(entries))
        return cls.from_raw(entries)

    def __len__(self) -> int:
        return len(self._definitions)

    def __iter__(self) -> Iterator[MilestoneDefinition]:
        return iter(self._definitions)

    def __contains__(self, milestone_id: object) -> bool:
        return milestone_id in self._index

    def all(self) -> List[MilestoneDefinition]:
        """All definitions in source order."""
        return list(self._definitions)

    def by_id(self, milestone_id: str) -> Optional[MilestoneDefinition]:
        """Look up a definition, or None if the id is unknown."""
        return self._index.get(milestone_id)

    def get(self, milestone_id: str) -> MilestoneDefinition:
        """
        Look up a definition by id.

        Raises:
            MilestoneNotFoundError: If the id is unknown
        """
        definition = self._index.get(milestone_id)
        if definition is None:
            raise MilestoneNotFoundError(milestone_id)
        return definition

    def filter(
        self,
        category: Optional[MilestoneCategory] = None,
        min_age: Optional[int] = None,
        max_age: Optional[int] = None,
    ) -> List[MilestoneDefinition]:
        """
        Definitions matching every provided constraint, in source order.

        The age bounds apply to the definition's own window:
        ``min_age`` keeps ``expected_age_months_min >= min_age`` and
        ``max_age`` keeps ``expected_age_months_max <= max_age``.

        Args:
            category: Restrict to one category
            min_age: Lower bound on the window start
            max_age: Upper bound on the window end
        """
        if category is not None:
            category = parse_category(category)

        results = []
        for definition in self._definitions:
            if category is not None and definition.category != category:
                continue
            if min_age is not None and definition.expected_age_months_min < min_age:
                continue
            if max_age is not None and definition.expected_age_months_max > max_age:
                continue
            results.append(definition)
        return results

    def by_category(self, category: MilestoneCategory) -> List[MilestoneDefinition]:
        return self.filter(category=category)

    def by_age_range(
        self,
        min_age: Optional[int] = None,
        max_age: Optional[int] = None,
    ) -> List[MilestoneDefinition]:
        return self.filter(min_age=min_age, max_age=max_age)

    def sorted_for_display(self) -> List[MilestoneDefinition]:
        return sort_for_display(self._definitions)


_default_catalog: Optional[MilestoneCatalog] = None


def get_default_catalog() -> MilestoneCatalog:
    """
    The packaged catalog, built on first use and shared afterwards.

    Returns:
        MilestoneCatalog loaded from the bundled content file
    """
    global _default_catalog
    if _default_catalog is None:
        _default_catalog = MilestoneCatalog.from_file(DEFAULT_CATALOG_PATH)
    return _default_catalog
