"""Tests for upcoming milestone ranking."""

from datetime import date

from milestone_engine.analytics.upcoming import UpcomingMilestones, rank_upcoming
from milestone_engine.milestones.achievements import build_achievement_map
from milestone_engine.milestones.catalog import MilestoneCatalog


def catalog_of(*windows):
    return MilestoneCatalog.from_raw([
        {
            "category": category,
            "name": name,
            "description": "",
            "expected_age_months_min": age_min,
            "expected_age_months_max": age_min + 3,
        }
        for category, name, age_min in windows
    ])


class TestRankUpcoming:
    """Filtering, ordering and the imminent flag."""

    def test_soonest_first(self):
        catalog = catalog_of(("motor", "Crawls", 7), ("motor", "Sits", 6))

        ranked = rank_upcoming(catalog.all(), {}, 5.5)

        assert [m.definition.name for m in ranked] == ["Sits", "Crawls"]
        assert [m.months_until_expected for m in ranked] == [0.5, 1.5]

    def test_imminent_boundary(self):
        """Exactly three months away is imminent; 3.1 is not."""
        catalog = catalog_of(("language", "Says first word", 9))

        at_six = rank_upcoming(catalog.all(), {}, 6.0)
        at_five_nine = rank_upcoming(catalog.all(), {}, 5.9)

        assert at_six[0].months_until_expected == 3.0
        assert at_six[0].is_imminent
        assert at_five_nine[0].months_until_expected == 3.1
        assert not at_five_nine[0].is_imminent

    def test_excludes_started_windows(self, small_catalog):
        """Milestones whose window has started (or passed) are not upcoming."""
        ranked = rank_upcoming(small_catalog.all(), {}, 10.0)

        assert [m.definition.name for m in ranked] == ["Walks independently"]
        assert ranked[0].months_until_expected == 2.0
        assert ranked[0].is_imminent

    def test_excludes_achieved(self, small_catalog, make_achievement):
        achievements = build_achievement_map([
            make_achievement("motor", "Walks independently", date(2024, 9, 1)),
        ])

        ranked = rank_upcoming(small_catalog.all(), achievements, 8.0)

        assert [m.definition.name for m in ranked] == ["Says first word"]

    def test_ties_use_display_order(self, small_catalog):
        """Equal distances fall back to category, then name."""
        ranked = rank_upcoming(small_catalog.all(), {}, 5.0)

        assert [m.definition.name for m in ranked[:2]] == [
            "Looks for dropped objects",
            "Sits without support",
        ]
        assert ranked[0].months_until_expected == ranked[1].months_until_expected == 1.0

    def test_custom_horizon(self, small_catalog):
        ranked = rank_upcoming(small_catalog.all(), {}, 8.0, imminent_horizon_months=2.0)

        flags = {m.definition.name: m.is_imminent for m in ranked}
        assert flags == {"Says first word": True, "Walks independently": False}

    def test_nothing_upcoming(self, small_catalog):
        assert rank_upcoming(small_catalog.all(), {}, 30.0) == []

    def test_response_shape(self, small_catalog):
        ranked = rank_upcoming(small_catalog.all(), {}, 8.0)

        data = UpcomingMilestones(baby_age_months=8.0, upcoming_milestones=ranked, baby_id="b").to_dict()

        assert data["total"] == 2
        assert data["babyAgeMonths"] == 8.0
        assert data["upcomingMilestones"][0]["definition"]["name"] == "Says first word"
        assert data["upcomingMilestones"][0]["monthsUntilExpected"] == 2.0
        assert data["upcomingMilestones"][0]["isImminent"] is True
