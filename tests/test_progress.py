"""Tests for progress aggregation."""

from datetime import date

from milestone_engine.analytics.progress import aggregate_progress, is_age_appropriate
from milestone_engine.milestones.achievements import build_achievement_map


class TestAggregateProgress:
    """Overall and per-category progress."""

    def test_overall_and_by_category(self, small_catalog, make_achievement):
        achievements = build_achievement_map([
            make_achievement("motor", "Rolls over", date(2024, 5, 20)),
            make_achievement("social", "First social smile", date(2024, 2, 10)),
        ])

        summary = aggregate_progress(small_catalog.all(), achievements, 7.0)

        assert summary.total_milestones == 4
        assert summary.achieved_milestones == 2
        assert summary.progress_percentage == 50.0
        assert summary.progress_by_category == {
            "motor": 50.0,
            "cognitive": 0.0,
            "social": 100.0,
            "language": 0.0,
        }

    def test_empty_category_is_zero(self, small_catalog):
        """No age-appropriate milestones in a category reports 0."""
        summary = aggregate_progress(small_catalog.all(), {}, 7.0)

        assert summary.progress_by_category["language"] == 0.0

    def test_nothing_age_appropriate(self, small_catalog):
        """A newborn has no denominator at all."""
        summary = aggregate_progress(small_catalog.all(), {}, 0.5)

        assert summary.total_milestones == 0
        assert summary.achieved_milestones == 0
        assert summary.progress_percentage == 0.0
        assert set(summary.progress_by_category.values()) == {0.0}

    def test_early_achievement_waits_for_window(self, small_catalog, make_achievement):
        """Achieving before the window start does not count until the window opens."""
        achievements = build_achievement_map([
            make_achievement("motor", "Walks independently", date(2024, 10, 20)),
        ])

        at_ten_months = aggregate_progress(small_catalog.all(), achievements, 10.0)
        at_twelve_months = aggregate_progress(small_catalog.all(), achievements, 12.0)

        assert at_ten_months.total_milestones == 5
        assert at_ten_months.achieved_milestones == 0
        assert at_ten_months.progress_percentage == 0.0

        assert at_twelve_months.total_milestones == 6
        assert at_twelve_months.achieved_milestones == 1
        assert at_twelve_months.progress_percentage == 16.7
        assert at_twelve_months.progress_by_category["motor"] == 33.3

    def test_delayed_milestones_count(self, small_catalog):
        """Delayed milestones stay in the denominator."""
        summary = aggregate_progress(small_catalog.all(), {}, 20.0)

        assert summary.total_milestones == 6
        assert summary.progress_percentage == 0.0

    def test_bounds(self, default_catalog):
        """Percentages stay within 0..100."""
        every_milestone = {d.id: object() for d in default_catalog}

        for age in (0.0, 3.5, 9.0, 18.2, 30.0):
            for achieved in ({}, every_milestone):
                summary = aggregate_progress(default_catalog.all(), achieved, age)
                assert 0 <= summary.progress_percentage <= 100
                for value in summary.progress_by_category.values():
                    assert 0 <= value <= 100

    def test_all_achieved(self, default_catalog):
        every_milestone = {d.id: object() for d in default_catalog}

        summary = aggregate_progress(default_catalog.all(), every_milestone, 30.0)

        assert summary.total_milestones == 78
        assert summary.progress_percentage == 100.0
        assert set(summary.progress_by_category.values()) == {100.0}

    def test_to_dict(self, small_catalog):
        data = aggregate_progress(small_catalog.all(), {}, 7.0, baby_id="baby-1").to_dict()

        assert data["babyId"] == "baby-1"
        assert data["babyAgeMonths"] == 7.0
        assert data["totalMilestones"] == 4
        assert data["achievedMilestones"] == 0
        assert data["progressPercentage"] == 0.0
        assert set(data["progressByCategory"]) == {"motor", "cognitive", "social", "language"}


class TestIsAgeAppropriate:

    def test_inclusive_window_start(self, small_catalog):
        sits = small_catalog.filter(category="motor", min_age=6, max_age=8)[0]

        assert not is_age_appropriate(sits, 5.9)
        assert is_age_appropriate(sits, 6.0)
        assert is_age_appropriate(sits, 30.0)
