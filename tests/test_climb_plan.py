"""
Tests for the built-in Steady Climb monthly plan.
"""
import pytest

from habitlog.services.climb_plan import (
    is_plan_applicable,
    normalize_habit_name,
    plan_target_for_habit,
    plan_targets,
)


class TestPlanTable:
    def test_first_and_last_month(self):
        assert plan_targets(1).push_ups == 20
        assert plan_targets(1).plank_seconds == 60
        assert plan_targets(12).squats == 75
        assert plan_targets(12).plank_seconds == 240

    def test_out_of_range_month_is_clamped(self):
        assert plan_targets(0) == plan_targets(1)
        assert plan_targets(13) == plan_targets(12)

    def test_monotonic(self):
        for month in range(1, 12):
            assert plan_targets(month + 1).push_ups > plan_targets(month).push_ups
            assert plan_targets(month + 1).plank_seconds > plan_targets(month).plank_seconds


class TestHabitMapping:
    @pytest.mark.parametrize("name", ["Push-ups", "push ups", "PUSHUPS", "Press-ups"])
    def test_push_up_aliases(self, name):
        assert plan_target_for_habit(name, 6) == 45

    def test_squats(self):
        assert plan_target_for_habit("Squats", 2) == 25

    def test_plank_is_seconds(self):
        assert plan_target_for_habit("Plank", 3) == 90

    @pytest.mark.parametrize("name", ["16/8 Fasting", "Run", "squash", "Reading"])
    def test_other_habits_have_no_plan(self, name):
        assert not is_plan_applicable(name)
        assert plan_target_for_habit(name, 5) is None

    def test_normalize(self):
        assert normalize_habit_name("  Push-Ups ") == "pushups"
