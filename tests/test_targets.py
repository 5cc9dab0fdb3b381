"""
Tests for monthly targets: manual overrides, the plan fallback and the
monthly overview.
"""
from datetime import date

import pytest

from habitlog.core.errors import HabitNotFoundError, ValidationFailedError
from habitlog.services import habits as registry
from habitlog.services.ledger import toggle_completion
from habitlog.services.targets import (
    NO_TARGET_DISPLAY,
    TargetSource,
    get_monthly_target,
    list_overrides_in_range,
    monthly_target_overview,
    resolve_monthly_target,
    set_monthly_target,
)
from habitlog.services.units import HabitUnit


class TestTargetService:
    def test_plan_fallback_is_not_persisted(self, db, principal):
        plank = registry.create_habit(db, principal, "Plank", 7, HabitUnit.time())
        resolved = resolve_monthly_target(db, principal, plank.id, 3, 2024)
        assert resolved.amount == 90
        assert resolved.source == TargetSource.PLAN
        assert get_monthly_target(db, principal, plank.id, 3, 2024) is None

    def test_override_wins(self, db, principal):
        squats = registry.create_habit(db, principal, "Squats", 4, HabitUnit.reps())
        set_monthly_target(db, principal, squats.id, 900, 6, 2024)
        resolved = resolve_monthly_target(db, principal, squats.id, 6, 2024)
        assert (resolved.amount, resolved.source) == (900, TargetSource.MANUAL)
        assert get_monthly_target(db, principal, squats.id, 6, 2024) == 900

    def test_override_is_replaced_not_added(self, db, principal):
        squats = registry.create_habit(db, principal, "Squats", 4, HabitUnit.reps())
        set_monthly_target(db, principal, squats.id, 900, 6, 2024)
        set_monthly_target(db, principal, squats.id, 1000, 6, 2024)
        assert get_monthly_target(db, principal, squats.id, 6, 2024) == 1000
        start, end = date(2024, 6, 1), date(2024, 6, 30)
        assert len(list_overrides_in_range(db, principal, start, end)) == 1

    def test_no_plan_for_other_habits(self, db, principal):
        reading = registry.create_habit(db, principal, "Reading", 7, HabitUnit.custom("pages"))
        resolved = resolve_monthly_target(db, principal, reading.id, 6, 2024)
        assert resolved.amount is None
        assert resolved.source is None

    def test_excluded_habit_has_no_plan(self, db, principal):
        run = registry.create_habit(db, principal, "Run", 3, HabitUnit.custom("km"))
        assert resolve_monthly_target(db, principal, run.id, 6, 2024).amount is None

    def test_time_target_takes_duration_text(self, db, principal):
        plank = registry.create_habit(db, principal, "Plank", 7, HabitUnit.time())
        target = set_monthly_target(db, principal, plank.id, "30 min", 6, 2024)
        assert target.amount == 1800

    def test_unitless_habit_takes_a_count(self, db, principal):
        fasting = registry.create_habit(db, principal, "16/8 fasting", 7, HabitUnit.none())
        assert set_monthly_target(db, principal, fasting.id, "20", 6, 2024).amount == 20

    @pytest.mark.parametrize("amount", [None, -1, "abc"])
    def test_bad_amount(self, db, principal, amount):
        squats = registry.create_habit(db, principal, "Squats", 4, HabitUnit.reps())
        with pytest.raises(ValidationFailedError):
            set_monthly_target(db, principal, squats.id, amount, 6, 2024)
        assert get_monthly_target(db, principal, squats.id, 6, 2024) is None

    def test_bad_month(self, db, principal):
        squats = registry.create_habit(db, principal, "Squats", 4, HabitUnit.reps())
        with pytest.raises(ValidationFailedError):
            set_monthly_target(db, principal, squats.id, 10, 13, 2024)

    def test_unknown_habit(self, db, principal):
        with pytest.raises(HabitNotFoundError):
            set_monthly_target(db, principal, "missing", 10, 6, 2024)

    def test_overrides_in_range_by_month(self, db, principal):
        squats = registry.create_habit(db, principal, "Squats", 4, HabitUnit.reps())
        for month, year in ((12, 2023), (1, 2024), (2, 2024), (3, 2024)):
            set_monthly_target(db, principal, squats.id, 100, month, year)
        found = list_overrides_in_range(db, principal, date(2023, 12, 15), date(2024, 2, 1))
        assert [(t.year, t.month) for t in found] == [(2023, 12), (2024, 1), (2024, 2)]

    def test_overview(self, db, principal):
        push = registry.create_habit(db, principal, "Push-ups", 5, HabitUnit.reps(), 20)
        plank = registry.create_habit(db, principal, "Plank", 7, HabitUnit.time(), 75)
        reading = registry.create_habit(db, principal, "Reading", 7, HabitUnit.none())
        toggle_completion(db, principal, push.id, 1, 6, 2024)
        toggle_completion(db, principal, push.id, 2, 6, 2024, amount=35)
        toggle_completion(db, principal, plank.id, 1, 6, 2024)
        toggle_completion(db, principal, push.id, 1, 7, 2024)

        by_id = {o.habit_id: o for o in monthly_target_overview(db, principal, 6, 2024)}
        assert by_id[push.id].monthly_total == 55
        assert by_id[push.id].target.amount == 45
        assert by_id[push.id].target_display == "45"
        assert by_id[plank.id].total_display == "1:15"
        assert by_id[plank.id].target_display == "2:15"
        assert by_id[reading.id].target_display == NO_TARGET_DISPLAY
        assert by_id[reading.id].unit == "—"


class TestTargetEndpoints:
    def _habit(self, client, headers, **body):
        payload = {"name": "Plank", "weekly_target": 7, "unit": {"kind": "time"}}
        payload.update(body)
        return client.post("/habits", json=payload, headers=headers).json()

    def test_plan_target(self, client, headers):
        plank = self._habit(client, headers)
        r = client.get(f"/targets/{plank['id']}/2024/3", headers=headers)
        assert r.status_code == 200
        assert r.json() == {
            "habit_id": plank["id"],
            "month": 3,
            "year": 2024,
            "amount": 90,
            "override": None,
            "source": "plan",
            "display": "1:30",
        }

    def test_put_override(self, client, headers):
        plank = self._habit(client, headers)
        r = client.put(f"/targets/{plank['id']}/2024/3", json={"amount": "2 min"}, headers=headers)
        assert r.status_code == 200
        body = r.json()
        assert body["amount"] == 120
        assert body["override"] == 120
        assert body["source"] == "manual"
        assert body["display"] == "2:00"

    def test_no_target_display(self, client, headers):
        habit = self._habit(client, headers, name="Reading", unit={"kind": "custom", "label": "pages"})
        body = client.get(f"/targets/{habit['id']}/2024/3", headers=headers).json()
        assert body["amount"] is None
        assert body["display"] == "—"

    def test_null_amount_rejected(self, client, headers):
        plank = self._habit(client, headers)
        r = client.put(f"/targets/{plank['id']}/2024/3", json={"amount": None}, headers=headers)
        assert r.status_code == 422

    def test_unknown_habit(self, client, headers):
        r = client.get("/targets/missing/2024/3", headers=headers)
        assert r.status_code == 404

    def test_overview(self, client, headers):
        plank = self._habit(client, headers)
        client.put(f"/records/{plank['id']}/2024/6/1", json={"amount": "1:00"}, headers=headers)
        client.put(f"/records/{plank['id']}/2024/6/2", json={"amount": 30}, headers=headers)
        r = client.get("/targets", params={"month": 6, "year": 2024}, headers=headers)
        (item,) = r.json()["items"]
        assert item["monthly_total"] == 90
        assert item["total_display"] == "1:30"
        assert item["target"] == 135
        assert item["source"] == "plan"
