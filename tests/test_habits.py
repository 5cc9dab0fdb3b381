"""
Tests for the habit registry: service functions and the /habits endpoints.
"""
import pytest

from habitlog.core.errors import HabitNotFoundError, ValidationFailedError
from habitlog.models.habit_record import HabitRecord
from habitlog.models.monthly_target import MonthlyTarget
from habitlog.services import habits as registry
from habitlog.services.ledger import toggle_completion
from habitlog.services.targets import set_monthly_target
from habitlog.services.units import HabitUnit, UnitKind


# ---------------------------------------------------------------------------
# Service layer
# ---------------------------------------------------------------------------

class TestRegistryService:
    def test_create_strips_name(self, db, principal):
        habit = registry.create_habit(db, principal, "  Push-ups ", 5, HabitUnit.reps(), 20)
        assert habit.name == "Push-ups"
        assert habit.weekly_target == 5
        assert habit.default_amount == 20
        assert habit.unit == HabitUnit.reps()
        assert len(habit.id) == 32

    @pytest.mark.parametrize("target", [0, 8, -1, True])
    def test_weekly_target_out_of_range(self, db, principal, target):
        with pytest.raises(ValidationFailedError):
            registry.create_habit(db, principal, "Run", target, HabitUnit.none())
        assert registry.list_habits(db, principal) == []

    def test_empty_name_rejected(self, db, principal):
        with pytest.raises(ValidationFailedError):
            registry.create_habit(db, principal, "   ", 3, HabitUnit.reps())

    def test_time_default_accepts_duration_text(self, db, principal):
        habit = registry.create_habit(db, principal, "Plank", 7, HabitUnit.time(), "1:30")
        assert habit.default_amount == 90

    def test_none_unit_drops_default(self, db, principal):
        habit = registry.create_habit(db, principal, "16/8 fasting", 7, HabitUnit.none(), 10)
        assert habit.default_amount is None

    def test_custom_unit_label_persists(self, db, principal):
        habit = registry.create_habit(db, principal, "Run", 3, HabitUnit.custom("km"))
        db.expire_all()
        again = registry.get_habit(db, principal, habit.id)
        assert again.unit == HabitUnit(UnitKind.custom, "km")

    def test_list_is_creation_ordered(self, db, principal):
        a = registry.create_habit(db, principal, "A", 1, HabitUnit.reps())
        b = registry.create_habit(db, principal, "B", 1, HabitUnit.reps())
        assert [h.id for h in registry.list_habits(db, principal)] == [a.id, b.id]

    def test_mutations_on_unknown_habit(self, db, principal):
        with pytest.raises(HabitNotFoundError):
            registry.rename_habit(db, principal, "nope", "X")
        with pytest.raises(HabitNotFoundError):
            registry.set_weekly_target(db, principal, "nope", 3)
        with pytest.raises(HabitNotFoundError):
            registry.set_unit(db, principal, "nope", HabitUnit.time())
        with pytest.raises(HabitNotFoundError):
            registry.set_default_amount(db, principal, "nope", 1)

    def test_set_unit_none_clears_default(self, db, principal):
        habit = registry.create_habit(db, principal, "Squats", 4, HabitUnit.reps(), 30)
        habit = registry.set_unit(db, principal, habit.id, HabitUnit.none())
        assert habit.default_amount is None

    def test_set_unit_keeps_existing_records(self, db, principal):
        habit = registry.create_habit(db, principal, "Plank", 7, HabitUnit.reps(), 30)
        toggle_completion(db, principal, habit.id, 1, 6, 2024)
        registry.set_unit(db, principal, habit.id, HabitUnit.time())
        record = db.query(HabitRecord).filter(HabitRecord.habit_id == habit.id).one()
        assert record.unit == HabitUnit.reps()

    def test_other_principal_cannot_see_habit(self, db, principal):
        habit = registry.create_habit(db, principal, "Run", 3, HabitUnit.custom("km"))
        with pytest.raises(HabitNotFoundError):
            registry.get_habit(db, principal + "-other", habit.id)
        assert registry.list_habits(db, principal + "-other") == []

    def test_delete_cascades_and_is_idempotent(self, db, principal):
        habit = registry.create_habit(db, principal, "Push-ups", 5, HabitUnit.reps(), 20)
        toggle_completion(db, principal, habit.id, 3, 6, 2024)
        set_monthly_target(db, principal, habit.id, 500, 6, 2024)

        assert registry.delete_habit(db, principal, habit.id) is True
        assert registry.delete_habit(db, principal, habit.id) is False
        assert db.query(HabitRecord).filter(HabitRecord.habit_id == habit.id).count() == 0
        assert db.query(MonthlyTarget).filter(MonthlyTarget.habit_id == habit.id).count() == 0


# ---------------------------------------------------------------------------
# HTTP layer
# ---------------------------------------------------------------------------

def _create(client, headers, **overrides):
    body = {"name": "Push-ups", "weekly_target": 5, "unit": {"kind": "reps"}, "default_amount": 20}
    body.update(overrides)
    r = client.post("/habits", json=body, headers=headers)
    assert r.status_code == 201, r.text
    return r.json()


class TestHabitEndpoints:
    def test_create_and_get(self, client, headers):
        habit = _create(client, headers)
        assert habit["unit"] == {"kind": "reps", "label": None, "display": "reps", "short": "reps"}

        r = client.get(f"/habits/{habit['id']}", headers=headers)
        assert r.status_code == 200
        assert r.json()["name"] == "Push-ups"

    def test_create_defaults_to_reps(self, client, headers):
        r = client.post("/habits", json={"name": "Squats", "weekly_target": 3}, headers=headers)
        assert r.status_code == 201
        assert r.json()["unit"]["kind"] == "reps"

    def test_custom_unit_labels(self, client, headers):
        habit = _create(client, headers, name="Run", unit={"kind": "custom", "label": "km"}, default_amount=5)
        assert habit["unit"]["display"] == "km"
        assert habit["unit"]["short"] == "km"

    def test_time_unit_labels(self, client, headers):
        habit = _create(client, headers, name="Plank", unit={"kind": "time"}, default_amount="1:30")
        assert habit["unit"]["display"] == "minutes"
        assert habit["unit"]["short"] == "min"
        assert habit["default_amount"] == 90

    def test_bad_weekly_target(self, client, headers):
        r = client.post("/habits", json={"name": "Run", "weekly_target": 8}, headers=headers)
        assert r.status_code == 422
        assert r.json()["code"] == "VALIDATION_ERROR"

    def test_blank_name(self, client, headers):
        r = client.post("/habits", json={"name": "   ", "weekly_target": 3}, headers=headers)
        assert r.status_code == 422

    def test_bad_default_duration(self, client, headers):
        r = client.post(
            "/habits",
            json={"name": "Plank", "weekly_target": 3, "unit": {"kind": "time"}, "default_amount": "1:75"},
            headers=headers,
        )
        assert r.status_code == 422
        assert r.json()["details"]["field"] == "default_amount"

    def test_list(self, client, headers):
        _create(client, headers, name="A")
        _create(client, headers, name="B")
        r = client.get("/habits", headers=headers)
        assert [h["name"] for h in r.json()] == ["A", "B"]

    def test_patch_endpoints(self, client, headers):
        habit = _create(client, headers)
        hid = habit["id"]

        r = client.patch(f"/habits/{hid}/name", json={"name": "Press-ups"}, headers=headers)
        assert r.json()["name"] == "Press-ups"

        r = client.patch(f"/habits/{hid}/weekly-target", json={"weekly_target": 7}, headers=headers)
        assert r.json()["weekly_target"] == 7

        r = client.patch(f"/habits/{hid}/default-amount", json={"default_amount": 40}, headers=headers)
        assert r.json()["default_amount"] == 40

        r = client.patch(f"/habits/{hid}/unit", json={"unit": {"kind": "none"}}, headers=headers)
        body = r.json()
        assert body["unit"]["display"] == "—"
        assert body["default_amount"] is None

    def test_unknown_habit_is_404(self, client, headers):
        r = client.get("/habits/doesnotexist", headers=headers)
        assert r.status_code == 404
        assert r.json()["code"] == "HABIT_NOT_FOUND"

    def test_other_principal_gets_404(self, client, headers):
        habit = _create(client, headers)
        r = client.get(f"/habits/{habit['id']}", headers={"X-Principal": "someone-else"})
        assert r.status_code == 404

    def test_delete_twice(self, client, headers):
        habit = _create(client, headers)
        assert client.delete(f"/habits/{habit['id']}", headers=headers).status_code == 204
        assert client.delete(f"/habits/{habit['id']}", headers=headers).status_code == 204
        assert client.get(f"/habits/{habit['id']}", headers=headers).status_code == 404
