"""
Tests for the export snapshot and the /export and /stats/report endpoints.
"""
from datetime import date

from habitlog.services import habits as registry
from habitlog.services.diary import save_diary_entry
from habitlog.services.export import export_range
from habitlog.services.investments import add_investment_entry, create_goal
from habitlog.services.ledger import toggle_completion
from habitlog.services.profile import save_profile
from habitlog.services.targets import set_monthly_target
from habitlog.services.units import HabitUnit


class TestExportService:
    def _seed(self, db, principal):
        push = registry.create_habit(db, principal, "Push-ups", 5, HabitUnit.reps(), 20)
        plank = registry.create_habit(db, principal, "Plank", 7, HabitUnit.time(), 60)
        toggle_completion(db, principal, push.id, 31, 5, 2024)
        toggle_completion(db, principal, push.id, 1, 6, 2024)
        toggle_completion(db, principal, plank.id, 2, 6, 2024)
        toggle_completion(db, principal, push.id, 1, 7, 2024)
        set_monthly_target(db, principal, push.id, 600, 6, 2024)
        set_monthly_target(db, principal, push.id, 700, 8, 2024)
        save_diary_entry(db, principal, "2024-06-01", "Energy: 3", "")
        save_diary_entry(db, principal, "2024-07-05", "Energy: 2", "")
        save_diary_entry(db, principal, "ideas", "", "undated")
        create_goal(db, principal, "VWRL", 10, 20)
        add_investment_entry(db, principal, 1, "VWRL", 10)
        save_profile(db, principal, "Sam")
        return push, plank

    def test_range_filters_dated_sections(self, db, principal):
        push, plank = self._seed(db, principal)
        snap = export_range(db, principal, date(2024, 6, 1), date(2024, 6, 30))

        assert snap.profile.name == "Sam"
        assert {h.id for h in snap.habits} == {push.id, plank.id}
        assert [(r.record.month, r.record.day) for r in snap.records] == [(6, 1), (6, 2)]
        assert [t.amount for t in snap.monthly_targets] == [600]
        assert [e.date_key for e in snap.diary_entries] == ["2024-06-01", "ideas"]
        assert len(snap.investment_goals) == 1
        assert len(snap.investment_entries) == 1

    def test_habit_selection(self, db, principal):
        push, plank = self._seed(db, principal)
        snap = export_range(db, principal, date(2024, 6, 1), date(2024, 6, 30), habit_ids=[plank.id])
        assert [h.id for h in snap.habits] == [plank.id]
        assert [r.record.habit_id for r in snap.records] == [plank.id]
        assert snap.monthly_targets == []

    def test_renamed_habit_keeps_record_name(self, db, principal):
        push, _ = self._seed(db, principal)
        registry.rename_habit(db, principal, push.id, "Press-ups")
        snap = export_range(db, principal, date(2024, 6, 1), date(2024, 6, 1))
        (rec,) = snap.records
        assert rec.record.habit_name == "Push-ups"
        assert rec.current_habit_name == "Press-ups"

    def test_reversed_range_has_no_dated_rows(self, db, principal):
        self._seed(db, principal)
        snap = export_range(db, principal, date(2024, 6, 30), date(2024, 6, 1))
        assert snap.records == []
        assert snap.monthly_targets == []
        assert [e.date_key for e in snap.diary_entries] == ["ideas"]

    def test_empty_owner(self, db, principal):
        snap = export_range(db, principal, date(2024, 6, 1), date(2024, 6, 30))
        assert snap.profile is None
        assert snap.habits == []
        assert snap.records == []


class TestExportEndpoint:
    def test_export(self, client, headers):
        habit = client.post(
            "/habits", json={"name": "Push-ups", "weekly_target": 5, "default_amount": 20}, headers=headers
        ).json()
        other = client.post(
            "/habits", json={"name": "Squats", "weekly_target": 3, "default_amount": 10}, headers=headers
        ).json()
        client.put(f"/records/{habit['id']}/2024/6/1", json={}, headers=headers)
        client.put(f"/records/{other['id']}/2024/6/1", json={}, headers=headers)
        client.put("/profile", json={"name": "Sam"}, headers=headers)

        r = client.get(
            "/export",
            params={"start": "2024-06-01", "end": "2024-06-30", "habit_id": [habit["id"]]},
            headers=headers,
        )
        assert r.status_code == 200
        body = r.json()
        assert body["profile"] == {"name": "Sam"}
        assert [h["id"] for h in body["habits"]] == [habit["id"]]
        (rec,) = body["records"]
        assert rec["amount"] == 20
        assert rec["current_habit_name"] == "Push-ups"

    def test_bad_date_is_422(self, client, headers):
        r = client.get("/export", params={"start": "2024-02-30", "end": "2024-03-01"}, headers=headers)
        assert r.status_code == 422


class TestReportEndpoint:
    def test_report(self, client, headers):
        habit = client.post(
            "/habits", json={"name": "Push-ups", "weekly_target": 7, "default_amount": 20}, headers=headers
        ).json()
        for day in (1, 2, 3):
            client.put(f"/records/{habit['id']}/2024/6/{day}", json={}, headers=headers)

        r = client.get("/stats/report", params={"start": "2024-06-07", "end": "2024-06-01"}, headers=headers)
        assert r.status_code == 200
        body = r.json()
        assert (body["start"], body["end"]) == ("2024-06-01", "2024-06-07")
        assert body["total_expected"] == 7
        assert body["total_completed"] == 3
        assert body["overall_percentage"] == 43
        assert [d["percentage"] for d in body["daily_stats"]] == [100, 100, 100, 0, 0, 0, 0]
        (vol,) = body["volume_stats"]
        assert vol["total_volume"] == 60
        assert vol["daily_volumes"][:4] == [20, 20, 20, 0]

    def test_oversized_range_is_422(self, client, headers):
        r = client.get(
            "/stats/report", params={"start": "0001-01-01", "end": "9999-12-31"}, headers=headers
        )
        assert r.status_code == 422
        assert r.json()["code"] == "VALIDATION_ERROR"

    def test_volume(self, client, headers):
        habit = client.post(
            "/habits",
            json={"name": "Plank", "weekly_target": 7, "unit": {"kind": "time"}, "default_amount": 60},
            headers=headers,
        ).json()
        client.put(f"/records/{habit['id']}/2024/6/30", json={}, headers=headers)
        body = client.get("/stats/volume", params={"month": 6, "year": 2024}, headers=headers).json()
        (item,) = body["items"]
        assert item["unit"] == "minutes"
        assert len(item["daily_volumes"]) == 31
        assert item["daily_volumes"][29] == 60
