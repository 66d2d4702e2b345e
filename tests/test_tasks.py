"""Tests for task queries and endpoints."""

from datetime import date
from unittest.mock import patch

import pytest
from sqlalchemy.exc import IntegrityError

from kitchen_prep.models import Task
from kitchen_prep.services import (
    EmptyUpdateError,
    TaskNotFoundError,
    create_task,
    delete_task,
    list_tasks,
    update_task,
)


SERVER_TODAY = date(2026, 3, 14)
MALFORMED_TASK_IDS = ["abc", "1_0", " 7", "+3", "-1", "\u0663", "2147483648", "99999999999999999999"]


def _create_task(client, **overrides):
    payload = {"title": "Pick herbs"}
    payload.update(overrides)
    return client.post("/api/tasks", json=payload)


class TestCreateTaskQuery:
    def test_defaults(self, db, grill):
        task = create_task(station_id=grill.id, title="Sear 10 steaks", today=SERVER_TODAY)

        assert task.id is not None
        assert task.created_at is not None
        assert task.priority == "normal"
        assert task.is_done is False
        assert task.details is None
        assert task.created_by is None
        assert task.target_date == date(2026, 3, 15)

    def test_default_date_rolls_over_year_end(self, db, grill):
        task = create_task(station_id=grill.id, title="Stock take", today=date(2026, 12, 31))
        assert task.target_date == date(2027, 1, 1)

    def test_explicit_date_is_kept(self, db, grill):
        task = create_task(
            station_id=grill.id,
            title="Brine pork",
            target_date=date(2026, 4, 1),
            today=SERVER_TODAY,
        )
        assert task.target_date == date(2026, 4, 1)

    def test_unknown_station_fails_on_foreign_key(self, db, stations):
        with pytest.raises(IntegrityError):
            create_task(station_id=9999, title="Orphan")
        assert db.session.query(Task).count() == 0

    def test_priority_check_constraint(self, db, grill):
        with pytest.raises(IntegrityError):
            create_task(station_id=grill.id, title="Bad", priority="urgent")


class TestListTasksQuery:
    def test_high_priority_first_then_oldest(self, db, grill):
        first = create_task(station_id=grill.id, title="Normal one", today=SERVER_TODAY)
        second = create_task(station_id=grill.id, title="High one", priority="high", today=SERVER_TODAY)
        third = create_task(station_id=grill.id, title="Normal two", today=SERVER_TODAY)
        fourth = create_task(station_id=grill.id, title="High two", priority="high", today=SERVER_TODAY)

        assert [task.id for task in list_tasks()] == [second.id, fourth.id, first.id, third.id]

    def test_filters_combine_with_and(self, db, stations):
        larder, grill = stations["Larder"], stations["Grill"]
        day = date(2026, 3, 15)
        other_day = date(2026, 3, 16)

        match = create_task(station_id=grill.id, title="Match", target_date=day)
        create_task(station_id=larder.id, title="Other station", target_date=day)
        create_task(station_id=grill.id, title="Other day", target_date=other_day)
        done = create_task(station_id=grill.id, title="Done", target_date=day)
        update_task(done.id, {"is_done": True})

        result = list_tasks(station_id=grill.id, target_date=day, is_done=False)
        assert [task.id for task in result] == [match.id]

    def test_open_filter_never_returns_done_tasks(self, db, stations):
        for index, station in enumerate(stations.values()):
            task = create_task(station_id=station.id, title=f"Task {index}", today=SERVER_TODAY)
            if index % 2:
                update_task(task.id, {"is_done": True})

        for station_id in (None, *[station.id for station in stations.values()]):
            for target_date in (None, date(2026, 3, 15)):
                result = list_tasks(station_id=station_id, target_date=target_date, is_done=False)
                assert all(task.is_done is False for task in result)

    def test_station_name_is_joined(self, db, grill):
        create_task(station_id=grill.id, title="Sear 10 steaks")
        assert list_tasks()[0].station_name == "Grill"


class TestUpdateTaskQuery:
    def test_partial_update_leaves_other_fields(self, db, grill):
        task = create_task(
            station_id=grill.id,
            title="Sear 10 steaks",
            details="Rest 5 min",
            today=SERVER_TODAY,
        )

        updated = update_task(task.id, {"priority": "high"})

        assert updated.priority == "high"
        assert updated.title == "Sear 10 steaks"
        assert updated.details == "Rest 5 min"
        assert updated.target_date == date(2026, 3, 15)

    def test_falsy_values_are_applied(self, db, grill):
        task = create_task(station_id=grill.id, title="Sear", details="Hot pan")
        update_task(task.id, {"is_done": True})

        updated = update_task(task.id, {"is_done": False, "details": None})

        assert updated.is_done is False
        assert updated.details is None

    def test_empty_update_fails_without_writing(self, db, grill):
        task = create_task(station_id=grill.id, title="Sear")

        with pytest.raises(EmptyUpdateError):
            update_task(task.id, {})

        db.session.expire_all()
        assert db.session.get(Task, task.id).title == "Sear"

    def test_unknown_field_rejected(self, db, grill):
        task = create_task(station_id=grill.id, title="Sear")
        with pytest.raises(ValueError):
            update_task(task.id, {"station_id": 1})

    def test_missing_task(self, db, stations):
        with pytest.raises(TaskNotFoundError):
            update_task(404, {"title": "Ghost"})


class TestDeleteTaskQuery:
    def test_delete_is_idempotent(self, db, grill):
        task = create_task(station_id=grill.id, title="Sear")

        delete_task(task.id)
        assert db.session.query(Task).count() == 0

        delete_task(task.id)
        assert db.session.query(Task).count() == 0


class TestTaskScenarios:
    def test_seeded_grill_task_is_found_by_station_and_default_date(self, client, stations, grill):
        with patch("kitchen_prep.services.tasks.utc_today", return_value=SERVER_TODAY):
            response = _create_task(
                client, station_id=grill.id, title="Sear 10 steaks", priority="high"
            )
        assert response.status_code == 201

        response = client.get(f"/api/tasks?station_id={grill.id}&target_date=2026-03-15")
        data = response.get_json()
        assert len(data) == 1
        assert data[0]["title"] == "Sear 10 steaks"
        assert data[0]["priority"] == "high"
        assert data[0]["is_done"] is False
        assert data[0]["station_name"] == "Grill"

    def test_high_created_later_is_listed_first(self, client, grill):
        _create_task(client, station_id=grill.id, title="Slice onions", target_date="2026-03-15")
        _create_task(
            client,
            station_id=grill.id,
            title="Sear 10 steaks",
            priority="high",
            target_date="2026-03-15",
        )

        data = client.get(f"/api/tasks?station_id={grill.id}&target_date=2026-03-15").get_json()
        assert [task["title"] for task in data] == ["Sear 10 steaks", "Slice onions"]


class TestCreateTaskEndpoint:
    def test_create_task(self, client, grill):
        with patch("kitchen_prep.services.tasks.utc_today", return_value=SERVER_TODAY):
            response = _create_task(
                client,
                station_id=grill.id,
                title="  Sear 10 steaks ",
                details="  Rest 5 min  ",
                created_by=" Sam ",
            )

        assert response.status_code == 201
        data = response.get_json()
        assert data["title"] == "Sear 10 steaks"
        assert data["details"] == "Rest 5 min"
        assert data["created_by"] == "Sam"
        assert data["priority"] == "normal"
        assert data["target_date"] == "2026-03-15"
        assert data["station_id"] == grill.id
        assert data["station_name"] == "Grill"
        assert data["is_done"] is False

    def test_blank_optional_fields_fall_back(self, client, grill):
        with patch("kitchen_prep.services.tasks.utc_today", return_value=SERVER_TODAY):
            response = _create_task(
                client,
                station_id=grill.id,
                details="   ",
                priority="",
                target_date=None,
                created_by="",
            )

        data = response.get_json()
        assert response.status_code == 201
        assert data["details"] is None
        assert data["created_by"] is None
        assert data["priority"] == "normal"
        assert data["target_date"] == "2026-03-15"

    @pytest.mark.parametrize("station_id", [None, 0, "3", 1.5, True, 2**31])
    def test_requires_numeric_station_id(self, client, stations, station_id):
        response = _create_task(client, station_id=station_id)
        assert response.status_code == 400
        assert response.get_json()["error"] == "Valid station_id is required"

    def test_missing_station_id(self, client, stations):
        response = client.post("/api/tasks", json={"title": "Pick herbs"})
        assert response.status_code == 400
        assert response.get_json()["error"] == "Valid station_id is required"

    @pytest.mark.parametrize("title", [None, "", "   ", 7])
    def test_requires_title(self, client, grill, title):
        response = _create_task(client, station_id=grill.id, title=title)
        assert response.status_code == 400
        assert response.get_json()["error"] == "Task title is required"

    def test_rejects_unknown_priority(self, client, grill):
        response = _create_task(client, station_id=grill.id, priority="urgent")
        assert response.status_code == 400
        assert response.get_json()["error"] == 'Priority must be "normal" or "high"'

    def test_rejects_malformed_date(self, client, grill):
        response = _create_task(client, station_id=grill.id, target_date="15/03/2026")
        assert response.status_code == 400
        assert "target_date" in response.get_json()["fields"]

    def test_unknown_station_is_generic_failure(self, client, stations):
        response = _create_task(client, station_id=9999)
        assert response.status_code == 500
        assert response.get_json()["error"] == "Failed to create task"


class TestListTasksEndpoint:
    def test_empty(self, client, stations):
        response = client.get("/api/tasks")
        assert response.status_code == 200
        assert response.get_json() == []

    def test_is_done_filter(self, client, grill):
        open_id = _create_task(client, station_id=grill.id, title="Open").get_json()["id"]
        done_id = _create_task(client, station_id=grill.id, title="Done").get_json()["id"]
        client.patch(f"/api/tasks/{done_id}", json={"is_done": True})

        open_tasks = client.get("/api/tasks?is_done=false").get_json()
        done_tasks = client.get("/api/tasks?is_done=true").get_json()

        assert [task["id"] for task in open_tasks] == [open_id]
        assert [task["id"] for task in done_tasks] == [done_id]

    def test_empty_query_values_are_ignored(self, client, grill):
        _create_task(client, station_id=grill.id)
        response = client.get("/api/tasks?station_id=&target_date=&is_done=")
        assert response.status_code == 200
        assert len(response.get_json()) == 1

    @pytest.mark.parametrize(
        "query",
        [
            "station_id=abc",
            "station_id=1_0",
            "station_id=%2B3",
            "station_id=99999999999999999999",
            "target_date=tomorrow",
            "is_done=maybe",
        ],
    )
    def test_malformed_filters(self, client, stations, query):
        response = client.get(f"/api/tasks?{query}")
        assert response.status_code == 400


class TestUpdateTaskEndpoint:
    def test_toggle_done_by_read_then_update(self, client, grill):
        task = _create_task(client, station_id=grill.id).get_json()

        response = client.patch(f"/api/tasks/{task['id']}", json={"is_done": not task["is_done"]})

        assert response.status_code == 200
        assert response.get_json()["is_done"] is True
        assert response.get_json()["title"] == "Pick herbs"

    def test_edit_fields(self, client, grill):
        task = _create_task(client, station_id=grill.id, details="Thyme").get_json()

        response = client.patch(
            f"/api/tasks/{task['id']}",
            json={"title": "Pick thyme", "details": "", "priority": "high", "target_date": "2026-05-01"},
        )

        data = response.get_json()
        assert response.status_code == 200
        assert data["title"] == "Pick thyme"
        assert data["details"] == ""
        assert data["priority"] == "high"
        assert data["target_date"] == "2026-05-01"

    @pytest.mark.parametrize("task_id", MALFORMED_TASK_IDS)
    def test_invalid_id(self, client, stations, task_id):
        response = client.patch(f"/api/tasks/{task_id}", json={"title": "x"})
        assert response.status_code == 400
        assert response.get_json()["error"] == "Invalid task ID"

    def test_underscored_id_does_not_reach_other_task(self, client, grill):
        for index in range(10):
            _create_task(client, station_id=grill.id, title=f"Task {index + 1}")

        response = client.patch("/api/tasks/1_0", json={"title": "Renamed"})

        assert response.status_code == 400
        titles = [task["title"] for task in client.get("/api/tasks").get_json()]
        assert "Renamed" not in titles

    @pytest.mark.parametrize("value", [1, 0, "true", None])
    def test_is_done_must_be_boolean(self, client, grill, value):
        task = _create_task(client, station_id=grill.id).get_json()

        response = client.patch(f"/api/tasks/{task['id']}", json={"is_done": value})

        assert response.status_code == 400
        assert response.get_json()["error"] == "is_done must be true or false"
        assert client.get("/api/tasks").get_json()[0]["is_done"] is False

    def test_invalid_priority(self, client, grill):
        task = _create_task(client, station_id=grill.id).get_json()
        response = client.patch(f"/api/tasks/{task['id']}", json={"priority": "urgent"})
        assert response.status_code == 400
        assert response.get_json()["error"] == 'Priority must be "normal" or "high"'

    def test_empty_update(self, client, grill):
        task = _create_task(client, station_id=grill.id).get_json()
        response = client.patch(f"/api/tasks/{task['id']}", json={})
        assert response.status_code == 400
        assert response.get_json()["error"] == "No fields to update"

    def test_unknown_task(self, client, stations):
        response = client.patch("/api/tasks/404", json={"title": "Ghost"})
        assert response.status_code == 404


class TestDeleteTaskEndpoint:
    def test_delete_twice(self, client, grill):
        task = _create_task(client, station_id=grill.id).get_json()

        first = client.delete(f"/api/tasks/{task['id']}")
        second = client.delete(f"/api/tasks/{task['id']}")

        assert first.status_code == 200
        assert first.get_json() == {"success": True}
        assert second.status_code == 200
        assert client.get("/api/tasks").get_json() == []

    @pytest.mark.parametrize("task_id", MALFORMED_TASK_IDS)
    def test_invalid_id(self, client, grill, task_id):
        _create_task(client, station_id=grill.id)

        response = client.delete(f"/api/tasks/{task_id}")

        assert response.status_code == 400
        assert len(client.get("/api/tasks").get_json()) == 1
