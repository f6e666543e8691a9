from app.models import ScheduleStatus

from .conftest import API


def create_activity(client, schedule_id, title="Room Cleaning", description="Tidy bedroom"):
    return client.post(
        f"{API}/schedules/{schedule_id}/activities",
        json={"title": title, "description": description},
    )


def test_create_and_fetch_activity(client, make_schedule):
    schedule_id = make_schedule()

    response = create_activity(client, schedule_id)

    assert response.status_code == 201
    activity = response.json()
    assert activity["schedule_id"] == schedule_id
    assert activity["is_resolved"] is False
    assert activity["reason"] == ""

    fetched = client.get(f"{API}/activities/{activity['id']}")
    assert fetched.status_code == 200
    assert fetched.json()["title"] == "Room Cleaning"


def test_list_activities_for_schedule(client, make_schedule):
    schedule_id = make_schedule()
    other_id = make_schedule(client_name="Mary Johnson")
    create_activity(client, schedule_id, title="First")
    create_activity(client, schedule_id, title="Second")
    create_activity(client, other_id, title="Elsewhere")

    response = client.get(f"{API}/schedules/{schedule_id}/activities")

    assert response.status_code == 200
    assert [a["title"] for a in response.json()] == ["First", "Second"]


def test_create_activity_requires_fields(client, make_schedule):
    schedule_id = make_schedule()

    response = create_activity(client, schedule_id, title="   ")

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


def test_create_activity_unknown_schedule(client):
    response = create_activity(client, 999)

    assert response.status_code == 404


def test_unresolved_requires_reason(client, make_schedule):
    schedule_id = make_schedule()
    activity_id = create_activity(client, schedule_id).json()["id"]

    response = client.put(
        f"{API}/activities/{activity_id}", json={"is_resolved": False, "reason": ""}
    )

    assert response.status_code == 400
    error = response.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert error["message"] == "Reason is required when activity is not resolved"


def test_unresolved_with_reason(client, make_schedule):
    schedule_id = make_schedule()
    activity_id = create_activity(client, schedule_id).json()["id"]

    response = client.put(
        f"{API}/activities/{activity_id}",
        json={"is_resolved": False, "reason": "Client was not hungry"},
    )

    assert response.status_code == 200
    assert response.json()["reason"] == "Client was not hungry"
    assert response.json()["is_resolved"] is False


def test_resolved_without_reason(client, make_schedule):
    schedule_id = make_schedule()
    activity_id = create_activity(client, schedule_id).json()["id"]
    client.put(f"{API}/activities/{activity_id}", json={"is_resolved": False, "reason": "Later"})

    response = client.put(f"{API}/activities/{activity_id}", json={"is_resolved": True})

    assert response.status_code == 200
    assert response.json()["is_resolved"] is True
    assert response.json()["reason"] == ""


def test_no_schedule_gate_for_activities(client, make_schedule):
    schedule_id = make_schedule(status=ScheduleStatus.COMPLETED)
    activity_id = create_activity(client, schedule_id).json()["id"]

    response = client.put(f"{API}/activities/{activity_id}", json={"is_resolved": True})

    assert response.status_code == 200


def test_unknown_activity(client):
    assert client.get(f"{API}/activities/999").status_code == 404
    response = client.put(f"{API}/activities/999", json={"is_resolved": True})
    assert response.status_code == 404
    assert response.json()["error"]["message"] == "Activity not found"
