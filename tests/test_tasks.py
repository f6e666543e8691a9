import pytest

from app.models import ScheduleStatus, Task, TaskStatus

from .conftest import API


def first_task(session_factory, schedule_id):
    with session_factory() as session:
        task = (
            session.query(Task).filter(Task.schedule_id == schedule_id).order_by(Task.id).first()
        )
        session.expunge(task)
        return task


def start(client, schedule_id):
    response = client.post(
        f"{API}/schedules/{schedule_id}/start", json={"latitude": 40.0, "longitude": -73.0}
    )
    assert response.status_code == 200


def test_list_tasks_in_creation_order(client, make_schedule):
    schedule_id = make_schedule(tasks=["b task", "a task", "c task"])

    response = client.get(f"{API}/schedules/{schedule_id}/tasks")

    assert response.status_code == 200
    tasks = response.json()
    assert [t["description"] for t in tasks] == ["b task", "a task", "c task"]
    assert all(t["status"] == "pending" and t["reason"] == "" for t in tasks)


def test_list_tasks_unknown_schedule(client):
    response = client.get(f"{API}/schedules/404/tasks")

    assert response.status_code == 404


def test_complete_task_during_visit(client, make_schedule, session_factory):
    schedule_id = make_schedule()
    start(client, schedule_id)
    task = first_task(session_factory, schedule_id)

    response = client.put(f"{API}/tasks/{task.id}", json={"status": "completed"})

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Task updated successfully"
    assert body["task"]["status"] == "completed"
    assert body["task"]["reason"] == ""
    assert first_task(session_factory, schedule_id).status == TaskStatus.COMPLETED


def test_not_completed_stores_reason(client, make_schedule, session_factory):
    schedule_id = make_schedule()
    start(client, schedule_id)
    task = first_task(session_factory, schedule_id)

    response = client.put(
        f"{API}/tasks/{task.id}",
        json={"status": "not_completed", "reason": "Client declined"},
    )

    assert response.status_code == 200
    stored = first_task(session_factory, schedule_id)
    assert stored.status == TaskStatus.NOT_COMPLETED
    assert stored.reason == "Client declined"


def test_completing_clears_previous_reason(client, make_schedule, session_factory):
    schedule_id = make_schedule()
    start(client, schedule_id)
    task = first_task(session_factory, schedule_id)

    client.put(f"{API}/tasks/{task.id}", json={"status": "not_completed", "reason": "Later"})
    client.put(f"{API}/tasks/{task.id}", json={"status": "completed", "reason": "ignored"})

    assert first_task(session_factory, schedule_id).reason == ""


def test_post_update_alias(client, make_schedule, session_factory):
    schedule_id = make_schedule()
    start(client, schedule_id)
    task = first_task(session_factory, schedule_id)

    response = client.post(f"{API}/tasks/{task.id}/update", json={"status": "completed"})

    assert response.status_code == 200
    assert response.json()["task"]["status"] == "completed"


@pytest.mark.parametrize(
    "status",
    [ScheduleStatus.UPCOMING, ScheduleStatus.IN_PROGRESS, ScheduleStatus.COMPLETED, ScheduleStatus.MISSED],
)
@pytest.mark.parametrize("reason", [None, "", "   "])
def test_not_completed_without_reason_always_invalid(
    client, make_schedule, session_factory, status, reason
):
    schedule_id = make_schedule(status=status)
    task = first_task(session_factory, schedule_id)
    body = {"status": "not_completed"}
    if reason is not None:
        body["reason"] = reason

    response = client.put(f"{API}/tasks/{task.id}", json=body)

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"
    assert first_task(session_factory, schedule_id).status == TaskStatus.PENDING


@pytest.mark.parametrize(
    "status", [ScheduleStatus.UPCOMING, ScheduleStatus.COMPLETED, ScheduleStatus.MISSED]
)
@pytest.mark.parametrize(
    "body",
    [
        {"status": "completed"},
        {"status": "not_completed", "reason": "Client asleep"},
    ],
)
def test_gate_blocks_updates_outside_visit(client, make_schedule, session_factory, status, body):
    schedule_id = make_schedule(status=status)
    task = first_task(session_factory, schedule_id)

    response = client.put(f"{API}/tasks/{task.id}", json=body)

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "CONFLICT"
    stored = first_task(session_factory, schedule_id)
    assert stored.status == TaskStatus.PENDING
    assert stored.reason is None


def test_gate_message_before_visit(client, make_schedule, session_factory):
    schedule_id = make_schedule()
    task = first_task(session_factory, schedule_id)

    response = client.put(f"{API}/tasks/{task.id}", json={"status": "completed"})

    assert response.json()["error"]["message"] == "Cannot update tasks before starting the visit"


def test_gate_closes_after_visit_ends(client, make_schedule, session_factory):
    schedule_id = make_schedule()
    start(client, schedule_id)
    client.post(f"{API}/schedules/{schedule_id}/end", json={"latitude": 40.0, "longitude": -73.0})
    task = first_task(session_factory, schedule_id)

    response = client.put(f"{API}/tasks/{task.id}", json={"status": "completed"})

    assert response.status_code == 400
    assert first_task(session_factory, schedule_id).status == TaskStatus.PENDING


def test_invalid_status_value(client, make_schedule, session_factory):
    schedule_id = make_schedule(status=ScheduleStatus.IN_PROGRESS)
    task = first_task(session_factory, schedule_id)

    response = client.put(f"{API}/tasks/{task.id}", json={"status": "pending"})

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


def test_unknown_task(client):
    response = client.put(f"{API}/tasks/999", json={"status": "completed"})

    assert response.status_code == 404
    assert response.json()["error"]["message"] == "Task not found"
