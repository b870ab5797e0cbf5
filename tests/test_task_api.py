from fastapi.testclient import TestClient

from datetime import datetime, timezone

from src.server.app import create_app
from src.task_manager.config import Config
from src.tasks import TaskStore


def create_test_client() -> TestClient:
    return TestClient(create_app(config=Config()))


def new_task(client, **overrides):
    payload = {
        "title": "Ship report",
        "dueDate": "2024-01-01T00:00:00Z",
        "categoryId": 1,
    }
    payload.update(overrides)
    resp = client.post("/api/tasks", json=payload)
    assert resp.status_code == 201, resp.text
    return resp.json()


def test_task_crud_flow():
    client = create_test_client()

    assert client.get("/api/tasks").json() == []

    task = new_task(client, description="Q4 numbers")
    assert task["title"] == "Ship report"
    assert task["description"] == "Q4 numbers"
    assert task["completed"] is False
    assert task["dueDate"] == "2024-01-01T00:00:00Z"
    assert task["category"] == {"id": 1, "name": "Work", "color": "blue"}

    resp = client.get(f"/api/tasks/{task['id']}")
    assert resp.status_code == 200
    assert resp.json() == task

    resp = client.put(f"/api/tasks/{task['id']}", json={"completed": True})
    assert resp.status_code == 200
    updated = resp.json()
    assert updated["completed"] is True
    for field in ("title", "description", "dueDate", "categoryId"):
        assert updated[field] == task[field]

    resp = client.delete(f"/api/tasks/{task['id']}")
    assert resp.status_code == 204
    assert client.get(f"/api/tasks/{task['id']}").status_code == 404
    assert client.delete(f"/api/tasks/{task['id']}").status_code == 404


def test_end_to_end_category_lifecycle():
    client = create_test_client()

    resp = client.post("/api/categories", json={"name": "Work", "color": "blue"})
    assert resp.status_code == 201
    category = resp.json()
    assert category["id"] == 5

    task = new_task(client, categoryId=5)
    assert task["category"] == {"id": 5, "name": "Work", "color": "blue"}

    listed = client.get("/api/tasks", params={"categoryId": 5}).json()
    assert [t["id"] for t in listed] == [task["id"]]

    resp = client.delete("/api/categories/5")
    assert resp.status_code == 409
    assert client.get(f"/api/tasks/{task['id']}").status_code == 200

    assert client.delete(f"/api/tasks/{task['id']}").status_code == 204
    assert client.delete("/api/categories/5").status_code == 204


def test_create_task_with_unknown_category_is_server_fault():
    client = create_test_client()

    resp = client.post(
        "/api/tasks",
        json={"title": "Orphan", "dueDate": "2024-01-01T00:00:00Z", "categoryId": 999},
    )
    assert resp.status_code == 500
    assert "Invalid category ID" in resp.json()["detail"]
    assert client.get("/api/tasks").json() == []


def test_update_task_to_unknown_category_is_server_fault():
    client = create_test_client()
    task = new_task(client)

    resp = client.put(f"/api/tasks/{task['id']}", json={"categoryId": 999})
    assert resp.status_code == 500
    assert client.get(f"/api/tasks/{task['id']}").json()["categoryId"] == 1


def test_create_task_validation_lists_every_field():
    client = create_test_client()

    resp = client.post("/api/tasks", json={"description": "no title"})
    assert resp.status_code == 400
    detail = resp.json()["detail"]
    for field in ("title", "dueDate", "categoryId"):
        assert field in detail


def test_update_task_rejects_null_for_required_fields():
    client = create_test_client()
    task = new_task(client, description="keep me")

    resp = client.put(f"/api/tasks/{task['id']}", json={"title": None})
    assert resp.status_code == 400

    resp = client.put(f"/api/tasks/{task['id']}", json={"description": None})
    assert resp.status_code == 200
    assert resp.json()["description"] is None


def test_invalid_ids():
    client = create_test_client()

    assert client.get("/api/tasks/abc").json() == {"detail": "Invalid task ID"}
    assert client.get("/api/tasks/abc").status_code == 400
    assert client.put("/api/tasks/abc", json={"completed": True}).status_code == 400
    assert client.delete("/api/tasks/abc").status_code == 400
    assert client.put("/api/tasks/42", json={"completed": True}).status_code == 404

    resp = client.get("/api/tasks", params={"categoryId": "work"})
    assert resp.status_code == 400
    assert resp.json() == {"detail": "Invalid category ID"}


def test_list_filters():
    client = create_test_client()
    milk = new_task(client, title="Buy Milk", categoryId=4)
    report = new_task(client, title="Write report", description="milk the data", categoryId=1)
    done = new_task(client, title="Gym", categoryId=3, completed=True)

    def ids(params):
        resp = client.get("/api/tasks", params=params)
        assert resp.status_code == 200
        return [t["id"] for t in resp.json()]

    assert ids({}) == [milk["id"], report["id"], done["id"]]
    assert ids({"search": "MILK"}) == [milk["id"], report["id"]]
    assert ids({"search": "bread"}) == []
    assert ids({"categoryId": 4}) == [milk["id"]]
    # category filter wins over search
    assert ids({"categoryId": 3, "search": "milk"}) == [done["id"]]
    assert ids({"completed": "true"}) == [done["id"]]
    assert ids({"completed": "false"}) == [milk["id"], report["id"]]
    assert ids({"completed": "yes"}) == [milk["id"], report["id"]]
    assert ids({"search": "milk", "completed": "true"}) == []


def test_long_text_fields_are_accepted():
    client = create_test_client()

    task = new_task(client, title="x" * 500, description="y" * 10000)
    assert len(task["title"]) == 500
    assert len(task["description"]) == 10000


def test_body_fields_are_not_coerced():
    client = create_test_client()

    resp = client.post(
        "/api/tasks",
        json={
            "title": "Typed",
            "dueDate": "2024-01-01T00:00:00Z",
            "categoryId": "1",
            "completed": "yes",
        },
    )
    assert resp.status_code == 400
    detail = resp.json()["detail"]
    assert "categoryId" in detail
    assert "completed" in detail
    assert client.get("/api/tasks").json() == []

    resp = client.post(
        "/api/tasks",
        json={"title": 42, "dueDate": "2024-01-01T00:00:00Z", "categoryId": 1},
    )
    assert resp.status_code == 400

    task = new_task(client)
    resp = client.put(f"/api/tasks/{task['id']}", json={"categoryId": "2"})
    assert resp.status_code == 400
    resp = client.put(f"/api/tasks/{task['id']}", json={"completed": 1})
    assert resp.status_code == 400
    assert client.get(f"/api/tasks/{task['id']}").json() == task


def test_broken_category_reference_on_read_is_server_fault():
    store = TaskStore()
    work = store.create_category("Work", "blue")
    created = store.create_task(
        title="a", due_date=datetime(2024, 1, 1, tzinfo=timezone.utc), category_id=work.id
    )
    # corrupted state; the API never lets a referenced category go
    store._categories.pop(work.id)
    client = TestClient(create_app(store=store, config=Config()))

    resp = client.get(f"/api/tasks/{created.id}")
    assert resp.status_code == 500
    assert "Invalid category ID" in resp.json()["detail"]

    for params in ({}, {"search": "a"}, {"categoryId": work.id}):
        resp = client.get("/api/tasks", params=params)
        assert resp.status_code == 500
        assert resp.json()["detail"].startswith("Error retrieving tasks")
