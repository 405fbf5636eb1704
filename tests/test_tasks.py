from sqlalchemy import select

from app.models.task import Task

def auth(jwt: str) -> dict[str, str]:
    return {"authorization": f"bearer {jwt}"}

def create_task(client, jwt: str, title: str, **fields) -> dict:
    r = client.post("/tasks", json={"title": title, **fields}, headers=auth(jwt))
    assert r.status_code == 200, r.text
    return r.json()

def update_task(client, jwt: str, task_id: int, title: str) -> int:
    r = client.put(f"/tasks/{task_id}", json={"title": title}, headers=auth(jwt))
    return r.status_code

def delete_task(client, jwt: str, task_id: int) -> int:
    r = client.delete(f"/tasks/{task_id}", headers=auth(jwt))
    return r.status_code

def test_create_lands_in_callers_org(client, admin_jwt, seeded):
    t = create_task(client, admin_jwt, "write tests", category="urgent", order=3)

    assert t["organization_id"] == seeded.parent_org_id
    assert t["created_by"] == seeded.admin_id
    assert t["updated_by"] == seeded.admin_id
    assert t["category"] == "urgent"
    assert t["status"] == "todo"
    assert t["order"] == 3

def test_viewer_reads_but_never_writes(client, viewer_jwt, owner_jwt):
    r = client.get("/tasks", headers=auth(viewer_jwt))
    assert r.status_code == 200
    assert len(r.json()) == 2

    r = client.post("/tasks", json={"title": "nope"}, headers=auth(viewer_jwt))
    assert r.status_code == 403

    task_id = create_task(client, owner_jwt, "owner task")["id"]
    assert update_task(client, viewer_jwt, task_id, "hacked") == 403
    assert delete_task(client, viewer_jwt, task_id) == 403

def test_admin_modifies_only_own_tasks(client, admin_jwt, owner_jwt, seeded, db_session):
    own = create_task(client, admin_jwt, "mine")["id"]
    assert update_task(client, admin_jwt, own, "mine, edited") == 200

    owners = create_task(client, owner_jwt, "owner's")["id"]
    assert update_task(client, admin_jwt, owners, "hacked") == 403
    assert delete_task(client, admin_jwt, owners) == 403

    assert delete_task(client, admin_jwt, own) == 200
    assert db_session.scalar(select(Task).where(Task.id == own)) is None

def test_admin_cannot_touch_another_admins_task(client, admin_jwt, owner_jwt):
    r = client.post(
        "/auth/register",
        json={
            "email": "admin2@example.com",
            "password": "Password123!",
            "name": "Second Admin",
            "organization_id": client.get("/auth/me", headers=auth(owner_jwt)).json()["organization_id"],
            "role": "admin",
        },
        headers=auth(owner_jwt),
    )
    assert r.status_code == 200, r.text
    admin2_jwt = r.json()["access_token"]

    task_id = create_task(client, admin2_jwt, "admin2 task")["id"]
    assert update_task(client, admin_jwt, task_id, "hacked") == 403
    assert delete_task(client, admin_jwt, task_id) == 403

def test_owner_modifies_any_task_in_org(client, owner_jwt, admin_jwt, seeded):
    task_id = create_task(client, admin_jwt, "admin's")["id"]

    r = client.put(f"/tasks/{task_id}", json={"status": "done"}, headers=auth(owner_jwt))
    assert r.status_code == 200, r.text
    assert r.json()["status"] == "done"
    assert r.json()["title"] == "admin's"
    assert r.json()["updated_by"] == seeded.owner_id

    assert delete_task(client, owner_jwt, task_id) == 200

def test_get_task(client, owner_jwt):
    task_id = create_task(client, owner_jwt, "one", description="details")["id"]

    r = client.get(f"/tasks/{task_id}", headers=auth(owner_jwt))
    assert r.status_code == 200
    assert r.json()["description"] == "details"

    r = client.get("/tasks/999999", headers=auth(owner_jwt))
    assert r.status_code == 404

def test_missing_task_update_is_404(client, owner_jwt):
    assert update_task(client, owner_jwt, 999999, "x") == 404
    assert delete_task(client, owner_jwt, 999999) == 404

def test_list_filters_and_sorting(client, owner_jwt):
    create_task(client, owner_jwt, "alpha report", category="personal", order=9)
    create_task(client, owner_jwt, "beta", category="personal", status="done", order=8)

    r = client.get("/tasks", params={"category": "personal"}, headers=auth(owner_jwt))
    assert sorted(t["title"] for t in r.json()) == ["alpha report", "beta"]

    r = client.get("/tasks", params={"status": "done"}, headers=auth(owner_jwt))
    assert [t["title"] for t in r.json()] == ["beta"]

    r = client.get("/tasks", params={"search": "REPORT"}, headers=auth(owner_jwt))
    assert {t["title"] for t in r.json()} == {"alpha report", "Review Q4 Reports"}

    r = client.get("/tasks", params={"sort_by": "order", "sort_dir": "desc"}, headers=auth(owner_jwt))
    orders = [t["order"] for t in r.json()]
    assert orders == sorted(orders, reverse=True)

    r = client.get("/tasks", params={"sort_by": "title"}, headers=auth(owner_jwt))
    titles = [t["title"] for t in r.json()]
    assert titles == sorted(titles)

    r = client.get("/tasks", params={"sort_by": "nonsense"}, headers=auth(owner_jwt))
    assert r.status_code == 422

def test_requires_token(client, seeded):
    r = client.get("/tasks")
    assert r.status_code == 401

    r = client.get("/tasks", headers=auth("not-a-jwt"))
    assert r.status_code == 401
