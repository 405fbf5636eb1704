def auth(jwt: str) -> dict[str, str]:
    return {"authorization": f"bearer {jwt}"}

def test_child_org_cannot_see_parent_org_tasks(client, child_jwt, owner_jwt, seeded):
    r = client.get("/tasks", headers=auth(child_jwt))
    assert r.status_code == 200
    assert {t["organization_id"] for t in r.json()} == {seeded.child_org_id}
    assert [t["title"] for t in r.json()] == ["Child org kickoff"]

    parent_task = client.get("/tasks", headers=auth(owner_jwt)).json()[0]

    r = client.get(f"/tasks/{parent_task['id']}", headers=auth(child_jwt))
    assert r.status_code == 403
    # generic denial, no org ids in the body
    assert r.json() == {"detail": "forbidden"}

def test_parent_org_owner_does_not_see_child_org_tasks(client, owner_jwt, child_jwt, seeded):
    r = client.get("/tasks", headers=auth(owner_jwt))
    assert {t["organization_id"] for t in r.json()} == {seeded.parent_org_id}

    child_task = client.get("/tasks", headers=auth(child_jwt)).json()[0]

    r = client.get(f"/tasks/{child_task['id']}", headers=auth(owner_jwt))
    assert r.status_code == 403

def test_cross_org_writes_denied(client, owner_jwt, child_jwt):
    parent_task = client.get("/tasks", headers=auth(owner_jwt)).json()[0]

    r = client.put(f"/tasks/{parent_task['id']}", json={"title": "nope"}, headers=auth(child_jwt))
    assert r.status_code == 403

    r = client.delete(f"/tasks/{parent_task['id']}", headers=auth(child_jwt))
    assert r.status_code == 403

    child_task = client.get("/tasks", headers=auth(child_jwt)).json()[0]
    r = client.put(f"/tasks/{child_task['id']}", json={"title": "nope"}, headers=auth(owner_jwt))
    assert r.status_code == 403
