import pytest


def test_create_project_applies_defaults(client, tmp_path):
    r = client.post("/projects", json={"name": "Mobile App"})
    assert r.status_code == 201
    body = r.json()
    assert body["db_path"] == "mobile_app.db"
    assert body["story_point_hours"] == 4.0
    assert body["daily_hours"] == 8.0
    assert (tmp_path / "mobile_app.db").exists()


def test_new_project_gets_seeded_statuses(api):
    statuses = api.get("/statuses").json()
    assert [s["name"] for s in statuses] == ["Open", "In Progress", "On Hold", "Resolved", "Closed", "Deployed"]
    assert [s["name"] for s in statuses if s["is_default"]] == ["Open"]
    assert {s["name"] for s in statuses if s["is_completed"]} == {"Resolved", "Closed", "Deployed"}


def test_duplicate_project_name_conflicts(client, project):
    r = client.post("/projects", json={"name": "Demo Project"})
    assert r.status_code == 409


def test_project_hours_must_be_positive(client):
    r = client.post("/projects", json={"name": "Bad", "story_point_hours": 0})
    assert r.status_code == 422


def test_update_project(client, project):
    r = client.patch(f"/projects/{project['id']}", json={"story_point_hours": 6, "name": "Renamed"})
    assert r.status_code == 200
    assert r.json()["story_point_hours"] == 6
    assert r.json()["name"] == "Renamed"
    assert [p["name"] for p in client.get("/projects").json()] == ["Renamed"]


def test_missing_project_is_404(client):
    r = client.get("/projects/999")
    assert r.status_code == 404
    assert r.json() == {"detail": "Project 999 not found"}
    assert client.get("/projects/999/stories").status_code == 404


def test_delete_project_removes_database(client, project, tmp_path):
    assert (tmp_path / project["db_path"]).exists()
    assert client.delete(f"/projects/{project['id']}").status_code == 204
    assert not (tmp_path / project["db_path"]).exists()
    assert client.get(f"/projects/{project['id']}").status_code == 404


def test_projects_are_isolated(client, api):
    api.story("Only in demo")
    other = client.post("/projects", json={"name": "Other"}).json()
    assert client.get(f"/projects/{other['id']}/stories").json() == []
    assert len(api.get("/stories").json()) == 1


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_blank_project_name_rejected(client, project):
    r = client.post("/projects", json={"name": "   "})
    assert r.status_code == 400
    assert r.json() == {"detail": "Project name is required"}
    assert client.patch(f"/projects/{project['id']}", json={"name": " \t"}).status_code == 400
    assert client.get(f"/projects/{project['id']}").json()["name"] == "Demo Project"


@pytest.mark.parametrize("path, payload", [
    ("/developers", {"name": "Ann"}),
    ("/epics", {"name": "Auth"}),
    ("/statuses", {"name": "Blocked"}),
    ("/sprints", {"name": "Sprint 1", "start_date": "2025-01-06"}),
])
def test_blank_names_rejected(api, path, payload):
    r = api.post(path, json={**payload, "name": "   "})
    assert r.status_code == 400
    assert r.json()["detail"].endswith("name is required")

    created = api.post(path, json=payload).json()
    assert api.patch(f"{path}/{created['id']}", json={"name": "  "}).status_code == 400
    assert api.get(f"{path}/{created['id']}").json()["name"] == payload["name"]
    assert "" not in [row["name"] for row in api.get(path).json()]
