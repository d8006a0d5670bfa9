from sprintdesk.config import get_settings


def _sprint_with_stories(api):
    sprint = api.sprint()
    open_ = api.story("Open", story_points=3, sprint_id=sprint["id"])
    progress = api.story("Progress", story_points=2, sprint_id=sprint["id"], status="In Progress")
    done = api.story("Done", story_points=5, sprint_id=sprint["id"], status="Resolved")
    return sprint, open_, progress, done


def test_completing_sprint_returns_unfinished_stories(api):
    sprint, open_, progress, done = _sprint_with_stories(api)
    r = api.patch(f"/sprints/{sprint['id']}", json={"status": "Completed"})
    assert r.status_code == 200
    assert r.json()["status"] == "Completed"

    assert [s["id"] for s in api.get("/stories", params={"sprint_id": sprint["id"]}).json()] == [done["id"]]
    backlog = {s["id"] for s in api.get("/stories", params={"backlog": True}).json()}
    assert backlog == {open_["id"], progress["id"]}
    # status is untouched
    assert api.get(f"/stories/{progress['id']}").json()["status"] == "In Progress"


def test_completing_sprint_without_completed_statuses_moves_everything(api):
    sprint, *_ = _sprint_with_stories(api)
    for name in ("Resolved", "Closed", "Deployed"):
        api.patch(f"/statuses/{api.status_id(name)}", json={"is_completed": False})
    api.patch(f"/sprints/{sprint['id']}", json={"status": "Completed"})
    assert api.get("/stories", params={"sprint_id": sprint["id"]}).json() == []
    assert len(api.get("/stories", params={"backlog": True}).json()) == 3


def test_no_completed_status_can_keep_stories(api, monkeypatch):
    sprint, *_ = _sprint_with_stories(api)
    for name in ("Resolved", "Closed", "Deployed"):
        api.patch(f"/statuses/{api.status_id(name)}", json={"is_completed": False})
    monkeypatch.setenv("SPRINTDESK_BACKLOG_ALL_WHEN_NO_COMPLETED_STATUS", "false")
    get_settings.cache_clear()
    api.patch(f"/sprints/{sprint['id']}", json={"status": "Completed"})
    assert len(api.get("/stories", params={"sprint_id": sprint["id"]}).json()) == 3


def test_deleting_status_moves_stories_to_default(api):
    blocked = api.post("/statuses", json={"name": "Blocked"}).json()
    assert blocked["position"] == 6
    story = api.story("Stuck", status_id=blocked["id"])

    assert api.delete(f"/statuses/{blocked['id']}").status_code == 204
    assert api.get(f"/stories/{story['id']}").json()["status"] == "Open"
    assert "Blocked" not in [s["name"] for s in api.get("/statuses").json()]


def test_default_status_cannot_be_deleted(api):
    r = api.delete(f"/statuses/{api.status_id('Open')}")
    assert r.status_code == 400
    assert "default" in r.json()["detail"]


def test_exactly_one_default_status(api):
    progress = api.status_id("In Progress")
    r = api.patch(f"/statuses/{progress}", json={"is_default": True})
    assert r.json()["is_default"] is True
    defaults = [s["name"] for s in api.get("/statuses").json() if s["is_default"]]
    assert defaults == ["In Progress"]
    assert api.story("New")["status"] == "In Progress"

    # the only default cannot be switched off directly
    assert api.patch(f"/statuses/{progress}", json={"is_default": False}).status_code == 400

    created = api.post("/statuses", json={"name": "Triage", "is_default": True}).json()
    defaults = [s["id"] for s in api.get("/statuses").json() if s["is_default"]]
    assert defaults == [created["id"]]


def test_renaming_status_follows_stories(api):
    story = api.story("Login", status="On Hold")
    api.patch(f"/statuses/{api.status_id('On Hold')}", json={"name": "Waiting"})
    assert api.get(f"/stories/{story['id']}").json()["status"] == "Waiting"


def test_status_names_are_unique_ignoring_case(api):
    assert api.post("/statuses", json={"name": "open"}).status_code == 409
    closed = api.status_id("Closed")
    assert api.patch(f"/statuses/{closed}", json={"name": "RESOLVED"}).status_code == 409
