from sprintdesk.services.csv_io import read_rows

HEADER = "Epic,Story,Description,Developer,Story Points,Status\n"

SPRINT_FILE = (
    HEADER
    + 'Auth,Login,"Sign in, with SSO",Ann,5,Open\n'
    + "Auth,Logout,,Bob,3,Review\n"
    + ",Settings page,,,,\n"
    + ",,orphan description,,,\n"
    + "Billing,Invoice,,Ann,many,Open\n"
)


def _fields(stories):
    return sorted(
        (s["title"], s["epic_name"], s["assignee_name"], s["story_points"], s["status"], s["description"])
        for s in stories
    )


def test_import_creates_stories_and_referenced_rows(api):
    sprint = api.sprint()
    r = api.upload(f"/sprints/{sprint['id']}/import", SPRINT_FILE)
    assert r.status_code == 200
    assert r.json() == {"imported": 3, "skipped": 2}

    stories = api.get("/stories", params={"sprint_id": sprint["id"]}).json()
    assert _fields(stories) == [
        ("Login", "Auth", "Ann", 5.0, "Open", "Sign in, with SSO"),
        ("Logout", "Auth", "Bob", 3.0, "Review", None),
        ("Settings page", None, None, None, "Open", None),
    ]
    assert [e["name"] for e in api.get("/epics").json()] == ["Auth"]
    assert [d["name"] for d in api.get("/developers").json()] == ["Ann", "Bob"]

    review = api.get("/statuses").json()[-1]
    assert review["name"] == "Review"
    assert review["is_completed"] is False
    assert review["is_default"] is False
    assert review["position"] == 6


def test_import_twice_does_not_duplicate(api):
    sprint = api.sprint()
    api.upload(f"/sprints/{sprint['id']}/import", SPRINT_FILE)
    r = api.upload(f"/sprints/{sprint['id']}/import", SPRINT_FILE)
    assert r.json() == {"imported": 3, "skipped": 2}
    assert len(api.get("/stories", params={"sprint_id": sprint["id"]}).json()) == 3
    assert len(api.get("/epics").json()) == 1
    assert len(api.get("/statuses").json()) == 7


def test_reimport_merges_non_blank_cells(api):
    sprint = api.sprint()
    api.upload(f"/sprints/{sprint['id']}/import", SPRINT_FILE)
    api.upload(f"/sprints/{sprint['id']}/import", HEADER + ",LOGIN,,,,closed\n")

    [login] = [s for s in api.get("/stories", params={"sprint_id": sprint["id"]}).json() if s["title"] == "Login"]
    assert login["status"] == "Closed"
    assert login["story_points"] == 5
    assert login["epic_name"] == "Auth"
    assert login["assignee_name"] == "Ann"
    assert login["description"] == "Sign in, with SSO"


def test_backlog_import_is_separate_from_sprints(api):
    sprint = api.sprint()
    api.upload(f"/sprints/{sprint['id']}/import", SPRINT_FILE)
    r = api.upload("/backlog/import", HEADER + "Auth,Login,,,8,\n")
    assert r.json() == {"imported": 1, "skipped": 0}
    [backlog] = api.get("/stories", params={"backlog": True}).json()
    assert backlog["title"] == "Login"
    assert backlog["story_points"] == 8
    assert backlog["sprint_id"] is None


def test_export_then_import_round_trip(api):
    first = api.sprint("First")
    second = api.sprint("Second")
    api.upload(f"/sprints/{first['id']}/import", SPRINT_FILE)

    r = api.get(f"/sprints/{first['id']}/export.csv")
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/csv")
    assert 'filename="First.csv"' in r.headers["content-disposition"]
    assert r.content.startswith(b"\xef\xbb\xbf")
    rows = read_rows(r.content)
    assert rows[0] == ["Epic", "Story", "Description", "Developer", "Story Points", "Status"]
    assert rows[1] == ["Auth", "Login", "Sign in, with SSO", "Ann", "5", "Open"]

    r = api.post(
        f"/sprints/{second['id']}/import",
        files={"file": ("export.csv", r.content, "text/csv")},
    )
    assert r.json() == {"imported": 3, "skipped": 0}
    assert _fields(api.get("/stories", params={"sprint_id": second["id"]}).json()) == _fields(
        api.get("/stories", params={"sprint_id": first["id"]}).json()
    )


def test_status_import(api):
    sprint = api.sprint()
    api.upload(f"/sprints/{sprint['id']}/import", SPRINT_FILE)
    r = api.upload(
        f"/sprints/{sprint['id']}/status-import",
        "Status,Story\ndeployed,login\nOpen,Missing story\n,Logout\nBlocked,Settings page\n",
    )
    assert r.status_code == 200
    assert r.json() == {"updated": 2, "skipped": 2}

    statuses = {s["title"]: s["status"] for s in api.get("/stories", params={"sprint_id": sprint["id"]}).json()}
    assert statuses == {"Login": "Deployed", "Logout": "Review", "Settings page": "Blocked"}


def test_status_import_without_named_columns_uses_first_two(api):
    sprint = api.sprint()
    api.upload(f"/sprints/{sprint['id']}/import", SPRINT_FILE)
    r = api.upload(f"/sprints/{sprint['id']}/status-import", "Title,State\nLogout,Closed\n")
    assert r.json() == {"updated": 1, "skipped": 0}


def test_rejects_unreadable_files(api):
    sprint = api.sprint()
    assert api.upload(f"/sprints/{sprint['id']}/import", "").status_code == 400
    r = api.upload(f"/sprints/{sprint['id']}/import", HEADER)
    assert r.status_code == 400
    assert r.json() == {"detail": "CSV is empty"}
    assert api.upload("/sprints/999/import", SPRINT_FILE).status_code == 404


def test_open_quote_rejects_whole_file(api):
    sprint = api.sprint()
    text = (
        HEADER
        + "Auth,Login,,Ann,3,Open\n"
        + 'Auth,Bad,"unterminated,Ann,3,Open\n'
        + "Auth,After,,Ann,2,Open\n"
    )
    r = api.upload(f"/sprints/{sprint['id']}/import", text)
    assert r.status_code == 400
    assert r.json()["detail"].startswith("Could not parse CSV")
    # nothing from the file is kept
    assert api.get("/stories", params={"sprint_id": sprint["id"]}).json() == []
    assert api.get("/developers").json() == []
