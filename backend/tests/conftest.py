import pytest
from fastapi.testclient import TestClient

from sprintdesk.config import get_settings


@pytest.fixture
def client(tmp_path, monkeypatch):
    monkeypatch.setenv("SPRINTDESK_DATA_DIR", str(tmp_path))
    get_settings.cache_clear()
    from sprintdesk.main import app

    with TestClient(app) as c:
        yield c
    get_settings.cache_clear()


@pytest.fixture
def project(client):
    r = client.post("/projects", json={"name": "Demo Project"})
    assert r.status_code == 201, r.text
    return r.json()


@pytest.fixture
def api(client, project):
    """Client bound to one project: ``api.get("/sprints")`` hits ``/projects/{id}/sprints``."""
    return ProjectApi(client, project["id"])


class ProjectApi:
    def __init__(self, client, project_id):
        self.client = client
        self.base = f"/projects/{project_id}"

    def get(self, path, **kw):
        return self.client.get(self.base + path, **kw)

    def post(self, path, **kw):
        return self.client.post(self.base + path, **kw)

    def patch(self, path, **kw):
        return self.client.patch(self.base + path, **kw)

    def put(self, path, **kw):
        return self.client.put(self.base + path, **kw)

    def delete(self, path, **kw):
        return self.client.delete(self.base + path, **kw)

    def status_id(self, name):
        return next(s["id"] for s in self.get("/statuses").json() if s["name"] == name)

    def sprint(self, name="Sprint 1", **fields):
        r = self.post("/sprints", json={"name": name, "start_date": "2025-01-06", **fields})
        assert r.status_code == 201, r.text
        return r.json()

    def story(self, title, **fields):
        r = self.post("/stories", json={"title": title, **fields})
        assert r.status_code == 201, r.text
        return r.json()

    def upload(self, path, text):
        return self.post(path, files={"file": ("stories.csv", text.encode("utf-8"), "text/csv")})
