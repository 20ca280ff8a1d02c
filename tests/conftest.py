import sys
from pathlib import Path as _Path
sys.path.insert(0, str(_Path(__file__).resolve().parents[1] / "src"))

from pathlib import Path

import pytest
import yaml
from fastapi.testclient import TestClient

from cms.auth.passwords import hash_password
from cms.auth.session import load_session
from cms.config import cookie_name


@pytest.fixture()
def data_dir(tmp_path: Path, monkeypatch) -> Path:
    d = tmp_path / "data"
    d.mkdir()
    monkeypatch.setenv("CMS_DATA_DIR", str(d))
    return d


@pytest.fixture()
def users_file(tmp_path: Path, monkeypatch) -> Path:
    """users.yml with a single admin/secret account."""
    path = tmp_path / "users.yml"
    path.write_text(yaml.safe_dump({"admin": hash_password("secret")}), encoding="utf-8")
    monkeypatch.setenv("CMS_USERS_PATH", str(path))
    return path


@pytest.fixture()
def secret_key(monkeypatch) -> str:
    monkeypatch.setenv("CMS_SECRET_KEY", "test-secret")
    return "test-secret"


@pytest.fixture()
def client(data_dir, users_file, secret_key):
    from cms.app import app

    return TestClient(app)


@pytest.fixture()
def admin_client(client):
    r = client.post("/users/signin", data={"username": "admin", "password": "secret"}, follow_redirects=False)
    assert r.status_code == 302
    # Consume the welcome message so tests start from a clean flash.
    client.get("/")
    return client


@pytest.fixture()
def create_document(data_dir):
    def _create(name: str, content: str = "") -> Path:
        path = data_dir / name
        path.write_text(content, encoding="utf-8")
        return path

    return _create


@pytest.fixture()
def session_of():
    def _session(c: TestClient):
        return load_session(c.cookies.get(cookie_name(), ""))

    return _session
