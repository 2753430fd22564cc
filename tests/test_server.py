import json

import pytest
import responses

from rumbling.database import connect
from rumbling.server import create_app, error_response, main


@pytest.fixture
def queries():
    return connect(":memory:")


@pytest.fixture
def client(queries):
    return create_app(queries).test_client()


def test_error_response_body_and_status():
    res = error_response(400, ValueError("bad input"))
    assert res.status_code == 400
    assert res.mimetype == "application/json"
    assert json.loads(res.get_data()) == {"error": "bad input"}


def test_post_invalid_json_is_bad_request(client):
    res = client.post("/api/data", data="not json")
    assert res.status_code == 400
    assert "error" in res.get_json()


def test_post_non_object_is_bad_request(client):
    res = client.post("/api/data", data="[1, 2]")
    assert res.status_code == 400


def test_post_non_string_url_is_bad_request(client):
    res = client.post("/api/data", json={"url": 5})
    assert res.status_code == 400


def test_get_is_not_allowed(client):
    assert client.get("/api/data").status_code == 405


def test_post_crawls_and_stores(client, queries):
    with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
        rsps.add(
            responses.GET,
            "https://example.com/",
            body='<a href="/next">n</a><p>Hello there.</p>',
            content_type="text/html",
        )
        rsps.add(
            responses.GET,
            "https://example.com/next",
            body="<p>Next page</p>",
            content_type="text/html",
        )
        res = client.post("/api/data", json={"url": "https://example.com/"})
    assert res.status_code == 200
    assert queries.retrieve_data("example.com").content == "hello there."
    assert queries.retrieve_data("example.com/next").content == "next page"


def test_main_without_db_url_exits(tmp_path, monkeypatch):
    monkeypatch.delenv("DB_URL", raising=False)
    with pytest.raises(SystemExit) as exc:
        main(["--env-file", str(tmp_path / "missing.env")])
    assert exc.value.code == "no database url provided"


def test_main_without_port_exits(tmp_path, monkeypatch):
    monkeypatch.setenv("DB_URL", str(tmp_path / "data.db"))
    monkeypatch.delenv("PORT", raising=False)
    with pytest.raises(SystemExit) as exc:
        main(["--env-file", str(tmp_path / "missing.env")])
    assert exc.value.code == "no port provided"


def test_main_with_bad_port_exits(tmp_path, monkeypatch):
    monkeypatch.setenv("DB_URL", str(tmp_path / "data.db"))
    monkeypatch.setenv("PORT", "nonsense")
    with pytest.raises(SystemExit) as exc:
        main(["--env-file", str(tmp_path / "missing.env")])
    assert exc.value.code == "server not started"