"""Session gate on the panel API: hidden as 404 without a session."""
import json

import pytest
from fastapi import HTTPException, Request

from app.api.deps import Collaborators, require_session
from app.config import Settings
from app.service.inbound_service import InboundStore
from tests.conftest import (
    NOW_MS,
    FakeBackupService,
    FakeExpiryResolver,
    FakeSessionOracle,
)

GATED = [
    "/panel/api/backuptotgbot",
    "/panel/api/inbounds/list",
    "/panel/api/server/status",
]


def _request(path: str = "/panel/api/backuptotgbot") -> Request:
    return Request({"type": "http", "method": "GET", "path": path, "headers": [], "query_string": b""})


def _collaborators(logged_in: bool, tmp_path) -> Collaborators:
    return Collaborators(
        session_oracle=FakeSessionOracle(logged_in),
        expiry_resolver=FakeExpiryResolver(),
        backup_service=FakeBackupService(),
        inbound_store=InboundStore(tmp_path / "inbounds.json"),
    )


def test_gate_raises_not_found_without_session(tmp_path):
    with pytest.raises(HTTPException) as exc:
        require_session(_request(), _collaborators(False, tmp_path))
    assert exc.value.status_code == 404


def test_gate_passes_through_with_session(tmp_path):
    assert require_session(_request(), _collaborators(True, tmp_path)) is None


@pytest.mark.parametrize("path", GATED)
def test_gated_routes_are_blank_404_without_session(client, backup, path):
    r = client.get(path)
    assert r.status_code == 404
    assert r.content == b""
    assert backup.calls == 0


def test_gated_route_looks_like_missing_route(client):
    gated = client.get("/panel/api/backuptotgbot")
    missing = client.get("/panel/api/does-not-exist")
    assert gated.status_code == missing.status_code == 404
    assert gated.content == missing.content == b""


def test_trailing_slash_is_not_redirected(client):
    r = client.get("/panel/api/backuptotgbot/", follow_redirects=False)
    assert r.status_code == 404
    assert r.content == b""


def test_wrong_method_on_gated_route_is_404(client):
    r = client.post("/panel/api/backuptotgbot")
    assert r.status_code == 404
    assert r.content == b""


def test_backup_relay_with_session(make_client, backup):
    client = make_client(session_oracle=FakeSessionOracle(logged_in=True))
    r = client.get("/panel/api/backuptotgbot")
    assert r.status_code == 200
    assert r.content == b""
    assert backup.calls == 1


def test_backup_failure_does_not_reach_caller(make_client):
    failing = FakeBackupService(error=RuntimeError("telegram down"))
    client = make_client(session_oracle=FakeSessionOracle(logged_in=True), backup_service=failing)
    r = client.get("/panel/api/backuptotgbot")
    assert r.status_code == 200
    assert failing.calls == 1


def test_server_status_with_session(make_client):
    client = make_client(session_oracle=FakeSessionOracle(logged_in=True))
    body = client.get("/panel/api/server/status").json()
    assert body["success"] is True
    assert body["obj"]["version"] == "0.1.0"
    assert body["obj"]["now"] == NOW_MS
    assert body["obj"]["uptimeSeconds"] >= 0


def test_inbound_list_with_session(make_client, settings):
    settings.inbounds_file.write_text(
        json.dumps(
            {
                "inbounds": [
                    {
                        "id": 1,
                        "remark": "main",
                        "protocol": "vless",
                        "port": 443,
                        "enable": True,
                        "settings": {"clients": [{"id": "a"}, {"id": "b"}]},
                    }
                ]
            }
        ),
        encoding="utf-8",
    )
    client = make_client(session_oracle=FakeSessionOracle(logged_in=True))
    body = client.get("/panel/api/inbounds/list").json()
    assert body["success"] is True
    assert body["obj"] == [
        {"id": 1, "remark": "main", "protocol": "vless", "port": 443, "enable": True, "clientCount": 2}
    ]


def test_inbound_list_store_failure(make_client):
    client = make_client(session_oracle=FakeSessionOracle(logged_in=True))
    r = client.get("/panel/api/inbounds/list")
    assert r.status_code == 500
    assert r.json()["msg"] == "failed to load inbounds"


def test_cookie_session_opens_gate(make_client, tmp_path):
    client = make_client(
        Settings(session_token="s3cret", inbounds_file=tmp_path / "inbounds.json"),
        session_oracle=None,
    )
    assert client.get("/panel/api/server/status").status_code == 404
    client.cookies.set("session", "wrong")
    assert client.get("/panel/api/server/status").status_code == 404
    client.cookies.set("session", "s3cret")
    assert client.get("/panel/api/server/status").status_code == 200
