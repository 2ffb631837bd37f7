from __future__ import annotations

import pytest

from .conftest import ADMIN_PASSWORD


def _register(client, nickname: str, car: str = "Dacia") -> str:
    res = client.post("/api/register", json={"nickname": nickname, "car": car})
    assert res.status_code == 200
    body = res.json()
    assert body["ok"] is True
    return body["id"]


def _approve(client, headers, pilot_id: str, approve: bool = True):
    return client.post("/api/admin/approve", json={"id": pilot_id, "approve": approve}, headers=headers)


def test_config_reports_effective_visibility(client) -> None:
    res = client.get("/api/config")
    assert res.status_code == 200
    assert res.json() == {"publicMode": True, "totalPilots": 0, "minPublicSignups": 2}


@pytest.mark.parametrize(
    "payload",
    [{}, {"nickname": "Ana"}, {"car": "Dacia"}, {"nickname": "", "car": "Dacia"}],
)
def test_register_validation(client, payload) -> None:
    res = client.post("/api/register", json=payload)
    assert res.status_code == 400
    assert "error" in res.json()


def test_register_rejects_malformed_body(client) -> None:
    res = client.post("/api/register", content=b"{not json", headers={"content-type": "application/json"})
    assert res.status_code == 400
    assert "error" in res.json()


def test_register_and_list_applicants(client, admin_headers) -> None:
    res = client.post("/api/register", json={"nickname": "Ana", "car": "Dacia", "photoUrl": "http://x/a.png"})
    pilot_id = res.json()["id"]
    res = client.get("/api/admin/applicants", headers=admin_headers)
    assert res.status_code == 200
    assert res.json() == {
        "applicants": [
            {
                "id": pilot_id,
                "nickname": "Ana",
                "car": "Dacia",
                "photoUrl": "http://x/a.png",
                "status": "pending",
                "rank": None,
                "accessCodes": [],
            }
        ]
    }


@pytest.mark.parametrize(
    "method, path",
    [
        ("get", "/api/admin/applicants"),
        ("post", "/api/admin/approve"),
        ("post", "/api/admin/reorder"),
        ("post", "/api/admin/toggle-privacy"),
        ("post", "/api/admin/logout"),
    ],
)
def test_admin_routes_require_token(client, method, path) -> None:
    res = getattr(client, method)(path)
    assert res.status_code == 401
    assert res.json() == {"error": "Unauthorized"}
    res = getattr(client, method)(path, headers={"x-admin-token": "NOTATOKN"})
    assert res.status_code == 401


def test_admin_login_wrong_password(client) -> None:
    res = client.post("/api/admin/login", json={"password": "nope"})
    assert res.status_code == 401
    assert "error" in res.json()


def test_bearer_header_is_accepted(client) -> None:
    token = client.post("/api/admin/login", json={"password": ADMIN_PASSWORD}).json()["token"]
    res = client.get("/api/admin/applicants", headers={"Authorization": f"Bearer {token}"})
    assert res.status_code == 200


def test_logout_invalidates_token(client, admin_headers) -> None:
    assert client.post("/api/admin/logout", headers=admin_headers).json() == {"ok": True}
    assert client.get("/api/admin/applicants", headers=admin_headers).status_code == 401


def test_approve_and_list_in_rank_order(client, admin_headers) -> None:
    a = _register(client, "Ana", "Dacia")
    b = _register(client, "Bogdan", "Logan")
    assert _approve(client, admin_headers, a).json() == {"ok": True}
    assert _approve(client, admin_headers, b).json() == {"ok": True}

    res = client.get("/api/list")
    assert res.status_code == 200
    assert res.json() == {
        "pilots": [
            {"id": a, "rank": 1, "nickname": "Ana", "car": "Dacia", "photoUrl": ""},
            {"id": b, "rank": 2, "nickname": "Bogdan", "car": "Logan", "photoUrl": ""},
        ]
    }
    assert client.get("/api/admin/applicants", headers=admin_headers).json() == {"applicants": []}


def test_approve_unknown_pilot(client, admin_headers) -> None:
    res = _approve(client, admin_headers, "NOPE2345")
    assert res.status_code == 404
    assert "error" in res.json()


def test_reject_removes_pilot(client, admin_headers) -> None:
    a = _register(client, "Ana")
    assert _approve(client, admin_headers, a, approve=False).status_code == 200
    assert client.get("/api/admin/applicants", headers=admin_headers).json() == {"applicants": []}
    assert client.get("/api/list").json() == {"pilots": []}
    assert client.get("/api/config").json()["totalPilots"] == 0


def test_reorder(client, admin_headers) -> None:
    ids = [_register(client, name) for name in ("a", "b", "c")]
    for pilot_id in ids:
        _approve(client, admin_headers, pilot_id)
    res = client.post(
        "/api/admin/reorder",
        json={"orderedIds": [ids[2], "UNKNOWN1", ids[0], ids[1]]},
        headers=admin_headers,
    )
    assert res.json() == {"ok": True}
    listed = client.get("/api/list").json()["pilots"]
    assert [(p["id"], p["rank"]) for p in listed] == [(ids[2], 1), (ids[0], 2), (ids[1], 3)]


@pytest.mark.parametrize("payload", [{}, {"orderedIds": []}, {"orderedIds": "abc"}])
def test_reorder_validation(client, admin_headers, payload) -> None:
    res = client.post("/api/admin/reorder", json=payload, headers=admin_headers)
    assert res.status_code == 400
    assert "error" in res.json()


def test_toggle_privacy_below_threshold(client, admin_headers) -> None:
    _register(client, "a")
    res = client.post("/api/admin/toggle-privacy", headers=admin_headers)
    assert res.status_code == 200
    body = res.json()
    assert body["ok"] is True
    assert body["publicMode"] is True
    assert body["note"]


def test_restricted_listing_and_access_codes(client, admin_headers) -> None:
    a = _register(client, "Ana")
    _register(client, "Bogdan")
    _approve(client, admin_headers, a)

    res = client.post("/api/admin/toggle-privacy", headers=admin_headers)
    assert res.json() == {"ok": True, "publicMode": False}
    assert client.get("/api/config").json()["publicMode"] is False

    res = client.get("/api/list")
    assert res.status_code == 403
    assert "error" in res.json()
    assert client.get("/api/list", headers={"x-access-code": "BADCODE2"}).status_code == 403

    assert client.post("/api/access/request", json={}).status_code == 400
    assert client.post("/api/access/request", json={"nickname": "Bogdan"}).status_code == 404

    res = client.post("/api/access/request", json={"nickname": "ana"})
    assert res.status_code == 200
    code = res.json()["accessCode"]

    res = client.get("/api/list", headers={"x-access-code": code})
    assert res.status_code == 200
    assert [p["id"] for p in res.json()["pilots"]] == [a]


def test_oversized_body_is_rejected(client) -> None:
    res = client.post("/api/register", json={"nickname": "Ana", "car": "x" * 2048})
    assert res.status_code == 413
    assert res.json() == {"error": "Payload too large"}


def test_apps_do_not_share_state(settings) -> None:
    from fastapi.testclient import TestClient

    from blacklist_api.app.main import create_app

    first = TestClient(create_app(settings))
    second = TestClient(create_app(settings))
    _register(first, "Ana")
    assert second.get("/api/config").json()["totalPilots"] == 0


def test_static_frontend_is_served(settings, tmp_path) -> None:
    from fastapi.testclient import TestClient

    from blacklist_api.app.main import create_app

    public = tmp_path / "public"
    public.mkdir()
    (public / "index.html").write_text("<h1>BlackList RO</h1>", encoding="utf-8")
    settings.static_dir = str(public)
    client = TestClient(create_app(settings))
    assert "BlackList RO" in client.get("/").text
    assert client.get("/api/config").status_code == 200


def test_login_without_body_is_unauthorized(client) -> None:
    res = client.post("/api/admin/login")
    assert res.status_code == 401
    assert res.json() == {"error": "Wrong password"}


def test_approve_without_body_is_not_found(client, admin_headers) -> None:
    res = client.post("/api/admin/approve", headers=admin_headers)
    assert res.status_code == 404
    assert "error" in res.json()


def test_bodyless_public_requests_report_missing_fields(client, admin_headers) -> None:
    assert client.post("/api/register").status_code == 400
    assert client.post("/api/access/request").status_code == 400
    assert client.post("/api/admin/reorder", headers=admin_headers).status_code == 400


def test_numeric_fields_are_accepted_as_text(client, admin_headers) -> None:
    res = client.post("/api/register", json={"nickname": 77, "car": 1310})
    assert res.status_code == 200
    applicant = client.get("/api/admin/applicants", headers=admin_headers).json()["applicants"][0]
    assert (applicant["nickname"], applicant["car"]) == ("77", "1310")
    assert _approve(client, admin_headers, 12345).status_code == 404


def test_frontend_routes_fall_back_to_index(settings, tmp_path) -> None:
    from fastapi.testclient import TestClient

    from blacklist_api.app.main import create_app

    public = tmp_path / "public"
    public.mkdir()
    (public / "index.html").write_text("<h1>BlackList RO</h1>", encoding="utf-8")
    settings.static_dir = str(public)
    client = TestClient(create_app(settings))
    res = client.get("/admin")
    assert res.status_code == 200
    assert "BlackList RO" in res.text
    assert client.get("/api/unknown").status_code == 404
