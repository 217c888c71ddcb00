import json

import httpx
import pytest

from cell_admin_client import AuthenticationError, CellAdminClient, CellAdminHTTPError

BASE = "http://test"


def _page(items, number, total_pages, size=2):
    return {
        "content": items,
        "number": number,
        "size": size,
        "totalPages": total_pages,
        "totalElements": 3,
        "first": number == 0,
        "last": number + 1 >= total_pages,
    }


@pytest.mark.unit
def test_bearer_token_header(respx_mock):
    route = respx_mock.get(f"{BASE}/api/me/profile").mock(
        return_value=httpx.Response(200, json={"id": 1})
    )
    c = CellAdminClient(BASE, token="Bearer abc")
    assert c.get_my_profile()["id"] == 1
    assert route.calls.last.request.headers["Authorization"] == "Bearer abc"


@pytest.mark.unit
def test_no_auth_header_without_token(respx_mock):
    route = respx_mock.get(f"{BASE}/api/semesters").mock(return_value=httpx.Response(200, json=[]))
    CellAdminClient(BASE).get("/api/semesters")
    assert "Authorization" not in route.calls.last.request.headers


@pytest.mark.unit
def test_get_retries_server_errors(respx_mock):
    route = respx_mock.get(f"{BASE}/api/semesters").mock(
        side_effect=[
            httpx.Response(503),
            httpx.Response(502),
            httpx.Response(200, json=[{"id": 1}]),
        ]
    )
    c = CellAdminClient(BASE, retries=3)
    assert c.get("/api/semesters") == [{"id": 1}]
    assert route.call_count == 3


@pytest.mark.unit
def test_post_is_not_retried(respx_mock):
    route = respx_mock.post(f"{BASE}/api/notices").mock(
        return_value=httpx.Response(500, json={"status": 500, "error": "Internal Server Error"})
    )
    c = CellAdminClient(BASE)
    with pytest.raises(CellAdminHTTPError) as ei:
        c.post("/api/notices", json={"title": "x"})
    assert route.call_count == 1
    assert ei.value.status_code == 500


@pytest.mark.unit
def test_spring_validation_errors_are_formatted(respx_mock):
    body = {
        "status": 400,
        "error": "Bad Request",
        "errors": [
            {"field": "name", "defaultMessage": "must not be blank"},
            {"field": "startDate", "defaultMessage": "must be a date"},
        ],
    }
    respx_mock.post(f"{BASE}/api/semesters").mock(return_value=httpx.Response(400, json=body))
    c = CellAdminClient(BASE)
    with pytest.raises(CellAdminHTTPError) as ei:
        c.semesters.create({"name": ""})
    err = ei.value
    assert err.status_code == 400
    assert err.path == "/api/semesters"
    assert str(err) == "400: name: must not be blank; startDate: must be a date"


@pytest.mark.unit
def test_non_json_error_body(respx_mock):
    respx_mock.get(f"{BASE}/api/cells/1").mock(return_value=httpx.Response(404, text="Not Found"))
    c = CellAdminClient(BASE)
    with pytest.raises(CellAdminHTTPError) as ei:
        c.cells.get(1)
    assert ei.value.payload == {"message": "Not Found"}
    assert str(ei.value) == "Not Found"


@pytest.mark.unit
def test_empty_body_returns_empty_dict(respx_mock):
    respx_mock.delete(f"{BASE}/api/cells/1").mock(return_value=httpx.Response(204))
    assert CellAdminClient(BASE).cells.delete(1) == {}


@pytest.mark.unit
def test_list_paged_walks_zero_based_pages(respx_mock):
    def pages(request: httpx.Request) -> httpx.Response:
        n = int(request.url.params["page"])
        assert request.url.params["size"] == "2"
        if n == 0:
            return httpx.Response(200, json=_page([{"id": 1}, {"id": 2}], 0, 2))
        return httpx.Response(200, json=_page([{"id": 3}], 1, 2))

    route = respx_mock.get(f"{BASE}/api/teams").mock(side_effect=pages)
    c = CellAdminClient(BASE, default_page_size=2)
    assert [t["id"] for t in c.teams.list(active=True)] == [1, 2, 3]
    assert route.call_count == 2
    assert route.calls[0].request.url.params["active"] == "true"


@pytest.mark.unit
def test_fetch_all_stops_on_page_without_last_flag(respx_mock):
    respx_mock.get(f"{BASE}/api/teams").mock(
        return_value=httpx.Response(200, json={"content": [{"id": 1}], "number": 0, "totalPages": 1})
    )
    assert CellAdminClient(BASE).fetch_all("/api/teams") == [{"id": 1}]


@pytest.mark.unit
def test_close_is_idempotent_and_client_recreated(respx_mock):
    respx_mock.get(f"{BASE}/api/semesters").mock(return_value=httpx.Response(200, json=[]))
    with CellAdminClient(BASE) as c:
        c.close()
        c.close()
        assert c.get("/api/semesters") == []
    assert c._client is None


@pytest.mark.unit
def test_401_triggers_single_refresh_and_replay(respx_mock):
    calls = {"n": 0}

    def profile(request: httpx.Request) -> httpx.Response:
        calls["n"] += 1
        if request.headers["Authorization"] == "Bearer old":
            return httpx.Response(401, json={"message": "expired"})
        return httpx.Response(200, json={"id": 9})

    respx_mock.get(f"{BASE}/api/me/profile").mock(side_effect=profile)
    refresh = respx_mock.post(f"{BASE}/api/auth/refresh").mock(
        return_value=httpx.Response(200, json={"accessToken": "new", "refreshToken": "r2"})
    )

    c = CellAdminClient(BASE, token="old", refresh_token="r1")
    assert c.profile.get() == {"id": 9}
    assert calls["n"] == 2
    assert json.loads(refresh.calls.last.request.content) == {"refreshToken": "r1"}
    assert "Authorization" not in refresh.calls.last.request.headers
    assert (c.access_token, c.refresh_token) == ("new", "r2")


@pytest.mark.unit
def test_failed_refresh_clears_tokens(respx_mock):
    respx_mock.get(f"{BASE}/api/me/profile").mock(return_value=httpx.Response(401, json={}))
    respx_mock.post(f"{BASE}/api/auth/refresh").mock(
        return_value=httpx.Response(401, json={"message": "refresh token expired"})
    )
    c = CellAdminClient(BASE, token="old", refresh_token="r1")
    with pytest.raises(AuthenticationError) as ei:
        c.profile.get()
    assert ei.value.path == "/api/auth/refresh"
    assert c.access_token is None and c.refresh_token is None


@pytest.mark.unit
def test_401_without_refresh_token_raises_authentication_error(respx_mock):
    respx_mock.get(f"{BASE}/api/me/profile").mock(return_value=httpx.Response(401, json={"message": "no"}))
    with pytest.raises(AuthenticationError):
        CellAdminClient(BASE, token="old").profile.get()


@pytest.mark.unit
def test_lazy_login_with_credentials(respx_mock):
    login = respx_mock.post(f"{BASE}/api/auth/login").mock(
        return_value=httpx.Response(
            200,
            json={"accessToken": "a1", "refreshToken": "r1", "userId": 1, "memberId": 10, "role": "EXECUTIVE", "name": "관리자"},
        )
    )
    sems = respx_mock.get(f"{BASE}/api/semesters").mock(return_value=httpx.Response(200, json=[]))

    c = CellAdminClient(BASE, username="admin", password="pw")
    assert c.get_semesters() == []
    assert login.call_count == 1
    assert sems.calls.last.request.headers["Authorization"] == "Bearer a1"
    assert c.current_user.username == "admin"


@pytest.mark.unit
def test_get_bytes_uses_content_disposition(respx_mock):
    respx_mock.get(f"{BASE}/api/export/cells/3/members.xlsx").mock(
        return_value=httpx.Response(
            200,
            content=b"PK\x03\x04",
            headers={"Content-Disposition": "attachment; filename=\"3cell-members.xlsx\""},
        )
    )
    content, name = CellAdminClient(BASE).get_bytes("/api/export/cells/3/members.xlsx", default_filename="x.xlsx")
    assert content == b"PK\x03\x04"
    assert name == "3cell-members.xlsx"


@pytest.mark.unit
def test_refresh_transport_failure_clears_tokens(respx_mock):
    respx_mock.get(f"{BASE}/api/me/profile").mock(return_value=httpx.Response(401, json={}))
    respx_mock.post(f"{BASE}/api/auth/refresh").mock(side_effect=httpx.ConnectError("connection refused"))
    c = CellAdminClient(BASE, token="old", refresh_token="r1")
    with pytest.raises(AuthenticationError) as ei:
        c.profile.get()
    assert ei.value.path == "/api/auth/refresh"
    assert isinstance(ei.value.__cause__, httpx.ConnectError)
    assert c.access_token is None and c.refresh_token is None
