from typing import Any, Dict, Iterable, Optional, Tuple

import atexit
import httpx

from .errors import AuthenticationError, CellAdminHTTPError
from .logging import configure_logging, logger, redact
from .paging import has_next_page, page_content, page_summary
from .policy import CurrentUser
from .resources import (
    Attendances,
    Auth,
    Cells,
    Dashboard,
    Exports,
    Members,
    Notices,
    Prayers,
    Profile,
    Reports,
    Semesters,
    Statistics,
    Suggestions,
    Teams,
)
from .settings import ClientSettings
from .utils.utils import build_url, clean_params, filename_from_disposition

AUTH_PREFIX = "/api/auth/"


class CellAdminClient:
    """
    Thin, synchronous client for the cell administration REST API.

    - Dict/JSON in & out.
    - Stdlib logging (JSON output by default when configured).
    - Bearer JWT auth; access tokens are refreshed once on 401 when a refresh token is known.
    - Spring page envelopes via get_page(), list_paged() and fetch_all().
    - One resource object per API area: client.members, client.cells, ...
    """

    def __init__(
        self,
        base_url: str | None = None,
        *,
        username: str | None = None,
        password: str | None = None,
        token: str | None = None,
        refresh_token: str | None = None,
        default_page_size: int = 20,
        timeout: float = 30.0,
        retries: int = 3,
        verify_ssl: bool = True,
        settings: ClientSettings | None = None,
        log_level: str | None = None,
        log_format: str | None = None,  # "json" (default) or "text"
        log_destination: str | None = None,
    ) -> None:
        if settings:
            configure_logging(
                level=log_level or settings.log_level,
                fmt=(log_format or settings.log_format),
                destination=(log_destination or settings.log_destination),
            )
            base_url = base_url or settings.base_url
            username = username or settings.username
            password = password or settings.password
            token = token or settings.token
            refresh_token = refresh_token or settings.refresh_token
            default_page_size = (
                default_page_size if default_page_size != 20 else settings.default_page_size
            )
            timeout = timeout if timeout != 30.0 else settings.timeout
            retries = retries if retries != 3 else settings.retries
            verify_ssl = verify_ssl if verify_ssl is not True else settings.verify_ssl
        elif log_level or log_format or log_destination:
            configure_logging(
                level=log_level or "WARNING",
                fmt=(log_format or "json"),
                destination=log_destination,
            )

        if not base_url:
            raise ValueError("base_url is required")

        self.base_url = base_url.rstrip("/")
        self.default_page_size = int(default_page_size)
        self.timeout = float(timeout)
        self.retries = int(retries)
        self.verify_ssl = bool(verify_ssl)

        # Credentials are used for a lazy login when no access token is present.
        self._username = username
        self._password = password
        self.access_token: Optional[str] = _strip_bearer(token)
        self.refresh_token: Optional[str] = refresh_token
        self.current_user: Optional[CurrentUser] = None

        self._client: Optional[httpx.Client] = self._build_client()
        atexit.register(self.close)

        self.auth = Auth(self)
        self.members = Members(self)
        self.cells = Cells(self)
        self.teams = Teams(self)
        self.attendances = Attendances(self)
        self.notices = Notices(self)
        self.prayers = Prayers(self)
        self.semesters = Semesters(self)
        self.suggestions = Suggestions(self)
        self.statistics = Statistics(self)
        self.dashboard = Dashboard(self)
        self.reports = Reports(self)
        self.exports = Exports(self)
        self.profile = Profile(self)

    # ---------- lifecycle ----------

    def _build_client(self) -> httpx.Client:
        return httpx.Client(
            headers={"Accept": "application/json", "Content-Type": "application/json"},
            timeout=self.timeout,
            verify=self.verify_ssl,
        )

    def _ensure_client(self) -> httpx.Client:
        """Recreate the httpx.Client if it was closed."""
        if self._client is None:
            logger.debug("Recreating HTTP client")
            self._client = self._build_client()
        return self._client

    def close(self) -> None:
        """Idempotent close of the underlying HTTP client."""
        client, self._client = self._client, None
        if client is not None:
            try:
                client.close()
            except Exception as e:
                logger.warning("Error during client.close(): %s", e)

    def __enter__(self) -> "CellAdminClient":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    # ---------- tokens ----------

    def set_tokens(self, access_token: Optional[str], refresh_token: Optional[str]) -> None:
        self.access_token = _strip_bearer(access_token)
        self.refresh_token = refresh_token

    def clear_tokens(self) -> None:
        self.access_token = None
        self.refresh_token = None
        self.current_user = None

    def _auth_headers(self) -> Dict[str, str]:
        if self.access_token:
            return {"Authorization": f"Bearer {self.access_token}"}
        return {}

    def _refresh_access_token(self) -> bool:
        """POST /api/auth/refresh; rotates both tokens. False when refresh is impossible."""
        if not self.refresh_token:
            return False
        try:
            resp = self._send(
                "POST", "/api/auth/refresh", json={"refreshToken": self.refresh_token}, with_auth=False
            )
        except httpx.HTTPError as e:
            logger.warning("Token refresh failed: %s", e)
            self.clear_tokens()
            raise AuthenticationError(0, "/api/auth/refresh", {"message": f"Token refresh failed: {e}"}) from e
        body = _json_or_message(resp)
        if resp.status_code // 100 != 2 or not body.get("accessToken"):
            logger.warning("Token refresh failed with HTTP %s", resp.status_code)
            self.clear_tokens()
            raise AuthenticationError(resp.status_code, "/api/auth/refresh", body)
        self.set_tokens(body["accessToken"], body.get("refreshToken") or self.refresh_token)
        logger.info("Access token refreshed")
        return True

    # -------------------------
    # Core HTTP (pass-throughs)
    # -------------------------

    def _send(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json: Any = None,
        headers: Optional[Dict[str, str]] = None,
        with_auth: bool = True,
    ) -> httpx.Response:
        url = build_url(self.base_url, path)
        params = clean_params(params) or None
        logger.info(
            "Request %s %s params=%s",
            method,
            path,
            redact(params),
            extra={"method": method, "path": path},
        )

        resp: httpx.Response | None = None
        for attempt in range(self.retries + 1):
            client = self._ensure_client()
            h = dict(headers or {})
            if with_auth:
                h.update(self._auth_headers())
            resp = client.request(method, url, params=params, json=json, headers=h)
            if resp.status_code >= 500 and method.upper() == "GET" and attempt < self.retries:
                logger.warning(
                    "Retrying %s %s after server error %s (attempt %s)",
                    method,
                    path,
                    resp.status_code,
                    attempt + 1,
                )
                continue
            break

        assert resp is not None
        return resp

    def _request_response(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json: Any = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> httpx.Response:
        is_auth_call = path.startswith(AUTH_PREFIX)
        if not self.access_token and not is_auth_call and self._username and self._password:
            self.auth.login(self._username, self._password)

        resp = self._send(method, path, params=params, json=json, headers=headers)
        if resp.status_code == 401 and not is_auth_call and self.refresh_token:
            logger.warning("HTTP 401 on %s; attempting token refresh", path)
            if self._refresh_access_token():
                resp = self._send(method, path, params=params, json=json, headers=headers)

        if resp.status_code // 100 != 2:
            payload = _json_or_message(resp)
            logger.error(
                "HTTP %s on %s: %s",
                resp.status_code,
                path,
                redact(payload),
                extra={"method": method, "path": path, "status": resp.status_code},
            )
            if resp.status_code == 401:
                raise AuthenticationError(resp.status_code, path, payload)
            raise CellAdminHTTPError(resp.status_code, path, payload)
        return resp

    def _request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json: Any = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        resp = self._request_response(method, path, params=params, json=json, headers=headers)
        if not resp.content:
            return {}
        data = resp.json()
        if isinstance(data, dict) and "content" in data and "totalPages" in data:
            p = page_summary(data)
            logger.info(
                "Page: number=%s/%s total=%s", p["number"], p["totalPages"], p["totalElements"]
            )
        return data

    def get(self, path: str, *, params: Optional[Dict[str, Any]] = None) -> Any:
        return self._request("GET", path, params=params)

    def post(self, path: str, *, params: Dict[str, Any] | None = None, json: Any = None) -> Any:
        return self._request("POST", path, params=params, json=json)

    def put(self, path: str, *, params: Dict[str, Any] | None = None, json: Any = None) -> Any:
        return self._request("PUT", path, params=params, json=json)

    def patch(self, path: str, *, params: Dict[str, Any] | None = None, json: Any = None) -> Any:
        return self._request("PATCH", path, params=params, json=json)

    def delete(self, path: str, *, params: Dict[str, Any] | None = None) -> Any:
        return self._request("DELETE", path, params=params)

    def get_bytes(
        self, path: str, *, params: Optional[Dict[str, Any]] = None, default_filename: str = "download"
    ) -> Tuple[bytes, str]:
        """Binary download; returns (content, filename from Content-Disposition or default)."""
        resp = self._request_response(
            "GET", path, params=params, headers={"Accept": "application/octet-stream, */*"}
        )
        filename = filename_from_disposition(resp.headers.get("content-disposition"), default_filename)
        return resp.content, filename

    # -------------------------
    # Paging helpers
    # -------------------------

    def get_page(
        self,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        page: Optional[int] = None,
        size: Optional[int] = None,
    ) -> Dict[str, Any]:
        """One Spring page (0-based `page`, `size`, optional `sort`)."""
        q = dict(params or {})
        if page is not None:
            q["page"] = page
        if size is not None:
            q["size"] = size
        q.setdefault("page", 0)
        q.setdefault("size", self.default_page_size)
        return self.get(path, params=q)

    def list_paged(
        self,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        page_size: Optional[int] = None,
    ) -> Iterable[Dict[str, Any]]:
        params = dict(params or {})
        params.setdefault("size", page_size or self.default_page_size)
        params.setdefault("page", 0)

        while True:
            data = self.get(path, params=params)
            for it in page_content(data):
                yield it
            if not has_next_page(data):
                break
            params["page"] = int(data.get("number", params["page"])) + 1

    def fetch_all(
        self,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        page_size: Optional[int] = None,
    ) -> list[Dict[str, Any]]:
        return list(self.list_paged(path, params=params, page_size=page_size))

    # --------------------------------
    # Public convenience (delegations)
    # --------------------------------

    def login(self, username: str, password: str, *, remember_me: bool = False) -> CurrentUser:
        return self.auth.login(username, password, remember_me=remember_me)

    def logout(self) -> None:
        self.auth.logout()

    def get_my_profile(self) -> Dict[str, Any]:
        return self.profile.get()

    def get_semesters(self, *, is_active: Optional[bool] = None) -> list[Dict[str, Any]]:
        return self.semesters.list(is_active=is_active)


def _strip_bearer(token: Optional[str]) -> Optional[str]:
    if token and token.startswith("Bearer "):
        return token[len("Bearer "):]
    return token


def _json_or_message(resp: httpx.Response) -> Dict[str, Any]:
    try:
        data = resp.json()
    except ValueError:
        return {"message": resp.text}
    return data if isinstance(data, dict) else {"message": data}
