from __future__ import annotations

from typing import Any, Dict

import httpx

from ..errors import AuthenticationError, CellAdminHTTPError
from ..logging import logger
from ..policy import CurrentUser
from .base import Resource


class Auth(Resource):
    """
    Session handling against /api/auth.

    login() stores the access/refresh token pair on the client and remembers the
    resulting CurrentUser; later requests carry `Authorization: Bearer <token>`.
    """

    def login(self, username: str, password: str, *, remember_me: bool = False) -> CurrentUser:
        # rememberMe asks the backend for a long-lived refresh token
        body = self._post(
            "/api/auth/login",
            json={"username": username, "password": password, "rememberMe": remember_me},
        )
        access, refresh = body.get("accessToken"), body.get("refreshToken")
        if not access or not refresh:
            raise AuthenticationError(200, "/api/auth/login", {"message": "Tokens not received"})

        self._c.set_tokens(access, refresh)
        user = CurrentUser.from_login(body, username)
        self._c.current_user = user
        logger.info("Logged in as %s (%s)", user.username, user.role.value)
        return user

    def logout(self) -> None:
        """Best-effort server logout; local tokens are always cleared."""
        try:
            if self._c.access_token:
                self._post("/api/auth/logout", json={})
        except (CellAdminHTTPError, httpx.HTTPError) as e:
            logger.warning("Logout call failed: %s", e)
        finally:
            self._c.clear_tokens()

    def refresh(self) -> str:
        """Force a token refresh; returns the new access token."""
        if not self._c.refresh_token:
            raise AuthenticationError(401, "/api/auth/refresh", {"message": "No refresh token"})
        self._c._refresh_access_token()
        return self._c.access_token or ""

    def check_username(self, username: str) -> bool:
        """True when the username is still free."""
        body = self._get("/api/auth/check-username", params={"username": username})
        return bool(body.get("isAvailable"))

    def register(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Self sign-up; creates a member record."""
        return self._post("/api/members", json=payload)

    def change_password(self, user_id: int, payload: Dict[str, Any]) -> Dict[str, Any]:
        return self._post(f"/api/auth/change-password/{user_id}", json=payload)
