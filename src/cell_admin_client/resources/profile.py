from typing import Any, Dict

from ..errors import AuthenticationError
from .base import Resource


class Profile(Resource):
    """The signed-in member's own profile (/api/me)."""

    def get(self) -> Dict[str, Any]:
        return self._get("/api/me/profile")

    def update(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return self._put("/api/me/profile", json=payload)

    def change_password(self, current_password: str, new_password: str) -> Dict[str, Any]:
        return self._put(
            "/api/me/password",
            json={"oldPassword": current_password, "newPassword": new_password},
        )

    def verify_password(self, password: str) -> None:
        body = self._post("/api/me/verify-password", json={"password": password})
        if not body.get("isValid"):
            raise AuthenticationError(200, "/api/me/verify-password", {"message": "Current password is incorrect"})
