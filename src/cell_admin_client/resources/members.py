from typing import Any, Dict, Iterable, List, Optional

from .base import Resource


class Members(Resource):
    """
    Members (성도) CRUD plus cell/team membership.

    List filters: name, joinYear, gender, role, unassigned, cellId, active, month
    (birthday month), excludeRoles (list, sent as repeated params), sort.
    """

    def list(self, **params) -> Iterable[Dict[str, Any]]:
        return self._list("/api/members", params=self._query(params))

    def page(self, page: int = 0, size: Optional[int] = None, **params) -> Dict[str, Any]:
        return self._c.get_page("/api/members", params=self._query(params), page=page, size=size)

    def get(self, member_id: int) -> Dict[str, Any]:
        return self._get(f"/api/members/{member_id}")

    def create(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return self._post("/api/members", json=payload)

    def update(self, member_id: int, payload: Dict[str, Any]) -> Dict[str, Any]:
        return self._patch(f"/api/members/{member_id}", json=payload)

    def delete(self, member_id: int) -> Dict[str, Any]:
        return self._delete(f"/api/members/{member_id}")

    def unassign_from_cell(self, member_id: int) -> Dict[str, Any]:
        return self._delete(f"/api/members/{member_id}/cell")

    def teams(self, member_id: int) -> List[Dict[str, Any]]:
        return self._get(f"/api/members/{member_id}/teams")

    def add_to_team(self, member_id: int, team_id: int) -> Dict[str, Any]:
        return self._post(f"/api/members/{member_id}/teams/{team_id}")

    def remove_from_team(self, member_id: int, team_id: int) -> Dict[str, Any]:
        return self._delete(f"/api/members/{member_id}/teams/{team_id}")

    def available_join_years(self) -> List[int]:
        return self._get("/api/members/available-join-years")

    def unassigned(self, *, exclude_roles: Iterable[str] = ("EXECUTIVE",), size: int = 100) -> List[Dict[str, Any]]:
        """
        Members without a cell, newest first. The backend may answer with a page
        envelope or a bare list; both are flattened to a list.
        """
        data = self._get(
            "/api/members",
            params={
                "unassigned": True,
                "excludeRoles": list(exclude_roles),
                "size": size,
                "sort": "createdAt,desc",
            },
        )
        if isinstance(data, list):
            return data
        if isinstance(data, dict) and isinstance(data.get("content"), list):
            return data["content"]
        return []

    def reset_password(self, member_id: int) -> str:
        """Admin reset; returns the temporary password issued by the backend."""
        body = self._post(f"/api/admin/members/{member_id}/reset-password")
        return body.get("temporaryPassword", "")
