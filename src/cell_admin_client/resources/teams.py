from typing import Any, Dict, Iterable, List, Optional

from .base import Resource


class Teams(Resource):
    def list(self, **params) -> Iterable[Dict[str, Any]]:
        return self._list("/api/teams", params=self._query(params))

    def page(self, page: int = 0, size: Optional[int] = None, **params) -> Dict[str, Any]:
        return self._c.get_page("/api/teams", params=self._query(params), page=page, size=size)

    def get(self, team_id: int) -> Dict[str, Any]:
        return self._get(f"/api/teams/{team_id}")

    def create(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return self._post("/api/teams", json=payload)

    def update(self, team_id: int, payload: Dict[str, Any]) -> Dict[str, Any]:
        return self._patch(f"/api/teams/{team_id}", json=payload)

    def delete(self, team_id: int) -> Dict[str, Any]:
        return self._delete(f"/api/teams/{team_id}")

    def members(self, team_id: int) -> List[Dict[str, Any]]:
        return self._get(f"/api/teams/{team_id}/members")

    def add_members(self, team_id: int, member_ids: Iterable[int]) -> Dict[str, Any]:
        # body is a bare JSON array of member ids
        return self._post(f"/api/teams/{team_id}/members", json=list(member_ids))
