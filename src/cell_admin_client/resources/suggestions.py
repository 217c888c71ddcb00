# Plain CRUD wrappers, no filters.
from typing import Any, Dict, List

from .base import Resource


class Suggestions(Resource):
    def list(self) -> List[Dict[str, Any]]:
        return self._get("/api/suggestions")

    def get(self, suggestion_id: int) -> Dict[str, Any]:
        return self._get(f"/api/suggestions/{suggestion_id}")

    def create(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return self._post("/api/suggestions", json=payload)

    def update(self, suggestion_id: int, payload: Dict[str, Any]) -> Dict[str, Any]:
        return self._patch(f"/api/suggestions/{suggestion_id}", json=payload)

    def delete(self, suggestion_id: int) -> Dict[str, Any]:
        return self._delete(f"/api/suggestions/{suggestion_id}")
