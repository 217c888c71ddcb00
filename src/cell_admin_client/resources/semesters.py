from __future__ import annotations

from typing import Any, Dict, List, Optional

from ..utils.periods import Semester, active_semester
from .base import Resource


class Semesters(Resource):
    def list(self, *, is_active: Optional[bool] = None) -> List[Dict[str, Any]]:
        return self._get("/api/semesters", params={"isActive": is_active})

    def list_typed(self, *, is_active: Optional[bool] = None) -> List[Semester]:
        return [Semester.from_dict(s) for s in self.list(is_active=is_active)]

    def active(self) -> Optional[Semester]:
        return active_semester(self.list(is_active=True))

    def get(self, semester_id: int) -> Dict[str, Any]:
        return self._get(f"/api/semesters/{semester_id}")

    def create(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """payload: {name, startDate, endDate}; startDate must not be after endDate."""
        start, end = payload.get("startDate"), payload.get("endDate")
        if start and end and start > end:
            raise ValueError(f"Semester startDate {start} is after endDate {end}")
        return self._post("/api/semesters", json=payload)

    def update(self, semester_id: int, payload: Dict[str, Any]) -> Dict[str, Any]:
        return self._patch(f"/api/semesters/{semester_id}", json=payload)

    def delete(self, semester_id: int) -> Dict[str, Any]:
        return self._delete(f"/api/semesters/{semester_id}")
