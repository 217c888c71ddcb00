from typing import Any, Dict, Iterable, List, Optional

from ..utils.periods import PeriodSelection, SemesterLike
from .base import Resource


class Cells(Resource):
    """
    Cells (small groups) and their attendance statistics.

    Statistic endpoints accept either explicit startDate/endDate or
    year/month/quarter/half; with no period at all the backend uses the
    currently active semester. Pass `period` (+ `semesters` for SEMESTER
    selections) to send a resolved startDate/endDate pair instead.
    """

    def list(
        self,
        *,
        period: Optional[PeriodSelection] = None,
        semesters: Iterable[SemesterLike] = (),
        **params,
    ) -> Iterable[Dict[str, Any]]:
        return self._list("/api/cells", params=self._query(params, period, semesters))

    def page(
        self,
        page: int = 0,
        size: Optional[int] = None,
        *,
        period: Optional[PeriodSelection] = None,
        semesters: Iterable[SemesterLike] = (),
        **params,
    ) -> Dict[str, Any]:
        return self._c.get_page(
            "/api/cells", params=self._query(params, period, semesters), page=page, size=size
        )

    def get(self, cell_id: int) -> Dict[str, Any]:
        return self._get(f"/api/cells/{cell_id}")

    def create(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return self._post("/api/cells", json=payload)

    def update(self, cell_id: int, payload: Dict[str, Any]) -> Dict[str, Any]:
        return self._patch(f"/api/cells/{cell_id}", json=payload)

    def delete(self, cell_id: int) -> Dict[str, Any]:
        return self._delete(f"/api/cells/{cell_id}")

    def available_years(self) -> List[int]:
        """Years in which cells were organised."""
        return self._get("/api/cells/available-years")

    # ---------- per-cell statistics ----------

    def attendance_summary(
        self,
        cell_id: int,
        *,
        group_by: Optional[str] = None,
        period: Optional[PeriodSelection] = None,
        semesters: Iterable[SemesterLike] = (),
        **params,
    ) -> Dict[str, Any]:
        params["groupBy"] = group_by
        return self._get(
            f"/api/cells/{cell_id}/attendances/summary",
            params=self._query(params, period, semesters),
        )

    def attendance_rate(
        self,
        cell_id: int,
        *,
        period: Optional[PeriodSelection] = None,
        semesters: Iterable[SemesterLike] = (),
        **params,
    ) -> Dict[str, Any]:
        return self._get(
            f"/api/cells/{cell_id}/attendance-rate", params=self._query(params, period, semesters)
        )

    def available_years_for(self, cell_id: int) -> List[int]:
        """Years with data for one cell, newest first."""
        return self._get(f"/api/cells/{cell_id}/available-years")

    def dashboard_summary(
        self,
        cell_id: int,
        *,
        period: Optional[PeriodSelection] = None,
        semesters: Iterable[SemesterLike] = (),
        **params,
    ) -> Dict[str, Any]:
        """Cell leader dashboard: present count, headcount, rate, unchecked weeks."""
        return self._get(
            f"/api/cells/{cell_id}/dashboard-summary", params=self._query(params, period, semesters)
        )

    def member_attendance_rates(
        self,
        cell_id: int,
        *,
        period: Optional[PeriodSelection] = None,
        semesters: Iterable[SemesterLike] = (),
        **params,
    ) -> List[Dict[str, Any]]:
        return self._get(
            f"/api/cells/{cell_id}/members/attendance-rate",
            params=self._query(params, period, semesters),
        )

    def member_attendance_summary(self, cell_id: int) -> List[Dict[str, Any]]:
        """Per-member last attendance date and consecutive absences, as of now."""
        return self._get(f"/api/cells/{cell_id}/members/attendance-summary")
