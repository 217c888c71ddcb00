from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from ..utils.periods import PeriodSelection, SemesterLike, period_params
from .base import Resource

NEWCOMER_GROUPINGS = ("MONTH", "SEMESTER")


class Statistics(Resource):
    """
    Statistics dashboard (read-only). Aggregation happens server-side.
    """

    def attendance_trend(
        self,
        *,
        group_by: Optional[str] = None,
        period: Optional[PeriodSelection] = None,
        semesters: Iterable[SemesterLike] = (),
        **params,
    ) -> List[Dict[str, Any]]:
        """params: startDate, endDate, cellId, memberId, status."""
        params["groupBy"] = group_by
        return self._get("/api/statistics/attendance-trend", params=self._query(params, period, semesters))

    def overall_attendance(
        self,
        *,
        period: Optional[PeriodSelection] = None,
        semesters: Iterable[SemesterLike] = (),
        **params,
    ) -> Dict[str, Any]:
        return self._get(
            "/api/statistics/overall-attendance", params=self._query(params, period, semesters)
        )

    def available_years(self) -> List[int]:
        return self._get("/api/statistics/available-years")

    def newcomers(
        self,
        group_by: str,
        *,
        period: PeriodSelection,
        semesters: Iterable[SemesterLike] = (),
    ) -> List[Dict[str, Any]]:
        """Newcomer registrations per MONTH or SEMESTER; a concrete period is required."""
        if group_by not in NEWCOMER_GROUPINGS:
            raise ValueError(f"group_by must be one of {NEWCOMER_GROUPINGS}, got {group_by!r}")
        dates = period_params(period, semesters)
        if not dates:
            raise ValueError("newcomer statistics need a concrete date range")
        return self._get("/api/statistics/newcomers", params={"groupBy": group_by, **dates})

    def semester_summary(self, semester_id: Optional[int] = None) -> Dict[str, Any]:
        """Key figures and demographics; the active semester when no id is given."""
        return self._get("/api/statistics/semester-summary", params={"semesterId": semester_id})
