from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from ..logging import logger
from ..utils.periods import PeriodSelection, SemesterLike
from .base import Resource

ATTENDANCE_STATUSES = ("PRESENT", "ABSENT")


class Attendances(Resource):
    """
    Attendance records and attendance statistics.

    - Records: GET/DELETE /api/attendances, POST /api/attendances/process
    - Weekly cell report: POST /api/cells/{id}/attendance-with-prayers
      (attendance + prayer requests + cell sharing notes in one call)
    - Rates and summaries are computed server-side.
    """

    def list(
        self,
        *,
        period: Optional[PeriodSelection] = None,
        semesters: Iterable[SemesterLike] = (),
        **params,
    ) -> Iterable[Dict[str, Any]]:
        return self._list("/api/attendances", params=self._query(params, period, semesters))

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
            "/api/attendances", params=self._query(params, period, semesters), page=page, size=size
        )

    def process(self, records: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """
        Create/update a batch of records.
        Each record: {memberId, date (YYYY-MM-DD), status, memo?, createdById}
        """
        batch = list(records)
        for r in batch:
            _check_status(r.get("status"))
        return self._post("/api/attendances/process", json=batch)

    def process_with_prayers(
        self,
        cell_id: int,
        *,
        meeting_date: str,
        items: Iterable[Dict[str, Any]],
        cell_share: str = "",
        special_notes: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        items: [{memberId, status, memo?, prayerContent?}]
        """
        rows = list(items)
        for r in rows:
            _check_status(r.get("status"))
        payload: Dict[str, Any] = {
            "meetingDate": meeting_date,
            "cellShare": cell_share,
            "items": rows,
        }
        if special_notes:
            payload["specialNotes"] = special_notes
        return self._post(f"/api/cells/{cell_id}/attendance-with-prayers", json=payload)

    def cell_report(self, cell_id: int, meeting_date: str) -> Dict[str, Any]:
        """Sharing notes and special remarks submitted for one meeting date."""
        return self._get(f"/api/cells/{cell_id}/attendance-report", params={"date": meeting_date})

    def submitted_dates(
        self, cell_id: int, *, year: Optional[int] = None, month: Optional[int] = None
    ) -> List[str]:
        return self._get(
            f"/api/cells/{cell_id}/submitted-dates", params={"year": year, "month": month}
        )

    def delete(self, attendance_id: int) -> Dict[str, Any]:
        return self._delete(f"/api/attendances/{attendance_id}")

    def alerts(self, **params) -> List[Dict[str, Any]]:
        """Members with consecutive absences (e.g. consecutiveAbsences=3, cellId=...)."""
        return self._get("/api/attendances/alerts", params=self._query(params))

    def overall_rate(
        self,
        *,
        period: Optional[PeriodSelection] = None,
        semesters: Iterable[SemesterLike] = (),
        **params,
    ) -> Dict[str, Any]:
        return self._get("/api/attendances/rate/overall", params=self._query(params, period, semesters))

    def overall_summary(
        self,
        *,
        group_by: Optional[str] = None,
        period: Optional[PeriodSelection] = None,
        semesters: Iterable[SemesterLike] = (),
        **params,
    ) -> Dict[str, Any]:
        params["groupBy"] = group_by
        return self._get(
            "/api/attendances/summary/overall", params=self._query(params, period, semesters)
        )

    def member_summary(
        self,
        member_id: int,
        *,
        group_by: Optional[str] = None,
        period: Optional[PeriodSelection] = None,
        semesters: Iterable[SemesterLike] = (),
        **params,
    ) -> Dict[str, Any]:
        params["groupBy"] = group_by
        return self._get(
            f"/api/attendances/summary/members/{member_id}",
            params=self._query(params, period, semesters),
        )

    def available_years(self) -> List[int]:
        return self._get("/api/statistics/available-years")


def _check_status(status: Any) -> None:
    if status not in ATTENDANCE_STATUSES:
        logger.error("Rejected attendance status %r", status)
        raise ValueError(f"Invalid attendance status: {status!r} (expected one of {ATTENDANCE_STATUSES})")
