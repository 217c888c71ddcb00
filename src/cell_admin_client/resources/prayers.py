from typing import Any, Dict, Iterable, List, Optional

from ..utils.periods import PeriodSelection, SemesterLike
from .base import Resource


class Prayers(Resource):
    """
    Prayer requests. Date filters apply to the meeting date.
    Summaries (per member / per cell) live under /api/admin/prayers/summary.
    """

    def list(
        self,
        *,
        period: Optional[PeriodSelection] = None,
        semesters: Iterable[SemesterLike] = (),
        **params,
    ) -> Iterable[Dict[str, Any]]:
        return self._list("/api/prayers", params=self._query(params, period, semesters))

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
            "/api/prayers", params=self._query(params, period, semesters), page=page, size=size
        )

    def get(self, prayer_id: int) -> Dict[str, Any]:
        return self._get(f"/api/prayers/{prayer_id}")

    def create(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return self._post("/api/prayers", json=payload)

    def update(self, prayer_id: int, payload: Dict[str, Any]) -> Dict[str, Any]:
        return self._patch(f"/api/prayers/{prayer_id}", json=payload)

    def delete(self, prayer_id: int) -> Dict[str, Any]:
        return self._delete(f"/api/prayers/{prayer_id}")

    def available_years(self) -> List[int]:
        return self._get("/api/prayers/available-years")

    def member_summary(
        self,
        *,
        period: Optional[PeriodSelection] = None,
        semesters: Iterable[SemesterLike] = (),
        **params,
    ) -> Dict[str, Any]:
        return self._get(
            "/api/admin/prayers/summary/members", params=self._query(params, period, semesters)
        )

    def cell_summary(
        self,
        *,
        period: Optional[PeriodSelection] = None,
        semesters: Iterable[SemesterLike] = (),
        **params,
    ) -> Dict[str, Any]:
        return self._get(
            "/api/admin/prayers/summary/cells", params=self._query(params, period, semesters)
        )
