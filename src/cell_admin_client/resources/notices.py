from typing import Any, Dict, Iterable, List, Optional

from ..utils.periods import PeriodSelection, SemesterLike
from .base import Resource

NOTICE_TARGETS = ("ALL", "CELL_LEADER", "EXECUTIVE", "CELL")


class Notices(Resource):
    def list(
        self,
        *,
        period: Optional[PeriodSelection] = None,
        semesters: Iterable[SemesterLike] = (),
        **params,
    ) -> Iterable[Dict[str, Any]]:
        return self._list("/api/notices", params=self._query(params, period, semesters))

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
            "/api/notices", params=self._query(params, period, semesters), page=page, size=size
        )

    def get(self, notice_id: int) -> Dict[str, Any]:
        return self._get(f"/api/notices/{notice_id}")

    def create(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        payload: {title, content, target, targetCellId?, pinned?, publishAt?, expireAt?}
        A CELL-targeted notice needs targetCellId.
        """
        target = payload.get("target")
        if target not in NOTICE_TARGETS:
            raise ValueError(f"Invalid notice target: {target!r}")
        if target == "CELL" and not payload.get("targetCellId"):
            raise ValueError("targetCellId is required for CELL notices")
        return self._post("/api/notices", json=payload)

    def update(self, notice_id: int, payload: Dict[str, Any]) -> Dict[str, Any]:
        return self._patch(f"/api/notices/{notice_id}", json=payload)

    def delete(self, notice_id: int) -> Dict[str, Any]:
        return self._delete(f"/api/notices/{notice_id}")

    def available_years(self) -> List[int]:
        return self._get("/api/notices/available-years")
