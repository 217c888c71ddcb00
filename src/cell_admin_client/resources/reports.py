from typing import Any, Dict, Iterable, List, Optional

from ..utils.periods import PeriodSelection, SemesterLike
from .base import Resource


class Reports(Resource):
    def incomplete_checks(
        self,
        *,
        period: Optional[PeriodSelection] = None,
        semesters: Iterable[SemesterLike] = (),
        **params,
    ) -> List[Dict[str, Any]]:
        """Cells with weeks where attendance was never submitted."""
        return self._get("/api/reports/incomplete-checks", params=self._query(params, period, semesters))

    def available_years(self) -> List[int]:
        return self._get("/api/reports/available-years")
