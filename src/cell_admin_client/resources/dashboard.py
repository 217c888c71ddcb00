from typing import Any, Dict, Iterable, Optional

from ..utils.periods import PeriodSelection, SemesterLike, period_params
from .base import Resource


class Dashboard(Resource):
    def get(
        self,
        period: str = "3m",
        *,
        selection: Optional[PeriodSelection] = None,
        semesters: Iterable[SemesterLike] = (),
    ) -> Dict[str, Any]:
        """
        GET /api/dashboard?period=1m|3m|6m|12m
        A resolvable `selection` adds startDate/endDate, which the backend prefers.
        """
        params: Dict[str, Any] = {"period": period}
        params.update(period_params(selection, semesters))
        return self._get("/api/dashboard", params=params)
