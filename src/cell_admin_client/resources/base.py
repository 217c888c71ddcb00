from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Iterable, Optional

from ..utils.periods import PeriodSelection, SemesterLike, period_params
from ..utils.utils import clean_params

if TYPE_CHECKING:
    from cell_admin_client.client import CellAdminClient


class Resource:
    def __init__(self, client: "CellAdminClient") -> None:
        self._c = client

    # convenience pass-throughs
    def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return self._c.get(path, params=params)

    def _post(self, path: str, json: Any = None, params: Optional[Dict[str, Any]] = None) -> Any:
        return self._c.post(path, json=json, params=params)

    def _put(self, path: str, json: Any = None) -> Any:
        return self._c.put(path, json=json)

    def _patch(self, path: str, json: Any = None) -> Any:
        return self._c.patch(path, json=json)

    def _delete(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return self._c.delete(path, params=params)

    def _page(self, path: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return self._c.get_page(path, params=params)

    def _list(
        self,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        page_size: Optional[int] = None,
    ) -> Iterable[Dict[str, Any]]:
        return self._c.list_paged(path, params=params, page_size=page_size)

    @staticmethod
    def _query(
        params: Optional[Dict[str, Any]],
        period: Optional[PeriodSelection] = None,
        semesters: Iterable[SemesterLike] = (),
    ) -> Dict[str, Any]:
        """Merge a resolved period filter into query params and drop empty values."""
        q = clean_params(params)
        q.update(period_params(period, semesters))
        return q
