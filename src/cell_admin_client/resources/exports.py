from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional, Tuple, Union

from ..logging import logger
from ..utils.periods import PeriodSelection, SemesterLike, period_params
from .base import Resource


class Exports(Resource):
    """
    Spreadsheet downloads. Each call returns (xlsx bytes, filename); the filename
    comes from Content-Disposition when the server sends one.
    """

    def cell_members(self, cell_id: int) -> Tuple[bytes, str]:
        return self._c.get_bytes(
            f"/api/export/cells/{cell_id}/members.xlsx",
            default_filename=f"cell-{cell_id}-members.xlsx",
        )

    def cell_attendances(
        self,
        cell_id: int,
        *,
        period: PeriodSelection,
        semesters: Iterable[SemesterLike] = (),
    ) -> Tuple[bytes, str]:
        dates = period_params(period, semesters)
        if not dates:
            raise ValueError("attendance export needs a concrete date range")
        return self._c.get_bytes(
            f"/api/export/cells/{cell_id}/attendances.xlsx",
            params=dates,
            default_filename=f"cell-{cell_id}-attendances.xlsx",
        )

    @staticmethod
    def save(download: Tuple[bytes, str], directory: Union[str, Path] = ".", filename: Optional[str] = None) -> Path:
        content, name = download
        target = Path(directory) / (filename or name)
        target.write_bytes(content)
        logger.info("Saved export %s (%s bytes)", target, len(content))
        return target
