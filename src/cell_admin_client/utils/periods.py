# cell_admin_client/utils/periods.py
from __future__ import annotations

import calendar as _calendar
import operator
from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum
from typing import Any, Dict, Iterable, Mapping, Optional, Union

from ..errors import PeriodSelectionError


class PeriodMode(str, Enum):
    RANGE = "RANGE"
    UNIT = "UNIT"


class PeriodUnit(str, Enum):
    YEAR = "YEAR"
    HALF = "HALF"
    QUARTER = "QUARTER"
    MONTH = "MONTH"
    SEMESTER = "SEMESTER"


# unit -> allowed sub values
_SUB_VALUE_BOUNDS: Dict[PeriodUnit, int] = {
    PeriodUnit.HALF: 2,
    PeriodUnit.QUARTER: 4,
    PeriodUnit.MONTH: 12,
}


@dataclass(frozen=True)
class PeriodSelection:
    """
    What the user picked in a period filter.

    - RANGE: explicit_start / explicit_end (YYYY-MM-DD) are used verbatim.
    - UNIT:  unit + year (+ sub_value for HALF/QUARTER/MONTH), or unit=SEMESTER + semester_id.
    """

    mode: PeriodMode = PeriodMode.UNIT
    unit: Optional[PeriodUnit] = None
    year: Optional[int] = None
    sub_value: Optional[int] = None
    semester_id: Optional[int] = None
    explicit_start: Optional[str] = None
    explicit_end: Optional[str] = None

    @classmethod
    def between(cls, start: Optional[str], end: Optional[str]) -> "PeriodSelection":
        return cls(mode=PeriodMode.RANGE, explicit_start=start, explicit_end=end)

    @classmethod
    def unit_of(
        cls, unit: Union[PeriodUnit, str], year: Optional[int] = None, sub_value: Optional[int] = None
    ) -> "PeriodSelection":
        return cls(mode=PeriodMode.UNIT, unit=_as_unit(unit), year=year, sub_value=sub_value)

    @classmethod
    def semester(cls, semester_id: Optional[int]) -> "PeriodSelection":
        return cls(mode=PeriodMode.UNIT, unit=PeriodUnit.SEMESTER, semester_id=semester_id)


@dataclass(frozen=True)
class Semester:
    id: int
    name: str
    start_date: str
    end_date: str
    is_active: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Semester":
        return cls(
            id=data["id"],
            name=data.get("name") or "",
            start_date=data["startDate"],
            end_date=data["endDate"],
            is_active=bool(data.get("isActive", False)),
        )

    def contains(self, day: date) -> bool:
        return self.start_date <= day.isoformat() <= self.end_date


@dataclass(frozen=True)
class DateRange:
    start_date: str
    end_date: str

    @classmethod
    def of(cls, start: date, end: date) -> "DateRange":
        return cls(start.isoformat(), end.isoformat())

    def as_params(self) -> Dict[str, str]:
        return {"startDate": self.start_date, "endDate": self.end_date}


SemesterLike = Union[Semester, Mapping[str, Any]]


def _as_semester(s: SemesterLike) -> Semester:
    return s if isinstance(s, Semester) else Semester.from_dict(s)


# --- Calendar arithmetic -----------------------------------------------------

def last_day_of(year: int, month: int) -> int:
    """Number of days in `month` of `year` (Gregorian, leap-year aware)."""
    if not (1 <= month <= 12):
        raise PeriodSelectionError(f"Invalid month: {month} (expected 1..12)")
    return _calendar.monthrange(year, month)[1]


def month_range(year: int, start_month: int, end_month: int) -> DateRange:
    """First day of start_month .. last day of end_month, both inside `year`."""
    start = date(year, start_month, 1)
    end = date(year, end_month, last_day_of(year, end_month))
    return DateRange.of(start, end)


def _as_int(value: Any) -> Optional[int]:
    """Exact integers only; floats, strings and bools are not coerced."""
    if isinstance(value, bool):
        return None
    try:
        return operator.index(value)
    except TypeError:
        return None


def _as_mode(mode: Union[PeriodMode, str]) -> PeriodMode:
    try:
        return PeriodMode(mode)
    except ValueError:
        raise PeriodSelectionError(f"Unknown period mode: {mode!r}") from None


def _as_unit(unit: Union[PeriodUnit, str]) -> PeriodUnit:
    try:
        return PeriodUnit(unit)
    except ValueError:
        raise PeriodSelectionError(f"Unknown period unit: {unit!r}") from None


def _check_year(year: Any) -> int:
    y = _as_int(year)
    if y is None or not (1 <= y <= 9999):
        raise PeriodSelectionError(f"Invalid year: {year!r} (expected an integer 1..9999)")
    return y


def _check_sub_value(unit: PeriodUnit, sub_value: Any) -> int:
    upper = _SUB_VALUE_BOUNDS[unit]
    v = _as_int(sub_value)
    if v is None or not (1 <= v <= upper):
        raise PeriodSelectionError(
            f"Invalid {unit.value.lower()} value: {sub_value!r} (expected an integer 1..{upper})"
        )
    return v


# --- Resolver ------------------------------------------------------------------

def resolve_period_range(
    selection: PeriodSelection, semesters: Iterable[SemesterLike] = ()
) -> Optional[DateRange]:
    """
    Turn a period selection into an inclusive DateRange, or None for "no date filter".

    Precedence:
      1) RANGE    -> explicit dates verbatim (None if either is missing)
      2) SEMESTER -> the matching semester's dates (None if absent/unknown)
      3) other units without a year -> None
      4) YEAR / HALF / QUARTER / MONTH within the year; a missing sub value means full year

    Out-of-range sub values and years raise PeriodSelectionError.
    """
    if _as_mode(selection.mode) is PeriodMode.RANGE:
        if selection.explicit_start and selection.explicit_end:
            return DateRange(selection.explicit_start, selection.explicit_end)
        return None

    unit = _as_unit(selection.unit) if selection.unit else PeriodUnit.YEAR

    if unit is PeriodUnit.SEMESTER:
        if selection.semester_id is None:
            return None
        for s in semesters:
            sem = _as_semester(s)
            if sem.id == selection.semester_id:
                return DateRange(sem.start_date, sem.end_date)
        return None

    if selection.year is None or selection.year == "":
        return None
    year = _check_year(selection.year)

    if unit is PeriodUnit.YEAR or selection.sub_value is None:
        return month_range(year, 1, 12)

    sub = _check_sub_value(unit, selection.sub_value)
    if unit is PeriodUnit.HALF:
        return month_range(year, 1, 6) if sub == 1 else month_range(year, 7, 12)
    if unit is PeriodUnit.QUARTER:
        start_month = (sub - 1) * 3 + 1
        return month_range(year, start_month, start_month + 2)
    # MONTH
    return month_range(year, sub, sub)


def period_params(
    selection: Optional[PeriodSelection], semesters: Iterable[SemesterLike] = ()
) -> Dict[str, str]:
    """Query params for a selection; empty when there is nothing to filter on."""
    if selection is None:
        return {}
    rng = resolve_period_range(selection, semesters)
    return rng.as_params() if rng else {}


# --- Presets -----------------------------------------------------------------

def this_week_range(today: Optional[date] = None) -> DateRange:
    """Sunday..Saturday of the week containing `today`."""
    today = today or date.today()
    # date.weekday(): Monday=0 .. Sunday=6
    sunday = today - timedelta(days=(today.weekday() + 1) % 7)
    return DateRange.of(sunday, sunday + timedelta(days=6))


def this_month_range(today: Optional[date] = None) -> DateRange:
    today = today or date.today()
    return month_range(today.year, today.month, today.month)


def _months_back(day: date, months: int) -> date:
    total = day.year * 12 + (day.month - 1) - months
    y, m = divmod(total, 12)
    m += 1
    return date(y, m, min(day.day, last_day_of(y, m)))


_RECENT_PERIODS: Dict[str, int] = {"1m": 1, "3m": 3, "6m": 6, "12m": 12}


def recent_period_range(period: str = "3m", today: Optional[date] = None) -> DateRange:
    """
    Look-back window ending today for dashboard codes "1m" | "3m" | "6m" | "12m".
    Unknown codes fall back to "3m".
    """
    today = today or date.today()
    months = _RECENT_PERIODS.get(period, 3)
    return DateRange.of(_months_back(today, months), today)


def preset_range(preset: str, today: Optional[date] = None) -> Optional[DateRange]:
    if preset == "thisWeek":
        return this_week_range(today)
    if preset == "thisMonth":
        return this_month_range(today)
    if preset == "all":
        return None
    raise PeriodSelectionError(f"Unknown date preset: {preset!r}")


# --- Semester lookups --------------------------------------------------------

def semester_containing(semesters: Iterable[SemesterLike], day: Optional[date] = None) -> Optional[Semester]:
    day = day or date.today()
    for s in semesters:
        sem = _as_semester(s)
        if sem.contains(day):
            return sem
    return None


def active_semester(semesters: Iterable[SemesterLike]) -> Optional[Semester]:
    for s in semesters:
        sem = _as_semester(s)
        if sem.is_active:
            return sem
    return None
