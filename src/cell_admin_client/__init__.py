from .client import CellAdminClient
from .errors import (
    AuthenticationError,
    CellAdminHTTPError,
    PeriodSelectionError,
    PermissionDeniedError,
)
from .policy import (
    Action,
    CurrentUser,
    Role,
    can_edit_prayer,
    can_view_cell,
    can_view_prayer,
    is_allowed,
    require,
)
from .settings import ClientSettings
from .utils.periods import (
    DateRange,
    PeriodMode,
    PeriodSelection,
    PeriodUnit,
    Semester,
    last_day_of,
    period_params,
    resolve_period_range,
)

__all__ = [
    "CellAdminClient",
    "ClientSettings",
    "CellAdminHTTPError",
    "AuthenticationError",
    "PermissionDeniedError",
    "PeriodSelectionError",
    "Role",
    "Action",
    "CurrentUser",
    "is_allowed",
    "require",
    "can_edit_prayer",
    "can_view_cell",
    "can_view_prayer",
    "PeriodMode",
    "PeriodUnit",
    "PeriodSelection",
    "Semester",
    "DateRange",
    "last_day_of",
    "resolve_period_range",
    "period_params",
]
