from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Dict, FrozenSet, Mapping, Optional, Union

from .errors import PermissionDeniedError


class Role(str, Enum):
    EXECUTIVE = "EXECUTIVE"
    CELL_LEADER = "CELL_LEADER"
    MEMBER = "MEMBER"


class Action(str, Enum):
    VIEW_DASHBOARD = "view_dashboard"
    VIEW_MY_CELL = "view_my_cell"
    VIEW_BIRTHDAYS = "view_birthdays"
    VIEW_NOTICES = "view_notices"
    VIEW_PRAYERS = "view_prayers"
    CREATE_PRAYER = "create_prayer"
    EDIT_PRAYER = "edit_prayer"
    VIEW_MEMBER = "view_member"
    VIEW_CELL_DASHBOARD = "view_cell_dashboard"
    TAKE_ATTENDANCE = "take_attendance"
    VIEW_ATTENDANCE_ALERTS = "view_attendance_alerts"
    EXPORT_CELL = "export_cell"
    MANAGE_MEMBERS = "manage_members"
    MANAGE_TEAMS = "manage_teams"
    MANAGE_CELLS = "manage_cells"
    MANAGE_SEMESTERS = "manage_semesters"
    MANAGE_ATTENDANCES = "manage_attendances"
    MANAGE_NOTICES = "manage_notices"
    MANAGE_PRAYERS = "manage_prayers"
    VIEW_STATISTICS = "view_statistics"
    VIEW_INCOMPLETE_CHECKS = "view_incomplete_checks"
    VIEW_PRAYER_SUMMARIES = "view_prayer_summaries"
    RESET_PASSWORD = "reset_password"


_MEMBER_ACTIONS: FrozenSet[Action] = frozenset(
    {
        Action.VIEW_DASHBOARD,
        Action.VIEW_MY_CELL,
        Action.VIEW_BIRTHDAYS,
        Action.VIEW_NOTICES,
        Action.VIEW_PRAYERS,
        Action.EDIT_PRAYER,
        Action.VIEW_MEMBER,
    }
)

_CELL_LEADER_ACTIONS: FrozenSet[Action] = _MEMBER_ACTIONS | {
    Action.CREATE_PRAYER,
    Action.VIEW_CELL_DASHBOARD,
    Action.TAKE_ATTENDANCE,
    Action.VIEW_ATTENDANCE_ALERTS,
    Action.EXPORT_CELL,
}

POLICY: Dict[Role, FrozenSet[Action]] = {
    Role.MEMBER: _MEMBER_ACTIONS,
    Role.CELL_LEADER: _CELL_LEADER_ACTIONS,
    Role.EXECUTIVE: frozenset(Action),
}


def normalize_role(value: Union[Role, str, None]) -> Role:
    """Unknown or missing roles are treated as MEMBER."""
    if isinstance(value, Role):
        return value
    try:
        return Role(str(value or "").upper())
    except ValueError:
        return Role.MEMBER


def allowed_actions(role: Union[Role, str, None]) -> FrozenSet[Action]:
    return POLICY[normalize_role(role)]


def is_allowed(role: Union[Role, str, None], action: Union[Action, str]) -> bool:
    return Action(action) in allowed_actions(role)


def require(role: Union[Role, str, None], action: Union[Action, str]) -> None:
    if not is_allowed(role, action):
        raise PermissionDeniedError(normalize_role(role).value, Action(action).value)


@dataclass(frozen=True)
class CurrentUser:
    id: int
    member_id: Optional[int]
    username: str
    name: str
    role: Role
    cell_id: Optional[int] = None
    cell_name: Optional[str] = None

    @classmethod
    def from_login(cls, data: Mapping[str, Any], username: str) -> "CurrentUser":
        """Build from the /auth/login response body."""
        return cls(
            id=data.get("userId"),
            member_id=data.get("memberId"),
            username=username,
            name=data.get("name") or username,
            role=normalize_role(data.get("role")),
            cell_id=data.get("cellId"),
            cell_name=data.get("cellName"),
        )

    def can(self, action: Union[Action, str]) -> bool:
        return is_allowed(self.role, action)


def can_view_cell(user: CurrentUser, cell_id: Optional[int]) -> bool:
    if user.role is Role.EXECUTIVE:
        return True
    return cell_id is not None and user.cell_id == cell_id


def can_edit_prayer(user: CurrentUser, prayer: Mapping[str, Any]) -> bool:
    """EXECUTIVE, the prayer's author, or the leader of the prayer member's cell."""
    if user.role is Role.EXECUTIVE:
        return True
    author = (prayer.get("createdBy") or {}).get("id")
    if author is not None and author == user.id:
        return True
    member_cell = ((prayer.get("member") or {}).get("cell") or {}).get("id")
    return user.role is Role.CELL_LEADER and member_cell is not None and member_cell == user.cell_id


def can_view_prayer(user: CurrentUser, prayer: Mapping[str, Any], today: Optional[date] = None) -> bool:
    """
    EXECUTIVE and the author always; a CELL_LEADER only for prayers written this
    year by members of their own cell.
    """
    if user.role is Role.EXECUTIVE:
        return True
    author = (prayer.get("createdBy") or {}).get("id")
    if author is not None and author == user.id:
        return True
    if user.role is not Role.CELL_LEADER:
        return False
    created = str(prayer.get("createdAt") or "")[:10]
    try:
        created_year = date.fromisoformat(created).year
    except ValueError:
        return False
    member_cell = ((prayer.get("member") or {}).get("cell") or {}).get("id")
    this_year = (today or date.today()).year
    return created_year == this_year and member_cell is not None and member_cell == user.cell_id
