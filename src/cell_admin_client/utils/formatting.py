# cell_admin_client/utils/formatting.py
from __future__ import annotations

import math
from datetime import date
from typing import Any, Dict, Iterable, Mapping, Optional, Union

ROLE_LABELS: Dict[str, str] = {
    "EXECUTIVE": "임원단",
    "CELL_LEADER": "셀장",
    "MEMBER": "셀원",
}

NOTICE_TARGET_LABELS: Dict[str, str] = {
    "ALL": "전체",
    "CELL_LEADER": "셀장",
    "EXECUTIVE": "임원단",
    "CELL": "특정 셀",
}

ATTENDANCE_STATUS_LABELS: Dict[str, str] = {
    "PRESENT": "출석",
    "ABSENT": "결석",
}

PRAYER_VISIBILITY_LABELS: Dict[str, str] = {
    "PRIVATE": "비공개",
    "CELL": "셀 공개",
    "ALL": "전체 공개",
}


def translate_role(role: Optional[str]) -> str:
    return ROLE_LABELS.get(role or "", role or "")


def translate_notice_target(target: Optional[str]) -> str:
    return NOTICE_TARGET_LABELS.get(target or "", target or "")


def translate_attendance_status(status: Optional[str]) -> str:
    if not status:
        return ""
    return ATTENDANCE_STATUS_LABELS.get(status, status)


def translate_prayer_visibility(visibility: Optional[str]) -> str:
    return PRAYER_VISIBILITY_LABELS.get(visibility or "", visibility or "")


def prayer_visibility_options() -> list[dict[str, str]]:
    """[{value, label}] pairs for a visibility selector, in declaration order."""
    return [{"value": k, "label": v} for k, v in PRAYER_VISIBILITY_LABELS.items()]


def format_date_korean(value: Optional[str]) -> str:
    """'2025-03-09' -> '2025년 3월 9일'. Unparseable input is returned unchanged."""
    if not value:
        return ""
    try:
        d = date.fromisoformat(value[:10])
    except ValueError:
        return value
    return f"{d.year}년 {d.month}월 {d.day}일"


def format_name_with_birthdate(member: Mapping[str, Any]) -> str:
    """'홍길동' + 1990-01-03 -> '홍길동 (900103)'."""
    name = member.get("name") or ""
    birth = member.get("birthDate")
    if not birth:
        return name
    try:
        d = date.fromisoformat(str(birth)[:10])
    except ValueError:
        return name
    return f"{name} ({d.strftime('%y%m%d')})"


def format_display_name(member: Mapping[str, Any], all_members: Iterable[Mapping[str, Any]]) -> str:
    """Append the birthdate only when another member shares the same name."""
    if not member:
        return ""
    name = member.get("name")
    same = sum(1 for m in all_members if m.get("name") == name)
    if same > 1:
        return format_name_with_birthdate(member)
    return name or ""


def normalize_number_input(value: Union[int, float, str, None]) -> Optional[Union[int, float]]:
    """Form value -> number, or None for empty / non-numeric input."""
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    try:
        f = float(str(value).strip())
    except ValueError:
        return None
    if not math.isfinite(f):
        return None
    return int(f) if f.is_integer() else f
