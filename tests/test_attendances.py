import json

import httpx
import pytest

from cell_admin_client import CellAdminClient, PeriodSelection

BASE = "http://test"


@pytest.mark.unit
def test_process_batch_from_fixture(respx_mock, fx):
    batch = fx.json("attendance_batch.json")
    route = respx_mock.post(f"{BASE}/api/attendances/process").mock(
        return_value=httpx.Response(200, json=[{"id": 101}, {"id": 102}])
    )
    out = CellAdminClient(BASE).attendances.process(batch)
    assert [r["id"] for r in out] == [101, 102]
    assert json.loads(route.calls.last.request.content) == batch


@pytest.mark.unit
def test_process_rejects_unknown_status():
    c = CellAdminClient(BASE)
    with pytest.raises(ValueError, match="LATE"):
        c.attendances.process([{"memberId": 1, "date": "2025-03-09", "status": "LATE"}])


@pytest.mark.unit
def test_process_with_prayers_payload(respx_mock):
    route = respx_mock.post(f"{BASE}/api/cells/3/attendance-with-prayers").mock(
        return_value=httpx.Response(200, json={"ok": True})
    )
    items = [
        {"memberId": 11, "status": "PRESENT", "prayerContent": "가족 건강"},
        {"memberId": 12, "status": "ABSENT", "memo": "출장"},
    ]
    CellAdminClient(BASE).attendances.process_with_prayers(
        3, meeting_date="2025-03-09", items=items, cell_share="말씀 나눔", special_notes="새가족 방문"
    )
    assert json.loads(route.calls.last.request.content) == {
        "meetingDate": "2025-03-09",
        "cellShare": "말씀 나눔",
        "items": items,
        "specialNotes": "새가족 방문",
    }


@pytest.mark.unit
def test_process_with_prayers_omits_empty_notes(respx_mock):
    route = respx_mock.post(f"{BASE}/api/cells/3/attendance-with-prayers").mock(
        return_value=httpx.Response(200, json={})
    )
    CellAdminClient(BASE).attendances.process_with_prayers(
        3, meeting_date="2025-03-16", items=[{"memberId": 11, "status": "PRESENT"}]
    )
    body = json.loads(route.calls.last.request.content)
    assert "specialNotes" not in body
    assert body["cellShare"] == ""


@pytest.mark.unit
def test_report_dates_and_alerts(respx_mock):
    report = respx_mock.get(f"{BASE}/api/cells/3/attendance-report").mock(
        return_value=httpx.Response(200, json={"cellShare": "..."})
    )
    dates = respx_mock.get(f"{BASE}/api/cells/3/submitted-dates").mock(
        return_value=httpx.Response(200, json=["2025-03-02", "2025-03-09"])
    )
    alerts = respx_mock.get(f"{BASE}/api/attendances/alerts").mock(
        return_value=httpx.Response(200, json=[{"memberId": 12, "consecutiveAbsences": 3}])
    )

    a = CellAdminClient(BASE).attendances
    a.cell_report(3, "2025-03-09")
    assert report.calls.last.request.url.params["date"] == "2025-03-09"

    assert a.submitted_dates(3, year=2025) == ["2025-03-02", "2025-03-09"]
    assert dict(dates.calls.last.request.url.params) == {"year": "2025"}

    assert a.alerts(consecutiveAbsences=3, cellId=None)[0]["memberId"] == 12
    assert dict(alerts.calls.last.request.url.params) == {"consecutiveAbsences": "3"}


@pytest.mark.unit
def test_summaries_carry_group_by_and_period(respx_mock):
    overall = respx_mock.get(f"{BASE}/api/attendances/summary/overall").mock(
        return_value=httpx.Response(200, json={})
    )
    member = respx_mock.get(f"{BASE}/api/attendances/summary/members/11").mock(
        return_value=httpx.Response(200, json={})
    )
    rate = respx_mock.get(f"{BASE}/api/attendances/rate/overall").mock(
        return_value=httpx.Response(200, json={"attendanceRate": 70})
    )

    a = CellAdminClient(BASE).attendances
    a.overall_summary(group_by="MONTH", period=PeriodSelection.unit_of("YEAR", 2025))
    a.member_summary(11, group_by="WEEK", period=PeriodSelection.between("2025-03-01", "2025-03-31"))
    a.overall_rate()

    assert dict(overall.calls.last.request.url.params) == {
        "groupBy": "MONTH",
        "startDate": "2025-01-01",
        "endDate": "2025-12-31",
    }
    assert member.calls.last.request.url.params["startDate"] == "2025-03-01"
    assert dict(rate.calls.last.request.url.params) == {}
