import os

import pytest

from cell_admin_client import CellAdminClient, PeriodSelection

BASE_URL = os.environ.get("CELL_ADMIN_BASE_URL")
USERNAME = os.environ.get("CELL_ADMIN_USERNAME")
PASSWORD = os.environ.get("CELL_ADMIN_PASSWORD")
TOKEN = os.environ.get("CELL_ADMIN_TOKEN")

pytestmark = pytest.mark.integration


@pytest.fixture(scope="module")
def client():
    if not BASE_URL or not (TOKEN or (USERNAME and PASSWORD)):
        pytest.skip(
            "Set CELL_ADMIN_BASE_URL and either TOKEN or USERNAME/PASSWORD for integration tests."
        )
    c = CellAdminClient(base_url=BASE_URL, username=USERNAME, password=PASSWORD, token=TOKEN)
    yield c
    c.close()


def test_semesters(client):
    semesters = client.semesters.list_typed()
    assert isinstance(semesters, list)
    for s in semesters:
        assert s.start_date <= s.end_date


def test_cells_first_page(client):
    page = client.cells.page(0, 5)
    assert isinstance(page, dict)
    assert "content" in page and "totalElements" in page


def test_members_iteration_is_bounded(client):
    pulled = 0
    for _ in client.members.list():
        pulled += 1
        if pulled >= 5:
            break
    assert pulled >= 0


def test_dashboard_with_active_semester(client):
    semesters = client.semesters.list()
    active = client.semesters.active()
    selection = PeriodSelection.semester(active.id) if active else None
    data = client.dashboard.get("3m", selection=selection, semesters=semesters)
    assert isinstance(data, dict)
