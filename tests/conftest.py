import pytest

from dashboard.core import Dashboard, build_dashboard
from dashboard.settings import DashboardSettings


@pytest.fixture()
def dashboard() -> Dashboard:
    board = build_dashboard(DashboardSettings(seed=1234))
    try:
        yield board
    finally:
        board.store.close()
