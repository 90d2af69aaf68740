import pytest

from src.audit_sla.application import SLADeadlineService, StaticSLAWindowsProvider
from src.audit_sla.domain import BusinessCalendar, SLAWindowsConfig
from tests.helpers import et, fixed_clock


@pytest.fixture
def calendar():
    # Wednesday 2025-01-08 14:00 ET
    return BusinessCalendar(clock=fixed_clock(et(2025, 1, 8, 14, 0)))


@pytest.fixture
def windows_config():
    return SLAWindowsConfig()


@pytest.fixture
def service(calendar, windows_config):
    return SLADeadlineService(StaticSLAWindowsProvider(windows_config), calendar)
