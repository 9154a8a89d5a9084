"""Shared fixtures for timecard parsing tests."""

import pytest

from timecard_core.config import TimecardSettings, get_settings


# Hours glued to the clock-out time, one line reading 8.00 reg + 5.50 OT
STRICT_TEXT = """\
ACME LOGISTICS                          Employee Timecard
Employee: Jordan Lee                    ID: 40211
Date      In             Dept    Out          Reg  OT1
01/03/24 Wed 7:00a E Sales Wed 8:30p8.005.50
01/01/24 Mon 9:00a Sales Mon 5:00p8.00
01/07/24 Sun 10:00a Stock Sun 2:30p4.50
Total Hours 26.00
"""

# Separate hour columns after the clock-out time
FALLBACK_TEXT = """\
Date      In          Dept    Out          Total  Reg   OT1
01/02/24 Tue 7:00a Sales Tue 3:00p 6.00 2.00
01/03/24 Wed 7:00a Sales Wed 9:00p 20.00 10.00
01/04/24 Thu 6:00a Stock Thu 8:00p 13.50 8.00 5.50
01/05/24 Fri 9:00a Stock Fri 1:00p 4.00
"""

# A leading total column and stray column letters after the clock-in
FLEXIBLE_TEXT = """\
Date     Total  In             Dept   Out
01/08/24 8.00 Mon 7:00a E Sales Mon 3:00p
01/09/24 Tue 7:00a E Sales Tue 5:00p 8.00 2.00
"""


@pytest.fixture
def strict_text() -> str:
    return STRICT_TEXT


@pytest.fixture
def fallback_text() -> str:
    return FALLBACK_TEXT


@pytest.fixture
def flexible_text() -> str:
    return FLEXIBLE_TEXT


@pytest.fixture
def settings() -> TimecardSettings:
    """Settings built from defaults, independent of the test environment."""
    return TimecardSettings(env="test")


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Each test sees settings loaded from its own environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
