# tests/conftest.py

import pytest

from eracal.core.time import instant_from_jdn, to_jdn
from eracal.engines.factory import make_calendar
from eracal.engines.specs import GREGORIAN, JAPANESE


def at(y, m, d):
    """Local midnight of a Gregorian date."""
    return instant_from_jdn(to_jdn(y, m, d))


@pytest.fixture
def japanese():
    return make_calendar(JAPANESE)


@pytest.fixture
def gregorian():
    return make_calendar(GREGORIAN)
