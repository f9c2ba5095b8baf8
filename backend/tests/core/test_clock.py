# backend/tests/core/test_clock.py
"""Tests for the injectable time source."""

from datetime import date, datetime

import pytest

from slotbook.core.clock import Clock, SystemClock
from tests.helpers.clock import FrozenClock


class TestClock:
    def test_clock_cannot_be_instantiated_without_now(self):
        with pytest.raises(TypeError):
            Clock()

    def test_today_follows_now(self):
        clock = FrozenClock(datetime(2026, 3, 2, 23, 59, 59))

        assert clock.today() == date(2026, 3, 2)

    def test_system_clock_is_naive(self):
        assert SystemClock().now().tzinfo is None
