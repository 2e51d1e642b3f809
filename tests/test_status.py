"""Tests for the membership status engine."""
import datetime

import pytest

from core.status import MembershipStatus, derived_status, is_currently_paused
from models.client import Client

D = datetime.date


def make_client(active=True, paused_from=None, paused_to=None):
    return Client(id=1, first_name="Ana", last_name="Gómez", email="ana@gym.com",
                  active=active, paused_from=paused_from, paused_to=paused_to)


class TestIsCurrentlyPaused:

    @pytest.mark.parametrize("day,expected", [
        (D(2024, 2, 29), False),
        (D(2024, 3, 1), True),    # first day, inclusive
        (D(2024, 3, 4), True),
        (D(2024, 3, 7), True),    # last day, inclusive
        (D(2024, 3, 8), False),
    ])
    def test_window_is_inclusive(self, day, expected):
        c = make_client(paused_from=D(2024, 3, 1), paused_to=D(2024, 3, 7))
        assert is_currently_paused(c, day) is expected

    def test_missing_dates_are_never_paused(self):
        assert not is_currently_paused(make_client(paused_from=D(2024, 3, 1)), D(2024, 3, 1))
        assert not is_currently_paused(make_client(paused_to=D(2024, 3, 1)), D(2024, 3, 1))
        assert not is_currently_paused(make_client(), D(2024, 3, 1))

    def test_reversed_window_contains_nothing(self):
        c = make_client(paused_from=D(2024, 3, 7), paused_to=D(2024, 3, 1))
        assert not is_currently_paused(c, D(2024, 3, 4))

    def test_time_of_day_is_ignored(self):
        c = make_client(paused_from=D(2024, 3, 1), paused_to=D(2024, 3, 7))
        assert is_currently_paused(c, datetime.datetime(2024, 3, 7, 23, 59))

    def test_independent_of_active_flag(self):
        c = make_client(active=False, paused_from=D(2024, 3, 1), paused_to=D(2024, 3, 7))
        assert is_currently_paused(c, D(2024, 3, 2))

    def test_defaults_to_today(self):
        today = datetime.date.today()
        c = make_client(paused_from=today, paused_to=today)
        assert is_currently_paused(c)


class TestDerivedStatus:

    def test_active(self):
        assert derived_status(make_client(), D(2024, 3, 1)) is MembershipStatus.ACTIVE

    def test_paused(self):
        c = make_client(paused_from=D(2024, 3, 1), paused_to=D(2024, 3, 7))
        assert derived_status(c, D(2024, 3, 3)) is MembershipStatus.PAUSED

    def test_pause_over_is_active_again(self):
        c = make_client(paused_from=D(2024, 3, 1), paused_to=D(2024, 3, 7))
        assert derived_status(c, D(2024, 3, 8)) is MembershipStatus.ACTIVE

    def test_inactive_wins_over_paused(self):
        c = make_client(active=False, paused_from=D(2024, 3, 1), paused_to=D(2024, 3, 7))
        assert derived_status(c, D(2024, 3, 3)) is MembershipStatus.INACTIVE
