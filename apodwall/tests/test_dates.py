"""
Tests for dates.py

Validate page names for archive days and the random archive day generator.
"""

import random
import re
from datetime import date, datetime, timedelta, timezone

import pytest

# following entities are tested in this module:
from apodwall.dates import FIRST_APOD
from apodwall.dates import date_days_ago
from apodwall.dates import is_missing
from apodwall.dates import latest_candidate
from apodwall.dates import page_name_for_date
from apodwall.dates import random_candidate_date

NOW = datetime(2025, 1, 4, 3, 0, tzinfo=timezone.utc)


class SequenceRandom:
    """Stand-in for random.Random that hands out predetermined offsets."""

    def __init__(self, offsets):
        self.offsets = iter(offsets)
        self.calls = 0

    def randint(self, a, b):
        self.calls += 1
        offset = next(self.offsets)
        return b if offset == "max" else offset


@pytest.mark.parametrize(
    "day,page_name",
    [
        (date(2025, 1, 1), "ap250101.html"),
        (date(1995, 6, 16), "ap950616.html"),
        (date(2009, 12, 31), "ap091231.html"),
        (date(2000, 2, 29), "ap000229.html"),
        # two digit years repeat every century
        (date(2100, 3, 4), "ap000304.html"),
    ],
)
def test_page_name_for_date(day, page_name):
    assert page_name_for_date(day) == page_name


def test_page_name_pattern_across_archive():
    day = date(1995, 6, 16)
    while day < date(2026, 1, 1):
        name = page_name_for_date(day)
        assert re.fullmatch(r"ap\d{2}\d{2}\d{2}\.html", name)
        assert name[2:4] == str(day.year)[-2:]
        day += timedelta(days=37)


def test_date_days_ago_today():
    assert date_days_ago(0, now=NOW) == date(2025, 1, 4)


def test_date_days_ago_is_consecutive():
    assert date_days_ago(0, now=NOW) - date_days_ago(1, now=NOW) == timedelta(days=1)


def test_date_days_ago_several_days():
    assert date_days_ago(3, now=NOW) == date(2025, 1, 1)


def test_date_days_ago_uses_utc():
    # late evening on the US east coast is already the next day in UTC
    evening = datetime(2025, 1, 1, 23, 30, tzinfo=timezone(timedelta(hours=-5)))

    assert date_days_ago(0, now=evening) == date(2025, 1, 2)


def test_date_days_ago_default_now():
    assert date_days_ago(0) == datetime.now(timezone.utc).date()


def test_latest_candidate():
    assert latest_candidate(now=NOW) == datetime(2025, 1, 4, 13, 59, 59, 999000)


@pytest.mark.parametrize(
    "instant,missing",
    [
        (datetime(1995, 6, 16, 23, 59, 59, 999000), False),
        (datetime(1995, 6, 17), True),
        (datetime(1995, 6, 18, 12), True),
        (datetime(1995, 6, 19, 23, 59, 59, 999000), True),
        (datetime(1995, 6, 20), False),
    ],
)
def test_is_missing(instant, missing):
    assert is_missing(instant) is missing


def test_random_candidate_date_stays_in_archive():
    rng = random.Random(1995)
    today = date_days_ago(0)

    for _ in range(10_000):
        day = random_candidate_date(rng=rng)

        assert day >= date(1995, 6, 16)
        assert day <= today
        assert not date(1995, 6, 17) <= day <= date(1995, 6, 19)


def test_random_candidate_date_redraws_missing_days():
    missing_offset = (datetime(1995, 6, 18) - FIRST_APOD) // timedelta(milliseconds=1)
    rng = SequenceRandom([missing_offset, 0])

    assert random_candidate_date(rng=rng, now=NOW) == date(1995, 6, 16)
    assert rng.calls == 2


def test_random_candidate_date_upper_bound():
    rng = SequenceRandom(["max"])

    assert random_candidate_date(rng=rng, now=NOW) == date(2025, 1, 4)


def test_random_candidate_date_custom_exclusions():
    rng = SequenceRandom([0, "max"])
    excluded = [(datetime(1995, 6, 16), datetime(1995, 6, 16, 23, 59, 59))]

    assert random_candidate_date(rng=rng, now=NOW, excluded=excluded) == date(2025, 1, 4)
