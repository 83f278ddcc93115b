"""
APOD dates

Every APOD page is named after the day it was published: the page for 2025-01-01 is
ap250101.html. This module converts calendar dates into those page names and picks
random dates from the archive.

The random draw is adapted from the generator on https://apod.nasa.gov/apod/random_apod.html
(by Judy Schmidt, www.geckzilla.com): an instant is drawn uniformly between the first APOD
and late today, and redrawn while it falls into a stretch of the archive that was never
published.
"""

import random
from datetime import date, datetime, timedelta, timezone
from typing import Optional

# 1995 June 16 00:00:00, the first APOD
FIRST_APOD = datetime(1995, 6, 16)

# the first three days after the very first APOD (June 17th, 18th & 19th, 1995) were never posted
MISSING_APODS = [
    (datetime(1995, 6, 17), datetime(1995, 6, 19, 23, 59, 59, 999000)),
]

# APOD goes by US east coast time. Taking a few hours off the end of today should keep
# anyone from landing on a page that isn't published yet in their timezone.
PUBLISH_CUTOFF = timedelta(hours=18, minutes=59, seconds=59, milliseconds=999)
PUBLISH_LAG = timedelta(hours=5)


def page_name_for_date(day: date) -> str:
    """
    Name of the APOD page for day, e.g. ap250101.html for 2025-01-01.

    The year is truncated to two digits because that is how the archive names its pages.
    Dates a hundred years apart map to the same page name.
    """

    return day.strftime("ap%y%m%d.html")


def _utc_now(now: Optional[datetime] = None) -> datetime:
    if now is None:
        return datetime.now(timezone.utc)
    if now.tzinfo is None:
        return now.replace(tzinfo=timezone.utc)
    return now.astimezone(timezone.utc)


def date_days_ago(days: int, now: Optional[datetime] = None) -> date:
    """
    Calendar date (in UTC) that lies the given number of days before now. The date is taken
    in a fixed timezone so that it doesn't drift with the local clock around midnight.
    """

    return _utc_now(now).date() - timedelta(days=days)


def latest_candidate(now: Optional[datetime] = None) -> datetime:
    """Upper bound for random dates: today's UTC date at 18:59:59.999, less five hours."""

    today = _utc_now(now).date()
    return datetime.combine(today, datetime.min.time()) + PUBLISH_CUTOFF - PUBLISH_LAG


def is_missing(instant: datetime, excluded=MISSING_APODS) -> bool:
    """True if instant lies inside any of the excluded (inclusive) ranges."""

    return any(start <= instant <= end for start, end in excluded)


def random_candidate_date(
    rng: Optional[random.Random] = None,
    now: Optional[datetime] = None,
    excluded=MISSING_APODS,
) -> date:
    """
    Pick a random day from the APOD archive.

    An instant is drawn with millisecond resolution, uniformly between FIRST_APOD and
    latest_candidate(), and redrawn until it is outside every excluded range. The excluded
    ranges are a few days out of decades so the loop almost always runs once.
    """

    rng = rng or random.Random()

    lower = FIRST_APOD
    upper = latest_candidate(now)
    span_ms = int((upper - lower) / timedelta(milliseconds=1))

    instant = lower + timedelta(milliseconds=rng.randint(0, span_ms))
    while is_missing(instant, excluded):
        instant = lower + timedelta(milliseconds=rng.randint(0, span_ms))

    return instant.date()
