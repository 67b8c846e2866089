from datetime import date, datetime, timedelta
import os

import pytz
from dotenv import load_dotenv

load_dotenv()

# The operator's wall clock. "Today" on the dashboard is a calendar day in this zone.
APP_TIMEZONE = os.getenv("APP_TIMEZONE", "Asia/Karachi")


def local_timezone():
    return pytz.timezone(APP_TIMEZONE)


def local_now() -> datetime:
    return datetime.now(local_timezone())


def local_today() -> date:
    return local_now().date()


def local_day_bounds(day: date):
    """
    Return the half-open window [local midnight, next local midnight) for `day`.

    pytz zones must be attached with localize(); replacing tzinfo directly
    would pick the zone's LMT offset.
    """
    tz = local_timezone()
    start = tz.localize(datetime.combine(day, datetime.min.time()))
    end = tz.localize(datetime.combine(day + timedelta(days=1), datetime.min.time()))
    return start, end
