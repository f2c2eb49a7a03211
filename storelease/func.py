import secrets
from datetime import datetime, timedelta
from pathlib import PurePosixPath

from storelease.vars import UPLOAD_PREFIX, WEEK_START_WEEKDAY


def to_local_naive(value: datetime | None) -> datetime | None:
    """
    Convert an aware datetime into naive local time. Naive values pass through.
    """
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


def start_of_week(now: datetime, weekday: int = WEEK_START_WEEKDAY) -> datetime:
    """
    Most recent occurrence of `weekday` at midnight, `now` included.
    """
    days_back = (now.weekday() - weekday) % 7
    start = now - timedelta(days=days_back)
    return start.replace(hour=0, minute=0, second=0, microsecond=0)


def generate_code(digits: int = 6) -> str:
    return f"{secrets.randbelow(10**digits):0{digits}d}"


def normalize_phone(phone: str) -> str:
    return phone.replace("-", "").replace(" ", "").strip()


def build_upload_key(filename: str, now: datetime | None = None) -> str:
    """
    Storage key for an upload: listings/<epoch ms>_<filename>.
    Only the last path component of the filename is kept.
    """
    now = now or datetime.now()
    name = PurePosixPath(filename.replace("\\", "/")).name
    millis = round(now.timestamp() * 1000)
    return f"{UPLOAD_PREFIX}/{millis}_{name}"
