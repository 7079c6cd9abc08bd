import secrets
import string
import time
from datetime import datetime, timedelta

from django.utils import timezone

BASE36_ALPHABET = string.digits + string.ascii_lowercase


def now():
    return timezone.now()


def generate_order_number(prefix="ORD"):
    """
    Human-readable order number: ORD-<epoch millis>-<9 base36 chars>.
    Not collision-proof on its own; callers retry on a unique violation.
    """
    millis = int(time.time() * 1000)
    suffix = "".join(secrets.choice(BASE36_ALPHABET) for _ in range(9))
    return f"{prefix}-{millis}-{suffix}"


def start_of_today():
    return timezone.localtime().replace(hour=0, minute=0, second=0, microsecond=0)


def start_of_month(day: datetime | None = None):
    day = day or start_of_today()
    return day.replace(day=1, hour=0, minute=0, second=0, microsecond=0)


def start_of_previous_month(day: datetime | None = None):
    first = start_of_month(day)
    return start_of_month(first - timedelta(days=1))


def dict_clean(d: dict):
    """
    Remove keys where value is None or empty
    """
    return {k: v for k, v in d.items() if v not in [None, "", [], {}]}
