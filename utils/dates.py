from datetime import datetime, time, timedelta

from django.utils import timezone


def local_day_bounds(day=None):
    """[midnight, next midnight) of ``day`` in the active time zone, as aware datetimes."""
    if day is None:
        day = timezone.localdate()
    start = timezone.make_aware(datetime.combine(day, time.min))
    return start, start + timedelta(days=1)
