from datetime import datetime, timezone


def utc_now():
    """Naive UTC timestamp, the way DateTime columns store it."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def today_utc():
    return datetime.now(timezone.utc).date()


def isoformat_utc(value):
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat().replace("+00:00", "Z")
