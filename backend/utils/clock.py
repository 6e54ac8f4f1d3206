from datetime import datetime


def get_now() -> datetime:
    """Local wall-clock time. Overridden in tests to pin 'now'."""
    return datetime.now()
