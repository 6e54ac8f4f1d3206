import re
from typing import Any, List, Optional, Tuple

_FREQUENCY_RE = re.compile(r'^\s*(-?\d+)\s*h?\s*$', re.IGNORECASE)
_TIME_RE = re.compile(r'^(\d{1,2}):(\d{2})$')


def parse_frequency(frequency: Any) -> Optional[int]:
    """Return the dosing interval in hours for '12h', '12' or 12, else None."""
    if isinstance(frequency, bool):
        return None
    if isinstance(frequency, int):
        return frequency
    if not isinstance(frequency, str):
        return None
    match = _FREQUENCY_RE.match(frequency)
    if not match:
        return None
    return int(match.group(1))


def format_frequency(hours: int) -> str:
    return f"{hours}h"


def parse_time(value: str) -> Tuple[int, int]:
    """Split an HH:MM string into (hour, minute). Raises ValueError if malformed."""
    match = _TIME_RE.match((value or '').strip())
    if not match:
        raise ValueError(f"Invalid time of day: {value!r} (expected HH:MM)")
    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        raise ValueError(f"Invalid time of day: {value!r} (expected HH:MM)")
    return hour, minute


def format_time(hour: int, minute: int) -> str:
    return f"{hour:02d}:{minute:02d}"


def expand_slots(first_time: str, frequency_hours: Any) -> List[str]:
    """Derive the daily time slots for a medication.

    Slots start at first_time and repeat every frequency_hours, wrapping
    around midnight, for min(24 // frequency_hours, 24) doses. The minute
    is kept from first_time. An invalid frequency (non-numeric or not
    positive) degrades to a single slot at first_time.

    >>> expand_slots("06:00", 12)
    ['06:00', '18:00']
    >>> expand_slots("08:30", "8h")
    ['08:30', '16:30', '00:30']
    """
    interval = parse_frequency(frequency_hours)
    if interval is None or interval <= 0:
        return [first_time]

    hour, minute = parse_time(first_time)
    count = min(24 // interval, 24)
    slots: List[str] = []
    for i in range(count):
        slot = format_time((hour + i * interval) % 24, minute)
        if slot not in slots:
            slots.append(slot)
    return slots


def doses_per_day(frequency_hours: Any) -> float:
    """Real-valued doses per day; 0.0 when the frequency is unusable."""
    interval = parse_frequency(frequency_hours)
    if interval is None or interval <= 0:
        return 0.0
    return 24 / interval
