from datetime import date, datetime

from schemas.dose_log import DoseStatus
from services import dose_log_service
from factories import make_entry

TODAY = date(2026, 10, 19)


def test_append_puts_newest_first_without_dedup():
    first = make_entry(id="a")
    second = make_entry(id="b")

    log = dose_log_service.append((), first)
    log = dose_log_service.append(log, second)

    assert [e.id for e in log] == ["b", "a"]


def test_append_returns_new_tuple():
    original = (make_entry(id="a"),)
    updated = dose_log_service.append(original, make_entry(id="b"))
    assert len(original) == 1
    assert len(updated) == 2


def test_remove_by_key_only_touches_the_given_day():
    today_entry = make_entry(id="today", timestamp=datetime(2026, 10, 19, 6, 1))
    yesterday_entry = make_entry(id="yesterday", timestamp=datetime(2026, 10, 18, 6, 3))
    other_slot = make_entry(id="other-slot", time_slot="18:00", timestamp=datetime(2026, 10, 19, 18, 2))
    other_med = make_entry(id="other-med", medication_id="med-2", timestamp=datetime(2026, 10, 19, 6, 4))
    log = (today_entry, yesterday_entry, other_slot, other_med)

    remaining = dose_log_service.remove_by_key(log, "med-1", "06:00", TODAY)

    assert [e.id for e in remaining] == ["yesterday", "other-slot", "other-med"]


def test_remove_by_key_removes_every_duplicate_of_the_day():
    log = (
        make_entry(id="x", timestamp=datetime(2026, 10, 19, 6, 1)),
        make_entry(id="y", timestamp=datetime(2026, 10, 19, 9, 0), status=DoseStatus.SKIPPED),
    )
    assert dose_log_service.remove_by_key(log, "med-1", "06:00", TODAY) == ()


def test_remove_by_key_defaults_to_today():
    entry = make_entry(timestamp=datetime.now())
    assert dose_log_service.remove_by_key((entry,), entry.medication_id, entry.time_slot) == ()


def test_query_filters_without_mutating():
    log = (
        make_entry(id="t", status=DoseStatus.TAKEN),
        make_entry(id="s", status=DoseStatus.SKIPPED),
    )
    skipped = dose_log_service.query(log, lambda e: e.status == DoseStatus.SKIPPED)

    assert [e.id for e in skipped] == ["s"]
    assert len(log) == 2


def test_find_entry_matches_medication_slot_and_day():
    entry = make_entry(id="hit", timestamp=datetime(2026, 10, 19, 6, 30))
    log = (make_entry(id="old", timestamp=datetime(2026, 10, 17, 6, 0)), entry)

    assert dose_log_service.find_entry(log, "med-1", "06:00", TODAY) is entry
    assert dose_log_service.find_entry(log, "med-1", "18:00", TODAY) is None
    assert dose_log_service.find_entry(log, "med-1", "06:00", date(2026, 10, 18)) is None
