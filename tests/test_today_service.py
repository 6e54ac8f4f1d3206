from datetime import datetime

import pytest

from schemas.dose_log import DoseStatus
from schemas.medication import MedicationStatus
from services.today_service import classify
from factories import make_entry, make_med

NOW = datetime(2026, 10, 19, 7, 0)


def _slots(items):
    return [(d.medication.id, d.time_slot) for d in items]


def test_twelve_hour_medication_at_seven_am():
    med = make_med(slots=["06:00", "18:00"], frequency="12h", period_days=10)

    buckets = classify([med], [], NOW)

    assert _slots(buckets.late) == [("med-1", "06:00")]
    assert _slots(buckets.next) == [("med-1", "18:00")]
    assert buckets.taken == []


def test_logging_the_late_dose_moves_it_to_taken():
    med = make_med(slots=["06:00", "18:00"], frequency="12h", period_days=10)
    entry = make_entry(time_slot="06:00", timestamp=NOW)

    buckets = classify([med], [entry], NOW)

    assert buckets.late == []
    assert _slots(buckets.next) == [("med-1", "18:00")]
    assert _slots(buckets.taken) == [("med-1", "06:00")]
    assert buckets.taken[0].log == entry
    prog = buckets.taken[0].progress
    assert (prog.taken, prog.total) == (1, 20)
    assert prog.percent == pytest.approx(5)


def test_skipped_entry_also_lands_in_taken_bucket():
    med = make_med()
    entry = make_entry(time_slot="06:00", timestamp=NOW, status=DoseStatus.SKIPPED)

    buckets = classify([med], [entry], NOW)

    assert _slots(buckets.taken) == [("med-1", "06:00")]
    assert buckets.taken[0].log.status == DoseStatus.SKIPPED
    assert buckets.taken[0].progress.taken == 0


def test_entries_from_yesterday_do_not_count_for_today():
    med = make_med()
    entry = make_entry(time_slot="06:00", timestamp=datetime(2026, 10, 18, 6, 10))

    buckets = classify([med], [entry], NOW)

    assert _slots(buckets.late) == [("med-1", "06:00")]
    assert buckets.taken == []


def test_paused_medication_contributes_nothing():
    paused = make_med(id="paused", status=MedicationStatus.PAUSED, slots=["06:00", "18:00"])
    entry = make_entry(medication_id="paused", time_slot="06:00", timestamp=NOW)

    buckets = classify([paused], [entry], NOW)

    assert buckets.late == [] and buckets.next == [] and buckets.taken == []


def test_medication_without_slots_contributes_nothing():
    buckets = classify([make_med(slots=[])], [], NOW)
    assert buckets.late == [] and buckets.next == [] and buckets.taken == []


def test_slot_equal_to_now_is_upcoming():
    buckets = classify([make_med(slots=["07:00"], frequency="24h")], [], NOW)
    assert _slots(buckets.next) == [("med-1", "07:00")]


def test_buckets_are_sorted_by_slot():
    a = make_med(id="a", slots=["16:00", "08:00", "00:00"], frequency="8h")
    b = make_med(id="b", slots=["06:00", "18:00"])
    c = make_med(id="c", slots=["12:30"], frequency="24h")

    buckets = classify([a, b, c], [], datetime(2026, 10, 19, 12, 0))

    assert [d.time_slot for d in buckets.late] == ["00:00", "06:00", "08:00"]
    assert [d.time_slot for d in buckets.next] == ["12:30", "16:00", "18:00"]


@pytest.mark.parametrize("hour,minute", [(0, 0), (6, 0), (11, 59), (18, 1), (23, 59)])
def test_partition_is_exhaustive_and_disjoint(hour, minute):
    meds = [
        make_med(id="a", slots=["00:00", "08:00", "16:00"], frequency="8h"),
        make_med(id="b", slots=["06:00", "18:00"]),
        make_med(id="c", slots=["06:00", "12:00", "18:00", "00:00"], frequency="6h"),
        make_med(id="p", slots=["09:00"], frequency="24h", status=MedicationStatus.PAUSED),
    ]
    now = datetime(2026, 10, 19, hour, minute)
    log = [
        make_entry(medication_id="a", time_slot="08:00", timestamp=now),
        make_entry(medication_id="c", time_slot="18:00", timestamp=now, status=DoseStatus.SKIPPED),
    ]

    buckets = classify(meds, log, now)

    expected = {(m.id, s) for m in meds if m.status == MedicationStatus.ACTIVE for s in m.time_slots}
    seen = _slots(buckets.late) + _slots(buckets.next) + _slots(buckets.taken)
    assert sorted(seen) == sorted(expected)
    assert len(seen) == len(set(seen))
    assert set(_slots(buckets.taken)) == {("a", "08:00"), ("c", "18:00")}
