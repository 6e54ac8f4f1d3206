from datetime import datetime, timedelta

import pytest

from schemas.dose_log import DoseStatus
from services.progress_service import medication_progress, progress
from factories import make_entry, make_med


def _entries(n, status=DoseStatus.TAKEN, medication_id="med-1"):
    start = datetime(2026, 10, 1, 6, 0)
    return [
        make_entry(medication_id=medication_id, timestamp=start + timedelta(days=i), status=status)
        for i in range(n)
    ]


def test_skipped_doses_do_not_advance_progress():
    # 5 days every 12h -> 10 doses
    log = _entries(3) + _entries(2, status=DoseStatus.SKIPPED)

    result = progress("med-1", 5, 12, log)

    assert result.total == 10
    assert result.taken == 3
    assert result.percent == pytest.approx(30)


def test_percent_is_clamped_at_100():
    result = progress("med-1", 5, 12, _entries(15))

    assert result.taken == 15
    assert result.total == 10
    assert result.percent == 100


def test_total_for_twelve_hour_ten_day_course():
    assert progress("med-1", 10, "12h", []).total == 20


def test_total_uses_real_division_for_non_dividing_frequency():
    # 24 / 5 = 4.8 doses per day
    assert progress("med-1", 10, 5, []).total == 48


def test_total_rounds_half_up():
    # 3 days * 1.5 doses per day = 4.5
    assert progress("med-1", 3, 16, []).total == 5


@pytest.mark.parametrize("period_days,frequency", [(0, 12), (10, 0), (10, "abc"), (None, 12)])
def test_degenerate_inputs_keep_total_at_least_one(period_days, frequency):
    result = progress("med-1", period_days, frequency, [])
    assert result.total == 1
    assert result.percent == 0


def test_other_medications_are_ignored():
    log = _entries(2) + _entries(4, medication_id="med-2")
    assert progress("med-1", 10, 12, log).taken == 2


def test_counts_across_all_days_of_the_log():
    log = _entries(7)
    assert progress("med-1", 1, 24, log).taken == 7


def test_medication_progress_reads_the_medication_fields():
    med = make_med(frequency="8h", period_days=2)
    result = medication_progress(med, _entries(3))
    assert (result.taken, result.total) == (3, 6)
    assert result.percent == pytest.approx(50)
