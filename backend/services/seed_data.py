from datetime import date
from typing import List

from schemas.medication import Medication, MedicationStatus

_START = date(2025, 2, 2)


def default_medications() -> List[Medication]:
    """Built-in dataset used on first run and when the saved snapshot is unreadable."""
    rows = [
        ("1", "Sijugrino", "GAVIZ 10MG", "1/2 comprimido", "24h", ["06:00"], "em JEJUM", "Dar 2ml de água dps", 10),
        ("2", "Sijugrino", "AGEMOXI 250MG", "1/2 comprimido", "12h", ["06:00", "18:00"], "Alimentada", "Dar 2ml de água dps", 10),
        ("3", "Sijugrino", "PREDSIM 3MG/ML", "1ml", "24h", ["06:00"], "", "", 7),
        ("4", "Sijugrino", "Mucomucil", "2 doses", "8h", ["08:00", "16:00", "00:00"], "", "", 30),
        ("5", "Sijugrino", "Promun Cat", "1ml", "24h", ["08:00"], "", "", 30),
        ("6", "Lua", "ACIDO URSODESOXICOLICO", "1 dose", "24h", ["08:00"], "", "", 30),
        ("7", "Lua", "SAME/SILIMAR/VIT.E", "1 dose", "24h", ["08:00"], "", "", 30),
        ("8", "Lua", "MACROGARD PASTA", "5cm", "24h", ["08:00"], "", "Na boca ou pata", 30),
    ]
    return [
        Medication(
            id=mid,
            subject_name=subject,
            name=name,
            dosage=dosage,
            frequency=frequency,
            time_slots=slots,
            obs1=obs1,
            obs2=obs2,
            period_days=days,
            start_date=_START,
            status=MedicationStatus.PAUSED,
        )
        for mid, subject, name, dosage, frequency, slots, obs1, obs2, days in rows
    ]
