from typing import Iterable
from schemas.medication import Medication


def medications_to_context(medications: Iterable[Medication]) -> str:
    """One line per medication for the assistant prompt."""
    lines = []
    for m in medications:
        prefix = f"[{m.subject_name}] " if m.subject_name else ""
        line = f"- {prefix}{m.name}: {m.dosage}, {m.frequency}"
        if m.time_slots:
            line += f" ({', '.join(m.time_slots)})"
        if not m.is_active:
            line += " - paused"
        lines.append(line)

    if not lines:
        return "(no medications registered)"
    return "\n".join(lines)
