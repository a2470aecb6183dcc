from __future__ import annotations

from typing import Iterable

EMPTY_SLOT = "none"
MAX_DASHBOARD_SLOTS = 5


def normalize_selection(slots: Iterable[str | None], max_slots: int | None = MAX_DASHBOARD_SLOTS) -> list[str]:
    """Drop blank and "none" slots, keeping order and at most `max_slots` codes."""
    out: list[str] = []
    for slot in slots:
        value = (slot or "").strip()
        if not value or value.lower() == EMPTY_SLOT:
            continue
        out.append(value)
        if max_slots is not None and len(out) >= max_slots:
            break
    return out


def parse_codes_param(raw: str) -> list[str]:
    return normalize_selection(raw.split(","), max_slots=None)
