from __future__ import annotations

from typing import Tuple


def split_full_name(full_name: str) -> Tuple[str, str]:
    """Split a combined name field into (first_name, last_name).

    "Last, First" when the value contains a comma, otherwise the first
    whitespace-separated token is the first name and the rest the last name.
    """
    clean = (full_name or "").replace('"', "").strip()
    if not clean:
        return "", ""

    if "," in clean:
        last, _, first = clean.partition(",")
        return first.strip(), last.strip()

    parts = clean.split()
    return parts[0], " ".join(parts[1:])


def first_last(first_name: str, last_name: str) -> str:
    return " ".join(p for p in ((first_name or "").strip(), (last_name or "").strip()) if p)


def last_comma_first(first_name: str, last_name: str) -> str:
    first = (first_name or "").strip()
    last = (last_name or "").strip()
    if first and last:
        return f"{last}, {first}"
    return last or first
