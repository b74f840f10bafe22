"""Name normalization shared by every roster, punch and HotSchedules import.

Two kinds of keys are produced:

* the *time-punch key*, ``"last, first"`` lowercased, which is how the
  time-clock export spells people and how roster rows are matched;
* the strict *name key*, ``"last|first"`` built from letters only, used when
  two sources format names differently (roster vs. scraped HTML).
"""

from __future__ import annotations

from typing import Optional


def split_time_punch_name(name: str) -> Optional[tuple[str, str, str]]:
    """Split ``"Last, First"`` or ``"First ... Last"`` into (first, last, key).

    Without a comma only the first and final tokens are kept. Returns ``None``
    for blank input, a single token, or an empty side of the comma.
    """
    trimmed = (name or "").strip()
    if not trimmed:
        return None

    if "," in trimmed:
        last, first = (part.strip() for part in trimmed.split(",", 1))
        if not first or not last:
            return None
        return first, last, canonical_time_punch_name(first, last)

    fields = trimmed.split()
    if len(fields) < 2:
        return None
    first, last = fields[0], fields[-1]
    return first, last, canonical_time_punch_name(first, last)


def canonical_time_punch_name(first_name: str, last_name: str) -> str:
    return f"{last_name.strip().lower()}, {first_name.strip().lower()}"


def canonical_time_punch_name_from_value(value: str) -> str:
    """Canonicalize a stored raw name; unsplittable values fall back to lowercase."""
    trimmed = (value or "").strip()
    if not trimmed:
        return ""
    parts = split_time_punch_name(trimmed)
    if parts is not None:
        return parts[2]
    return trimmed.lower()


def split_display_name(name: str) -> Optional[tuple[str, str]]:
    """Split a HotSchedules display name; everything after the first token is the last name."""
    trimmed = (name or "").strip()
    if not trimmed:
        return None

    if "," in trimmed:
        last, first = (part.strip() for part in trimmed.split(",", 1))
        if not first or not last:
            return None
        return first, last

    fields = trimmed.split()
    if len(fields) < 2:
        return None
    return fields[0], " ".join(fields[1:])


def normalize_name_key(first: str, last: str) -> str:
    """Strict letters-only ``last|first`` key, or ``""`` when either side is empty."""
    first = normalize_first_name(first)
    last = normalize_last_name(last)
    if not first or not last:
        return ""
    return f"{last}|{first}"


def normalize_first_name(value: str) -> str:
    fields = normalize_name_text(strip_parenthetical(value)).split()
    return fields[0] if fields else ""


def normalize_last_name(value: str) -> str:
    return " ".join(normalize_name_text(value).split())


def normalize_name_text(value: str) -> str:
    """Lowercase, keeping letters and collapsing every other run of characters to one space."""
    out: list[str] = []
    last_was_space = False
    for ch in (value or "").strip().lower():
        if ch.isalpha():
            out.append(ch)
            last_was_space = False
        elif not last_was_space:
            out.append(" ")
            last_was_space = True
    return "".join(out).strip()


def strip_parenthetical(value: str) -> str:
    out: list[str] = []
    depth = 0
    for ch in value or "":
        if ch == "(":
            depth += 1
        elif ch == ")":
            if depth > 0:
                depth -= 1
        elif depth == 0:
            out.append(ch)
    return "".join(out)


def collapse_whitespace(value: str) -> str:
    return " ".join((value or "").split())
