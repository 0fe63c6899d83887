"""Text utilities for title matching and catalog field cleanup."""

import re
from datetime import date, datetime

from rapidfuzz.distance import Levenshtein

# OMDb uses this literal for every missing value
MISSING_SENTINEL = "N/A"


def similarity(a: str, b: str) -> float:
    """
    Case-insensitive normalized edit-distance similarity.

    Computed as ``(longest - levenshtein(a, b)) / longest`` where longest is
    the length of the longer string, so the result is in [0, 1].

    Examples:
        similarity("Inception", "inception") → 1.0
        similarity("", "") → 1.0
        similarity("abc", "") → 0.0

    Args:
        a: First title
        b: Second title

    Returns:
        Similarity ratio between 0.0 and 1.0
    """
    a = a.lower()
    b = b.lower()
    longest = max(len(a), len(b))
    if longest == 0:
        return 1.0
    return (longest - Levenshtein.distance(a, b)) / longest


def clean_value(value: object) -> str | None:
    """
    Strip a catalog string field, mapping blanks and "N/A" to None.

    Args:
        value: Raw field value

    Returns:
        Stripped string or None
    """
    if value is None:
        return None
    text = str(value).strip()
    if not text or text == MISSING_SENTINEL:
        return None
    return text


def split_list(value: object) -> list[str]:
    """
    Split a comma-separated catalog field into trimmed, non-empty items.

    "Action, Sci-Fi,  Thriller" → ["Action", "Sci-Fi", "Thriller"]
    """
    text = clean_value(value)
    if text is None:
        return []
    return [part.strip() for part in text.split(",") if part.strip()]


def split_credits(value: object) -> list[str]:
    """
    Split a comma-separated credit field, keeping parenthetical notes whole.

    "Bob Kane (characters created by: Bob Kane, Bill Finger), Jonathan Nolan"
    → ["Bob Kane (characters created by: Bob Kane, Bill Finger)", "Jonathan Nolan"]
    """
    text = clean_value(value)
    if text is None:
        return []
    # Commas followed by a ")" before any "(" sit inside a note
    parts = re.split(r",(?![^()]*\))", text)
    return [part.strip() for part in parts if part.strip()]


def extract_year(value: object) -> int | None:
    """
    Extract the first four-digit year from a date or year string.

    Handles "2010", "2010-07-16", "2010–2012" and "N/A".
    """
    text = clean_value(value)
    if text is None:
        return None
    match = re.search(r"\d{4}", text)
    return int(match.group(0)) if match else None


def parse_runtime(value: object) -> int | None:
    """Extract a runtime in minutes from free text like "148 min"."""
    if isinstance(value, int):
        return value or None
    text = clean_value(value)
    if text is None:
        return None
    match = re.search(r"(\d+)", text)
    return int(match.group(1)) if match else None


def parse_int(value: object) -> int | None:
    """Parse an integer that may contain thousands separators ("1,234,567")."""
    if isinstance(value, int):
        return value
    text = clean_value(value)
    if text is None:
        return None
    try:
        return int(text.replace(",", ""))
    except ValueError:
        return None


def parse_float(value: object) -> float | None:
    if isinstance(value, (int, float)):
        return float(value)
    text = clean_value(value)
    if text is None:
        return None
    try:
        return float(text)
    except ValueError:
        return None


def parse_release_date(value: object) -> date | None:
    """
    Parse a release date in either ISO ("2010-07-16") or OMDb ("16 Jul 2010") form.

    Returns None for missing or unparseable values.
    """
    text = clean_value(value)
    if text is None:
        return None
    for fmt in ("%Y-%m-%d", "%d %b %Y"):
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def split_credit_note(name: str) -> tuple[str, str | None]:
    """
    Split a trailing parenthetical note off a credit.

    "Jonathan Nolan (story)" → ("Jonathan Nolan", "story")
    "Christopher Nolan" → ("Christopher Nolan", None)
    """
    match = re.match(r"^(.*?)\s*\(([^)]*)\)\s*$", name)
    if match and match.group(1).strip():
        return match.group(1).strip(), match.group(2).strip() or None
    return name.strip(), None
