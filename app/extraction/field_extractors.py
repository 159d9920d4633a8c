"""Field extractors for a single accepted prescription line.

Each function depends only on its argument and never raises, so lines can be
processed in any order or in parallel.
"""

from app.extraction.keywords import (
    DOSAGE_NOT_SPECIFIED,
    DURATION_FALLBACK,
    TIMING_FALLBACK,
    TIMING_RULES,
)
from app.extraction.regex_utils import DOSAGE_PATTERN, DURATION_PATTERN, first_match


def extract_dosage(line: str) -> str:
    """Return the first dose token ("500mg", "5 ml") verbatim.

    Only the earliest token is used; "Augmentin 500mg + 125mg" yields "500mg".

    Args:
        line: Line text

    Returns:
        Dose token or "Not specified"
    """
    return first_match(DOSAGE_PATTERN, line, DOSAGE_NOT_SPECIFIED)


def extract_timing(line: str) -> str:
    """Map frequency abbreviations to a fixed label.

    Rules are checked in ``TIMING_RULES`` order and the first hit wins.

    Args:
        line: Line text

    Returns:
        "Twice Daily", "Three Times Daily", "Once Daily" or
        "Follow doctor instructions"
    """
    if not line:
        return TIMING_FALLBACK

    line_lower = line.lower()
    for keywords, label in TIMING_RULES:
        if any(kw in line_lower for kw in keywords):
            return label
    return TIMING_FALLBACK


def extract_duration(line: str) -> str:
    """Return the first "<n> days" / "<n> weeks" token verbatim, or "As prescribed"."""
    return first_match(DURATION_PATTERN, line, DURATION_FALLBACK)
