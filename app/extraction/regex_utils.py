"""Safe regex utilities for OCR text extraction.

Provides first-match helpers with sentinel fallbacks for noisy OCR lines,
where a pattern may not match at all.
"""

from typing import Optional, Match, Pattern
import re

# Digits, at most one whitespace character, then a unit. No word boundary:
# "500mgs" still yields "500mg".
DOSAGE_PATTERN: Pattern = re.compile(r"\d+\s?(?:mg|ml)", re.IGNORECASE | re.ASCII)
DURATION_PATTERN: Pattern = re.compile(r"\d+\s?(?:days|weeks)", re.IGNORECASE | re.ASCII)
DIGIT_PATTERN: Pattern = re.compile(r"[0-9]")


def safe_group(match: Optional[Match], group_idx: int = 0, default: str = "") -> str:
    """Safely extract a regex group with fallback.
    
    Args:
        match: Regex match object (may be None)
        group_idx: Group index to extract (default: 0, the whole match)
        default: Default value if match is None or group doesn't exist
        
    Returns:
        Extracted group value or default
        
    Examples:
        >>> m = DOSAGE_PATTERN.search("Paracetamol bd")
        >>> safe_group(m, default="Not specified")
        'Not specified'
        
        >>> m = DOSAGE_PATTERN.search("Paracetamol 500mg bd")
        >>> safe_group(m)
        '500mg'
    """
    if match is None:
        return default
    
    try:
        group_value = match.group(group_idx)
        if group_value is None:
            return default
        return group_value
    except (IndexError, AttributeError):
        return default


def first_match(pattern: Pattern, text: str, default: str = "") -> str:
    """Return the earliest match of ``pattern`` in ``text`` verbatim, or ``default``.
    
    Examples:
        >>> first_match(DURATION_PATTERN, "Azithromycin 500mg od 3 days")
        '3 days'
        
        >>> first_match(DURATION_PATTERN, "Azithromycin 500mg od", "As prescribed")
        'As prescribed'
    """
    if not text:
        return default
    return safe_group(pattern.search(text), 0, default)


def truncate_at_match(pattern: Pattern, text: str) -> str:
    """Cut ``text`` at the start of the first match of ``pattern`` and trim it.
    
    Text without a match is returned trimmed but otherwise unchanged.
    
    Examples:
        >>> truncate_at_match(DOSAGE_PATTERN, "  Paracetamol 500mg bd 5 days")
        'Paracetamol'
        
        >>> truncate_at_match(DOSAGE_PATTERN, "500 mg")
        ''
    """
    if not text:
        return ""
    
    match = pattern.search(text)
    if match is None:
        return text.strip()
    return text[:match.start()].strip()


def contains_digit(text: str) -> bool:
    """Check whether text holds at least one ASCII decimal digit."""
    return bool(text) and DIGIT_PATTERN.search(text) is not None
