"""Medicine name normalization."""

from app.extraction.regex_utils import DOSAGE_PATTERN, truncate_at_match


def normalize_medicine_name(line: str) -> str:
    """Strip the dose token and everything after it from a medicine line.

    "Paracetamol 500mg bd 5 days" becomes "Paracetamol". A line without a dose
    token is returned trimmed. An empty result means the name could not be
    determined; it is not an error.
    """
    return truncate_at_match(DOSAGE_PATTERN, line)
