"""Prescriber line lookup."""

from typing import Iterable

from app.extraction.keywords import DOCTOR_MARKER, DOCTOR_NOT_DETECTED


def locate_doctor(lines: Iterable[str]) -> str:
    """Return the first line mentioning "dr", trimmed.

    There is no word-boundary check, so a line like "Hydrocortisone cream"
    also matches. The scan stops at the first hit.

    Args:
        lines: OCR lines in original order

    Returns:
        Trimmed line or "Doctor name not detected"
    """
    for line in lines:
        if line and DOCTOR_MARKER in line.lower():
            return line.strip()
    return DOCTOR_NOT_DETECTED
