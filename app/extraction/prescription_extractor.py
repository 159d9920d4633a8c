"""Prescription Extractor.

Converts a raw OCR text block into ordered medicine entries plus the name of
the prescribing doctor.

Rules:
- Classification and field extraction are line-local. No state crosses lines.
- Output order is line order. No reordering, no deduplication.
- If no line is accepted, the result holds exactly one placeholder entry and
  never mixes it with real entries.
- Total over every string input, including "".
"""

from __future__ import annotations

import logging
from typing import List, Optional

from app.classification.line_classifier import LineClassifier
from app.extraction.doctor_locator import locate_doctor
from app.extraction.field_extractors import (
    extract_dosage,
    extract_duration,
    extract_timing,
)
from app.extraction.models import ExtractionResult, MedicineEntry
from app.extraction.name_normalizer import normalize_medicine_name

logger = logging.getLogger(__name__)


def split_lines(raw_text: Optional[str]) -> List[str]:
    """Split OCR output on "\\n", dropping the "\\r" of "\\r\\n" endings.

    Other control characters (form feeds, "\\x85", "\\u2028") stay inside
    their line.
    """
    if not raw_text:
        return []
    return [line.rstrip("\r") for line in raw_text.split("\n")]


def build_medicine_entry(line: str) -> MedicineEntry:
    """Run every field extractor over one accepted line."""
    return MedicineEntry(
        name=normalize_medicine_name(line),
        dosage=extract_dosage(line),
        timing=extract_timing(line),
        duration=extract_duration(line),
    )


def extract_prescription(
    raw_text: Optional[str],
    include_synonyms: bool = True,
) -> ExtractionResult:
    """Extract structured medicines and the doctor from OCR text.

    Args:
        raw_text: Full OCR output for one image. None is treated as "".
        include_synonyms: Accept "tablet"/"capsule"/"syrup" lines. Passing
            False runs the reduced abbreviation-only keyword set.

    Returns:
        ExtractionResult with medicines in line order
    """
    lines = split_lines(raw_text)
    classifier = LineClassifier(include_synonyms=include_synonyms)

    medicines: List[MedicineEntry] = [
        build_medicine_entry(line) for line in lines if classifier.classify(line)
    ]
    logger.debug(f"Scanned {len(lines)} OCR lines, accepted {len(medicines)} as medicines")

    if not medicines:
        medicines = [MedicineEntry.placeholder()]

    return ExtractionResult(
        medicines=tuple(medicines),
        doctor=locate_doctor(lines),
    )
