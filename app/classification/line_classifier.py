"""
Prescription Line Classifier: decides whether an OCR line names a medicine.

A line is a candidate when it carries a number AND a dosage unit, form or
frequency keyword. The digit requirement drops letterhead lines such as
"Dr. A. Rao, MD (Medicine)" that mention units without a dose.
"""
from typing import Iterable, List, Tuple

from app.extraction.keywords import MEDICINE_FORM_KEYWORDS, MEDICINE_UNIT_KEYWORDS
from app.extraction.regex_utils import contains_digit


# CLASSIFIER CLASS
class LineClassifier:
    """
    Keyword + digit heuristic over single OCR lines.

    False positives and negatives on noisy OCR are expected. Tightening the
    rules here lowers recall on real prescriptions.
    """

    def __init__(self, include_synonyms: bool = True):
        keywords: Tuple[str, ...] = MEDICINE_UNIT_KEYWORDS
        if include_synonyms:
            keywords = keywords + MEDICINE_FORM_KEYWORDS
        self.keywords = keywords

    def classify(self, line: str) -> bool:
        """
        Classify a single OCR line.
        Args:
            line: Raw line text (may be empty or garbled)
        Returns:
            True if the line looks like a medicine entry
        """
        if not line or not contains_digit(line):
            return False
        line_lower = line.lower()
        return any(kw in line_lower for kw in self.keywords)

    def filter_lines(self, lines: Iterable[str]) -> List[str]:
        """
        Keep accepted lines in their original order.
        Args:
            lines: OCR lines
        Returns:
            Accepted lines
        """
        return [line for line in lines if self.classify(line)]


_DEFAULT_CLASSIFIER = LineClassifier()
_REDUCED_CLASSIFIER = LineClassifier(include_synonyms=False)


def is_medicine_line(line: str, include_synonyms: bool = True) -> bool:
    """
    Classify a single line with the shared keyword tables.
    Args:
        line: Raw line text
        include_synonyms: Also accept "tablet", "capsule", "syrup"
    Returns:
        True if the line looks like a medicine entry
    """
    classifier = _DEFAULT_CLASSIFIER if include_synonyms else _REDUCED_CLASSIFIER
    return classifier.classify(line)
