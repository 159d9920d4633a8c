"""
Prescription keyword tables: dosage units, dosage forms and frequency rules.

All matching against these tables is a case-insensitive substring test on the
lowercased line, so short abbreviations also hit inside longer words.
"""
from typing import Tuple

# CLASSIFICATION KEYWORDS
# Unit and frequency abbreviations as written on prescriptions
MEDICINE_UNIT_KEYWORDS: Tuple[str, ...] = (
    "mg", "ml",
    "tab", "cap",
    "bd", "td", "tds", "qd", "od",
)

# Natural-language dosage forms
MEDICINE_FORM_KEYWORDS: Tuple[str, ...] = (
    "tablet", "capsule", "syrup",
)

# TIMING RULES
# Ordered (keywords, label) pairs. First rule with any keyword present wins,
# so "bd" beats "od" on a line like "250mg bd od".
TWICE_DAILY = "Twice Daily"
THREE_TIMES_DAILY = "Three Times Daily"
ONCE_DAILY = "Once Daily"

TIMING_RULES: Tuple[Tuple[Tuple[str, ...], str], ...] = (
    (("bd", "twice"), TWICE_DAILY),
    (("tds", "td", "thrice"), THREE_TIMES_DAILY),
    (("qd", "od", "once"), ONCE_DAILY),
)

# FALLBACK VALUES
DOSAGE_NOT_SPECIFIED = "Not specified"
TIMING_FALLBACK = "Follow doctor instructions"
DURATION_FALLBACK = "As prescribed"
DOCTOR_NOT_DETECTED = "Doctor name not detected"
NO_MEDICINES_DETECTED = "No clear medicines detected"

# Substring that marks a prescriber line ("Dr.", "dr", "DR ")
DOCTOR_MARKER = "dr"
