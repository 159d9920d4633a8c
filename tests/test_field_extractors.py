"""
Unit tests for dosage, timing and duration extraction.
"""

import pytest

from app.extraction.field_extractors import (
    extract_dosage,
    extract_duration,
    extract_timing,
)
from app.extraction.keywords import TIMING_RULES


class TestDosage:

    def test_first_dose_token(self):
        assert extract_dosage("Paracetamol 500mg bd 5 days") == "500mg"

    def test_spaced_unit(self):
        assert extract_dosage("Amoxicillin 250 mg tds") == "250 mg"

    def test_ml(self):
        assert extract_dosage("Ascoril syrup 5ml tds") == "5ml"

    def test_only_first_of_several(self):
        assert extract_dosage("Augmentin 500mg/125mg bd") == "500mg"

    def test_not_specified(self):
        assert extract_dosage("Tab Dolo 1 bd") == "Not specified"
        assert extract_dosage("") == "Not specified"


class TestTiming:

    @pytest.mark.parametrize("line,expected", [
        ("Paracetamol 500mg bd", "Twice Daily"),
        ("Paracetamol 500mg twice a day", "Twice Daily"),
        ("Amoxicillin 250mg tds", "Three Times Daily"),
        ("Amoxicillin 250mg TD", "Three Times Daily"),
        ("Amoxicillin 250mg thrice", "Three Times Daily"),
        ("Azithromycin 500mg OD", "Once Daily"),
        ("Azithromycin 500mg qd", "Once Daily"),
        ("Azithromycin 500mg once", "Once Daily"),
        ("Cetirizine 10mg at night", "Follow doctor instructions"),
        ("", "Follow doctor instructions"),
    ])
    def test_labels(self, line, expected):
        assert extract_timing(line) == expected

    def test_bd_wins_over_od(self):
        assert extract_timing("Amoxicillin 250mg bd od") == "Twice Daily"

    def test_td_wins_over_od(self):
        assert extract_timing("Ibuprofen 400mg od tds") == "Three Times Daily"

    def test_precedence_table_order(self):
        labels = [label for _, label in TIMING_RULES]
        assert labels == ["Twice Daily", "Three Times Daily", "Once Daily"]


class TestDuration:

    def test_days(self):
        assert extract_duration("Azithromycin 500mg od 3 days") == "3 days"

    def test_weeks_verbatim(self):
        assert extract_duration("Vitamin D3 60000 IU 8Weeks") == "8Weeks"

    def test_as_prescribed(self):
        assert extract_duration("Azithromycin 500mg od") == "As prescribed"
        assert extract_duration("Paracetamol 500mg for 1 day") == "As prescribed"

    def test_extractors_are_pure(self):
        line = "Paracetamol 500mg bd 5 days"
        first = (extract_dosage(line), extract_timing(line), extract_duration(line))
        second = (extract_dosage(line), extract_timing(line), extract_duration(line))
        assert first == second == ("500mg", "Twice Daily", "5 days")
