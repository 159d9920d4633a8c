"""Unit tests for safe regex utilities.

Tests first-match handling for prescription OCR lines:
- None matches
- Missing groups
- First-occurrence-only matching
- OCR spacing and casing noise
"""

import sys

from app.extraction.regex_utils import (
    DOSAGE_PATTERN,
    DURATION_PATTERN,
    contains_digit,
    first_match,
    safe_group,
    truncate_at_match,
)


def test_safe_group_with_none():
    """Test safe_group handles None match gracefully."""
    print("Testing safe_group with None match...")
    
    m = DOSAGE_PATTERN.search("Dr. Smith, MBBS")
    result = safe_group(m, 0, "DEFAULT")
    
    assert result == "DEFAULT", f"Expected 'DEFAULT', got '{result}'"
    print("  ✓ None match returns default")


def test_safe_group_missing_group_index():
    """Test safe_group handles missing group indices."""
    print("Testing safe_group with missing group index...")
    
    # DOSAGE_PATTERN has no capture groups
    m = DOSAGE_PATTERN.search("Paracetamol 500mg")
    result = safe_group(m, 1, "FALLBACK")
    
    assert result == "FALLBACK", f"Expected 'FALLBACK', got '{result}'"
    print("  ✓ Missing group index returns default")


def test_first_match_returns_earliest_token():
    """Only the first dose token on a line is returned."""
    result = first_match(DOSAGE_PATTERN, "Augmentin 500mg + 125mg bd")
    assert result == "500mg", f"Expected '500mg', got '{result}'"


def test_first_match_preserves_casing_and_spacing():
    """Matched text comes back verbatim."""
    assert first_match(DOSAGE_PATTERN, "CROCIN 650 MG od") == "650 MG"
    assert first_match(DOSAGE_PATTERN, "Cough syrup 10Ml tds") == "10Ml"
    assert first_match(DURATION_PATTERN, "for 2 Weeks") == "2 Weeks"


def test_first_match_single_space_only():
    """At most one whitespace character between number and unit."""
    assert first_match(DOSAGE_PATTERN, "Paracetamol 500  mg", "none") == "none"
    assert first_match(DOSAGE_PATTERN, "Paracetamol 500\tmg") == "500\tmg"


def test_first_match_empty_text():
    assert first_match(DOSAGE_PATTERN, "", "Not specified") == "Not specified"
    assert first_match(DURATION_PATTERN, None, "As prescribed") == "As prescribed"


def test_truncate_at_match():
    """Test truncation at the first dose token."""
    print("Testing truncate_at_match...")
    
    assert truncate_at_match(DOSAGE_PATTERN, "Paracetamol 500mg bd 5 days") == "Paracetamol"
    assert truncate_at_match(DOSAGE_PATTERN, "  Vitamin D3 60000 mg weekly ") == "Vitamin D3"
    assert truncate_at_match(DOSAGE_PATTERN, "  Tab Pan-D od  ") == "Tab Pan-D od"
    assert truncate_at_match(DOSAGE_PATTERN, "250ml") == ""
    assert truncate_at_match(DOSAGE_PATTERN, "") == ""
    
    print("  ✓ Truncation working")


def test_contains_digit():
    assert contains_digit("Amlodipine 5mg")
    assert not contains_digit("Dr. Smith, MBBS")
    assert not contains_digit("")
    # Only ASCII digits count
    assert not contains_digit("Tab ٥mg")


def run_all_tests():
    """Run all test functions."""
    print("\n" + "=" * 60)
    print("Running Safe Regex Utilities Tests")
    print("=" * 60 + "\n")
    
    tests = [
        test_safe_group_with_none,
        test_safe_group_missing_group_index,
        test_first_match_returns_earliest_token,
        test_first_match_preserves_casing_and_spacing,
        test_first_match_single_space_only,
        test_first_match_empty_text,
        test_truncate_at_match,
        test_contains_digit,
    ]
    
    passed = 0
    failed = 0
    
    for test in tests:
        try:
            test()
            passed += 1
        except AssertionError as e:
            print(f"  ✗ FAILED: {e}")
            failed += 1
    
    print("\n" + "=" * 60)
    print(f"Results: {passed} passed, {failed} failed")
    print("=" * 60)
    
    return failed == 0


if __name__ == "__main__":
    success = run_all_tests()
    sys.exit(0 if success else 1)
