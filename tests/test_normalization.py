from __future__ import annotations

import math

import pytest

from pyskytrack.ingestion.normalize import (
    distinct_registrations,
    normalize_registration,
    safe_float,
    safe_int,
    safe_str,
)


@pytest.mark.parametrize("value", [None, "", True, "abc", math.nan, math.inf, object()])
def test_safe_float_rejects_placeholders(value: object) -> None:
    assert safe_float(value) is None


def test_safe_float_and_int_parse_numbers() -> None:
    assert safe_float("12.5") == 12.5
    assert safe_float(3) == 3.0
    assert safe_int("3499.6") == 3500
    assert safe_int("ground") is None


def test_safe_str_strips_padding() -> None:
    assert safe_str("BAW123  ") == "BAW123"
    assert safe_str("   ") is None
    assert safe_str(None) is None


def test_registration_is_upper_cased() -> None:
    assert normalize_registration(" g-abcd ") == "G-ABCD"
    assert normalize_registration("") is None


def test_distinct_registrations_keep_first_seen_order() -> None:
    values = ["G-WXYZ", None, "g-abcd", "G-WXYZ", "", "G-ABCD", "N12345"]
    assert distinct_registrations(values) == ["G-WXYZ", "G-ABCD", "N12345"]
