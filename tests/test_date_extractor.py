import pytest

from sensor_label.gs1_parser import parse_gs1_tags
from sensor_label.date_extractor import extract_dates, normalize_date


@pytest.mark.parametrize("value, expected", [
    ("2026-03-15", "2026-03-15"),
    ("2026/3/5", "2026-03-05"),
    ("03/15/2026", "2026-03-15"),
    ("20260315", "2026-03-15"),
    ("260315", "2026-03-15"),
    ("260200", "2026-02-28"),
    ("240200", "2024-02-29"),
])
def test_normalizes_known_forms(value, expected):
    assert normalize_date(value) == (expected, True)


@pytest.mark.parametrize("value", ["2026-13-45", "EXPSOON", "261332", "2026-02-30"])
def test_unparseable_dates_are_returned_unchanged(value):
    assert normalize_date(value) == (value, False)


def dates(text):
    return extract_dates(text, parse_gs1_tags(text))


def test_gs1_date_tags():
    assert dates("(11)2025-01-10 (17)2026-03-15") == (
        {'manufacture_date': '2025-01-10', 'expiration_date': '2026-03-15'}, [])


def test_gs1_yymmdd_tags():
    assert dates("(11)250110 (17)260315") == (
        {'manufacture_date': '2025-01-10', 'expiration_date': '2026-03-15'}, [])


def test_tagged_date_is_not_reused_as_bare_date():
    assert dates("(17)2026-03-15") == ({'expiration_date': '2026-03-15'}, [])


def test_bare_dates_fill_in_text_order():
    assert dates("MFG 2025/01/10 EXP 2026/03/15") == (
        {'manufacture_date': '2025-01-10', 'expiration_date': '2026-03-15'}, [])


def test_bare_date_fills_missing_manufacture_date():
    assert dates("(17)2026-03-15 MADE 2025-01-10") == (
        {'manufacture_date': '2025-01-10', 'expiration_date': '2026-03-15'}, [])


def test_malformed_tagged_date_is_flagged():
    assert dates("(17)2026-13-45") == ({'expiration_date': '2026-13-45'}, ['expiration_date'])


def test_non_date_tag_values_are_ignored():
    assert extract_dates("", {'17': 'SENSORS'}) == ({}, [])


def test_no_dates():
    assert dates("") == ({}, [])
