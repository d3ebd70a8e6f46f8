"""Tests for product ID parsing and ordering helpers."""
from app.utils.helpers import min_id, normalize_string, parse_product_ids, sorted_ids


def test_parse_splits_on_commas_whitespace_and_full_width_commas():
    assert parse_product_ids("1008, 1009\n1010，1011\t1012") == [
        "1008",
        "1009",
        "1010",
        "1011",
        "1012",
    ]


def test_parse_drops_duplicates_and_blanks():
    assert parse_product_ids(" ,1008,,1008 ,") == ["1008"]
    assert parse_product_ids("") == []


def test_ids_sort_numerically_not_lexically():
    assert sorted_ids(["1008", "251", "3443006"]) == ["251", "1008", "3443006"]
    assert min_id(["1009", "1008"]) == "1008"


def test_non_numeric_ids_sort_last():
    assert sorted_ids(["abc", "12", "2"]) == ["2", "12", "abc"]
    assert min_id([]) == ""


def test_normalize_string():
    assert normalize_string("  Amoxicillin Capsules ") == "Amoxicillin Capsules"
    assert normalize_string(None) == ""


def test_non_ascii_digits_are_not_numeric():
    assert sorted_ids(["²", "1009", "1008"]) == ["1008", "1009", "²"]
    assert min_id(["²", "1009"]) == "1009"
