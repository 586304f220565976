# tests/test_filters.py
import pytest

from wishlist.filters import (
    filter_books,
    parse_price,
    sort_books,
    unique_authors,
    unique_availabilities,
)


@pytest.mark.parametrize(
    "raw, expected",
    [
        (None, 0.0),
        ("", 0.0),
        ("Price on request", 0.0),
        ("12,50 €", 12.5),
        ("€ 7.99", 7.99),
        ("15 EUR", 15.0),
        ("1.234.5", 1.234),
    ],
)
def test_parse_price(raw, expected):
    assert parse_price(raw) == pytest.approx(expected)


def test_facets(sample_books):
    assert unique_authors(sample_books) == ["Ann Author", "Bob Writer"]
    assert unique_availabilities(sample_books) == ["In stock", "Out of stock", "Unknown"]


def test_no_criteria_keeps_everything(sample_books):
    assert filter_books(sample_books) == sample_books


def test_search_matches_title_or_author_case_insensitively(sample_books):
    assert [b.title for b in filter_books(sample_books, search="GAM")] == ["gamma"]
    assert [b.title for b in filter_books(sample_books, search="ann")] == ["Alpha", "gamma"]


def test_availability_filter_treats_missing_as_unknown(sample_books):
    result = filter_books(sample_books, availability=["Unknown", "In stock"])
    assert [b.title for b in result] == ["Alpha", "gamma"]


def test_author_filter(sample_books):
    assert [b.title for b in filter_books(sample_books, authors=["Bob Writer"])] == ["Beta"]


def test_price_range_is_inclusive(sample_books):
    result = filter_books(sample_books, min_price=10.5, max_price=20)
    assert [b.title for b in result] == ["Alpha", "Beta"]


def test_price_range_counts_missing_price_as_zero(sample_books):
    assert [b.title for b in filter_books(sample_books, max_price=5)] == ["gamma"]


def test_sort_by_title_ignores_case(sample_books):
    assert [b.title for b in sort_books(sample_books)] == ["Alpha", "Beta", "gamma"]
    assert [b.title for b in sort_books(sample_books, order="desc")] == ["gamma", "Beta", "Alpha"]


def test_sort_by_price(sample_books):
    result = sort_books(sample_books, sort_by="price", order="desc")
    assert [b.title for b in result] == ["Beta", "Alpha", "gamma"]


def test_sort_by_availability_puts_missing_first(sample_books):
    result = sort_books(sample_books, sort_by="availability")
    assert [b.title for b in result] == ["gamma", "Alpha", "Beta"]


def test_sort_by_author_is_stable(sample_books):
    result = sort_books(sample_books, sort_by="author")
    assert [b.title for b in result] == ["Alpha", "gamma", "Beta"]


def test_unknown_sort_field(sample_books):
    with pytest.raises(ValueError):
        sort_books(sample_books, sort_by="rating")
