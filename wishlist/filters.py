# wishlist/filters.py
"""
In-memory search, filtering and sorting over extracted books.

Prices stay raw display strings on BookRecord; they are turned into numbers
only here, when a filter or sort needs them.
"""
import re

UNKNOWN_AVAILABILITY = "Unknown"
SORT_FIELDS = ("title", "author", "price", "availability")

_PRICE_RE = re.compile(r"[\d.,]+")
_NUMBER_PREFIX_RE = re.compile(r"\d*\.?\d+|\d+")


def parse_price(price):
    """
    Turn a display price such as "12,50 €" into a float.

    The first run of digits/dots/commas is taken and its first comma is read
    as a decimal point. Missing or digit-less prices count as 0.
    """
    if not price:
        return 0.0
    m = _PRICE_RE.search(price)
    if not m:
        return 0.0
    number = _NUMBER_PREFIX_RE.match(m.group(0).replace(",", ".", 1))
    if not number:
        return 0.0
    return float(number.group(0))


def availability_label(book):
    return book.availability or UNKNOWN_AVAILABILITY


def unique_authors(books):
    return sorted({b.author for b in books})


def unique_availabilities(books):
    return sorted({availability_label(b) for b in books})


def filter_books(
    books,
    search=None,
    availability=None,
    authors=None,
    min_price=None,
    max_price=None,
):
    """
    Filter books the way the wishlist page does.

    Args:
        books (list[BookRecord]): books to filter
        search (str, optional): case-insensitive substring of title or author
        availability (list[str], optional): allowed availability labels;
            books without availability match "Unknown"
        authors (list[str], optional): allowed authors, exact match
        min_price (float, optional): inclusive lower bound on parse_price
        max_price (float, optional): inclusive upper bound on parse_price

    Returns:
        list[BookRecord]: matching books, input order preserved

    Note:
        Empty or None criteria are ignored, so filter_books(books) returns
        every book.
    """
    result = list(books)

    if search:
        query = search.lower()
        result = [
            b for b in result
            if query in b.title.lower() or query in b.author.lower()
        ]

    if availability:
        wanted = set(availability)
        result = [b for b in result if availability_label(b) in wanted]

    if authors:
        wanted = set(authors)
        result = [b for b in result if b.author in wanted]

    if min_price is not None:
        result = [b for b in result if parse_price(b.price) >= min_price]
    if max_price is not None:
        result = [b for b in result if parse_price(b.price) <= max_price]

    return result


def sort_books(books, sort_by="title", order="asc"):
    """Return a new list sorted by one of SORT_FIELDS; ties keep input order."""
    if sort_by == "title":
        key = lambda b: b.title.casefold()
    elif sort_by == "author":
        key = lambda b: b.author.casefold()
    elif sort_by == "price":
        key = lambda b: parse_price(b.price)
    elif sort_by == "availability":
        key = lambda b: (b.availability or "").casefold()
    else:
        raise ValueError(f"Unknown sort field: {sort_by!r}")
    if order not in ("asc", "desc"):
        raise ValueError(f"Unknown sort order: {order!r}")
    return sorted(books, key=key, reverse=(order == "desc"))
