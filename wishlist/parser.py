# wishlist/parser.py
"""
Extract book records from one wishlist page.

The selectors below couple this module to the site's current markup (Tailwind
utility classes). When the site changes, update the constant for the affected
field; the extraction logic itself should not need to change.
"""
import os

from bs4 import BeautifulSoup

from .config import BASE_URL
from .log import get_logger
from .models import BookRecord, UNKNOWN_AUTHOR
from .utils import ensure_absolute_url, url_slug

logger = get_logger("wishlist.parser")

CARD_SELECTOR = os.getenv(
    "WISHLIST_CARD_SELECTOR", ".w-full.max-w-sm.flex.flex-col.justify-between"
)
PRODUCT_LINK_SELECTOR = 'a[href*="/products/"]'
TITLED_LINK_SELECTOR = "a[title]"
TITLE_LABEL_SELECTOR = "span.text-base.font-normal"
AUTHOR_SELECTORS = (".truncate.text-gray-500", ".text-gray-500.text-sm.font-light")
IMAGE_SELECTOR = "img"
IMAGE_SOURCE_ATTRS = ("src", "data-src")
PRICE_SELECTOR = ".font-bold.text-gray-900"
AVAILABILITY_SELECTORS = (
    ".text-green-600, .text-green-500",
    ".text-red-600, .text-red-500",
)


def _attr(tag, name):
    if tag is None:
        return None
    value = tag.get(name)
    if isinstance(value, list):
        value = " ".join(value)
    return value.strip() if isinstance(value, str) else None


def _text(tag):
    return tag.get_text().strip() if tag is not None else None


def _first_non_empty(strategies, card):
    """Run `strategies` in order and return the first non-empty result."""
    for strategy in strategies:
        value = strategy(card)
        if value:
            return value
    return None


def _product_href(card):
    return _attr(card.select_one(PRODUCT_LINK_SELECTOR), "href")


def _title_from_product_link(card):
    return _attr(card.select_one(PRODUCT_LINK_SELECTOR), "title")


def _title_from_titled_link(card):
    return _attr(card.select_one(TITLED_LINK_SELECTOR), "title")


def _title_from_label(card):
    return _text(card.select_one(TITLE_LABEL_SELECTOR))


def _title_from_image_alt(card):
    return _attr(card.select_one(IMAGE_SELECTOR), "alt")


def _author_from(selector):
    def strategy(card):
        return _text(card.select_one(selector))

    return strategy


def _image_source(attr):
    def strategy(card):
        return _attr(card.select_one(IMAGE_SELECTOR), attr)

    return strategy


def _availability_from(selector):
    def strategy(card):
        return _text(card.select_one(selector))

    return strategy


TITLE_STRATEGIES = (
    _title_from_product_link,
    _title_from_titled_link,
    _title_from_label,
    _title_from_image_alt,
)
AUTHOR_STRATEGIES = tuple(_author_from(s) for s in AUTHOR_SELECTORS)
COVER_IMAGE_STRATEGIES = tuple(_image_source(a) for a in IMAGE_SOURCE_ATTRS)
AVAILABILITY_STRATEGIES = tuple(_availability_from(s) for s in AVAILABILITY_SELECTORS)


def make_book_id(page, index, url):
    return f"page:{page}:index:{index}:slug:{url_slug(url) or 'nourl'}"


def parse_card(card, page, index, base_url=BASE_URL):
    """
    Build a BookRecord from one card element.

    Args:
        card (bs4.Tag): the matched card container
        page (int): page index the card was found on
        index (int): position of the card among all matched cards of the page
        base_url (str): origin used to absolutize relative links

    Returns:
        BookRecord | None: None when no title can be resolved (decorative or
            placeholder card)
    """
    title = _first_non_empty(TITLE_STRATEGIES, card)
    if not title:
        return None

    href = _product_href(card)
    cover = _first_non_empty(COVER_IMAGE_STRATEGIES, card)

    return BookRecord(
        id=make_book_id(page, index, href),
        title=title,
        author=_first_non_empty(AUTHOR_STRATEGIES, card) or UNKNOWN_AUTHOR,
        cover_image=ensure_absolute_url(cover, base_url) if cover else None,
        price=_text(card.select_one(PRICE_SELECTOR)),
        availability=_first_non_empty(AVAILABILITY_STRATEGIES, card),
        url=ensure_absolute_url(href, base_url) if href else None,
    )


def parse_books(html, page, base_url=BASE_URL):
    """
    Parse every book card on a wishlist page, in document order.

    Cards without a resolvable title are skipped; a page without any
    matching card yields an empty list.
    """
    soup = BeautifulSoup(html, "lxml")
    cards = soup.select(CARD_SELECTOR)
    logger.debug(f"Selector matched {len(cards)} elements on page {page}")

    books = []
    for index, card in enumerate(cards):
        try:
            book = parse_card(card, page, index, base_url=base_url)
        except Exception as e:
            logger.exception(f"Failed to parse card {index} on page {page}: {e}")
            continue
        if book is None:
            logger.debug(f"Skipping card {index} on page {page}: no title")
            continue
        books.append(book)
    return books
