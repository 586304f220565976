# tests/conftest.py
import sys
import os

ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
sys.path.insert(0, ROOT_DIR)

import pytest
from httpx import ASGITransport, AsyncClient

from api.main import app
from wishlist.models import BookRecord

CARD_CLASSES = "w-full max-w-sm flex flex-col justify-between"


def build_card(
    title="Book",
    href="/en/products/book",
    author="Some Author",
    img_src="/images/book.jpg",
    img_attr="src",
    price="10.00 €",
    green=None,
    red=None,
):
    """
    Render one wishlist card the way the site marks it up.

    Passing None for a field leaves its element out of the card.
    """
    parts = [f'<div class="{CARD_CLASSES}">']
    if href is not None:
        title_attr = f' title="{title}"' if title else ""
        parts.append(f'<a href="{href}"{title_attr}>')
        if img_src is not None:
            parts.append(f'<img {img_attr}="{img_src}" alt="">')
        parts.append("</a>")
    else:
        if img_src is not None:
            parts.append(f'<img {img_attr}="{img_src}" alt="">')
        if title:
            parts.append(f'<span class="text-base font-normal">{title}</span>')
    if author is not None:
        parts.append(f'<div class="truncate text-gray-500">{author}</div>')
    if price is not None:
        parts.append(f'<div class="font-bold text-gray-900">{price}</div>')
    if green is not None:
        parts.append(f'<span class="text-green-600">{green}</span>')
    if red is not None:
        parts.append(f'<span class="text-red-600">{red}</span>')
    parts.append("</div>")
    return "".join(parts)


def build_page(cards):
    return (
        "<html><head><title>Wishlist</title></head><body>"
        + "".join(cards)
        + "</body></html>"
    )


def page_with_books(page, count):
    return build_page(
        build_card(title=f"Book {page}-{i}", href=f"/en/products/book-{page}-{i}")
        for i in range(count)
    )


class FakeFetcher:
    """Stands in for WishlistFetcher: serves canned pages and records calls."""

    def __init__(self, pages):
        # page index -> html string or an exception instance to raise
        self.pages = pages
        self.calls = []
        self.closed = False

    async def fetch(self, page):
        self.calls.append(page)
        result = self.pages.get(page, build_page([]))
        if isinstance(result, Exception):
            raise result
        return result

    async def close(self):
        self.closed = True


@pytest.fixture
def card():
    return build_card


@pytest.fixture
def page():
    return build_page


@pytest.fixture
def sample_books():
    """
    Three books with distinct authors, prices and availability.

    - "Alpha": 10,50 €, In stock
    - "Beta": 20.00 €, Out of stock
    - "gamma": no price, no availability, no url
    """
    return [
        BookRecord(
            id="page:1:index:0:slug:alpha",
            title="Alpha",
            author="Ann Author",
            price="10,50 €",
            availability="In stock",
            url="https://mnogoknig.com/en/products/alpha",
            cover_image="https://mnogoknig.com/images/alpha.jpg",
        ),
        BookRecord(
            id="page:1:index:1:slug:beta",
            title="Beta",
            author="Bob Writer",
            price="20.00 €",
            availability="Out of stock",
        ),
        BookRecord(
            id="page:2:index:0:slug:nourl",
            title="gamma",
            author="Ann Author",
        ),
    ]


@pytest.fixture
def books_page():
    return page_with_books


@pytest.fixture
def fake_fetcher():
    return FakeFetcher


@pytest.fixture
async def client(monkeypatch, sample_books):
    """
    Async test client with the extraction service replaced.

    get_favorite_books is patched to return sample_books, and API_KEY is
    cleared so endpoints are open unless a test sets it.
    """

    async def fake_get_favorite_books():
        return sample_books

    monkeypatch.setattr("api.main.get_favorite_books", fake_get_favorite_books)
    monkeypatch.setattr("api.auth.API_KEY", None)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
