# wishlist/crawler.py
from .config import BASE_URL, WISHLIST_PAGES
from .diagnostics import page_title, has_login_link
from .fetcher import TransportFailure, WishlistFetcher
from .log import get_logger
from .parser import parse_books

logger = get_logger("wishlist.crawler")


class WishlistCrawler:
    def __init__(
        self,
        session_cookie,
        base_url=BASE_URL,
        pages=WISHLIST_PAGES,
        fetcher=None,
        **fetcher_kwargs,
    ):
        self.base_url = base_url.rstrip("/")
        self.pages = tuple(sorted(pages))
        self.fetcher = fetcher or WishlistFetcher(
            session_cookie, base_url=self.base_url, **fetcher_kwargs
        )

    async def close(self):
        """Release the fetcher's HTTP client."""
        await self.fetcher.close()

    async def collect_all(self):
        """
        Walk the wishlist pages in ascending order and collect every book.

        Pages are fetched strictly one after another. A page that fails to
        download is logged and skipped; a page that downloads but yields no
        books marks the end of the wishlist and stops the walk.

        Returns:
            list[BookRecord]: books in page-then-position order. Never raises;
                failures only reduce what is returned.

        Logs:
            - Warning for each page lost to a TransportFailure
            - Page title and login-link presence, to spot an expired session
            - Info when pagination stops on an empty page
            - Exception details for unexpected per-page errors
        """
        books = []
        for page in self.pages:
            try:
                html = await self.fetcher.fetch(page)
            except TransportFailure as e:
                logger.warning(f"Skipping page {page}: {e}")
                continue
            except Exception as e:
                logger.exception(f"Unexpected error fetching page {page}: {e}")
                continue

            logger.debug(f"Page {page} title: {page_title(html)}")
            if has_login_link(html):
                logger.warning(
                    f"Page {page} shows a login link; the session cookie may have expired"
                )

            try:
                page_books = parse_books(html, page, base_url=self.base_url)
            except Exception as e:
                logger.exception(f"Failed to parse page {page}: {e}")
                continue

            logger.info(f"Found {len(page_books)} books on page {page}")
            if not page_books:
                logger.info(f"No books on page {page}, stopping pagination")
                break
            books.extend(page_books)

        logger.info(f"Total books fetched: {len(books)}")
        return books
