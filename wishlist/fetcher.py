# wishlist/fetcher.py
import httpx

from .config import (
    BASE_URL,
    WISHLIST_PATH,
    FETCH_TIMEOUT,
    FETCH_RETRIES,
    USER_AGENT,
)
from .log import get_logger
from .utils import network_retry

logger = get_logger("wishlist.fetcher")


class TransportFailure(Exception):
    """A wishlist page could not be retrieved (non-2xx status or network fault)."""

    def __init__(self, page, status_code=None, cause=None):
        self.page = page
        self.status_code = status_code
        self.cause = cause
        if status_code is not None:
            reason = f"HTTP {status_code}"
        else:
            reason = f"{type(cause).__name__}: {cause}"
        super().__init__(f"page {page}: {reason}")


class WishlistFetcher:
    def __init__(
        self,
        session_cookie,
        base_url=BASE_URL,
        path=WISHLIST_PATH,
        client=None,
        timeout=FETCH_TIMEOUT,
        retries=FETCH_RETRIES,
        sink=None,
    ):
        self.session_cookie = session_cookie
        self.base_url = base_url.rstrip("/")
        self.path = path
        self.retries = retries
        self.sink = sink
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(
            timeout=timeout, follow_redirects=True
        )

    async def close(self):
        """Close the HTTP client if this fetcher created it."""
        if self._owns_client:
            await self.client.aclose()

    def page_url(self, page):
        return f"{self.base_url}{self.path}?page={page}"

    def headers(self):
        """
        Request headers for one listing page.

        The site serves a different page (or refuses) to clients that do not
        look like a browser, so the cookie travels with browser-like headers.
        """
        return {
            "Cookie": self.session_cookie,
            "User-Agent": USER_AGENT,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
            "Accept-Language": "en-US,en;q=0.5",
        }

    async def fetch(self, page):
        """
        Fetch the raw HTML of one wishlist page.

        Args:
            page (int): 1-based page index

        Returns:
            str: response body

        Raises:
            TransportFailure: on a non-2xx response or a network fault, after
                `self.retries` attempts
        """
        html = await network_retry(
            attempts=self.retries, retry_on=TransportFailure
        )(self._get)(page)
        self._mirror(page, html)
        return html

    async def _get(self, page):
        logger.info(f"Fetching wishlist page {page}...")
        try:
            resp = await self.client.get(
                self.page_url(page),
                headers=self.headers(),
            )
        except httpx.HTTPError as e:
            logger.warning(f"Fetch error on page {page}: {e!r}")
            raise TransportFailure(page, cause=e) from e
        if not resp.is_success:
            logger.warning(
                f"Failed to fetch page {page}: {resp.status_code} {resp.reason_phrase}"
            )
            raise TransportFailure(page, status_code=resp.status_code)
        return resp.text

    def _mirror(self, page, html):
        if self.sink is None:
            return
        try:
            self.sink(page, html)
        except Exception as e:
            logger.debug(f"Diagnostic sink failed for page {page}: {e}")
