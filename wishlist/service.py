# wishlist/service.py
import asyncio
import json

from .config import DEBUG_DUMP_DIR, SESSION_COOKIE_ENV, get_session_cookie
from .crawler import WishlistCrawler
from .diagnostics import html_dump_sink
from .log import get_logger

logger = get_logger("wishlist.service")


async def get_favorite_books(session_cookie=None, **crawler_kwargs):
    """
    Fetch the user's favourite books from every wishlist page.

    Args:
        session_cookie (str, optional): Cookie header value for the site.
            Defaults to the MNOGOKNIG_SESSION_COOKIE environment variable.
        **crawler_kwargs: Passed to WishlistCrawler (pages, fetcher,
            client, sink, ...), mainly for tests.

    Returns:
        list[BookRecord]: the collected books. Empty when no cookie is
            configured or when the run fails; this function never raises.
    """
    session_cookie = session_cookie or get_session_cookie()
    if not session_cookie:
        logger.error(f"{SESSION_COOKIE_ENV} not set in environment")
        return []

    if DEBUG_DUMP_DIR and "fetcher" not in crawler_kwargs:
        crawler_kwargs.setdefault("sink", html_dump_sink(DEBUG_DUMP_DIR))

    crawler = None
    try:
        crawler = WishlistCrawler(session_cookie, **crawler_kwargs)
        return await crawler.collect_all()
    except Exception as e:
        logger.exception(f"Failed to fetch favourite books: {e}")
        return []
    finally:
        if crawler is not None:
            try:
                await crawler.close()
            except Exception as e:
                logger.warning(f"Failed to close crawler: {e}")


# convenience script
async def main():
    books = await get_favorite_books()
    print(json.dumps({"books": [b.to_dict() for b in books]}, ensure_ascii=False, indent=2))


if __name__ == "__main__":
    asyncio.run(main())
