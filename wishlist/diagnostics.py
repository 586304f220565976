# wishlist/diagnostics.py
import re
from pathlib import Path

from .config import BASE_URL
from .log import get_logger

logger = get_logger("wishlist.diagnostics")

LOGIN_LINK_MARKER = f'href="{BASE_URL}/en/login"'
_TITLE_RE = re.compile(r"<title>([^<]+)</title>", re.IGNORECASE)


def html_dump_sink(directory):
    """
    Build a diagnostic sink that mirrors each fetched page to a file.

    Args:
        directory (str | Path): target directory, created on first use

    Returns:
        Callable[[int, str], None]: sink writing `wishlist-page-<n>.html`
    """
    target = Path(directory)

    def sink(page, html):
        target.mkdir(parents=True, exist_ok=True)
        path = target / f"wishlist-page-{page}.html"
        path.write_text(html, encoding="utf-8")
        logger.debug("Saved HTML of page %d to %s", page, path)

    return sink


def page_title(html):
    m = _TITLE_RE.search(html)
    return m.group(1).strip() if m else "unknown"


def has_login_link(html):
    """True when the page offers a login link, i.e. the session is not accepted."""
    return LOGIN_LINK_MARKER in html
