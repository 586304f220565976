# wishlist/utils.py
from urllib.parse import urljoin, urlparse

from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
)


def ensure_absolute_url(url, base_url):
    """
    Make a link absolute against the site's base origin.

    Args:
        url (str): href/src value as found in the markup
        base_url (str): site origin, e.g. "https://mnogoknig.com"

    Returns:
        str: `url` unchanged when it already has a scheme and host, otherwise
            the url resolved against `base_url`. Protocol-relative values
            ("//cdn/...") keep their own host. None when `url` cannot be
            parsed at all (e.g. a broken IPv6 host).
    """
    try:
        parsed = urlparse(url)
    except ValueError:
        return None
    if parsed.scheme and parsed.netloc:
        return url
    return urljoin(base_url.rstrip("/") + "/", url)


def url_slug(url):
    """Return the last non-empty path segment of `url`, or "" if there is none."""
    if not url:
        return ""
    try:
        path = urlparse(url).path
    except ValueError:
        return ""
    segments = [s for s in path.split("/") if s]
    return segments[-1] if segments else ""


def network_retry(attempts=3, retry_on=Exception):
    """
    Create a tenacity retry decorator for handling network failures.

    Works on both plain and async callables (tenacity picks AsyncRetrying for
    coroutine functions).

    Args:
        attempts (int): Maximum number of attempts, 1 means no retry.
        retry_on (type | tuple[type, ...]): Exception type(s) worth retrying.

    Returns:
        Callable: Configured retry decorator

    Retry Behavior:
        - Stops after `attempts` attempts
        - Waits with exponential backoff: min=1s, max=10s, multiplier=1
        - Re-raises the last exception instead of tenacity.RetryError

    Example:
        @network_retry(attempts=5, retry_on=TransportFailure)
        async def fetch_page(page):
            ...
    """
    return retry(
        stop=stop_after_attempt(max(1, attempts)),
        wait=wait_exponential(multiplier=1, min=1, max=10),
        retry=retry_if_exception_type(retry_on),
        reraise=True,
    )
