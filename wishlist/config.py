# wishlist/config.py
import os

from dotenv import load_dotenv

load_dotenv()

BASE_URL = os.getenv("BASE_URL", "https://mnogoknig.com").rstrip("/")
WISHLIST_PATH = os.getenv("WISHLIST_PATH", "/en/wishlist")

# the listing has a small known upper bound on pages; it is not discovered
WISHLIST_MAX_PAGES = int(os.getenv("WISHLIST_MAX_PAGES", "3"))
WISHLIST_PAGES = tuple(range(1, WISHLIST_MAX_PAGES + 1))

FETCH_TIMEOUT = float(os.getenv("FETCH_TIMEOUT", "30"))
FETCH_RETRIES = int(os.getenv("FETCH_RETRIES", "1"))

DEBUG_DUMP_DIR = os.getenv("DEBUG_DUMP_DIR", "")

SESSION_COOKIE_ENV = "MNOGOKNIG_SESSION_COOKIE"

USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


def get_session_cookie():
    """Return the session cookie from the environment, or None when unset/blank."""
    value = os.getenv(SESSION_COOKIE_ENV, "")
    return value if value.strip() else None
