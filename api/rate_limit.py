# api/rate_limit.py
import os

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

API_RATE_LIMIT = os.getenv("API_RATE_LIMIT", "100/hour")

limiter = Limiter(key_func=get_remote_address)


async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    """Render a 429 in the books response shape, so clients still get `books`."""
    return JSONResponse(
        {"error": f"Rate limit exceeded: {exc.detail}", "books": []},
        status_code=429,
    )


def register_rate_limit(app: FastAPI):
    """
    Register the slowapi limiter and its 429 handler on the FastAPI app.

    Must be called during application initialization, before requests are
    served. Limits themselves are declared per route with @limiter.limit.
    """
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
