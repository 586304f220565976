# api/main.py
from fastapi import FastAPI, Depends, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
from typing import List, Optional
import os
from dotenv import load_dotenv
import pandas as pd
from .auth import get_api_key
from .rate_limit import register_rate_limit, limiter, API_RATE_LIMIT
from wishlist.filters import (
    SORT_FIELDS,
    filter_books,
    sort_books,
    unique_authors,
    unique_availabilities,
)
from wishlist.log import get_logger
from wishlist.service import get_favorite_books

load_dotenv()
API_PORT = int(os.getenv("API_PORT", "8000"))

EXPORT_COLUMNS = ["id", "title", "author", "coverImage", "price", "availability", "url"]

app = FastAPI(title="Wishlist Books API", version="1.0")

register_rate_limit(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET"],
    allow_headers=["*"],
)

logger = get_logger("api")


def error_response(message, status_code):
    """Error body that still carries an empty `books` list."""
    return JSONResponse({"error": message, "books": []}, status_code=status_code)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return error_response(str(exc.detail), exc.status_code)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return error_response(f"Invalid request: {exc.errors()}", 422)


@app.get("/books", dependencies=[Depends(get_api_key)])
@limiter.limit(API_RATE_LIMIT)
async def list_books(request: Request):
    """
    Return every book on the user's wishlist.

    Fetches all wishlist pages afresh on each call; nothing is cached or
    stored between requests.

    Args:
        request (Request): FastAPI request object (required for rate limiting)

    Returns:
        JSONResponse: {"books": [...]} with BookRecord objects using the
            public field names. An empty list when no session cookie is
            configured.

    Errors:
        500 with {"error": "Failed to fetch books", "books": []} on any
        unexpected failure.
    """
    try:
        books = await get_favorite_books()
        return JSONResponse({"books": [b.to_dict() for b in books]})
    except Exception as e:
        logger.exception(f"Error fetching books: {e}")
        return error_response("Failed to fetch books", 500)


@app.get("/books/search", dependencies=[Depends(get_api_key)])
@limiter.limit(API_RATE_LIMIT)
async def search_books(
    request: Request,
    search: Optional[str] = Query(None),
    availability: Optional[List[str]] = Query(None),
    author: Optional[List[str]] = Query(None),
    min_price: Optional[float] = Query(None),
    max_price: Optional[float] = Query(None),
    sort_by: str = Query("title", pattern="^(" + "|".join(SORT_FIELDS) + ")$"),
    order: str = Query("asc", pattern="^(asc|desc)$"),
):
    """
    Return wishlist books filtered and sorted in memory.

    Args:
        request (Request): FastAPI request object (required for rate limiting)
        search (str, optional): substring of title or author, case-insensitive
        availability (list[str], optional): allowed availability labels,
            "Unknown" matches books without one
        author (list[str], optional): allowed authors
        min_price (float, optional): inclusive lower price bound
        max_price (float, optional): inclusive upper price bound
        sort_by (str): title, author, price or availability. Defaults to title
        order (str): asc or desc. Defaults to asc

    Returns:
        JSONResponse:
            - books (list[dict]): matching books, sorted
            - total (int): number of books before filtering
            - authors (list[str]): distinct authors over all books
            - availabilities (list[str]): distinct availability labels
    """
    try:
        books = await get_favorite_books()
        matched = filter_books(
            books,
            search=search,
            availability=availability,
            authors=author,
            min_price=min_price,
            max_price=max_price,
        )
        matched = sort_books(matched, sort_by=sort_by, order=order)
        return JSONResponse(
            {
                "books": [b.to_dict() for b in matched],
                "total": len(books),
                "authors": unique_authors(books),
                "availabilities": unique_availabilities(books),
            }
        )
    except Exception as e:
        logger.exception(f"Error searching books: {e}")
        return error_response("Failed to fetch books", 500)


@app.get("/books/export.csv", dependencies=[Depends(get_api_key)])
@limiter.limit(API_RATE_LIMIT)
async def export_books(request: Request):
    """
    Return the wishlist as a CSV download.

    The file is built in memory for this response only. Columns follow the
    JSON field names; absent optional fields are left empty.
    """
    try:
        books = await get_favorite_books()
        df = pd.DataFrame([b.to_dict() for b in books], columns=EXPORT_COLUMNS)
        return Response(
            df.to_csv(index=False),
            media_type="text/csv",
            headers={"Content-Disposition": 'attachment; filename="wishlist.csv"'},
        )
    except Exception as e:
        logger.exception(f"Error exporting books: {e}")
        return error_response("Failed to export books", 500)


# Run uvicorn externally or here
if __name__ == "__main__":
    import uvicorn

    uvicorn.run("api.main:app", host="0.0.0.0", port=API_PORT, reload=True)
