# api/auth.py
from fastapi import HTTPException, Security
import os
from fastapi.security.api_key import APIKeyHeader
from dotenv import load_dotenv

load_dotenv()
API_KEY = os.getenv("API_KEY")
APIKEY_NAME = "X-API-Key"
api_key_header = APIKeyHeader(name=APIKEY_NAME, auto_error=False)


async def get_api_key(api_key_header: str = Security(api_key_header)):
    """
    Validate the API key from the request header.

    FastAPI dependency protecting the books endpoints. When API_KEY is not
    configured the endpoints are open, which suits a single-user local setup.

    Args:
        api_key_header (str): API key extracted from X-API-Key header via
            Security dependency injection

    Returns:
        str | None: The validated API key, None when no key is configured

    Raises:
        HTTPException: 401 if a key is configured and the header is missing
        HTTPException: 403 if the header doesn't match API_KEY
    """
    if not API_KEY:
        return None
    if not api_key_header:
        raise HTTPException(status_code=401, detail="Missing API Key")
    if api_key_header != API_KEY:
        raise HTTPException(status_code=403, detail="Forbidden")
    return api_key_header
