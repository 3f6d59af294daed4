import functools
import logging
import time
from typing import Callable, TypeVar

import httpx
from supabase import Client

from app.core.config import settings

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Dropped keep-alive connections surface as one of these from PostgREST calls.
RETRYABLE_ERRORS = (httpx.RemoteProtocolError, httpx.ConnectError)


def init_db():
    """Check at startup that the loyalty tables are reachable.

    Tables and the get_cafe_stats function live in supabase/migrations.
    A failed check is logged and the app still starts.
    """
    if not settings.supabase_url or not settings.supabase_secret_key:
        logger.warning("SUPABASE_URL / SUPABASE_SECRET_KEY not set, skipping cafes table check")
        return

    try:
        client = get_db()
        client.table("cafes").select("id").limit(1).execute()
        logger.info("Cafes table reachable")
    except Exception as e:
        logger.warning(f"Could not query the cafes table: {e}")
        logger.warning("Apply supabase/migrations and check the service key.")


def get_db() -> Client:
    """Service-role Supabase client for the current thread."""
    from .supabase_client import get_supabase_client
    return get_supabase_client()


def with_retry(max_retries: int = 2, delay: float = 0.1) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """Retry a repository call when the Supabase connection drops.

    The client is rebuilt before each new attempt. Errors other than
    RETRYABLE_ERRORS propagate immediately.
    """
    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> T:
            from .supabase_client import reset_supabase_client

            attempt = 0
            while True:
                try:
                    return func(*args, **kwargs)
                except RETRYABLE_ERRORS as e:
                    if attempt >= max_retries:
                        logger.error(f"{func.__name__} failed after {attempt + 1} attempts: {e}")
                        raise
                    attempt += 1
                    logger.warning(f"{func.__name__} lost its connection ({e}), retry {attempt}/{max_retries}")
                    reset_supabase_client()
                    time.sleep(delay)
        return wrapper
    return decorator
