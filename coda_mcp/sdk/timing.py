import time
import logging
from functools import wraps

logger = logging.getLogger(__name__)

def time_api_call(func):
    """A decorator to time async API calls and log the duration."""
    @wraps(func)
    async def wrapper(*args, **kwargs):
        start_time = time.perf_counter()
        try:
            return await func(*args, **kwargs)
        finally:
            duration = time.perf_counter() - start_time
            # args[1:3] is (method, path) for CodaClient._request
            label = " ".join(str(a) for a in args[1:3]) or func.__name__
            logger.debug(f"API call '{label}' took {duration:.4f} seconds.")
    return wrapper
