"""
Retry utilities
"""

import asyncio
import logging
from typing import Callable, Any
import functools

logger = logging.getLogger(__name__)


def retry_async(
    max_attempts: int = 3,
    delay: float = 1.0,
    backoff_factor: float = 2.0,
    exceptions: tuple = (Exception,)
):
    """
    Decorator for retrying async translator calls

    Args:
        max_attempts: Maximum number of attempts (at least one is made)
        delay: Initial delay between attempts in seconds
        backoff_factor: Factor to increase delay
        exceptions: Tuple of exceptions to retry on; anything else propagates at once
    """
    attempts = max(1, max_attempts)

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        async def wrapper(*args, **kwargs) -> Any:
            current_delay = delay

            for attempt in range(1, attempts + 1):
                try:
                    result = await func(*args, **kwargs)
                except exceptions as e:
                    if attempt == attempts:
                        logger.error(f"{func.__qualname__} failed after {attempts} attempts: {e}")
                        raise
                    logger.warning(
                        f"{func.__qualname__} failed on attempt {attempt}/{attempts}: {e}. "
                        f"Retrying in {current_delay}s..."
                    )
                    await asyncio.sleep(current_delay)
                    current_delay *= backoff_factor
                else:
                    if attempt > 1:
                        logger.info(f"{func.__qualname__} succeeded on attempt {attempt}")
                    return result

        return wrapper
    return decorator
