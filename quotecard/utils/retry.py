"""Retry policies for external calls."""

import logging

from googleapiclient.errors import HttpError
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry,
    retry_if_exception,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
    wait_none,
)

logger = logging.getLogger(__name__)

_TRANSIENT_STATUSES = {429, 500, 502, 503, 504}


def _is_transient_http_error(exc: BaseException) -> bool:
    return isinstance(exc, HttpError) and exc.resp.status in _TRANSIENT_STATUSES


# YouTube Data API retry decorator (rate limits and server errors only)
youtube_retry = retry(
    retry=retry_if_exception(_is_transient_http_error),
    wait=wait_exponential(multiplier=1, min=1, max=20),
    stop=stop_after_attempt(3),
    before_sleep=before_sleep_log(logger, logging.WARNING),
    reraise=True,
)


def image_retrying(max_retries: int, retry_on: type[BaseException]) -> AsyncRetrying:
    """Build the retry controller for one image acquisition.

    The first attempt plus ``max_retries`` immediate retries; the caller
    decides what each attempt fetches (e.g. a cache-busted URL).
    """
    return AsyncRetrying(
        retry=retry_if_exception_type(retry_on),
        wait=wait_none(),
        stop=stop_after_attempt(max_retries + 1),
        before_sleep=before_sleep_log(logger, logging.DEBUG),
        reraise=True,
    )
