"""
Document fetching

Retrieves schedule pages over HTTP. Single pages and whole batches; a batch
runs every request concurrently and either returns all pages in request
order or fails as a whole.
"""
import asyncio
import logging
from typing import Sequence

import httpx

from tvnow.errors import FetchFailed
from tvnow.utils.logging_helpers import log_batch_end, log_batch_start


logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0

# One short-lived connection per request
_NO_KEEPALIVE = httpx.Limits(max_keepalive_connections=0)


async def fetch_one(
    url: str,
    *,
    timeout: float = DEFAULT_TIMEOUT,
    transport: httpx.AsyncBaseTransport | None = None,
) -> str:
    """
    Download a schedule page

    No retries: any transport error or non-2xx status fails the fetch.

    Args:
        url: Page URL
        timeout: HTTP timeout in seconds
        transport: Optional httpx transport (tests pass an httpx.MockTransport)

    Returns:
        Decoded response body

    Raises:
        FetchFailed: On any network or HTTP status failure
    """
    logger.debug(f"Fetching {url}...")

    try:
        async with httpx.AsyncClient(
            timeout=timeout,
            transport=transport,
            limits=_NO_KEEPALIVE,
            headers={"Connection": "close"},
            follow_redirects=True,
        ) as client:
            response = await client.get(url)
            response.raise_for_status()
    except httpx.HTTPStatusError as e:
        logger.error(f"HTTP {e.response.status_code} for {url}")
        raise FetchFailed(url, e) from e
    except httpx.HTTPError as e:
        logger.error(f"Request to {url} failed: {type(e).__name__}: {e}")
        raise FetchFailed(url, e) from e

    logger.debug(f"Fetched {len(response.content) / 1024:.1f} KB from {url}")
    return response.text


async def fetch_many(
    urls: Sequence[str],
    *,
    timeout: float = DEFAULT_TIMEOUT,
    transport: httpx.AsyncBaseTransport | None = None,
) -> list[str]:
    """
    Download several schedule pages concurrently

    Every request runs to completion. Results come back in the order of
    `urls`, whatever order the responses arrive in. If any request failed
    the whole batch fails with the first failure in request order and no
    pages are returned.

    Raises:
        FetchFailed: If any request in the batch failed
    """
    log_batch_start(logger, len(urls))

    tasks = [
        asyncio.create_task(fetch_one(url, timeout=timeout, transport=transport))
        for url in urls
    ]
    results = await asyncio.gather(*tasks, return_exceptions=True)

    failures = [result for result in results if isinstance(result, BaseException)]
    if failures:
        logger.error(
            "Batch fetch failed: %s of %s requests failed, discarding results",
            len(failures),
            len(urls),
        )
        raise failures[0]

    log_batch_end(logger, len(results))
    return list(results)
