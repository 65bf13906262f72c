"""Concurrent probing of delivery endpoints."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

import httpx
from bs4 import BeautifulSoup

from .classifier import is_html
from .config import AGE_HEADER, CACHE_STATUS_HEADER, NOT_AUTHENTICATED_MARKER, AuditConfig
from .errors import AuthenticationRequiredError
from .models import ProbeFailure, ProbeOutcome, ProbeResponse

logger = logging.getLogger("cdn_audit")

_PROGRESS_LOG_EVERY = 100


class ProbeProgress:
    """Counter of finished probes, shared by all workers of one run."""

    def __init__(self, total: int) -> None:
        self.total = total
        self.completed = 0

    def advance(self) -> None:
        self.completed += 1
        if self.completed == self.total or self.completed % _PROGRESS_LOG_EVERY == 0:
            percent = self.completed / self.total * 100 if self.total else 100.0
            logger.info(
                "Probed %d/%d (%.0f%%)", self.completed, self.total, percent
            )


def page_title(html: str) -> Optional[str]:
    soup = BeautifulSoup(html, "html.parser")
    if soup.title and soup.title.string:
        return soup.title.string.strip()
    return None


def save_wall_page(target: str, html: str, output_dir: Path) -> Path:
    """Persist an HTML wall body as ``<target>.html`` for later inspection."""
    output_dir.mkdir(parents=True, exist_ok=True)
    destination = output_dir / f"{target}.html"
    destination.write_text(html, encoding="utf-8")
    logger.error(
        "HTML page served for %s (title: %s); saved as %s",
        target,
        page_title(html) or "n/a",
        destination,
    )
    return destination


async def probe(
    client: httpx.AsyncClient,
    target: str,
    config: AuditConfig,
) -> ProbeOutcome:
    """Issue a HEAD for ``target`` and capture the headers the classifier needs.

    When the CDN answers with HTML the body is fetched with a GET. A page
    carrying the not-authenticated marker without a cookie raises
    :class:`AuthenticationRequiredError`; any other page is saved to disk.
    """
    url = config.file_url(target)
    headers = {"cookie": config.cookie or ""}
    try:
        resp = await client.head(url, headers=headers, follow_redirects=True)
    except httpx.HTTPError as exc:
        logger.debug("Probe failed for %s: %s", url, exc)
        return ProbeFailure(str(exc) or exc.__class__.__name__)

    content_type = resp.headers.get("content-type")
    wall_path = None
    if is_html(content_type):
        try:
            page = await client.get(url, headers=headers, follow_redirects=True)
        except httpx.HTTPError as exc:
            logger.error("Failed to fetch HTML page %s: %s", url, exc)
            return ProbeFailure(str(exc) or exc.__class__.__name__)
        body = page.text
        if NOT_AUTHENTICATED_MARKER in body and not config.cookie:
            raise AuthenticationRequiredError(target)
        wall_path = save_wall_page(target, body, config.output_dir)

    return ProbeResponse(
        status=resp.status_code,
        content_type=content_type,
        cache_status=resp.headers.get(CACHE_STATUS_HEADER),
        age=resp.headers.get(AGE_HEADER),
        wall_path=wall_path,
    )


async def _drain(
    queue: "asyncio.Queue[str]",
    client: httpx.AsyncClient,
    config: AuditConfig,
    progress: ProbeProgress,
    results: List[Tuple[str, ProbeOutcome]],
) -> None:
    while True:
        try:
            target = queue.get_nowait()
        except asyncio.QueueEmpty:
            return
        outcome = await probe(client, target, config)
        progress.advance()
        results.append((target, outcome))


async def run_probes(
    targets: Sequence[str],
    config: AuditConfig,
    client: Optional[httpx.AsyncClient] = None,
    progress: Optional[ProbeProgress] = None,
) -> List[Tuple[str, ProbeOutcome]]:
    """Probe every target with at most ``config.concurrency`` in flight.

    Results come back in completion order. If a worker hits the login
    wall without a cookie, the remaining workers are cancelled and the
    error is re-raised with the outcomes gathered so far.
    """
    progress = progress or ProbeProgress(len(targets))
    results: List[Tuple[str, ProbeOutcome]] = []
    if not targets:
        return results

    queue: "asyncio.Queue[str]" = asyncio.Queue()
    for target in targets:
        queue.put_nowait(target)

    owns_client = client is None
    if client is None:
        client = httpx.AsyncClient(follow_redirects=True)
    worker_count = max(1, min(config.concurrency, len(targets)))
    logger.info(
        "Probing %d files with %d concurrent workers", len(targets), worker_count
    )
    workers = [
        asyncio.create_task(_drain(queue, client, config, progress, results))
        for _ in range(worker_count)
    ]
    try:
        await asyncio.gather(*workers)
    except BaseException as exc:
        for worker in workers:
            worker.cancel()
        await asyncio.gather(*workers, return_exceptions=True)
        if isinstance(exc, AuthenticationRequiredError):
            exc.partial = list(results)
        raise
    finally:
        if owns_client:
            await client.aclose()
    return results
