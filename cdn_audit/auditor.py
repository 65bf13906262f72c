"""High-level orchestration from catalog to report."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import List, Optional

import httpx

from .catalog import fetch_catalog
from .classifier import classify_all, collect_results
from .config import AuditConfig
from .expander import expand_catalog
from .models import AuditReport, CatalogEntry
from .prober import ProbeProgress, run_probes
from .stats import fold

logger = logging.getLogger("cdn_audit")


async def run_audit(
    config: AuditConfig,
    catalog: Optional[List[CatalogEntry]] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> AuditReport:
    """Expand the catalog, probe every target and fold the verdicts."""
    start = time.perf_counter()
    if catalog is None:
        catalog = await asyncio.to_thread(fetch_catalog, config.catalog_url)

    targets = expand_catalog(catalog, config.mode)
    logger.info(
        "Computed %d files to check (mode=%s)", len(targets), config.mode.value
    )

    progress = ProbeProgress(len(targets))
    outcomes = await run_probes(targets, config, client=client, progress=progress)
    verdicts = classify_all(outcomes)
    results = collect_results(verdicts)
    stats = fold(verdict for _, verdict in verdicts)
    elapsed = time.perf_counter() - start
    logger.info(
        "Finished in %.2fs (%d hit, %d miss, %d unknown, %d html walls)",
        elapsed,
        stats.hit,
        stats.miss,
        stats.unknown,
        stats.anomaly,
    )
    return AuditReport(
        mode=config.mode,
        results=results,
        stats=stats,
        elapsed_seconds=elapsed,
    )
