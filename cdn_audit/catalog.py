"""Download and decode the asset catalog."""

from __future__ import annotations

import logging
from typing import Any, List, Optional

import requests

from .errors import CatalogError
from .models import CatalogEntry

logger = logging.getLogger("cdn_audit")

CATALOG_TIMEOUT = 30


def parse_catalog(payload: Any) -> List[CatalogEntry]:
    """Decode ``[{"id": ..., "data": {"filetype": ...}}, ...]`` into entries."""
    if not isinstance(payload, list):
        raise CatalogError(f"Catalog must be a JSON array, got {type(payload).__name__}")
    entries: List[CatalogEntry] = []
    for index, item in enumerate(payload):
        try:
            entry_id = item["id"]
            filetype = item["data"]["filetype"]
        except (KeyError, TypeError) as exc:
            raise CatalogError(f"Malformed catalog entry at index {index}: {exc!r}") from exc
        if not isinstance(entry_id, str) or not isinstance(filetype, str):
            raise CatalogError(f"Malformed catalog entry at index {index}")
        entries.append(CatalogEntry(id=entry_id, filetype=filetype))
    return entries


def fetch_catalog(
    url: str,
    session: Optional[requests.Session] = None,
) -> List[CatalogEntry]:
    """Fetch the catalog JSON and return its entries in catalog order."""
    session = session or requests.Session()
    logger.info("Fetching catalog from %s", url)
    try:
        resp = session.get(url, timeout=CATALOG_TIMEOUT)
        resp.raise_for_status()
        payload = resp.json()
    except requests.RequestException as exc:
        raise CatalogError(f"Failed to fetch catalog {url}: {exc}") from exc
    except ValueError as exc:
        raise CatalogError(f"Catalog at {url} is not valid JSON: {exc}") from exc

    entries = parse_catalog(payload)
    logger.info("Catalog loaded (%d entries)", len(entries))
    return entries
