"""Configuration objects and constants for the cache audit."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .models import CheckMode

DEFAULT_CATALOG_URL = "https://files.byrdocs.org/metadata2.json"
DEFAULT_BASE_URL = "https://byrdocs.org"
DEFAULT_CONCURRENCY = 20

CACHE_STATUS_HEADER = "cf-cache-status"
AGE_HEADER = "age"
NOT_AUTHENTICATED_MARKER = "您没有使用北邮校园网(IPv6)访问本站"


@dataclass
class AuditConfig:
    """Top-level settings that control catalog loading and probing."""

    output_dir: Path
    mode: CheckMode = CheckMode.ALL
    cookie: Optional[str] = None
    catalog_url: str = DEFAULT_CATALOG_URL
    base_url: str = DEFAULT_BASE_URL
    concurrency: int = DEFAULT_CONCURRENCY

    def file_url(self, target: str) -> str:
        return f"{self.base_url.rstrip('/')}/files/{target}"
