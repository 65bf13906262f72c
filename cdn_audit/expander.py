"""Expand catalog entries into the concrete filenames to probe."""

from __future__ import annotations

from typing import Iterable, List

from .models import CatalogEntry, CheckMode

PREVIEW_SOURCE_TYPE = "pdf"


def expand(entry: CatalogEntry, mode: CheckMode) -> List[str]:
    """Return the probe targets implied by ``entry`` under ``mode``."""
    has_previews = entry.filetype == PREVIEW_SOURCE_TYPE
    file_target = f"{entry.id}.{entry.filetype}"

    if mode is CheckMode.FILE:
        return [file_target]
    if mode is CheckMode.JPG:
        return [f"{entry.id}.jpg"] if has_previews else []
    if mode is CheckMode.WEBP:
        return [f"{entry.id}.webp"] if has_previews else []

    targets = [file_target]
    if has_previews:
        targets.extend([f"{entry.id}.jpg", f"{entry.id}.webp"])
    return targets


def expand_catalog(entries: Iterable[CatalogEntry], mode: CheckMode) -> List[str]:
    targets: List[str] = []
    for entry in entries:
        targets.extend(expand(entry, mode))
    return targets
