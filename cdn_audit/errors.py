"""Exceptions raised by the audit pipeline."""

from __future__ import annotations

from typing import List, Tuple

from .models import ProbeOutcome


class AuditError(Exception):
    """Base class for audit failures that stop the run."""


class CatalogError(AuditError):
    """The catalog could not be downloaded or decoded."""


class AuthenticationRequiredError(AuditError):
    """The CDN answered with its login wall and no cookie was supplied."""

    def __init__(
        self,
        target: str,
        partial: List[Tuple[str, ProbeOutcome]] | None = None,
    ) -> None:
        super().__init__(f"Not authenticated while fetching {target}")
        self.target = target
        self.partial = list(partial or [])
