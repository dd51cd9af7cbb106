"""Shared result types and miss handling for the load-time passes."""

from __future__ import annotations

import dataclasses as dc
import logging

from kodama_meta.config.models import MissingPolicy
from kodama_meta.errors import SyncError


@dc.dataclass(slots=True)
class SyncReport:
    """Outcome of a taxon pass.

    Attributes
    ----------
    updated : list[str]
        Heading ids whose taxon label was overwritten, in contents order.
    missing : list[str]
        Diagnostics for entries that were skipped.
    """

    updated: list[str] = dc.field(default_factory=list)
    missing: list[str] = dc.field(default_factory=list)


def record_miss(
    logger: logging.Logger,
    policy: MissingPolicy,
    message: str,
    report: SyncReport | None = None,
) -> None:
    """Log a missing-element diagnostic and apply ``policy``.

    Raises
    ------
    SyncError
        When ``policy`` is :attr:`MissingPolicy.ABORT`.
    """
    if policy is MissingPolicy.ABORT:
        logger.error(message)
        raise SyncError(message)
    logger.warning(message)
    if report is not None:
        report.missing.append(message)


__all__ = ["SyncReport", "record_miss"]
