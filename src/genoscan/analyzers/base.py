"""Shared helpers for reference-database analyzers."""

from __future__ import annotations

import logging

from genoscan.models import ProgressCallback, ProgressEvent

logger = logging.getLogger(__name__)


def notify(
    progress: ProgressCallback | None,
    stage: str,
    value: float,
    message: str,
) -> None:
    """Deliver a progress event; a failing callback never aborts analysis."""

    if progress is None:
        return

    try:
        progress(ProgressEvent(stage=stage, progress=value, message=message))
    except Exception:
        logger.exception("Progress callback failed at stage %s", stage)
