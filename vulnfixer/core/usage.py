"""Fire-and-forget usage reporting."""

from __future__ import annotations

import httpx
import structlog

from vulnfixer import __version__

log = structlog.get_logger("vulnfixer.usage")

PRODUCT_ID = "vulnfixer"


async def report_usage(usage_url: str | None, feature: str) -> None:
    """Post a single usage event to *usage_url*.

    Does nothing when no URL is configured. Never raises: any failure is
    logged at debug level, since usage reporting must not affect a run.
    """
    if not usage_url:
        log.debug("usage.disabled", feature=feature)
        return
    payload = {"product": PRODUCT_ID, "feature": feature, "version": __version__}
    try:
        async with httpx.AsyncClient(timeout=10) as client:
            resp = await client.post(usage_url, json=payload)
            resp.raise_for_status()
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        log.debug("usage.report_failed", feature=feature, error=str(exc))
        return
    log.debug("usage.reported", feature=feature)
