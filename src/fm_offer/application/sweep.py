"""Periodic offer-expiry sweep, started from the app lifespan when
``OFFER_SWEEP_INTERVAL_SECONDS`` > 0. Lazy expiry on accept/reject/list
keeps behaviour correct without it; the sweep only tidies stale rows.
"""

import asyncio
import logging

from src.fm_common.database import async_session_factory
from src.fm_offer.application.service import OfferApplicationService

logger = logging.getLogger("fm.offer")


async def run_expiry_sweep(
    interval_seconds: float, service: OfferApplicationService | None = None
) -> None:
    service = service or OfferApplicationService()
    while True:
        await asyncio.sleep(interval_seconds)
        try:
            async with async_session_factory() as db:
                await service.expire_overdue(db)
        except Exception:
            # Keep sweeping: the next tick retries the same rows.
            logger.exception("offer expiry sweep failed")
