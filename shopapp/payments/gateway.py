# shopapp/payments/gateway.py

import asyncio
import logging
import random

from ..core.config import settings

logger = logging.getLogger(__name__)


class SimulatedPaymentGateway:
    """
    Stand-in for a card processor: waits for a configurable delay, then
    approves the charge with probability `success_rate`.
    """

    def __init__(self, success_rate: float, delay_seconds: float, rng: random.Random = None):
        self.success_rate = success_rate
        self.delay_seconds = delay_seconds
        self._rng = rng or random.Random()

    async def charge(self, amount: float, payment_method: str) -> bool:
        if self.delay_seconds > 0:
            await asyncio.sleep(self.delay_seconds)
        approved = self._rng.random() < self.success_rate
        logger.info(f"Gateway {'approved' if approved else 'declined'} {payment_method} charge of {amount:.2f}")
        return approved


gateway = SimulatedPaymentGateway(
    success_rate=settings.PAYMENT_SUCCESS_RATE,
    delay_seconds=settings.PAYMENT_PROCESSING_DELAY_SECONDS,
)
