"""Swap submission backends."""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timezone

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SwapOrder:
    from_symbol: str
    to_symbol: str
    send_amount: float
    receive_amount: float
    rate: float


@dataclass(frozen=True)
class SwapReceipt:
    order: SwapOrder
    confirmed_at: datetime


class SwapExecutor(ABC):
    """Settles a swap order.

    Implementations raise ``SubmissionError`` when the order cannot be settled.
    """

    name: str

    @abstractmethod
    async def execute(self, order: SwapOrder) -> SwapReceipt:
        pass


class SimulatedSwapExecutor(SwapExecutor):
    """Confirms every order after a fixed delay. Nothing is executed."""

    name = "simulated"

    def __init__(self, delay_seconds: float = 1.5):
        self.delay_seconds = delay_seconds

    async def execute(self, order: SwapOrder) -> SwapReceipt:
        await asyncio.sleep(self.delay_seconds)
        logger.info(
            "Simulated swap confirmed: %s %s -> %s %s",
            order.send_amount,
            order.from_symbol,
            order.receive_amount,
            order.to_symbol,
        )
        return SwapReceipt(order=order, confirmed_at=datetime.now(timezone.utc))
