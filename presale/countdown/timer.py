from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Awaitable, Callable, Optional, Protocol

from presale.countdown.fetch import fetch_presale_end_time

logger = logging.getLogger(__name__)

SECOND_MS = 1000
MINUTE_MS = SECOND_MS * 60
HOUR_MS = MINUTE_MS * 60
DAY_MS = HOUR_MS * 24


@dataclass(frozen=True)
class CountdownParts:
    days: int
    hours: int
    minutes: int
    seconds: int


class CountdownDisplay(Protocol):
    def show(self, parts: CountdownParts) -> None:
        ...


def split_distance(distance_ms: int) -> CountdownParts:
    """Break a non-negative millisecond distance into whole days/hours/minutes/seconds."""
    return CountdownParts(
        days=distance_ms // DAY_MS,
        hours=(distance_ms % DAY_MS) // HOUR_MS,
        minutes=(distance_ms % HOUR_MS) // MINUTE_MS,
        seconds=(distance_ms % MINUTE_MS) // SECOND_MS,
    )


def show_sale_ended() -> None:
    """Hook invoked once when the countdown passes its target. Intentionally a no-op."""
    return None


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _epoch_ms(dt: datetime) -> int:
    return int(dt.timestamp() * 1000)


async def run_countdown(
    target: datetime,
    display: CountdownDisplay,
    *,
    on_sale_ended: Callable[[], None] = show_sale_ended,
    clock: Callable[[], datetime] = _utcnow,
    interval: float = 1.0,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> None:
    """
    Tick every `interval` seconds until `target` has passed.

    The first tick happens one interval after the call. Once the distance goes negative
    `on_sale_ended` runs exactly once and the loop returns for good.
    """
    target_ms = _epoch_ms(target)
    while True:
        await sleep(interval)
        distance = target_ms - _epoch_ms(clock())
        if distance < 0:
            logger.info("Countdown finished")
            on_sale_ended()
            return
        display.show(split_distance(distance))


async def start_countdown(
    display: CountdownDisplay,
    url: Optional[str] = None,
    *,
    on_sale_ended: Callable[[], None] = show_sale_ended,
) -> None:
    """Fetch the end time (off the event loop) and then run the tick loop."""
    target = await asyncio.to_thread(fetch_presale_end_time, url)
    logger.info("Counting down to %s", target.isoformat())
    await run_countdown(target, display, on_sale_ended=on_sale_ended)
