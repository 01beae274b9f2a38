"""Cooperative wait over an externally mutable resource.

`poll_until` samples a reader at a fixed interval until a predicate accepts
the value or a wall-clock deadline passes. Clock and sleep are injectable so
deadline handling is testable without real time passing. There is no locking:
a single reader samples a resource written at human pace.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable


@dataclass(frozen=True)
class PollResult:
    value: str | None
    attempts: int

    @property
    def matched(self) -> bool:
        return self.value is not None


def poll_until(
    read: Callable[[], str],
    predicate: Callable[[str], bool],
    *,
    interval: float,
    timeout: float,
    clock: Callable[[], float] = time.monotonic,
    sleep: Callable[[float], None] = time.sleep,
    on_tick: Callable[[float], None] | None = None,
) -> PollResult:
    """Return the first value accepted by `predicate`, or an unmatched result at the deadline.

    `on_tick` receives the remaining seconds after each unsuccessful sample.
    Exceptions raised by `read` propagate to the caller.
    """

    deadline = clock() + timeout
    attempts = 0
    while True:
        attempts += 1
        value = (read() or "").strip()
        if value and predicate(value):
            return PollResult(value=value, attempts=attempts)

        remaining = deadline - clock()
        if remaining <= 0:
            return PollResult(value=None, attempts=attempts)
        if on_tick is not None:
            on_tick(remaining)
        sleep(min(interval, remaining))
