# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Monotonic time sources for measuring elapsed time.

Durations are measured with a monotonic, high-resolution counter that is
never affected by wall-clock adjustments (NTP, daylight saving, manual
changes). The zero point is arbitrary, so only differences between two
readings are meaningful.

Example (production)::

    from scopedio.clock import SYSTEM_CLOCK

    start = SYSTEM_CLOCK.monotonic()
    SYSTEM_CLOCK.sleep(1.0)
    elapsed = SYSTEM_CLOCK.monotonic() - start  # ~1.0

Example (testing)::

    from scopedio.clock import FakeClock

    clock = FakeClock()
    start = clock.monotonic()
    clock.sleep(10)  # Advances instantly, no real delay
    assert clock.monotonic() - start == 10
"""

from __future__ import annotations

import time as _time
from dataclasses import dataclass
from typing import Final, Protocol, runtime_checkable


@runtime_checkable
class MonotonicClock(Protocol):
    """Protocol for monotonic time measurement in float seconds."""

    def monotonic(self) -> float:
        """Return monotonic time in seconds."""
        ...


@runtime_checkable
class Sleeper(Protocol):
    """Protocol for blocking sleep operations."""

    def sleep(self, seconds: float) -> None:
        """Sleep for the specified duration in seconds."""
        ...


@runtime_checkable
class Clock(MonotonicClock, Sleeper, Protocol):
    """Monotonic clock that can also block the calling thread."""

    pass


@dataclass(frozen=True, slots=True)
class SystemClock:
    """Production clock delegating to the :mod:`time` module.

    - ``time.perf_counter()`` for monotonic time
    - ``time.sleep()`` for delays
    """

    def monotonic(self) -> float:
        """Return the highest-resolution monotonic counter available."""
        return _time.perf_counter()

    def sleep(self, seconds: float) -> None:
        """Sleep using time.sleep()."""
        _time.sleep(seconds)


# Module-level singleton for production use
SYSTEM_CLOCK: Final[Clock] = SystemClock()
"""Default clock instance used by :mod:`scopedio.timing` and the demo."""


@dataclass
class FakeClock:
    """Controllable clock for deterministic testing.

    Sleeping advances the clock immediately without blocking.

    Example::

        clock = FakeClock()
        clock.advance(2.5)
        assert clock.monotonic() == 2.5
    """

    _monotonic: float = 0.0

    def monotonic(self) -> float:
        """Return current monotonic time."""
        return self._monotonic

    def sleep(self, seconds: float) -> None:
        """Advance time immediately without blocking."""
        self.advance(seconds)

    def advance(self, seconds: float) -> None:
        """Advance the clock by the given duration.

        Raises:
            ValueError: If seconds is negative.
        """
        if seconds < 0:
            msg = "Cannot advance time by negative seconds"
            raise ValueError(msg)
        self._monotonic += seconds


__all__ = [
    "SYSTEM_CLOCK",
    "Clock",
    "FakeClock",
    "MonotonicClock",
    "Sleeper",
    "SystemClock",
]
