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

"""Wall-clock instrumentation for arbitrary units of work.

A unit of work is any callable plus the arguments to invoke it with. It is
invoked exactly once, synchronously, on the calling thread. The begin
timestamp is taken immediately before the call and the end timestamp
immediately after, using a monotonic clock.

Two entry points cover the two shapes of work:

- :func:`time_run` for work that produces nothing; returns seconds.
- :func:`time_call` for work that produces a value; returns
  ``(value, seconds)``.

:func:`runtime` picks between them from the callable's declared return
annotation. Exceptions raised by the callable propagate unchanged and no
timing is reported for that call.

Example::

    from scopedio.timing import time_call, time_run

    seconds = time_run(time.sleep, 0.1)
    total, seconds = time_call(sum, range(1_000_000))
"""

from __future__ import annotations

import inspect
from collections.abc import Callable
from dataclasses import dataclass
from functools import wraps
from typing import ParamSpec, TypeVar

from .clock import SYSTEM_CLOCK, MonotonicClock
from .logging import get_logger

__all__ = [
    "Stopwatch",
    "format_runtime",
    "runtime",
    "time_call",
    "time_run",
    "timed",
]

P = ParamSpec("P")
R = TypeVar("R")

_logger = get_logger(__name__, context={"component": "timing"})


@dataclass(frozen=True, slots=True)
class Stopwatch:
    """Times callables against an injectable monotonic clock."""

    clock: MonotonicClock = SYSTEM_CLOCK

    def call(
        self, func: Callable[P, R], /, *args: P.args, **kwargs: P.kwargs
    ) -> tuple[R, float]:
        """Invoke ``func`` once and return ``(result, elapsed_seconds)``."""
        start = self.clock.monotonic()
        result = func(*args, **kwargs)
        elapsed = self.clock.monotonic() - start
        _log_measurement(func, elapsed)
        return result, elapsed

    def run(
        self, func: Callable[P, object], /, *args: P.args, **kwargs: P.kwargs
    ) -> float:
        """Invoke ``func`` once, discard its result, and return elapsed seconds."""
        start = self.clock.monotonic()
        func(*args, **kwargs)
        elapsed = self.clock.monotonic() - start
        _log_measurement(func, elapsed)
        return elapsed

    def runtime(
        self, func: Callable[P, R], /, *args: P.args, **kwargs: P.kwargs
    ) -> float | tuple[R, float]:
        """Dispatch to :meth:`run` or :meth:`call` on the declared result type.

        Callables annotated ``-> None`` are treated as producing nothing.
        Everything else, unannotated callables included, is treated as
        producing a value.
        """
        if _declares_no_result(func):
            return self.run(func, *args, **kwargs)
        return self.call(func, *args, **kwargs)


_DEFAULT_STOPWATCH = Stopwatch()


def time_call(
    func: Callable[P, R], /, *args: P.args, **kwargs: P.kwargs
) -> tuple[R, float]:
    """Invoke ``func`` once and return ``(result, elapsed_seconds)``."""
    return _DEFAULT_STOPWATCH.call(func, *args, **kwargs)


def time_run(func: Callable[P, object], /, *args: P.args, **kwargs: P.kwargs) -> float:
    """Invoke ``func`` once and return only the elapsed seconds."""
    return _DEFAULT_STOPWATCH.run(func, *args, **kwargs)


def runtime(
    func: Callable[P, R], /, *args: P.args, **kwargs: P.kwargs
) -> float | tuple[R, float]:
    """Time ``func`` with the system clock, see :meth:`Stopwatch.runtime`."""
    return _DEFAULT_STOPWATCH.runtime(func, *args, **kwargs)


def timed(func: Callable[P, R]) -> Callable[P, tuple[R, float]]:
    """Decorate ``func`` so every call returns ``(result, elapsed_seconds)``."""

    @wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> tuple[R, float]:
        return _DEFAULT_STOPWATCH.call(func, *args, **kwargs)

    return wrapper


def format_runtime(seconds: float) -> str:
    """Format a duration as hours, minutes and seconds.

    >>> format_runtime(3723.5)
    '1h 02m 03.50s'
    >>> format_runtime(0.25)
    '0.25s'
    """
    hours = int(seconds // 3600)
    minutes = int((seconds % 3600) // 60)
    remainder = seconds % 60

    if hours > 0:
        return f"{hours}h {minutes:02d}m {remainder:05.2f}s"
    if minutes > 0:
        return f"{minutes}m {remainder:05.2f}s"
    return f"{remainder:.2f}s"


def _declares_no_result(func: Callable[..., object]) -> bool:
    try:
        signature = inspect.signature(func, eval_str=True)
    except (TypeError, ValueError):
        return False
    except Exception:  # noqa: BLE001
        # Annotations that fail to evaluate; fall back to the raw text.
        try:
            signature = inspect.signature(func)
        except (TypeError, ValueError):
            return False
    return signature.return_annotation in (None, type(None), "None")


def _log_measurement(func: Callable[..., object], elapsed: float) -> None:
    _logger.debug(
        "Unit of work timed.",
        event="timing.measured",
        context={
            "callable": getattr(func, "__qualname__", repr(func)),
            "seconds": elapsed,
        },
    )
