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

"""Tests for :mod:`scopedio.timing`."""

from __future__ import annotations

import logging
import math
import os
import time
from functools import partial

import pytest

from scopedio.clock import FakeClock
from scopedio.timing import (
    Stopwatch,
    format_runtime,
    runtime,
    time_call,
    time_run,
    timed,
)


class _Boom(RuntimeError):
    pass


def _produces_nothing() -> None:
    return None


def _produces_value() -> int:
    return 42


class TestTimeCall:
    def test_returns_value_then_duration(self) -> None:
        result = time_call(sorted, [3, 1, 2])
        assert result[0] == [1, 2, 3]
        assert result[1] >= 0

    def test_forwards_positional_and_keyword_arguments(self) -> None:
        value, _ = time_call(sorted, [1, 2, 3], reverse=True)
        assert value == [3, 2, 1]

    def test_invokes_callable_exactly_once(self) -> None:
        calls: list[int] = []

        def work() -> int:
            calls.append(1)
            return len(calls)

        value, _ = time_call(work)
        assert value == 1
        assert calls == [1]

    def test_duration_uses_injected_clock(self) -> None:
        clock = FakeClock()

        def work() -> str:
            clock.advance(3)
            return "done"

        assert Stopwatch(clock).call(work) == ("done", 3.0)

    def test_none_result_is_still_paired(self) -> None:
        value, seconds = time_call(_produces_nothing)
        assert value is None
        assert seconds >= 0


class TestTimeRun:
    def test_sleep_duration_is_at_least_requested(self) -> None:
        seconds = time_run(time.sleep, 1)
        assert seconds >= 1
        assert math.isfinite(seconds)

    def test_returns_only_duration(self) -> None:
        clock = FakeClock()
        assert Stopwatch(clock).run(clock.advance, 2.5) == 2.5

    def test_discards_result(self) -> None:
        assert isinstance(time_run(_produces_value), float)


class TestExceptionPropagation:
    def test_call_propagates_original_instance(self) -> None:
        error = _Boom("failed")

        def work() -> int:
            raise error

        with pytest.raises(_Boom) as exc_info:
            time_call(work)
        assert exc_info.value is error

    def test_run_propagates_original_instance(self) -> None:
        error = _Boom("failed")

        def work() -> None:
            raise error

        with pytest.raises(_Boom) as exc_info:
            time_run(work)
        assert exc_info.value is error

    def test_no_measurement_logged_on_failure(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        def work() -> None:
            raise _Boom

        with caplog.at_level(logging.DEBUG, logger="scopedio.timing"):
            with pytest.raises(_Boom):
                time_run(work)
        assert not [r for r in caplog.records if r.name == "scopedio.timing"]


class TestRuntimeDispatch:
    def test_none_annotation_returns_duration_only(self) -> None:
        assert isinstance(runtime(_produces_nothing), float)

    def test_value_annotation_returns_pair(self) -> None:
        value, seconds = runtime(_produces_value)
        assert value == 42
        assert seconds >= 0

    def test_unannotated_callable_returns_pair(self) -> None:
        result = runtime(lambda: "x")
        assert isinstance(result, tuple)
        assert result[0] == "x"

    def test_unresolvable_annotation_returns_pair(self) -> None:
        def work() -> Undefined:  # type: ignore[name-defined]  # noqa: F821
            return 1

        result = runtime(work)
        assert isinstance(result, tuple)
        assert result[0] == 1

    def test_annotation_raising_attribute_error_still_invokes_once(self) -> None:
        calls: list[int] = []

        def work() -> os.NoSuchType:  # type: ignore[name-defined]
            calls.append(1)
            return 7

        result = runtime(work)

        assert isinstance(result, tuple)
        value, seconds = result
        assert value == 7
        assert seconds >= 0
        assert calls == [1]

    def test_annotation_with_syntax_error_still_invokes_once(self) -> None:
        calls: list[int] = []

        def work() -> int:
            calls.append(1)
            return 3

        work.__annotations__["return"] = "not valid ]"

        result = runtime(work)

        assert isinstance(result, tuple)
        assert result[0] == 3
        assert calls == [1]

    def test_partial_of_void_function(self) -> None:
        def work(_: int) -> None:
            pass

        assert isinstance(runtime(partial(work, 1)), float)

    def test_builtin_without_signature_returns_pair(self) -> None:
        result = runtime(max, 1, 2)
        assert isinstance(result, tuple)
        assert result[0] == 2

    def test_stopwatch_runtime_uses_clock(self) -> None:
        clock = FakeClock()

        def tick() -> None:
            clock.advance(1)

        assert Stopwatch(clock).runtime(tick) == 1.0


class TestTimedDecorator:
    def test_wraps_result_with_duration(self) -> None:
        @timed
        def add(a: int, b: int) -> int:
            return a + b

        value, seconds = add(2, b=3)
        assert value == 5
        assert seconds >= 0

    def test_preserves_metadata(self) -> None:
        @timed
        def documented() -> int:
            """Docstring."""
            return 1

        assert documented.__name__ == "documented"
        assert documented.__doc__ == "Docstring."


class TestLogging:
    def test_measurement_emits_debug_event(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        clock = FakeClock()
        with caplog.at_level(logging.DEBUG, logger="scopedio.timing"):
            Stopwatch(clock).call(clock.advance, 2)

        records = [r for r in caplog.records if r.name == "scopedio.timing"]
        assert len(records) == 1
        assert records[0].levelno == logging.DEBUG
        assert getattr(records[0], "event") == "timing.measured"
        context = getattr(records[0], "context")
        assert context["seconds"] == 2
        assert context["component"] == "timing"


class TestFormatRuntime:
    @pytest.mark.parametrize(
        ("seconds", "expected"),
        [
            (0.25, "0.25s"),
            (59.999, "60.00s"),
            (125, "2m 05.00s"),
            (3723.5, "1h 02m 03.50s"),
        ],
    )
    def test_formats(self, seconds: float, expected: str) -> None:
        assert format_runtime(seconds) == expected
