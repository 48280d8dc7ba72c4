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

"""Command line entry point for the ``scopedio-demo`` executable.

Opens a file for narrow-encoded input, reports whether it is open, then
appends a line of UTF-8 text through a second stream. Exit status is 0 on
success and 1 when an error reaches the top level; the error message is
printed to stderr.
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from typing import TextIO

from ..clock import SYSTEM_CLOCK, Clock
from ..logging import configure_logging, get_logger
from ..streams import NarrowInputStream, OpenMode, Utf8OutputStream
from ..timing import Stopwatch, format_runtime
from .config import load_config

__all__ = ["countdown", "main", "run_demo"]

_logger = get_logger(__name__, context={"component": "demo"})


def main(argv: Sequence[str] | None = None) -> int:
    """Run the scopedio demo CLI."""

    parser = _build_parser()
    try:
        args = parser.parse_args(list(argv) if argv is not None else None)
    except SystemExit as exc:  # argparse exits with code 2 on errors
        code = exc.code if isinstance(exc.code, int) else 2
        return int(code)

    configure_logging(level=args.log_level, json_mode=args.json_logs)
    return run_demo(
        {"path": args.path, "message": args.message, "countdown": args.countdown}
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="scopedio-demo",
        description="Read a file with a narrow stream, then append UTF-8 text to it.",
    )
    _ = parser.add_argument(
        "--path",
        default=None,
        help="File to open (default: x.txt, or $SCOPEDIO_DEMO_PATH).",
    )
    _ = parser.add_argument(
        "--message",
        default=None,
        help="Text to append (default: a greeting, or $SCOPEDIO_DEMO_MESSAGE).",
    )
    _ = parser.add_argument(
        "--countdown",
        type=int,
        default=None,
        help="Seconds to count down before touching the file (default: 0).",
    )
    _ = parser.add_argument(
        "--log-level",
        choices=("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET"),
        default=None,
        help="Override the log level emitted by the CLI.",
    )
    _ = parser.add_argument(
        "--json-logs",
        action=argparse.BooleanOptionalAction,
        default=False,
        help="Emit structured JSON logs.",
    )
    return parser


def run_demo(
    overrides: dict[str, object] | None = None,
    *,
    env: dict[str, str] | None = None,
    clock: Clock = SYSTEM_CLOCK,
    out: TextIO | None = None,
    err: TextIO | None = None,
) -> int:
    """Execute the demo and return the process exit status."""

    out = sys.stdout if out is None else out
    err = sys.stderr if err is None else err

    try:
        config = load_config(overrides, env=env)

        if config.countdown > 0:
            elapsed = Stopwatch(clock).run(
                countdown, config.countdown, clock=clock, out=out
            )
            print(f"\ncountdown finished in {format_runtime(elapsed)}", file=out)

        with NarrowInputStream() as reader:
            _ = reader.open(config.path)
            if reader.is_open():
                print(f"{config.path} file is open.", file=out)
            else:
                print(f"{config.path} file is not open!", file=out)

            with Utf8OutputStream() as writer:
                _ = writer.open(config.path, OpenMode.APPEND)
                _ = writer.write(config.message)
    except Exception as exc:
        _logger.debug(
            "Demo failed.",
            event="demo.failed",
            context={"error": type(exc).__name__},
            exc_info=True,
        )
        print(exc, file=err)
        return 1
    return 0


def countdown(seconds: int, *, clock: Clock = SYSTEM_CLOCK, out: TextIO | None = None) -> None:
    """Print ``countdown: T-N ... 0``, one tick per second."""

    out = sys.stdout if out is None else out
    print("\n\ncountdown: T-", end="", file=out)
    for remaining in range(seconds, -1, -1):
        clock.sleep(1)
        print(remaining, end=" ", file=out, flush=True)


if __name__ == "__main__":
    raise SystemExit(main())
