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

"""Scoped, encoding-aware file streams and wall-clock instrumentation."""

from __future__ import annotations

from .errors import (
    DecodingError,
    ScopedIOError,
    StreamIOError,
    StreamStateError,
    TextEncodingError,
)
from .streams import NarrowInputStream, OpenMode, StreamState, Utf8OutputStream
from .timing import Stopwatch, format_runtime, runtime, time_call, time_run, timed

__all__ = [
    "DecodingError",
    "NarrowInputStream",
    "OpenMode",
    "ScopedIOError",
    "Stopwatch",
    "StreamIOError",
    "StreamState",
    "StreamStateError",
    "TextEncodingError",
    "Utf8OutputStream",
    "format_runtime",
    "runtime",
    "time_call",
    "time_run",
    "timed",
]
