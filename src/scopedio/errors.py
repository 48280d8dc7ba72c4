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

"""Base exception hierarchy for :mod:`scopedio`."""

from __future__ import annotations

from enum import Enum
from typing import Any, override


class ScopedIOError(Exception):
    """Base class for all scopedio exceptions.

    Catch this to handle every library-specific failure with a single
    handler while letting standard Python exceptions propagate normally.

    Example:
        Reporting any stream failure at the top level::

            try:
                with Utf8OutputStream("out.txt", OpenMode.APPEND) as stream:
                    stream.write("hello\\n")
            except ScopedIOError as e:
                print(e, file=sys.stderr)

    Note:
        Subclasses also inherit from the closest builtin exception
        (``ValueError``, ``OSError``) so they can be caught by handlers
        expecting standard errors.
    """


class StreamStateError(ScopedIOError, ValueError):
    """Raised when a stream operation requires a state the stream is not in.

    Reading from or writing to a wrapper that was never opened, failed to
    open, or has already been closed raises this error.

    Attributes:
        cls: The stream class whose method was called.
        method: Name of the method that was called.
        current_state: The state of the stream when the call was made.
    """

    def __init__(self, cls: type[Any], method: str, current_state: Enum) -> None:
        self.cls = cls
        self.method = method
        self.current_state = current_state
        super().__init__(cls, method, current_state)

    @override
    def __str__(self) -> str:
        return (
            f"{self.cls.__name__}.{self.method}() requires an open stream, "
            f"but current state is {self.current_state.name}"
        )


class DecodingError(ScopedIOError, ValueError):
    """Raised when bytes read from disk are invalid under the stream encoding.

    The original :class:`UnicodeDecodeError` is available as ``__cause__``.
    """

    def __init__(self, path: str, encoding: str, detail: str) -> None:
        self.path = path
        self.encoding = encoding
        self.detail = detail
        super().__init__(path, encoding, detail)

    @override
    def __str__(self) -> str:
        return f"Cannot decode {self.path} as {self.encoding}: {self.detail}"


class TextEncodingError(ScopedIOError, ValueError):
    """Raised when text handed to an output stream cannot be encoded."""


class StreamIOError(ScopedIOError, OSError):
    """Raised when a read, write or flush fails after a successful open.

    Disk full, revoked handles and similar OS-level failures surface as
    this error, chained from the originating :class:`OSError`.
    """


__all__ = [
    "DecodingError",
    "ScopedIOError",
    "StreamIOError",
    "StreamStateError",
    "TextEncodingError",
]
