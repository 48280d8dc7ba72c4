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

"""Output stream writing UTF-8 bytes verbatim."""

from __future__ import annotations

from collections.abc import Buffer, Iterable
from typing import BinaryIO, ClassVar, Self, override

from ..errors import StreamIOError, TextEncodingError
from ._core import StreamWrapper, StrPath
from ._lifecycle import StreamState, in_state
from ._modes import OpenMode

__all__ = [
    "Utf8OutputStream",
]

_UTF8 = "utf-8"
_NEWLINE = b"\n"


class Utf8OutputStream(StreamWrapper):
    """Scoped writer for UTF-8 content.

    Bytes-like data is assumed to already be UTF-8 and is written as is,
    without validation or re-encoding. ``str`` data is encoded to UTF-8
    first. Opening with :attr:`OpenMode.APPEND` positions every write at
    the current end of the file instead of truncating it.

    Example::

        with Utf8OutputStream("log.txt", OpenMode.APPEND) as writer:
            writer.writeline("résumé")
    """

    __slots__ = ("_bytes_written",)

    default_mode: ClassVar[OpenMode] = OpenMode.WRITE | OpenMode.TRUNCATE

    def __init__(self, path: StrPath | None = None, mode: OpenMode | None = None) -> None:
        self._bytes_written = 0
        super().__init__(path, mode)

    @override
    @classmethod
    def _resolve_encoding(cls) -> str:
        return _UTF8

    @override
    @classmethod
    def _accepts(cls, mode: OpenMode) -> bool:
        return bool(mode & (OpenMode.WRITE | OpenMode.APPEND))

    @override
    def _attach(self, handle: BinaryIO) -> None:
        self._bytes_written = 0

    @override
    def _adopt(self, source: Self) -> None:
        super()._adopt(source)
        self._bytes_written, source._bytes_written = source._bytes_written, 0

    @property
    def bytes_written(self) -> int:
        """Bytes written during the current session."""
        return self._bytes_written

    @in_state(StreamState.OPEN)
    def write(self, data: str | Buffer) -> int:
        """Write ``data`` and return the number of bytes written.

        Raises:
            StreamStateError: If the stream is not open.
            TextEncodingError: If ``data`` is a ``str`` that is not encodable.
            StreamIOError: If the underlying write fails.
        """
        payload = _as_utf8(data)
        handle = self._handle
        if handle is None:  # pragma: no cover - guarded by in_state
            raise RuntimeError("handle missing on an open stream")
        try:
            written = handle.write(payload)
        except OSError as exc:
            msg = f"Failed to write {self._path}: {exc}"
            raise StreamIOError(msg) from exc
        self._bytes_written += written
        return written

    @in_state(StreamState.OPEN)
    def write_all(self, chunks: Iterable[str | Buffer]) -> int:
        """Write every chunk in order and return the total bytes written."""
        total = 0
        for chunk in chunks:
            total += self.write(chunk)
        return total

    @in_state(StreamState.OPEN)
    def writeline(self, data: str | Buffer) -> int:
        """Write ``data`` followed by a newline."""
        return self.write(data) + self.write(_NEWLINE)

    @in_state(StreamState.OPEN)
    def flush(self) -> None:
        """Push buffered bytes to the operating system."""
        handle = self._handle
        if handle is None:  # pragma: no cover - guarded by in_state
            raise RuntimeError("handle missing on an open stream")
        try:
            handle.flush()
        except OSError as exc:
            msg = f"Failed to flush {self._path}: {exc}"
            raise StreamIOError(msg) from exc


def _as_utf8(data: str | Buffer) -> Buffer:
    if not isinstance(data, str):
        return data
    try:
        return data.encode(_UTF8)
    except UnicodeEncodeError as exc:
        msg = f"Text is not encodable as UTF-8: {exc.reason}"
        raise TextEncodingError(msg) from exc
