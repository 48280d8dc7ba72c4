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

"""Input stream decoding the platform's native narrow encoding.

The narrow encoding is the locale's preferred encoding as reported by
:func:`locale.getencoding`, captured when the stream is constructed. Bytes
are decoded strictly and without newline translation, so a file is read
back exactly as it was written.
"""

from __future__ import annotations

import io
import locale
from collections.abc import Iterator
from contextlib import contextmanager
from typing import BinaryIO, ClassVar, Self, override

from ..errors import DecodingError, StreamIOError
from ._core import StreamWrapper, StrPath
from ._lifecycle import StreamState, in_state
from ._modes import OpenMode

__all__ = [
    "NarrowInputStream",
]

_READABLE_MODES = frozenset({OpenMode.READ, OpenMode.READ | OpenMode.WRITE})


class NarrowInputStream(StreamWrapper):
    """Scoped reader decoding bytes with the platform narrow encoding.

    Example::

        with NarrowInputStream("notes.txt") as reader:
            if reader.is_open():
                for line in reader.lines(strip=True):
                    print(f"{reader.line_number}: {line}")
    """

    __slots__ = ("_line_number", "_reader")

    default_mode: ClassVar[OpenMode] = OpenMode.READ

    def __init__(self, path: StrPath | None = None, mode: OpenMode | None = None) -> None:
        self._reader: io.TextIOWrapper | None = None
        self._line_number = 0
        super().__init__(path, mode)

    @override
    @classmethod
    def _resolve_encoding(cls) -> str:
        return locale.getencoding()

    @override
    @classmethod
    def _accepts(cls, mode: OpenMode) -> bool:
        # Append modes start at end of file and TRUNCATE empties it.
        return mode in _READABLE_MODES

    @override
    def _attach(self, handle: BinaryIO) -> None:
        self._reader = io.TextIOWrapper(
            handle, encoding=self._encoding, errors="strict", newline=""
        )
        self._line_number = 0

    @override
    def _release(self) -> None:
        reader, self._reader = self._reader, None
        if reader is not None:
            _ = reader.detach()

    @override
    def _adopt(self, source: Self) -> None:
        super()._adopt(source)
        self._reader, source._reader = source._reader, None
        self._line_number, source._line_number = source._line_number, 0

    @property
    def line_number(self) -> int:
        """Number of lines consumed by :meth:`readline` and iteration."""
        return self._line_number

    @in_state(StreamState.OPEN)
    def read(self, size: int = -1) -> str:
        """Read up to ``size`` characters; -1 reads to end of file.

        Raises:
            StreamStateError: If the stream is not open.
            DecodingError: If the bytes are invalid under :attr:`encoding`.
            StreamIOError: If the underlying read fails.
        """
        with self._decoding() as reader:
            return reader.read(size)

    @in_state(StreamState.OPEN)
    def readline(self) -> str:
        """Read the next line including its terminator; empty at end of file."""
        with self._decoding() as reader:
            line = reader.readline()
        if line:
            self._line_number += 1
        return line

    def __iter__(self) -> Iterator[str]:
        """Iterate over lines (including terminators)."""
        while line := self.readline():
            yield line

    def lines(self, *, strip: bool = False) -> Iterator[str]:
        """Iterate over lines, optionally stripping trailing whitespace."""
        for line in self:
            yield line.rstrip() if strip else line

    @contextmanager
    def _decoding(self) -> Iterator[io.TextIOWrapper]:
        reader = self._reader
        if reader is None:  # pragma: no cover - guarded by in_state
            raise RuntimeError("reader missing on an open stream")
        try:
            yield reader
        except UnicodeDecodeError as exc:
            raise DecodingError(self._path or "", self._encoding, exc.reason) from exc
        except OSError as exc:
            msg = f"Failed to read {self._path}: {exc}"
            raise StreamIOError(msg) from exc
