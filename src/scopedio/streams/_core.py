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

"""Scoped ownership of a native file handle.

:class:`StreamWrapper` owns at most one binary file object at a time and
guarantees it is released on every exit path: an explicit :meth:`close`,
leaving a ``with`` block (normally or through an exception), or the
wrapper being garbage collected.

Opening never raises. A failed :meth:`open` returns ``False`` and leaves
the wrapper closed, so callers check :meth:`is_open` before proceeding::

    stream = NarrowInputStream()
    if not stream.open("x.txt"):
        print("x.txt file is not open!")
"""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from typing import BinaryIO, ClassVar, Self, override

from ..errors import StreamIOError
from ..logging import get_logger
from ._lifecycle import StreamState
from ._modes import OpenMode, native_mode

__all__ = [
    "StrPath",
    "StreamWrapper",
]

type StrPath = str | os.PathLike[str]

_logger = get_logger(__name__, context={"component": "streams"})


class StreamWrapper(ABC):
    """Base class owning a native binary file handle.

    Concrete wrappers fix their text encoding and the open modes they
    accept. Instances cannot be copied; use :meth:`move` to transfer the
    handle to a new wrapper.
    """

    __slots__ = ("__weakref__", "_encoding", "_handle", "_mode", "_path", "_state")

    default_mode: ClassVar[OpenMode]

    def __init__(self, path: StrPath | None = None, mode: OpenMode | None = None) -> None:
        """Create a closed wrapper, opening ``path`` immediately when given."""
        self._encoding = self._resolve_encoding()
        self._handle: BinaryIO | None = None
        self._mode: OpenMode | None = None
        self._path: str | None = None
        self._state = StreamState.CLOSED
        if path is not None:
            _ = self.open(path, mode)

    @classmethod
    @abstractmethod
    def _resolve_encoding(cls) -> str:
        """Return the text encoding fixed for this wrapper."""

    @classmethod
    @abstractmethod
    def _accepts(cls, mode: OpenMode) -> bool:
        """Return True if this wrapper supports ``mode``."""

    def _attach(self, handle: BinaryIO) -> None:
        """Hook run after a handle has been acquired."""

    def _release(self) -> None:
        """Hook run before the handle is closed."""

    @property
    def state(self) -> StreamState:
        """Current lifecycle state."""
        return self._state

    @property
    def encoding(self) -> str:
        """Text encoding used by this wrapper."""
        return self._encoding

    @property
    def path(self) -> str | None:
        """Path of the current session, ``None`` when closed."""
        return self._path

    @property
    def mode(self) -> OpenMode | None:
        """Open mode of the current session, ``None`` when closed."""
        return self._mode

    def is_open(self) -> bool:
        """Return True if the wrapper currently owns a live handle."""
        return self._state is StreamState.OPEN

    def open(self, path: StrPath, mode: OpenMode | None = None) -> bool:
        """Acquire a handle for ``path``.

        Args:
            path: Filesystem path to open.
            mode: Open-mode flags. ``None`` selects :attr:`default_mode`.

        Returns:
            True on success. False if the path cannot be opened, the mode
            is not supported by this wrapper, or the wrapper is already
            open. A failure never raises and never disturbs an existing
            session.
        """
        resolved_mode = self.default_mode if mode is None else mode
        display_path = os.fspath(path)

        if self._state is StreamState.OPEN:
            self._log_open_failure(display_path, resolved_mode, "stream is already open")
            return False

        native = native_mode(resolved_mode) if self._accepts(resolved_mode) else None
        if native is None:
            self._log_open_failure(display_path, resolved_mode, "unsupported open mode")
            return False

        try:
            handle = open(display_path, native)  # noqa: SIM115
        except (OSError, ValueError) as exc:
            self._log_open_failure(display_path, resolved_mode, str(exc))
            return False

        self._handle = handle
        self._mode = resolved_mode
        self._path = display_path
        self._state = StreamState.OPEN
        self._attach(handle)
        _logger.debug(
            "Stream opened.",
            event="stream.open",
            context={
                "stream": type(self).__name__,
                "path": display_path,
                "mode": resolved_mode.name,
                "native_mode": native,
                "encoding": self._encoding,
            },
        )
        return True

    def close(self) -> None:
        """Flush and release the handle. Idempotent.

        The handle is released even when the final flush fails; the
        failure is then raised as :class:`StreamIOError`.
        """
        if self._state is StreamState.CLOSED:
            return
        handle = self._handle
        path = self._path
        try:
            self._release()
        finally:
            self._handle = None
            self._mode = None
            self._path = None
            self._state = StreamState.CLOSED
            if handle is not None:
                try:
                    handle.close()
                except OSError as exc:
                    msg = f"Failed to flush {path} on close: {exc}"
                    raise StreamIOError(msg) from exc
        _logger.debug(
            "Stream closed.",
            event="stream.close",
            context={"stream": type(self).__name__, "path": path},
        )

    def move(self) -> Self:
        """Transfer the handle to a new wrapper, leaving this one closed."""
        target = type(self)()
        target._adopt(self)
        _logger.debug(
            "Stream ownership moved.",
            event="stream.move",
            context={"stream": type(self).__name__, "path": target._path},
        )
        return target

    def _adopt(self, source: Self) -> None:
        self._encoding = source._encoding
        self._handle, source._handle = source._handle, None
        self._mode, source._mode = source._mode, None
        self._path, source._path = source._path, None
        self._state, source._state = source._state, StreamState.CLOSED

    def _log_open_failure(self, path: str, mode: OpenMode, reason: str) -> None:
        _logger.debug(
            "Stream failed to open.",
            event="stream.open_failed",
            context={
                "stream": type(self).__name__,
                "path": path,
                "mode": mode.name,
                "reason": reason,
            },
        )

    def __enter__(self) -> Self:
        """Enter context manager."""
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        """Exit context manager, releasing the handle on every exit path."""
        self.close()

    def __del__(self) -> None:
        if getattr(self, "_state", StreamState.CLOSED) is StreamState.OPEN:
            self.close()

    def __copy__(self) -> Self:
        raise TypeError(f"{type(self).__name__} owns its handle and cannot be copied")

    def __deepcopy__(self, memo: object) -> Self:
        raise TypeError(f"{type(self).__name__} owns its handle and cannot be copied")

    @override
    def __reduce_ex__(self, protocol: object) -> object:
        raise TypeError(f"{type(self).__name__} owns its handle and cannot be pickled")

    @override
    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(path={self._path!r}, "
            f"mode={self._mode!r}, state={self._state.name})"
        )
