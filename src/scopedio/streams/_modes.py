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

"""Composable open-mode flags and their native file-mode equivalents."""

from __future__ import annotations

from enum import Flag, auto
from types import MappingProxyType
from typing import Final

__all__ = [
    "OpenMode",
    "native_mode",
]


class OpenMode(Flag):
    """Open-mode flags recognised by :meth:`StreamWrapper.open`.

    Flags combine with ``|``. Only the combinations listed in
    :data:`_NATIVE_MODES` are valid; anything else makes ``open`` fail.
    """

    READ = auto()
    WRITE = auto()
    APPEND = auto()
    TRUNCATE = auto()


_R, _W, _A, _T = OpenMode.READ, OpenMode.WRITE, OpenMode.APPEND, OpenMode.TRUNCATE

# Mirrors the classic filebuf open-mode table; files are always binary.
_NATIVE_MODES: Final = MappingProxyType(
    {
        _R: "rb",
        _W: "wb",
        _W | _T: "wb",
        _A: "ab",
        _W | _A: "ab",
        _R | _W: "r+b",
        _R | _W | _T: "w+b",
        _R | _A: "a+b",
        _R | _W | _A: "a+b",
    }
)


def native_mode(mode: OpenMode) -> str | None:
    """Return the binary ``open()`` mode string for ``mode``, or ``None``."""
    return _NATIVE_MODES.get(mode)
