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

"""Encoding-aware file streams with guaranteed handle release.

Two concrete wrappers are provided:

- :class:`NarrowInputStream` decodes bytes with the platform narrow
  (locale) encoding.
- :class:`Utf8OutputStream` writes UTF-8 bytes verbatim, optionally
  appending to existing content.

Both start closed, report open failures through :meth:`~StreamWrapper.is_open`
rather than raising, and release their handle on ``close()``, on leaving a
``with`` block, or when garbage collected.

Example usage::

    from scopedio.streams import NarrowInputStream, OpenMode, Utf8OutputStream

    with Utf8OutputStream("x.txt", OpenMode.APPEND) as writer:
        writer.write("hello\\n")

    with NarrowInputStream("x.txt") as reader:
        if reader.is_open():
            print(reader.read())
"""

from __future__ import annotations

from ._core import StreamWrapper, StrPath
from ._lifecycle import StreamState
from ._modes import OpenMode, native_mode
from ._narrow import NarrowInputStream
from ._utf8 import Utf8OutputStream

__all__ = [
    "NarrowInputStream",
    "OpenMode",
    "StrPath",
    "StreamState",
    "StreamWrapper",
    "Utf8OutputStream",
    "native_mode",
]
