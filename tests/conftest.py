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

from __future__ import annotations

import locale
import logging
from collections.abc import Callable, Iterator

import pytest


@pytest.fixture
def narrow_encoding(monkeypatch: pytest.MonkeyPatch) -> Callable[[str], None]:
    """Pin the platform narrow encoding, UTF-8 unless the test re-pins it.

    Streams capture the encoding when constructed, so pin before creating them.
    """

    def pin(encoding: str) -> None:
        monkeypatch.setattr(locale, "getencoding", lambda: encoding)

    pin("utf-8")
    return pin


@pytest.fixture
def reset_root_logger() -> Iterator[None]:
    """Restore root logger handlers and level after the test."""
    root = logging.getLogger()
    original_handlers = list(root.handlers)
    original_level = root.level
    try:
        yield
    finally:
        for handler in list(root.handlers):
            if handler not in original_handlers:
                root.removeHandler(handler)
                handler.close()
        for handler in original_handlers:
            if handler not in root.handlers:
                root.addHandler(handler)
        root.setLevel(original_level)
