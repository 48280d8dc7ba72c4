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

"""Stream lifecycle states and the guard enforcing them.

Streams move ``CLOSED -> OPEN`` only through ``open`` and back to ``CLOSED``
only through ``close`` (or scope exit). Read and write operations are
self-loops on ``OPEN``; calling them in any other state raises
:class:`~scopedio.errors.StreamStateError`.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum, auto
from functools import wraps
from typing import Concatenate, ParamSpec, Protocol, TypeVar

from ..errors import StreamStateError

__all__ = [
    "StreamState",
    "in_state",
]


class StreamState(Enum):
    """Lifecycle state of a stream wrapper."""

    CLOSED = auto()
    OPEN = auto()


class _Stateful(Protocol):
    @property
    def state(self) -> StreamState: ...


P = ParamSpec("P")
S = TypeVar("S", bound=_Stateful)
R = TypeVar("R")


def in_state(
    *valid_states: StreamState,
) -> Callable[[Callable[Concatenate[S, P], R]], Callable[Concatenate[S, P], R]]:
    """Method decorator requiring the stream to be in one of ``valid_states``.

    Example::

        @in_state(StreamState.OPEN)
        def write(self, data: bytes) -> int:
            ...
    """
    if not valid_states:
        msg = "@in_state requires at least one state"
        raise ValueError(msg)

    states_set = frozenset(valid_states)

    def decorator(
        method: Callable[Concatenate[S, P], R],
    ) -> Callable[Concatenate[S, P], R]:
        method_name = getattr(method, "__name__", repr(method))

        @wraps(method)
        def wrapper(self: S, /, *args: P.args, **kwargs: P.kwargs) -> R:
            current = self.state
            if current not in states_set:
                raise StreamStateError(type(self), method_name, current)
            return method(self, *args, **kwargs)

        return wrapper

    return decorator
