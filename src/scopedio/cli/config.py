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

"""Configuration for the :mod:`scopedio.cli.demo` entry point.

Values resolve in three layers: built-in defaults, then environment
variables, then command line overrides. There is no configuration file.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Final

ENV_DEMO_PATH: Final = "SCOPEDIO_DEMO_PATH"
ENV_DEMO_MESSAGE: Final = "SCOPEDIO_DEMO_MESSAGE"
ENV_DEMO_COUNTDOWN: Final = "SCOPEDIO_DEMO_COUNTDOWN"

DEFAULT_PATH: Final = Path("x.txt")
DEFAULT_MESSAGE: Final = "\nI was inserted by another stream!:)\n"

__all__ = [
    "DEFAULT_MESSAGE",
    "DEFAULT_PATH",
    "ConfigError",
    "DemoConfig",
    "load_config",
]


class ConfigError(ValueError):
    """Raised when the demo configuration is invalid."""


@dataclass(frozen=True, slots=True)
class DemoConfig:
    """Resolved configuration for the demo program.

    Attributes:
        path: File read with the narrow stream and appended to.
        message: Text appended as UTF-8.
        countdown: Seconds to count down before touching the file; 0 skips it.
    """

    path: Path = DEFAULT_PATH
    message: str = DEFAULT_MESSAGE
    countdown: int = 0

    def __post_init__(self) -> None:
        if self.countdown < 0:
            msg = f"countdown must be non-negative (got {self.countdown})."
            raise ConfigError(msg)


def load_config(
    cli_overrides: Mapping[str, object] | None = None,
    *,
    env: Mapping[str, str] | None = None,
) -> DemoConfig:
    """Resolve the demo configuration.

    Parameters
    ----------
    cli_overrides:
        Values from argument parsing keyed by ``DemoConfig`` field name.
        ``None`` values are ignored.
    env:
        Optional environment mapping. Defaults to :data:`os.environ`.
    """

    env_map = os.environ if env is None else env

    config: dict[str, object] = {}
    if ENV_DEMO_PATH in env_map:
        config["path"] = env_map[ENV_DEMO_PATH]
    if ENV_DEMO_MESSAGE in env_map:
        config["message"] = env_map[ENV_DEMO_MESSAGE]
    if ENV_DEMO_COUNTDOWN in env_map:
        config["countdown"] = env_map[ENV_DEMO_COUNTDOWN]

    for key, value in (cli_overrides or {}).items():
        if value is not None:
            config[key] = value

    return _build_config(config)


def _build_config(config: Mapping[str, object]) -> DemoConfig:
    unknown = set(config) - {"path", "message", "countdown"}
    if unknown:
        msg = f"Unknown configuration keys: {', '.join(sorted(unknown))}."
        raise ConfigError(msg)

    path = config.get("path", DEFAULT_PATH)
    if not isinstance(path, str | os.PathLike) or not os.fspath(path):
        msg = f"path must be a non-empty path (got {path!r})."
        raise ConfigError(msg)

    message = config.get("message", DEFAULT_MESSAGE)
    if not isinstance(message, str):
        msg = f"message must be a string (got {message!r})."
        raise ConfigError(msg)

    return DemoConfig(
        path=Path(path),
        message=message,
        countdown=_coerce_countdown(config.get("countdown", 0)),
    )


def _coerce_countdown(value: object) -> int:
    if isinstance(value, bool):
        msg = "countdown must be an integer number of seconds."
        raise ConfigError(msg)
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    msg = f"countdown must be an integer number of seconds (got {value!r})."
    raise ConfigError(msg)
