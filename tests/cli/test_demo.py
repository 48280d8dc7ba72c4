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

"""Tests for the ``scopedio-demo`` entry point."""

from __future__ import annotations

import io
from pathlib import Path

import pytest

from scopedio.cli import main
from scopedio.cli.demo import countdown, run_demo
from scopedio.clock import FakeClock

pytestmark = pytest.mark.usefixtures("narrow_encoding", "reset_root_logger")


def _run(path: Path, **overrides: object) -> tuple[int, str, str]:
    out = io.StringIO()
    err = io.StringIO()
    code = run_demo(
        {"path": path, **overrides},
        env={},
        clock=FakeClock(),
        out=out,
        err=err,
    )
    return code, out.getvalue(), err.getvalue()


class TestRunDemo:
    def test_missing_file_is_reported_then_created(self, tmp_path: Path) -> None:
        path = tmp_path / "x.txt"

        code, out, err = _run(path, message="hello\n")

        assert code == 0
        assert out == f"{path} file is not open!\n"
        assert err == ""
        assert path.read_bytes() == b"hello\n"

    def test_existing_file_is_reported_and_appended(self, tmp_path: Path) -> None:
        path = tmp_path / "x.txt"
        path.write_bytes(b"hello\n")

        code, out, _ = _run(path, message="world\n")

        assert code == 0
        assert out == f"{path} file is open.\n"
        assert path.read_bytes() == b"hello\nworld\n"

    def test_default_message(self, tmp_path: Path) -> None:
        path = tmp_path / "x.txt"
        _run(path)
        assert path.read_text(encoding="utf-8") == "\nI was inserted by another stream!:)\n"

    def test_unwritable_path_exits_with_one(self, tmp_path: Path) -> None:
        code, out, err = _run(tmp_path)

        assert code == 1
        assert "file is not open!" in out
        assert "requires an open stream" in err

    def test_invalid_configuration_exits_with_one(self, tmp_path: Path) -> None:
        code, _, err = _run(tmp_path / "x.txt", countdown=-2)
        assert code == 1
        assert "non-negative" in err

    def test_countdown_is_timed_with_clock(self, tmp_path: Path) -> None:
        code, out, _ = _run(tmp_path / "x.txt", countdown=2)

        assert code == 0
        assert "countdown: T-2 1 0 " in out
        assert "countdown finished in 3.00s" in out


class TestCountdown:
    def test_sleeps_once_per_tick(self) -> None:
        clock = FakeClock()
        out = io.StringIO()

        countdown(3, clock=clock, out=out)

        assert clock.monotonic() == 4
        assert out.getvalue() == "\n\ncountdown: T-3 2 1 0 "


class TestMain:
    def test_success(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        path = tmp_path / "x.txt"

        code = main(["--path", str(path), "--message", "hi"])

        assert code == 0
        assert capsys.readouterr().out == f"{path} file is not open!\n"
        assert path.read_bytes() == b"hi"

    def test_path_from_environment(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        path = tmp_path / "env.txt"
        monkeypatch.setenv("SCOPEDIO_DEMO_PATH", str(path))

        assert main(["--message", "from env"]) == 0
        assert path.read_bytes() == b"from env"
        assert "env.txt file is not open!" in capsys.readouterr().out

    def test_failure_prints_message_to_stderr(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        code = main(["--path", str(tmp_path)])

        assert code == 1
        assert "requires an open stream" in capsys.readouterr().err

    def test_bad_arguments_return_argparse_code(self) -> None:
        assert main(["--countdown", "soon"]) == 2
