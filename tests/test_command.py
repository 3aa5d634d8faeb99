from __future__ import annotations

import sys

import pytest

from oomph_ide.lib.command import CmdResult, fmt_argv, run_cmd, spawn_cmd


def test_dry_run_executes_nothing(tmp_path) -> None:
    marker = tmp_path / "ran"
    res = run_cmd([sys.executable, "-c", f"open({str(marker)!r}, 'w')"], dry_run=True)
    assert res.ok
    assert not marker.exists()
    assert spawn_cmd(["definitely-not-a-program"], dry_run=True) is None


def test_failure_carries_exit_code_and_stderr() -> None:
    with pytest.raises(RuntimeError) as e:
        run_cmd([sys.executable, "-c", "import sys; sys.stderr.write('boom'); sys.exit(3)"])
    assert "Command failed (3)" in str(e.value)
    assert "boom" in str(e.value)


def test_unchecked_failure_returns_result() -> None:
    res = run_cmd([sys.executable, "-c", "import sys; print('hi'); sys.exit(2)"], check=False)
    assert res.returncode == 2
    assert res.stdout.strip() == "hi"


def test_fmt_argv_quotes() -> None:
    assert fmt_argv(["java", "-cp", "a b.jar"]) == "java -cp 'a b.jar'"


def test_result_raise_for_status() -> None:
    CmdResult(["java"], 0).raise_for_status()
    with pytest.raises(RuntimeError, match=r"Command failed \(1\): java -version\nbad"):
        CmdResult(["java", "-version"], 1, stderr="bad").raise_for_status()
