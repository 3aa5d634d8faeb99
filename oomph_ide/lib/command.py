from __future__ import annotations

import logging
import os
import shlex
import subprocess
from dataclasses import dataclass
from typing import List, Mapping, Optional, Sequence

logger = logging.getLogger(__name__)


def fmt_argv(argv: Sequence[str]) -> str:
    return " ".join(shlex.quote(str(a)) for a in argv)


@dataclass(frozen=True)
class CmdResult:
    argv: List[str]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    def log_output(self) -> None:
        if self.stdout:
            logger.debug("STDOUT %s", self.stdout.strip())
        if self.stderr:
            logger.debug("STDERR %s", self.stderr.strip())

    def raise_for_status(self) -> None:
        if not self.ok:
            raise RuntimeError(f"Command failed ({self.returncode}): {fmt_argv(self.argv)}\n{self.stderr}")


class _Launch:
    """A logged command line, about to be run or spawned."""

    def __init__(self, verb: str, argv: Sequence[object], cwd: str | os.PathLike[str] | None):
        self.argv = [str(a) for a in argv]
        self.cwd = cwd
        where = f" (in {cwd})" if cwd else ""
        logger.info("%s %s%s", verb, fmt_argv(self.argv), where)


def run_cmd(
    argv: Sequence[object],
    *,
    check: bool = True,
    env: Optional[Mapping[str, str]] = None,
    cwd: str | os.PathLike[str] | None = None,
    dry_run: bool = False,
) -> CmdResult:
    """Run an external program (p2 director, java) and wait for it.

    The command line is always logged; captured output goes to DEBUG. A
    non-zero exit raises ``RuntimeError`` carrying stderr when ``check`` is
    set. With ``dry_run`` nothing is executed.
    """

    launch = _Launch("CMD", argv, cwd)
    if dry_run:
        return CmdResult(argv=launch.argv, returncode=0)

    completed = subprocess.run(
        launch.argv,
        cwd=launch.cwd,
        env={**os.environ, **(env or {})},
        capture_output=True,
        text=True,
    )
    result = CmdResult(launch.argv, completed.returncode, completed.stdout, completed.stderr)
    result.log_output()
    if check:
        result.raise_for_status()
    return result


def spawn_cmd(
    argv: Sequence[object],
    *,
    cwd: str | os.PathLike[str] | None = None,
    dry_run: bool = False,
) -> Optional[subprocess.Popen]:
    """Start a program detached from this process, e.g. the installed IDE."""

    launch = _Launch("SPAWN", argv, cwd)
    if dry_run:
        return None

    return subprocess.Popen(
        launch.argv,
        cwd=launch.cwd,
        stdin=subprocess.DEVNULL,
        stdout=subprocess.DEVNULL,
        stderr=subprocess.DEVNULL,
        start_new_session=True,
    )
