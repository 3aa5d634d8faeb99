from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List, Optional

logger = logging.getLogger(__name__)

VMARGS = "-vmargs"


def _vmarg_key(arg: str) -> str:
    """Option part of a vm argument: ``-Xmx2g`` -> ``-Xmx``, ``-Dfoo=bar`` -> ``-Dfoo``."""
    if arg.startswith("-D") and "=" in arg:
        return arg.split("=", 1)[0]
    for prefix in ("-Xms", "-Xmx", "-Xss"):
        if arg.startswith(prefix):
            return prefix
    if arg.startswith("-XX:"):
        body = arg[4:].lstrip("+-")
        return "-XX:" + body.split("=", 1)[0]
    return arg


class EclipseIni:
    """Line model of an ``eclipse.ini`` launcher file.

    Launcher options come first, one token per line, with a value on the
    line right after its option. Everything after ``-vmargs`` goes to the JVM.
    """

    def __init__(self, lines: List[str]):
        self.lines = [ln.rstrip("\r\n") for ln in lines if ln.strip()]

    @classmethod
    def parse_from(cls, path: Path) -> "EclipseIni":
        return cls(Path(path).read_text(encoding="utf-8").splitlines())

    def _vmargs_index(self) -> int:
        try:
            return self.lines.index(VMARGS)
        except ValueError:
            return len(self.lines)

    def _option_index(self, key: str) -> Optional[int]:
        end = self._vmargs_index()
        for i, ln in enumerate(self.lines[:end]):
            if ln == key:
                return i
        return None

    def get(self, key: str) -> Optional[str]:
        i = self._option_index(key)
        if i is None or i + 1 >= self._vmargs_index():
            return None
        return self.lines[i + 1]

    def set(self, key: str, value: str | os.PathLike[str]) -> None:
        """Sets ``key`` to ``value``, replacing the existing value if present."""
        value = str(value)
        i = self._option_index(key)
        if i is not None:
            nxt = i + 1
            if nxt < self._vmargs_index() and not self.lines[nxt].startswith("-"):
                self.lines[nxt] = value
            else:
                self.lines.insert(nxt, value)
            return
        end = self._vmargs_index()
        self.lines[end:end] = [key, value]

    def set_flag(self, key: str) -> None:
        """Adds a launcher flag which takes no value."""
        if self._option_index(key) is None:
            end = self._vmargs_index()
            self.lines.insert(end, key)

    def vmargs(self) -> List[str]:
        end = self._vmargs_index()
        return list(self.lines[end + 1 :])

    def vmarg(self, arg: str) -> None:
        """Adds a vm argument, replacing one for the same option."""
        if VMARGS not in self.lines:
            self.lines.append(VMARGS)
        start = self._vmargs_index() + 1
        key = _vmarg_key(arg)
        for i in range(start, len(self.lines)):
            if _vmarg_key(self.lines[i]) == key:
                self.lines[i] = arg
                return
        self.lines.append(arg)

    def render(self) -> str:
        return "\n".join(self.lines) + "\n"

    def write_to(self, path: Path) -> None:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.render(), encoding="utf-8")
        logger.info("Wrote %s", path)
