from __future__ import annotations

import platform
import sys
from dataclasses import dataclass
from typing import List, Optional


def normalize_os(system: str) -> str:
    s = system.lower()
    if s.startswith("win"):
        return "win32"
    if s in {"darwin", "macosx", "macos"}:
        return "macosx"
    return "linux"


def normalize_arch(machine: str) -> str:
    m = machine.lower()
    return {
        "x86_64": "x86_64",
        "amd64": "x86_64",
        "aarch64": "aarch64",
        "arm64": "aarch64",
        "ppc64le": "ppc64le",
        "i386": "x86",
        "i686": "x86",
        "x86": "x86",
    }.get(m, m)


_WS_FOR_OS = {
    "win32": "win32",
    "macosx": "cocoa",
    "linux": "gtk",
}


@dataclass(frozen=True)
class SwtPlatform:
    """An os/windowing-system/arch triple in the form p2 expects."""

    os: str
    ws: str
    arch: str

    @classmethod
    def running(cls, system: Optional[str] = None, machine: Optional[str] = None) -> "SwtPlatform":
        os_ = normalize_os(system or platform.system() or sys.platform)
        arch = normalize_arch(machine or platform.machine())
        return cls(os=os_, ws=_WS_FOR_OS[os_], arch=arch)

    def is_mac(self) -> bool:
        return self.os == "macosx"

    def is_windows(self) -> bool:
        return self.os == "win32"

    def win_mac_linux(self, win: str, mac: str, linux: str) -> str:
        if self.is_windows():
            return win
        if self.is_mac():
            return mac
        return linux

    def launcher(self) -> str:
        """Native launcher, relative to the install directory."""
        return self.win_mac_linux("eclipse.exe", "Contents/MacOS/eclipse", "eclipse")

    def contents_prefix(self) -> str:
        # p2 lays a mac install out as an .app bundle
        return "Contents/Eclipse/" if self.is_mac() else ""

    def app_suffix(self) -> str:
        return ".app" if self.is_mac() else ""

    def p2_args(self) -> List[str]:
        return ["-p2.os", self.os, "-p2.ws", self.ws, "-p2.arch", self.arch]

    def __str__(self) -> str:
        return f"{self.os}.{self.ws}.{self.arch}"
