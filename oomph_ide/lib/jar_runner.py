from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path
from typing import Iterable, List, Mapping, Optional, Sequence

from .command import CmdResult, run_cmd

logger = logging.getLogger(__name__)

LAUNCHER_MAIN = "org.eclipse.equinox.launcher.Main"
LAUNCHER_JAR_PREFIX = "org.eclipse.equinox.launcher_"

# org.eclipse.osgi provides the framework classes; org.osgi.core jars never go on the classpath.
EXCLUDED_PREFIX = "org.osgi.core"


def filter_classpath(entries: Iterable[Path]) -> List[Path]:
    return [Path(e) for e in entries if not Path(e).name.startswith(EXCLUDED_PREFIX)]


def find_java(java: Optional[str] = None, env: Optional[Mapping[str, str]] = None) -> str:
    """Explicit path, then $JAVA_HOME/bin/java, then java on PATH."""

    if java:
        return str(java)
    env = os.environ if env is None else env
    java_home = env.get("JAVA_HOME")
    if java_home:
        exe = "java.exe" if os.name == "nt" else "java"
        return str(Path(java_home) / "bin" / exe)
    return shutil.which("java") or "java"


def find_launcher_jar(root_dir: Path) -> Path:
    plugins = Path(root_dir) / "plugins"
    if not plugins.is_dir():
        raise FileNotFoundError(f"No plugins folder in {root_dir}")
    candidates = sorted(p for p in plugins.glob(LAUNCHER_JAR_PREFIX + "*.jar") if p.is_file())
    if not candidates:
        raise FileNotFoundError(f"No {LAUNCHER_JAR_PREFIX}*.jar in {plugins}")
    # Highest version sorts last for the usual x.y.z.vQUALIFIER scheme.
    return candidates[-1]


def expand_classpath(entries: Iterable[Path]) -> List[Path]:
    """Directories expand to the jars directly inside them."""

    out: List[Path] = []
    for e in entries:
        p = Path(e)
        if p.is_dir():
            out.extend(sorted(j for j in p.glob("*.jar") if j.is_file()))
        else:
            out.append(p)
    return out


class JarFolderRunner:
    """Runs an Eclipse application in a new JVM.

    ``root_dir`` must contain a ``plugins`` folder holding the OSGi bundles
    needed by the application (an installed IDE qualifies).
    """

    def __init__(
        self,
        root_dir: Path,
        *,
        classpath: Sequence[Path] = (),
        java: Optional[str] = None,
        jvm_args: Sequence[str] = (),
    ):
        self.root_dir = Path(root_dir)
        self.extra_classpath = [Path(p) for p in classpath]
        self.java = java
        self.jvm_args = list(jvm_args)

    def classpath(self) -> List[Path]:
        entries = [find_launcher_jar(self.root_dir), *expand_classpath(self.extra_classpath)]
        return filter_classpath(entries)

    def command(self, args: Sequence[str]) -> List[str]:
        cp = os.pathsep.join(str(p) for p in self.classpath())
        return [
            find_java(self.java),
            *self.jvm_args,
            "-cp",
            cp,
            LAUNCHER_MAIN,
            "-install",
            str(self.root_dir),
            "-nosplash",
            "-consolelog",
            *[str(a) for a in args],
        ]

    def run(self, args: Sequence[str], *, dry_run: bool = False) -> CmdResult:
        """Blocks until the JVM exits; a non-zero exit raises RuntimeError."""
        return run_cmd(self.command(args), cwd=self.root_dir, dry_run=dry_run)
