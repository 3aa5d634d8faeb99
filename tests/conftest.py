"""Shared fixtures.

No Eclipse, JVM or network needed: the p2 director and the child JVM are
replaced by fakes that record their command line and, for the director,
lay out the handful of files a real install would produce.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Dict, List

import pytest

from oomph_ide.config import IdeConfig
from oomph_ide.ide import OomphIde
from oomph_ide.lib.command import CmdResult
from oomph_ide.lib.platform_info import SwtPlatform
from oomph_ide.lib.workspace_registry import WorkspaceRegistry

LINUX = SwtPlatform(os="linux", ws="gtk", arch="x86_64")
MAC = SwtPlatform(os="macosx", ws="cocoa", arch="aarch64")

ECLIPSE_INI = """\
-startup
plugins/org.eclipse.equinox.launcher_1.6.800.jar
-showsplash
org.eclipse.epp.package.common
-vmargs
-Xms256m
-Xmx2048m
"""

BUNDLES_INFO = "#version=1\norg.eclipse.osgi,3.20.0,plugins/org.eclipse.osgi_3.20.0.jar,-1,true\n"


@pytest.fixture(autouse=True)
def cache_dir(tmp_path, monkeypatch) -> Path:
    cache = tmp_path / "cache"
    monkeypatch.setenv("OOMPH_IDE_CACHE", str(cache))
    return cache


def fake_install(destination: Path, prefix: str = "") -> None:
    root = destination / prefix
    (root / "plugins").mkdir(parents=True, exist_ok=True)
    (root / "plugins" / "org.eclipse.equinox.launcher_1.6.800.jar").write_bytes(b"jar")
    (root / "plugins" / "org.eclipse.osgi_3.20.0.jar").write_bytes(b"jar")
    (root / "eclipse.ini").write_text(ECLIPSE_INI, encoding="utf-8")
    info = root / "configuration/org.eclipse.equinox.simpleconfigurator/bundles.info"
    info.parent.mkdir(parents=True, exist_ok=True)
    info.write_text(BUNDLES_INFO, encoding="utf-8")


class Recorder:
    def __init__(self) -> None:
        self.director: List[List[str]] = []
        self.jvm: List[List[str]] = []
        self.queues: List[Dict[str, Any]] = []
        self.fail_jvm = False


@pytest.fixture
def recorder(monkeypatch) -> Recorder:
    import json

    rec = Recorder()

    def director_cmd(argv, **kwargs):
        argv = [str(a) for a in argv]
        rec.director.append(argv)
        if kwargs.get("dry_run"):
            return CmdResult(argv=argv, returncode=0, stdout="", stderr="")
        dest = Path(argv[argv.index("-destination") + 1])
        os_ = argv[argv.index("-p2.os") + 1]
        fake_install(dest, "Contents/Eclipse/" if os_ == "macosx" else "")
        return CmdResult(argv=argv, returncode=0, stdout="", stderr="")

    def jvm_cmd(argv, **kwargs):
        argv = [str(a) for a in argv]
        rec.jvm.append(argv)
        if "-setupActions" in argv:
            queue = Path(argv[argv.index("-setupActions") + 1])
            rec.queues.append(json.loads(queue.read_text(encoding="utf-8")))
        if rec.fail_jvm:
            raise RuntimeError("Command failed (13): java")
        return CmdResult(argv=argv, returncode=0, stdout="", stderr="")

    monkeypatch.setattr("oomph_ide.lib.p2.run_cmd", director_cmd)
    monkeypatch.setattr("oomph_ide.lib.jar_runner.run_cmd", jvm_cmd)
    return rec


@pytest.fixture
def make_ide(tmp_path) -> Callable[..., OomphIde]:
    def _make(platform: SwtPlatform = LINUX, **raw: Any) -> OomphIde:
        raw.setdefault("ide_dir", "build/ide")
        p2 = raw.setdefault("p2", {})
        p2.setdefault("director", "eclipse-director")
        p2.setdefault("ius", ["org.eclipse.platform.ide"])
        cfg = IdeConfig(raw=raw, base_dir=tmp_path)
        return OomphIde(cfg, registry=WorkspaceRegistry(tmp_path / "workspaces"), platform=platform)

    return _make


@pytest.fixture
def project_dir(tmp_path) -> Path:
    proj = tmp_path / "proj-a"
    proj.mkdir()
    (proj / ".project").write_text("<projectDescription/>", encoding="utf-8")
    return proj
