from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Iterable

from ..lib.files import clean_dir
from ..pipeline import SetupCtx

logger = logging.getLogger(__name__)


def _within(path: Path, root: Path) -> bool:
    return path == root or root in path.parents


def check_workspace(workspace_dir: Path, *, ide_dir: Path, base_dir: Path, project_files: Iterable[Path]) -> None:
    """Refuse a workspace whose cleaning would delete the IDE or user sources."""

    ws = Path(workspace_dir).resolve()
    ide = Path(ide_dir).resolve()
    if _within(ws, ide) or _within(ide, ws):
        raise RuntimeError(f"Workspace {ws} must not overlap the IDE directory {ide}")
    if _within(Path(base_dir).resolve(), ws):
        raise RuntimeError(f"Workspace {ws} must not contain the configuration directory {base_dir}")
    for p in project_files:
        if _within(Path(p).resolve(), ws):
            raise RuntimeError(f"Workspace {ws} must not contain the project {Path(p).parent}")


class PrepareDirsStep:
    step_id = "10_prepare_dirs"

    def run(self, ctx: SetupCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        ide = ctx.ide
        ide_dir = ide.ide_dir
        workspace_dir = ide.workspace_dir

        check_workspace(
            workspace_dir,
            ide_dir=ide_dir,
            base_dir=ide.config.base_dir,
            project_files=ide.project_files,
        )

        clean_dir(ide_dir, dry_run=ctx.dry_run)
        clean_dir(workspace_dir, dry_run=ctx.dry_run)

        state.setdefault("execution", {}).setdefault("paths", {}).update(
            {"ide_dir": str(ide_dir), "workspace_dir": str(workspace_dir)}
        )
        return state
