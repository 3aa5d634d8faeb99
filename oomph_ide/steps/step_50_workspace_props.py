from __future__ import annotations

import logging
from typing import Any, Dict

from ..lib.props import write_props
from ..pipeline import SetupCtx

logger = logging.getLogger(__name__)


class WorkspacePropsStep:
    step_id = "50_workspace_props"

    def run(self, ctx: SetupCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        ide = ctx.ide
        written = []
        for rel, build in sorted(ide.workspace_to_content.items()):
            write_props(ide.workspace_dir / rel, build(), dry_run=ctx.dry_run)
            written.append(rel)
        state.setdefault("execution", {})["workspace_props"] = written
        return state
