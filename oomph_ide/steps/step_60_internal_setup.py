from __future__ import annotations

import logging
from typing import Any, Dict

from ..lib.jar_runner import JarFolderRunner
from ..pipeline import SetupCtx
from ..setup_actions import ProjectImporter, SetupWithinEclipse

logger = logging.getLogger(__name__)


class InternalSetupStep:
    step_id = "60_internal_setup"

    def build(self, ctx: SetupCtx) -> SetupWithinEclipse:
        ide = ctx.ide
        internal = SetupWithinEclipse(
            eclipse_root=ide.eclipse_root,
            workspace_dir=ide.workspace_dir,
            application=ide.config.setup_application,
        )
        if ide.project_files:
            missing = [p for p in ide.project_files if not p.is_file()]
            if missing and not ctx.dry_run:
                raise FileNotFoundError(f"Project files missing: {', '.join(str(p) for p in missing)}")
            internal.add(ProjectImporter(tuple(ide.project_files)))
        internal.extend(ide.internal_setup_actions)
        return internal

    def run(self, ctx: SetupCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        logger.info("Internal setup")
        internal = self.build(ctx)
        state.setdefault("execution", {})["setup_actions"] = len(internal)
        if ctx.dry_run:
            for action in internal.resolve():
                logger.info("Would run setup action %s", action.action_id)
            return state

        runner = JarFolderRunner(
            ctx.ide.eclipse_root,
            java=ctx.ide.config.java,
            jvm_args=ctx.ide.config.jvm_args,
        )
        internal.run(runner)
        return state
