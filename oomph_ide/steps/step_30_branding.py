from __future__ import annotations

import logging
from typing import Any, Dict

from ..lib.branding import write_branding_plugin
from ..pipeline import SetupCtx

logger = logging.getLogger(__name__)


class BrandingStep:
    step_id = "30_branding"

    def run(self, ctx: SetupCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        ide = ctx.ide
        result = write_branding_plugin(
            ide.eclipse_root,
            name=ide.name,
            perspective=ide.perspective,
            icon=ide.config.icon,
            splash=ide.config.splash,
            dry_run=ctx.dry_run,
        )
        state["branding"] = {"splash": result.splash, "icon": result.icon}
        return state
