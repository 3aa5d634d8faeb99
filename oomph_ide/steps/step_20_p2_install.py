from __future__ import annotations

import logging
import shutil
from typing import Any, Dict

from ..lib.p2 import release_update_site
from ..pipeline import SetupCtx

logger = logging.getLogger(__name__)

PROFILE = "OomphIde"


class P2InstallStep:
    step_id = "20_p2_install"

    def _director(self, ctx: SetupCtx) -> str:
        director = ctx.ide.config.director or shutil.which("eclipse")
        if director:
            return director
        if ctx.dry_run:
            return "eclipse"
        raise RuntimeError("No p2 director available: set p2.director to an Eclipse launcher")

    def run(self, ctx: SetupCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        ide = ctx.ide
        p2 = ide.p2.copy()
        if not p2.repos:
            site = release_update_site()
            logger.info("No metadata+artifact repository declared, adding %s", site)
            p2.add_repo(site)

        pool = ide.config.bundle_pool
        p2.add_artifact_repo_bundle_pool(pool)

        app = p2.director_app(ide.ide_dir, PROFILE)
        app.consolelog()
        # share the install for quickness
        app.bundlepool(pool)
        # create the native launcher
        app.platform(ide.platform)

        if not ctx.dry_run:
            pool.mkdir(parents=True, exist_ok=True)
        app.run(self._director(ctx), dry_run=ctx.dry_run)

        state.setdefault("execution", {}).setdefault("plan", {})["p2"] = {
            "ius": list(p2.ius),
            "repos": p2.all_metadata_repos(),
            "platform": str(ide.platform),
        }
        return state
