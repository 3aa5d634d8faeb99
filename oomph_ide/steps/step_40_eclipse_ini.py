from __future__ import annotations

import logging
from typing import Any, Dict

from ..lib.branding import PRODUCT_ID
from ..lib.eclipse_ini import EclipseIni
from ..pipeline import SetupCtx

logger = logging.getLogger(__name__)


class EclipseIniStep:
    step_id = "40_eclipse_ini"

    def configure(self, ctx: SetupCtx, ini: EclipseIni, state: Dict[str, Any]) -> EclipseIni:
        ide = ctx.ide
        ini.set("-data", ide.workspace_dir)
        ini.set("-product", PRODUCT_ID)
        splash = (state.get("branding") or {}).get("splash")
        if splash:
            ini.set("-showsplash", splash)
        # p2 director makes an invalid mac install out of the box
        if ide.platform.is_mac():
            ini.set("-install", ide.ide_dir / "Contents/MacOS")
            ini.set("-configuration", ide.ide_dir / "Contents/Eclipse/configuration")
        for key, value in ide.config.eclipse_ini_args.items():
            ini.set(key, value)
        for arg in ide.config.eclipse_ini_vmargs:
            ini.vmarg(arg)
        return ini

    def run(self, ctx: SetupCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        ini_file = ctx.ide.eclipse_root / "eclipse.ini"
        if ctx.dry_run:
            logger.info("Would rewrite %s", ini_file)
            return state
        ini = self.configure(ctx, EclipseIni.parse_from(ini_file), state)
        ini.write_to(ini_file)
        return state
