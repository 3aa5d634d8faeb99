from __future__ import annotations

import logging
from typing import Any, Dict

from ..pipeline import SetupCtx
from ..state_store import STALE_TOKEN, write_token

logger = logging.getLogger(__name__)


class StaleTokenStep:
    step_id = "90_stale_token"

    def run(self, ctx: SetupCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        if ctx.dry_run:
            logger.info("Would write %s", ctx.ide.ide_dir / STALE_TOKEN)
            return state
        path = write_token(ctx.ide.ide_dir, STALE_TOKEN, ctx.ide.state())
        logger.info("IDE setup complete, token written to %s", path)
        return state
