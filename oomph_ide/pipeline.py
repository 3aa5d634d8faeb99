from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Protocol, Sequence

if TYPE_CHECKING:
    from .ide import OomphIde

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SetupCtx:
    ide: "OomphIde"
    dry_run: bool = False


class Step(Protocol):
    """A single step of the setup sequence."""

    step_id: str

    def run(self, ctx: SetupCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        ...


@dataclass(frozen=True)
class PipelineResult:
    state: Dict[str, Any]
    ran_steps: List[str] = field(default_factory=list)
    up_to_date: bool = False


def run_pipeline(
    *,
    ctx: SetupCtx,
    steps: Sequence[Step],
    state: Optional[Dict[str, Any]] = None,
) -> PipelineResult:
    """Run every step in order. The first failure propagates unchanged."""

    state = {} if state is None else state
    ran: List[str] = []

    for step in steps:
        state.setdefault("execution", {})["current_step"] = step.step_id
        logger.info("Running step %s", step.step_id)
        state = step.run(ctx, state)
        ran.append(step.step_id)

    state.setdefault("execution", {})["current_step"] = None
    return PipelineResult(state=state, ran_steps=ran)
