from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from .config import PERSPECTIVE_RESOURCES, IdeConfig
from .conventions import apply_jdt
from .lib.command import spawn_cmd
from .lib.p2 import P2Model
from .lib.platform_info import SwtPlatform
from .lib.workspace_registry import WorkspaceRegistry
from .pipeline import PipelineResult, SetupCtx, run_pipeline
from .setup_actions import ActionFactory, ApplicationAction, SetupAction, eager
from .state_store import STALE_TOKEN, has_token, snapshot
from .steps import (
    BrandingStep,
    EclipseIniStep,
    InternalSetupStep,
    P2InstallStep,
    PrepareDirsStep,
    StaleTokenStep,
    WorkspacePropsStep,
)

logger = logging.getLogger(__name__)


def build_steps():
    return [
        PrepareDirsStep(),
        P2InstallStep(),
        BrandingStep(),
        EclipseIniStep(),
        WorkspacePropsStep(),
        InternalSetupStep(),
        StaleTokenStep(),
    ]


class OomphIde:
    """The declared IDE: what to install, how to brand it, what to set up.

    Built from an :class:`IdeConfig`; conventions and user settings are
    applied on construction so the model is complete before any setup runs.
    """

    def __init__(
        self,
        config: IdeConfig,
        *,
        registry: Optional[WorkspaceRegistry] = None,
        platform: Optional[SwtPlatform] = None,
    ):
        self.config = config
        self.registry = registry if registry is not None else WorkspaceRegistry()
        self.platform = platform if platform is not None else config.platform
        self.name = config.name
        self.perspective = config.perspective or PERSPECTIVE_RESOURCES
        self.project_files: List[Path] = list(config.projects)
        self.workspace_to_content: Dict[str, Callable[[], Dict[str, str]]] = {}
        self.internal_setup_actions: List[ActionFactory] = []

        self.p2 = P2Model()
        for r in config.repos:
            self.p2.add_repo(r)
        for r in config.metadata_repos:
            self.p2.add_metadata_repo(r)
        for r in config.artifact_repos:
            self.p2.add_artifact_repo(r)
        self.p2.add_ius(config.ius)
        for f in config.features:
            self.p2.add_feature(f)

        if config.jdt is not None:
            apply_jdt(self, config.jdt)
        for rel, props in config.workspace_props.items():
            self.workspace_prop(rel, lambda p, props=props: p.update(props))
        for action in config.extra_actions:
            self.add_setup_action(ApplicationAction(action["application"], tuple(action["args"])))

    # model

    def require_ius(self, *ius: str) -> None:
        self.p2.add_ius(ius)

    def set_perspective_over(self, perspective: str, over: str = PERSPECTIVE_RESOURCES) -> None:
        """Switches to ``perspective`` only if the current one is still ``over``."""
        if self.perspective == over:
            self.perspective = perspective

    def workspace_prop(self, path: str, configure: Callable[[Dict[str, str]], Any]) -> None:
        """Sets ``path`` within the workspace to be a property file.

        A later call for the same path replaces the earlier one.
        """

        def build() -> Dict[str, str]:
            props: Dict[str, str] = {}
            configure(props)
            return props

        self.workspace_to_content[str(path)] = build

    def add_setup_action(self, action: SetupAction) -> None:
        """Adds an action which will be run inside the installed runtime."""
        self.internal_setup_actions.append(eager(action))

    def add_setup_action_lazy(self, factory: ActionFactory) -> None:
        """Like :meth:`add_setup_action`, but the action is created at setup time."""
        self.internal_setup_actions.append(factory)

    # paths

    @property
    def ide_dir(self) -> Path:
        return self.config.ide_dir

    @property
    def eclipse_root(self) -> Path:
        return self.ide_dir / self.platform.contents_prefix()

    @property
    def workspace_dir(self) -> Path:
        return self.config.workspace_dir or self.registry.workspace_dir(self.ide_dir)

    # staleness

    def state(self) -> str:
        return snapshot(self.ide_dir, self.p2, self.project_files)

    def is_clean(self) -> bool:
        """True iff the installation matches the current configuration."""
        return has_token(self.ide_dir, STALE_TOKEN, self.state())

    # tasks

    def ide_setup(
        self,
        *,
        force: bool = False,
        dry_run: bool = False,
        state: Optional[Dict[str, Any]] = None,
    ) -> PipelineResult:
        """Sets up the IDE from scratch, unless it is already up to date."""
        if not force and self.is_clean():
            logger.info("IDE at %s is up to date", self.ide_dir)
            return PipelineResult(state={}, up_to_date=True)
        logger.info("Setting up IDE %s at %s", self.name, self.ide_dir)
        return run_pipeline(ctx=SetupCtx(ide=self, dry_run=dry_run), steps=build_steps(), state=state)

    def ide(self, *, dry_run: bool = False, state: Optional[Dict[str, Any]] = None):
        """Sets the IDE up if needed, then opens it without waiting."""
        self.registry.clean()
        self.ide_setup(dry_run=dry_run, state=state)
        launcher = self.ide_dir / self.platform.launcher()
        return spawn_cmd([str(launcher)], cwd=self.ide_dir, dry_run=dry_run)
