from .step_10_prepare_dirs import PrepareDirsStep
from .step_20_p2_install import P2InstallStep
from .step_30_branding import BrandingStep
from .step_40_eclipse_ini import EclipseIniStep
from .step_50_workspace_props import WorkspacePropsStep
from .step_60_internal_setup import InternalSetupStep
from .step_90_stale_token import StaleTokenStep

__all__ = [
    "PrepareDirsStep",
    "P2InstallStep",
    "BrandingStep",
    "EclipseIniStep",
    "WorkspacePropsStep",
    "InternalSetupStep",
    "StaleTokenStep",
]
