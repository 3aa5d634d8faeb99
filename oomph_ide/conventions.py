from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Dict, List

from .config import PERSPECTIVE_JAVA, ConfigError, InstalledJre
from .setup_actions import InstalledJreAdder

if TYPE_CHECKING:
    from .ide import OomphIde

logger = logging.getLogger(__name__)

JDT_CORE_PREFS = ".metadata/.plugins/org.eclipse.core.runtime/.settings/org.eclipse.jdt.core.prefs"

JDT_COMPLIANCE_PROPS = (
    "org.eclipse.jdt.core.compiler.codegen.targetPlatform",
    "org.eclipse.jdt.core.compiler.compliance",
    "org.eclipse.jdt.core.compiler.source",
)
JDT_CLASSPATH_VAR_FMT = "org.eclipse.jdt.core.classpathVariable.{}"


class IUs:
    IDE = "org.eclipse.platform.ide"
    JDT = "org.eclipse.jdt"
    ERROR_LOG = "org.eclipse.ui.views.log"


def java_version(level: str) -> str:
    """Normalize a compliance level the way Java tooling spells it.

    ``8`` and ``1.8`` give ``1.8``; ``11`` and ``1.11`` give ``11``. Levels
    below 5 are rejected.
    """

    m = re.fullmatch(r"\s*(?:1\.)?(\d+)\s*", str(level))
    if not m:
        raise ConfigError(f"Could not determine java version from '{level}'")
    major = int(m.group(1))
    # JDT knows no compliance level below 1.5
    if major < 5:
        raise ConfigError(f"Could not determine java version from '{level}'")
    return f"1.{major}" if major <= 8 else str(major)


class ConventionJdt:
    """Java development tools.

    Requires the platform IDE, JDT and the error log view, and opens on the
    Java perspective while the perspective is still the resources one (the
    default, whether implicit or configured). Compiler settings land in the
    workspace ``org.eclipse.jdt.core.prefs``; installed JREs are registered
    by a setup action inside the runtime.
    """

    def __init__(self, ide: "OomphIde"):
        self.ide = ide
        self.installed_jres: List[InstalledJre] = []
        self.props: Dict[str, str] = {}
        ide.require_ius(IUs.IDE, IUs.JDT, IUs.ERROR_LOG)
        ide.set_perspective_over(PERSPECTIVE_JAVA)

    def installed_jre(self, jre: InstalledJre) -> None:
        if jre not in self.installed_jres:
            self.installed_jres.append(jre)

    def compiler_compliance_level(self, level: str) -> None:
        version = java_version(level)
        for p in JDT_COMPLIANCE_PROPS:
            self.props[p] = version
        # default compliance settings
        self.props["org.eclipse.jdt.core.compiler.codegen.inlineJsrBytecode"] = "enabled"
        self.props["org.eclipse.jdt.core.compiler.problem.assertIdentifier"] = "error"
        self.props["org.eclipse.jdt.core.compiler.problem.enumIdentifier"] = "error"

    def classpath_variable(self, name: str, value: str) -> None:
        self.props[JDT_CLASSPATH_VAR_FMT.format(name)] = str(value)

    def close(self) -> None:
        if self.props:
            props = dict(self.props)
            self.ide.workspace_prop(JDT_CORE_PREFS, lambda p: p.update(props))
        if self.installed_jres:
            self.ide.add_setup_action(InstalledJreAdder(tuple(self.installed_jres)))
        logger.debug("JDT convention applied (%d prefs, %d jres)", len(self.props), len(self.installed_jres))


def apply_jdt(ide: "OomphIde", jdt: Dict) -> ConventionJdt:
    """Apply the ``jdt`` section of the configuration."""

    convention = ConventionJdt(ide)
    for jre in ide.config.installed_jres():
        convention.installed_jre(jre)
    if jdt.get("compiler_compliance"):
        convention.compiler_compliance_level(str(jdt["compiler_compliance"]))
    variables = jdt.get("classpath_variables") or {}
    if not isinstance(variables, dict):
        raise ConfigError("jdt.classpath_variables must be a mapping")
    for name, value in variables.items():
        convention.classpath_variable(str(name), str(value))
    convention.close()
    return convention
