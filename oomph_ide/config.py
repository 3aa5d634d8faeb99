from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from .lib.env import cache_locations
from .lib.platform_info import SwtPlatform

DEFAULT_CONFIG = "oomph-ide.yaml"

PERSPECTIVE_RESOURCES = "org.eclipse.ui.resourcePerspective"
PERSPECTIVE_JAVA = "org.eclipse.jdt.ui.JavaPerspective"
PERSPECTIVE_PDE = "org.eclipse.pde.ui.PDEPerspective"

DEFAULT_SETUP_APPLICATION = "oomph.ide.setup"


class ConfigError(ValueError):
    pass


def _mapping(value: Any, key: str) -> Dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f"{key} must be a mapping, got {type(value).__name__}")
    return value


def _str_list(value: Any, key: str) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list):
        raise ConfigError(f"{key} must be a list, got {type(value).__name__}")
    out = [str(v).strip() for v in value if v is not None and str(v).strip()]
    return out


def _is_url(value: str) -> bool:
    return "://" in value or value.startswith("file:")


@dataclass(frozen=True)
class InstalledJre:
    version: str
    location: Path
    mark_default: bool = False
    execution_environments: Tuple[str, ...] = ()

    def to_json(self) -> Dict[str, Any]:
        return {
            "version": self.version,
            "location": str(self.location),
            "markDefault": self.mark_default,
            "executionEnvironments": list(self.execution_environments),
        }


@dataclass(frozen=True)
class IdeConfig:
    """Declared IDE, read from ``oomph-ide.yaml`` (or ``.json``).

    Relative paths resolve against ``base_dir``, the config file's directory.
    """

    raw: Dict[str, Any]
    base_dir: Path

    def path(self, value: Any) -> Path:
        p = Path(str(value)).expanduser()
        return p if p.is_absolute() else (self.base_dir / p)

    def _opt_path(self, key: str) -> Optional[Path]:
        value = self.raw.get(key)
        return self.path(value) if value else None

    @property
    def platform(self) -> SwtPlatform:
        return SwtPlatform.running()

    @property
    def name(self) -> str:
        return str(self.raw.get("name") or self.base_dir.resolve().name)

    @property
    def perspective(self) -> Optional[str]:
        value = self.raw.get("perspective")
        return str(value) if value else None

    @property
    def ide_dir(self) -> Path:
        default = "build/oomph-ide" + self.platform.app_suffix()
        return self.path(self.raw.get("ide_dir") or default).resolve()

    @property
    def workspace_dir(self) -> Optional[Path]:
        p = self._opt_path("workspace_dir")
        return p.resolve() if p else None

    @property
    def icon(self) -> Optional[Path]:
        return self._opt_path("icon")

    @property
    def splash(self) -> Optional[Path]:
        return self._opt_path("splash")

    # p2

    @property
    def _p2(self) -> Dict[str, Any]:
        return _mapping(self.raw.get("p2"), "p2")

    def _repos(self, key: str) -> List[str]:
        out = []
        for r in _str_list(self._p2.get(key), f"p2.{key}"):
            out.append(r if _is_url(r) else str(self.path(r).resolve()))
        return out

    @property
    def repos(self) -> List[str]:
        return self._repos("repos")

    @property
    def metadata_repos(self) -> List[str]:
        return self._repos("metadata_repos")

    @property
    def artifact_repos(self) -> List[str]:
        return self._repos("artifact_repos")

    @property
    def ius(self) -> List[str]:
        return _str_list(self._p2.get("ius"), "p2.ius")

    @property
    def features(self) -> List[str]:
        return _str_list(self._p2.get("features"), "p2.features")

    @property
    def director(self) -> Optional[str]:
        value = self._p2.get("director")
        if not value:
            return None
        return str(self.path(value)) if ("/" in str(value) or "\\" in str(value)) else str(value)

    @property
    def bundle_pool(self) -> Path:
        value = self._p2.get("bundle_pool")
        return self.path(value) if value else cache_locations().bundle_pool

    # projects

    def _project_file(self, entry: str) -> Path:
        p = self.path(entry).resolve()
        if p.is_dir():
            p = p / ".project"
        if p.name != ".project":
            raise ConfigError(f"Project file must be '.project', was {p}")
        return p

    @property
    def projects(self) -> List[Path]:
        found = {self._project_file(e) for e in _str_list(self.raw.get("projects"), "projects")}
        for root in _str_list(self.raw.get("projects_from"), "projects_from"):
            root_dir = self.path(root).resolve()
            if not root_dir.is_dir():
                raise ConfigError(f"projects_from entry is not a directory: {root_dir}")
            found.update(p for p in root_dir.rglob(".project") if p.is_file())
        return sorted(found)

    # launch file and workspace

    @property
    def eclipse_ini_args(self) -> Dict[str, str]:
        ini = _mapping(self.raw.get("eclipse_ini"), "eclipse_ini")
        args = _mapping(ini.get("args"), "eclipse_ini.args")
        return {str(k): str(v) for k, v in args.items()}

    @property
    def eclipse_ini_vmargs(self) -> List[str]:
        ini = _mapping(self.raw.get("eclipse_ini"), "eclipse_ini")
        return _str_list(ini.get("vmargs"), "eclipse_ini.vmargs")

    @property
    def workspace_props(self) -> Dict[str, Dict[str, str]]:
        out: Dict[str, Dict[str, str]] = {}
        for rel, props in _mapping(self.raw.get("workspace_props"), "workspace_props").items():
            mapping = _mapping(props, f"workspace_props.{rel}")
            out[str(rel)] = {str(k): str(v) for k, v in mapping.items()}
        return out

    # conventions

    @property
    def jdt(self) -> Optional[Dict[str, Any]]:
        if "jdt" not in self.raw:
            return None
        return _mapping(self.raw.get("jdt"), "jdt")

    def installed_jres(self) -> List[InstalledJre]:
        jdt = self.jdt or {}
        items = jdt.get("installed_jres") or []
        if not isinstance(items, list):
            raise ConfigError("jdt.installed_jres must be a list")
        jres: List[InstalledJre] = []
        for i, item in enumerate(items):
            item = _mapping(item, f"jdt.installed_jres[{i}]")
            if not item.get("version") or not item.get("location"):
                raise ConfigError(f"jdt.installed_jres[{i}] needs version and location")
            jres.append(
                InstalledJre(
                    version=str(item["version"]),
                    location=self.path(item["location"]),
                    mark_default=bool(item.get("default", False)),
                    execution_environments=tuple(
                        _str_list(item.get("execution_environments"), f"jdt.installed_jres[{i}].execution_environments")
                    ),
                )
            )
        return jres

    # internal setup

    @property
    def _setup(self) -> Dict[str, Any]:
        return _mapping(self.raw.get("setup"), "setup")

    @property
    def setup_application(self) -> str:
        return str(self._setup.get("application") or DEFAULT_SETUP_APPLICATION)

    @property
    def java(self) -> Optional[str]:
        value = self._setup.get("java")
        return str(value) if value else None

    @property
    def jvm_args(self) -> List[str]:
        return _str_list(self._setup.get("jvm_args"), "setup.jvm_args")

    @property
    def extra_actions(self) -> List[Dict[str, Any]]:
        items = self._setup.get("actions") or []
        if not isinstance(items, list):
            raise ConfigError("setup.actions must be a list")
        out = []
        for i, item in enumerate(items):
            item = _mapping(item, f"setup.actions[{i}]")
            if not item.get("application"):
                raise ConfigError(f"setup.actions[{i}] needs an application")
            out.append(
                {
                    "application": str(item["application"]),
                    "args": _str_list(item.get("args"), f"setup.actions[{i}].args"),
                }
            )
        return out


def parse_config_text(text: str, fmt: str) -> Dict[str, Any]:
    if fmt == "json":
        raw = json.loads(text)
    else:
        try:
            import yaml  # type: ignore
        except ImportError as e:  # pragma: no cover
            raise RuntimeError("PyYAML is required to read YAML configuration") from e
        raw = yaml.safe_load(text)
    raw = raw or {}
    if not isinstance(raw, dict):
        raise ConfigError("configuration must contain a mapping/object")
    return raw


def load_config(path: str | Path) -> IdeConfig:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(str(path))

    ext = p.suffix.lower()
    if ext not in {".yaml", ".yml", ".json"}:
        raise ConfigError("configuration must be YAML or JSON")

    raw = parse_config_text(p.read_text(encoding="utf-8"), "json" if ext == ".json" else "yaml")
    return IdeConfig(raw=raw, base_dir=p.resolve().parent)
