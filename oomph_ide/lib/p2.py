from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional

from .command import CmdResult, run_cmd
from .platform_info import SwtPlatform

logger = logging.getLogger(__name__)

DIRECTOR_APPLICATION = "org.eclipse.equinox.p2.director"

LATEST_OFFICIAL_RELEASE = "4.33"


def release_update_site(version: str = LATEST_OFFICIAL_RELEASE) -> str:
    return f"https://download.eclipse.org/eclipse/updates/{version}/"


def _add_unique(items: List[str], value: str) -> None:
    value = str(value).strip()
    if not value:
        raise ValueError("p2 entries must be non-empty")
    if value not in items:
        items.append(value)


def _as_uri(location: str | Path) -> str:
    s = str(location)
    if "://" in s or s.startswith("file:"):
        return s
    return Path(s).expanduser().resolve().as_uri()


@dataclass
class P2Model:
    """Repositories and installable units to feed the p2 director.

    Every list keeps insertion order and drops duplicates, so the string form
    is stable for a given declaration.
    """

    repos: List[str] = field(default_factory=list)
    metadata_repos: List[str] = field(default_factory=list)
    artifact_repos: List[str] = field(default_factory=list)
    ius: List[str] = field(default_factory=list)

    def add_repo(self, repo: str | Path) -> None:
        """Adds a repository used for both metadata and artifacts."""
        _add_unique(self.repos, _as_uri(repo))

    def add_metadata_repo(self, repo: str | Path) -> None:
        _add_unique(self.metadata_repos, _as_uri(repo))

    def add_artifact_repo(self, repo: str | Path) -> None:
        _add_unique(self.artifact_repos, _as_uri(repo))

    def add_iu(self, iu: str) -> None:
        _add_unique(self.ius, iu)

    def add_ius(self, ius: Iterable[str]) -> None:
        for iu in ius:
            self.add_iu(iu)

    def add_feature(self, feature: str) -> None:
        """Adds a feature by id, appending ``.feature.group`` if missing."""
        suffix = ".feature.group"
        self.add_iu(feature if feature.endswith(suffix) else feature + suffix)

    def add_artifact_repo_bundle_pool(self, pool: Path) -> bool:
        """Reuse the shared bundle pool as an artifact source when it exists."""
        if (pool / "artifacts.xml").is_file() or (pool / "artifacts.jar").is_file():
            self.add_artifact_repo(pool)
            return True
        logger.info("Bundle pool %s has no artifact repository yet", pool)
        return False

    def copy(self) -> "P2Model":
        return P2Model(
            repos=list(self.repos),
            metadata_repos=list(self.metadata_repos),
            artifact_repos=list(self.artifact_repos),
            ius=list(self.ius),
        )

    def all_metadata_repos(self) -> List[str]:
        return self.repos + [r for r in self.metadata_repos if r not in self.repos]

    def all_artifact_repos(self) -> List[str]:
        return self.repos + [r for r in self.artifact_repos if r not in self.repos]

    def director_app(self, destination: Path, profile: str) -> "DirectorApp":
        if not self.ius:
            raise ValueError("p2 director needs at least one installable unit")
        if not self.all_metadata_repos():
            raise ValueError("p2 director needs at least one repository")
        return DirectorApp(model=self.copy(), destination=Path(destination), profile=profile)

    def __str__(self) -> str:
        return "\n".join(
            [
                f"repos: {self.repos}",
                f"metadataRepos: {self.metadata_repos}",
                f"artifactRepos: {self.artifact_repos}",
                f"ius: {self.ius}",
            ]
        )


@dataclass
class DirectorApp:
    """Arguments for one invocation of the p2 director application."""

    model: P2Model
    destination: Path
    profile: str
    extra: List[str] = field(default_factory=list)

    def consolelog(self) -> None:
        self.extra.append("-consolelog")

    def bundlepool(self, pool: Path) -> None:
        self.extra += ["-bundlepool", str(pool)]

    def platform(self, swt: SwtPlatform) -> None:
        self.extra += swt.p2_args()

    def args(self) -> List[str]:
        argv = [
            "-application",
            DIRECTOR_APPLICATION,
            "-metadataRepository",
            ",".join(self.model.all_metadata_repos()),
        ]
        artifact_repos = self.model.all_artifact_repos()
        if artifact_repos:
            argv += ["-artifactRepository", ",".join(artifact_repos)]
        argv += [
            "-installIU",
            ",".join(self.model.ius),
            "-destination",
            str(self.destination),
            "-profile",
            self.profile,
            "-profileProperties",
            "org.eclipse.update.install.features=true",
        ]
        return argv + self.extra

    def run(self, director: str, *, dry_run: bool = False, env: Optional[dict] = None) -> CmdResult:
        """Run the director through an Eclipse launcher, blocking until it exits."""
        logger.info("Installing %d IUs into %s", len(self.model.ius), self.destination)
        return run_cmd([director, "-nosplash", *self.args()], env=env, dry_run=dry_run)
