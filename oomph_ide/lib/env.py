from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

CACHE_ENV_VAR = "OOMPH_IDE_CACHE"


def _cache_root() -> Path:
    override = os.environ.get(CACHE_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".oomph-ide"


@dataclass(frozen=True)
class CacheLocations:
    root: Path

    @property
    def bundle_pool(self) -> Path:
        """Shared p2 bundle pool, reused by every IDE installed on this machine."""
        return self.root / "shared-bundles"

    @property
    def workspaces(self) -> Path:
        return self.root / "ide-workspaces"

    @property
    def log_fallback(self) -> Path:
        return self.root / "oomph-ide.log"


def cache_locations() -> CacheLocations:
    # Resolved per call so the env override is honoured after import.
    return CacheLocations(root=_cache_root())
