from __future__ import annotations

import hashlib
import json
import logging
import re
import shutil
from pathlib import Path
from typing import Dict, List, Optional

from .env import cache_locations

logger = logging.getLogger(__name__)

REGISTRY_FILE = "registry.json"


def _slug(name: str) -> str:
    return re.sub(r"[^A-Za-z0-9._-]+", "-", name).strip("-") or "ide"


class WorkspaceRegistry:
    """Keeps one workspace directory per IDE directory.

    Workspaces live outside the IDE so that a clean install does not lose
    user state unnecessarily; the registry remembers which IDE owns which
    workspace so orphans can be removed.
    """

    def __init__(self, root: Optional[Path] = None):
        self.root = Path(root) if root is not None else cache_locations().workspaces

    @property
    def registry_path(self) -> Path:
        return self.root / REGISTRY_FILE

    def _load(self) -> Dict[str, str]:
        p = self.registry_path
        if not p.exists():
            return {}
        data = json.loads(p.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError(f"{p} must contain an object")
        return {str(k): str(v) for k, v in data.items()}

    def _save(self, entries: Dict[str, str]) -> None:
        self.root.mkdir(parents=True, exist_ok=True)
        self.registry_path.write_text(json.dumps(entries, indent=2, sort_keys=True) + "\n", encoding="utf-8")

    def workspace_dir(self, ide_dir: Path) -> Path:
        """Returns (and registers) the workspace for ``ide_dir``."""
        ide_dir = Path(ide_dir).resolve()
        digest = hashlib.sha1(str(ide_dir).encode("utf-8")).hexdigest()[:10]
        name = f"{_slug(ide_dir.name)}-{digest}"
        entries = self._load()
        if entries.get(name) != str(ide_dir):
            entries[name] = str(ide_dir)
            self._save(entries)
        return self.root / name

    def clean(self) -> List[Path]:
        """Deletes workspaces whose IDE directory no longer exists."""
        entries = self._load()
        removed: List[Path] = []
        for name, owner in sorted(entries.items()):
            if Path(owner).exists():
                continue
            ws = self.root / name
            if ws.exists():
                logger.info("Removing orphaned workspace %s (ide %s is gone)", ws, owner)
                shutil.rmtree(ws)
            removed.append(ws)
            del entries[name]
        if removed:
            self._save(entries)
        return removed
