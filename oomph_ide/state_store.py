from __future__ import annotations

import hashlib
import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

logger = logging.getLogger(__name__)

STALE_TOKEN = "token_stale"


def snapshot(ide_dir: Path, p2: object, project_files: Iterable[Path]) -> str:
    """String form of everything whose change forces a fresh install."""

    projects = sorted(str(Path(p)) for p in project_files)
    return f"{Path(ide_dir)}\n{p2}\n{projects}"


def fingerprint(state: str) -> str:
    return hashlib.sha256(state.encode("utf-8")).hexdigest()


def load_token(dir_: Path, name: str = STALE_TOKEN) -> Optional[Dict[str, Any]]:
    p = Path(dir_) / name
    if not p.is_file():
        return None
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.warning("Ignoring unreadable token %s: %s", p, e)
        return None
    if not isinstance(data, dict):
        logger.warning("Ignoring token %s: expected an object, got %s", p, type(data).__name__)
        return None
    return data


def has_token(dir_: Path, name: str, state: str) -> bool:
    """True iff ``dir_`` holds a token written for exactly this state."""

    token = load_token(dir_, name)
    if token is None:
        return False
    return token.get("fingerprint") == fingerprint(state)


def write_token(dir_: Path, name: str, state: str) -> Path:
    p = Path(dir_) / name
    p.parent.mkdir(parents=True, exist_ok=True)
    token = {"fingerprint": fingerprint(state), "state": state}
    p.write_text(json.dumps(token, indent=2, sort_keys=True) + "\n", encoding="utf-8")
    return p
