from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Callable

logger = logging.getLogger(__name__)


def clean_dir(path: Path, *, dry_run: bool = False) -> None:
    """Deletes ``path`` if present and recreates it empty."""

    p = Path(path)
    if dry_run:
        logger.info("Would clean %s", p)
        return
    if p.is_symlink() or p.is_file():
        p.unlink()
    elif p.exists():
        shutil.rmtree(p)
    p.mkdir(parents=True, exist_ok=True)
    logger.info("Cleaned %s", p)


def copy_file(src: Path, dst: Path, *, dry_run: bool = False) -> None:
    s = Path(src)
    d = Path(dst)
    if not s.is_file():
        raise FileNotFoundError(str(s))

    if dry_run:
        logger.info("Would copy %s -> %s", s, d)
        return

    d.parent.mkdir(parents=True, exist_ok=True)
    shutil.copy2(s, d)


def write_text(path: Path, content: str, *, dry_run: bool = False) -> None:
    p = Path(path)
    if dry_run:
        logger.info("Would write %s", p)
        return
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(content, encoding="utf-8")
    logger.info("Wrote %s", p)


def modify_file(path: Path, fn: Callable[[str], str], *, dry_run: bool = False) -> None:
    """Rewrites a file in place; a missing file is treated as empty."""

    p = Path(path)
    if dry_run:
        logger.info("Would modify %s", p)
        return
    before = p.read_text(encoding="utf-8") if p.exists() else ""
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(fn(before), encoding="utf-8")
