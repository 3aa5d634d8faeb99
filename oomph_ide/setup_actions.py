from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional, Protocol, Sequence

from .config import InstalledJre
from .lib.command import CmdResult
from .lib.jar_runner import JarFolderRunner

logger = logging.getLogger(__name__)

QUEUE_FILE = "setup-actions.json"


class SetupAction(Protocol):
    """A unit of work executed once inside the installed runtime."""

    action_id: str

    def to_json(self) -> Dict[str, Any]:
        ...


ActionFactory = Callable[[], SetupAction]


def eager(action: SetupAction) -> ActionFactory:
    """Factory returning an action that already exists."""
    return lambda: action


@dataclass(frozen=True)
class ProjectImporter:
    """Imports existing projects into the workspace, by their ``.project`` file."""

    project_files: Sequence[Path]
    action_id: str = "import_projects"

    def to_json(self) -> Dict[str, Any]:
        return {
            "action": self.action_id,
            "projects": [str(Path(p).parent) for p in sorted(self.project_files)],
        }


@dataclass(frozen=True)
class InstalledJreAdder:
    jres: Sequence[InstalledJre]
    action_id: str = "installed_jres"

    def to_json(self) -> Dict[str, Any]:
        return {"action": self.action_id, "jres": [j.to_json() for j in self.jres]}


@dataclass(frozen=True)
class ApplicationAction:
    """Runs another headless Eclipse application with the given arguments."""

    application: str
    args: Sequence[str] = ()
    action_id: str = "application"

    def to_json(self) -> Dict[str, Any]:
        return {"action": self.action_id, "application": self.application, "args": list(self.args)}


@dataclass
class SetupWithinEclipse:
    """Queue of setup actions, run by one child JVM booted from the IDE.

    The queue is serialized in insertion order to a JSON file which the
    setup application reads; factories are resolved when the queue is
    written, not when they are added.
    """

    eclipse_root: Path
    workspace_dir: Path
    application: str
    _queue: List[ActionFactory] = field(default_factory=list)

    def add(self, action: SetupAction) -> None:
        self._queue.append(eager(action))

    def add_lazy(self, factory: ActionFactory) -> None:
        self._queue.append(factory)

    def extend(self, factories: Iterable[ActionFactory]) -> None:
        self._queue.extend(factories)

    def __len__(self) -> int:
        return len(self._queue)

    def resolve(self) -> List[SetupAction]:
        return [factory() for factory in self._queue]

    def queue_payload(self) -> Dict[str, Any]:
        return {
            "workspace": str(self.workspace_dir),
            "actions": [a.to_json() for a in self.resolve()],
        }

    def write_queue(self, path: Path) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(self.queue_payload(), indent=2) + "\n", encoding="utf-8")
        return path

    def args(self, queue_path: Path) -> List[str]:
        return [
            "-application",
            self.application,
            "-data",
            str(self.workspace_dir),
            "-setupActions",
            str(queue_path),
        ]

    def run(self, runner: JarFolderRunner, queue_path: Optional[Path] = None) -> Optional[CmdResult]:
        """Spawns the runtime once for the whole queue; an empty queue spawns nothing."""
        if not self._queue:
            logger.info("No setup actions queued")
            return None
        queue_path = self.write_queue(queue_path or (self.eclipse_root / "configuration" / QUEUE_FILE))
        logger.info("Running %d setup action(s) via %s", len(self._queue), self.application)
        return runner.run(self.args(queue_path))
