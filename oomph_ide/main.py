from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from .config import DEFAULT_CONFIG, load_config
from .ide import OomphIde
from .lib.jar_runner import JarFolderRunner
from .logging_utils import DEFAULT_LOG_PATH, configure_logging

logger = logging.getLogger(__name__)


def run(
    *,
    config_path: str = DEFAULT_CONFIG,
    log_path: str = DEFAULT_LOG_PATH,
    force: bool = False,
    dry_run: bool = False,
    launch: bool = False,
    verbose: bool = False,
) -> Dict[str, Any]:
    """Set up (and optionally open) the IDE declared in ``config_path``."""

    actual_log_path = configure_logging(log_path=log_path, level=logging.DEBUG if verbose else logging.INFO)

    summary: Dict[str, Any] = {"log_path": actual_log_path}
    state: Dict[str, Any] = {}
    try:
        ide = OomphIde(load_config(config_path))
        summary["ide_dir"] = str(ide.ide_dir)
        if launch:
            ide.ide(dry_run=dry_run, state=state)
            summary["launched"] = not dry_run
        else:
            result = ide.ide_setup(force=force, dry_run=dry_run, state=state)
            summary["up_to_date"] = result.up_to_date
            summary["ran_steps"] = result.ran_steps
        return summary
    except Exception:
        logger.exception(
            "IDE setup failed at step %s; the installation is stale and will be redone on the next run",
            (state.get("execution") or {}).get("current_step"),
        )
        raise


def status(*, config_path: str = DEFAULT_CONFIG) -> bool:
    ide = OomphIde(load_config(config_path))
    return ide.is_clean()


def run_app(
    *,
    root: str,
    args: List[str],
    classpath: Optional[List[str]] = None,
    java: Optional[str] = None,
    jvm_args: Optional[List[str]] = None,
    log_path: str = DEFAULT_LOG_PATH,
    dry_run: bool = False,
) -> int:
    """Run an Eclipse application in a child JVM against ``root/plugins``."""

    configure_logging(log_path=log_path)
    runner = JarFolderRunner(
        Path(root),
        classpath=[Path(c) for c in classpath or []],
        java=java,
        jvm_args=jvm_args or [],
    )
    return runner.run(args, dry_run=dry_run).returncode


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="oomph-ide")
    p.add_argument("--log", default=DEFAULT_LOG_PATH, help="Path to the log file")
    p.add_argument("-v", "--verbose", action="store_true", help="Log captured command output")

    sub = p.add_subparsers(dest="subcmd", required=True)

    for name, help_text in [
        ("setup", "Install and configure the IDE if it is stale"),
        ("launch", "Set up the IDE if needed, then open it"),
        ("status", "Report whether the installed IDE is up to date"),
    ]:
        sp = sub.add_parser(name, help=help_text)
        sp.add_argument("--config", default=DEFAULT_CONFIG, help="IDE configuration (yaml|json)")
        if name != "status":
            sp.add_argument("--dry-run", action="store_true", help="Log commands and writes without doing them")
        if name == "setup":
            sp.add_argument("--force", action="store_true", help="Reinstall even if the IDE is up to date")

    sp = sub.add_parser("run-app", help="Run an Eclipse application in a new JVM")
    sp.add_argument("--root", required=True, help="Directory containing a plugins folder")
    sp.add_argument("--classpath", action="append", default=[], help="Extra classpath entry (repeatable)")
    sp.add_argument("--java", default=None, help="Java executable (default: JAVA_HOME or PATH)")
    sp.add_argument("--jvm-arg", action="append", default=[], dest="jvm_args", help="JVM argument, e.g. --jvm-arg=-Xmx2g (repeatable)")
    sp.add_argument("--dry-run", action="store_true")
    sp.add_argument("app_args", nargs=argparse.REMAINDER, help="Application arguments; use: run-app --root DIR -- <args...>")

    return p


def main(argv: Optional[list[str]] = None) -> int:
    p = build_parser()
    args = p.parse_args(argv)

    try:
        if args.subcmd == "status":
            clean = status(config_path=args.config)
            print("up-to-date" if clean else "stale")
            return 0 if clean else 1

        if args.subcmd == "run-app":
            app_args = list(args.app_args)
            if app_args and app_args[0] == "--":
                app_args = app_args[1:]
            return run_app(
                root=args.root,
                args=app_args,
                classpath=args.classpath,
                java=args.java,
                jvm_args=args.jvm_args,
                log_path=args.log,
                dry_run=bool(args.dry_run),
            )

        run(
            config_path=args.config,
            log_path=args.log,
            force=bool(getattr(args, "force", False)),
            dry_run=bool(args.dry_run),
            launch=args.subcmd == "launch",
            verbose=bool(args.verbose),
        )
        return 0
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    raise SystemExit(main())
