from __future__ import annotations

import argparse
import logging
import os
from pathlib import Path
from typing import Callable, Optional, Sequence

from .config import ProvisionConfig, load_config
from .context import WorkflowContext
from .errors import ProvisionError, StateIntegrityError, UserAbort, WorkflowAborted
from .handoff import handoff_state, inherit_candidates
from .logging_utils import DEFAULT_LOG_PATH, configure_logging
from .pipeline import Workflow, WorkflowResult, run_workflow
from .prompts import ConsolePrompter, Prompter
from .state_store import FlatFileBackend, MemoryBackend, StateStore
from .steps import install_workflow, post_install_workflow

logger = logging.getLogger(__name__)


def _open_store(path: str, *, dry_run: bool, inherit_from: tuple[str, ...] = ()) -> StateStore:
    if dry_run:
        # Dry runs read existing state but must not mark anything complete on disk.
        store = StateStore(MemoryBackend(FlatFileBackend(path).load()))
        for candidate in inherit_from:
            if store.inherit_from(FlatFileBackend(candidate)):
                break
        return store
    return StateStore.open(path, inherit_from=inherit_from)


def _execute(
    workflow: Workflow,
    *,
    cfg: ProvisionConfig,
    store: StateStore,
    prompter: Prompter,
    force: bool,
    stop_after: Optional[str],
) -> WorkflowResult:
    ctx = WorkflowContext.from_store(store, cfg)
    logger.info("Resuming %s with completed steps: %s", workflow.name, ", ".join(store.completed_steps()) or "none")
    return run_workflow(workflow, store=store, prompter=prompter, ctx=ctx, force=force, stop_after=stop_after)


def run_install(
    *,
    cfg: ProvisionConfig,
    state_path: Optional[str] = None,
    log_path: str = DEFAULT_LOG_PATH,
    force: bool = False,
    stop_after: Optional[str] = None,
    prompter: Optional[Prompter] = None,
) -> WorkflowResult:
    """Run the base install workflow, then hand its state to the target."""

    configure_logging(log_path=log_path)
    state_path = state_path or cfg.install_state
    store = _open_store(state_path, dry_run=cfg.dry_run)

    result = _execute(
        install_workflow(),
        cfg=cfg,
        store=store,
        prompter=prompter or ConsolePrompter(),
        force=force,
        stop_after=stop_after,
    )

    if stop_after is None:
        handoff_state(state_path, cfg.target_root, cfg.handoff_state, dry_run=cfg.dry_run)
        logger.info("Installation complete. Next: umount -R %s, reboot, then run arch-post-install", cfg.target_root)
    return result


def run_post_install(
    *,
    cfg: ProvisionConfig,
    state_path: Optional[str] = None,
    log_path: str = DEFAULT_LOG_PATH,
    force: bool = False,
    stop_after: Optional[str] = None,
    prompter: Optional[Prompter] = None,
) -> WorkflowResult:
    """Run the post-install workflow, seeded from the install state when available."""

    configure_logging(log_path=log_path)
    state_path = state_path or cfg.post_install_state
    store = _open_store(state_path, dry_run=cfg.dry_run, inherit_from=tuple(inherit_candidates(cfg)))

    result = _execute(
        post_install_workflow(),
        cfg=cfg,
        store=store,
        prompter=prompter or ConsolePrompter(),
        force=force,
        stop_after=stop_after,
    )
    if stop_after is None:
        logger.info("Post-installation configuration completed. Reboot and log in as %s", result.context.get("username"))
    return result


def _require_root() -> None:
    if os.geteuid() != 0:
        raise ProvisionError("This command must be run as root")


def _check_live_environment(prompter: Prompter, cmdline_path: str = "/proc/cmdline") -> None:
    try:
        cmdline = Path(cmdline_path).read_text(encoding="utf-8")
    except OSError:
        cmdline = ""
    if "archiso" in cmdline:
        return
    logger.warning("This installer is designed to run from an Arch Linux live environment")
    if not prompter.confirm("Continue anyway?"):
        raise ProvisionError("Not running from the Arch live environment; aborting")


def _check_arch_system() -> None:
    if not (Path("/etc/arch-release").exists() or Path("/etc/os-release").exists()):
        raise ProvisionError("This doesn't appear to be an Arch Linux system")


def _parser(prog: str, state_default: str, step_ids: Sequence[str]) -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog=prog)
    p.add_argument("--config", default=None, help="YAML provisioning config")
    p.add_argument("--state", default=None, help=f"Path to step state (default {state_default})")
    p.add_argument("--log", default=DEFAULT_LOG_PATH, help="Path to log file")
    p.add_argument(
        "--stop-after",
        default=None,
        choices=list(step_ids),
        metavar="STEP",
        help=f"Stop after step (one of: {', '.join(step_ids)})",
    )
    p.add_argument("--force", action="store_true", help="Re-run steps even if marked completed")
    p.add_argument("--dry-run", action="store_true", help="Log commands without executing them")
    return p


def _guarded(fn: Callable[[], object]) -> int:
    try:
        fn()
    except UserAbort as e:
        logger.info("%s", e)
        return 0
    except WorkflowAborted as e:
        logger.exception("%s. Fix the problem and re-run; completed steps will be skipped.", e)
        return 1
    except StateIntegrityError as e:
        logger.error("State file is inconsistent: %s", e)
        return 2
    except ProvisionError as e:
        logger.error("%s", e)
        return 1
    except KeyboardInterrupt:
        logger.warning("Interrupted; re-run to resume")
        return 130
    return 0


def main_install(argv: Optional[list[str]] = None) -> int:
    p = _parser("arch-install", ProvisionConfig().install_state, install_workflow().step_ids())
    args = p.parse_args(argv)
    cfg = load_config(args.config).with_overrides(dry_run=True if args.dry_run else None)
    prompter = ConsolePrompter()

    def _run() -> None:
        configure_logging(log_path=args.log)
        if not cfg.dry_run:
            _require_root()
            _check_live_environment(prompter)
        run_install(
            cfg=cfg,
            state_path=args.state,
            log_path=args.log,
            force=args.force,
            stop_after=args.stop_after,
            prompter=prompter,
        )

    return _guarded(_run)


def main_post_install(argv: Optional[list[str]] = None) -> int:
    p = _parser("arch-post-install", ProvisionConfig().post_install_state, post_install_workflow().step_ids())
    args = p.parse_args(argv)
    cfg = load_config(args.config).with_overrides(dry_run=True if args.dry_run else None)
    prompter = ConsolePrompter()

    def _run() -> None:
        configure_logging(log_path=args.log)
        if not cfg.dry_run:
            _require_root()
        _check_arch_system()
        run_post_install(
            cfg=cfg,
            state_path=args.state,
            log_path=args.log,
            force=args.force,
            stop_after=args.stop_after,
            prompter=prompter,
        )

    return _guarded(_run)


if __name__ == "__main__":
    raise SystemExit(main_install())
