from __future__ import annotations

import logging
from typing import Sequence

from .command import CmdResult, run_cmd

logger = logging.getLogger(__name__)


def chroot_cmd(
    target_root: str,
    argv: Sequence[str],
    *,
    input_text: str | None = None,
    capture: bool = True,
    dry_run: bool = False,
) -> CmdResult:
    """Run a command inside target root (arch-chroot handles the bind mounts)."""

    return run_cmd(["arch-chroot", target_root, *argv], input_text=input_text, capture=capture, dry_run=dry_run)


def user_cmd(
    username: str,
    argv: Sequence[str],
    *,
    cwd: str | None = None,
    check: bool = True,
    capture: bool = True,
    dry_run: bool = False,
) -> CmdResult:
    """Run a command as an unprivileged user (AUR builds refuse to run as root)."""

    return run_cmd(["sudo", "-u", username, *argv], cwd=cwd, check=check, capture=capture, dry_run=dry_run)
