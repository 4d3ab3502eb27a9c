from __future__ import annotations

import logging
from typing import Sequence

from .chroot import user_cmd
from .command import run_cmd

logger = logging.getLogger(__name__)

YAY_REPO = "https://aur.archlinux.org/yay.git"


def pacstrap(target_root: str, packages: Sequence[str], *, dry_run: bool = False) -> None:
    run_cmd(["pacstrap", target_root, *packages], capture=False, dry_run=dry_run)


def pacman_install(packages: Sequence[str], *, dry_run: bool = False) -> None:
    if not packages:
        return
    run_cmd(["pacman", "-Sy", "--noconfirm", *packages], capture=False, dry_run=dry_run)


def pacman_upgrade(*, dry_run: bool = False) -> None:
    run_cmd(["pacman", "-Syu", "--noconfirm"], capture=False, dry_run=dry_run)


def install_yay(username: str, *, dry_run: bool = False) -> None:
    """Build yay from the AUR as ``username``."""

    home = f"/home/{username}"
    build_dir = f"{home}/yay"
    user_cmd(username, ["rm", "-rf", build_dir], dry_run=dry_run)
    user_cmd(username, ["git", "clone", YAY_REPO, build_dir], cwd=home, dry_run=dry_run)
    try:
        user_cmd(username, ["makepkg", "-si", "--noconfirm"], cwd=build_dir, capture=False, dry_run=dry_run)
    finally:
        user_cmd(username, ["rm", "-rf", build_dir], check=False, dry_run=dry_run)


def yay_install(username: str, packages: Sequence[str], *, dry_run: bool = False) -> None:
    if not packages:
        return
    user_cmd(username, ["yay", "-S", "--noconfirm", *packages], capture=False, dry_run=dry_run)
