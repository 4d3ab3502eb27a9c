"""Paths and helpers shared by the post-install steps."""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import Optional

from ...context import WorkflowContext
from ...desktops import Desktop

ASSETS_CHECKOUT = "/tmp/arch-install-assets"
WALLPAPER_CHECKOUT = "/tmp/arch-install-wallpaper"
XDG_DIRS = ("Desktop", "Documents", "Downloads", "Pictures", "Videos", "Music")


def home_dir(username: str) -> Path:
    return Path("/home") / username


def desktop_of(ctx: WorkflowContext) -> Desktop:
    return Desktop.from_tag(ctx.require("desktop"))


def timezone_error(answer: str) -> Optional[str]:
    if not answer:
        return None
    if ".." in answer or not Path("/usr/share/zoneinfo", answer).is_file():
        return f"Unknown timezone {answer!r} (see 'timedatectl list-timezones')"
    return None


def remove_checkout(path: str, dry_run: bool) -> None:
    if not dry_run:
        shutil.rmtree(path, ignore_errors=True)
