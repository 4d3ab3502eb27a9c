from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Optional

from .chroot import user_cmd
from .command import run_cmd

logger = logging.getLogger(__name__)


def copy_tree(src: str, dst: str, *, dry_run: bool = False) -> None:
    s = Path(src)
    d = Path(dst)
    if not s.exists():
        raise FileNotFoundError(src)

    if dry_run:
        logger.info("Would copy tree %s -> %s", str(s), str(d))
        return

    d.mkdir(parents=True, exist_ok=True)
    for item in s.rglob("*"):
        rel = item.relative_to(s)
        out = d / rel
        if item.is_dir():
            out.mkdir(parents=True, exist_ok=True)
        else:
            out.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(item, out)


def clone_repo(url: str, dest: str, *, username: str, dry_run: bool = False) -> None:
    if not dry_run and Path(dest).exists():
        shutil.rmtree(dest)
    user_cmd(username, ["git", "clone", "--depth", "1", url, dest], dry_run=dry_run)


def extract_archive(archive: Path, dest: Path, *, dry_run: bool = False) -> bool:
    """Unpack zip/tar archives; False when the archive is not present."""

    if not archive.exists():
        logger.warning("Asset %s not found", archive.name)
        return False
    if dry_run:
        logger.info("Would unpack %s -> %s", archive, dest)
        return True
    dest.mkdir(parents=True, exist_ok=True)
    shutil.unpack_archive(str(archive), str(dest))
    return True


def chown_tree(path: str, username: str, *, dry_run: bool = False) -> None:
    run_cmd(["chown", "-R", f"{username}:{username}", path], dry_run=dry_run)


def install_theme_assets(repo_dir: Path, home: Path, *, dry_run: bool = False) -> list[str]:
    """Place GTK themes, cursors, icons and colour schemes from an assets checkout.

    Returns the names of the asset groups that were installed.
    """

    share = home / ".local/share"
    themes_dir = share / "themes"
    icons_dir = share / "icons"
    schemes_dir = share / "color-schemes"
    installed: list[str] = []

    staging = repo_dir / ".unpacked"
    if extract_archive(repo_dir / "Catppuccin-gtk-main.zip", staging, dry_run=dry_run):
        src = staging / "Catppuccin-gtk-main/themes"
        if dry_run or src.is_dir():
            copy_tree(str(src), str(themes_dir), dry_run=dry_run)
            installed.append("gtk")

    if extract_archive(repo_dir / "Vimix-cursors-master.zip", staging, dry_run=dry_run):
        src = staging / "Vimix-cursors-master/dist"
        if dry_run or src.is_dir():
            copy_tree(str(src), str(icons_dir), dry_run=dry_run)
            installed.append("cursors")

    if extract_archive(repo_dir / "Azure-Glassy-Dark-icons.tar.gz", icons_dir, dry_run=dry_run):
        installed.append("icons")

    colors = repo_dir / "colors"
    if colors.is_dir():
        copy_tree(str(colors), str(schemes_dir), dry_run=dry_run)
        installed.append("color-schemes")
    else:
        logger.warning("Colour schemes not found in %s", repo_dir)

    return installed


def fetch_wallpaper(repo_dir: Path, wallpaper_dir: Path, *, name: str = "crane.png", dry_run: bool = False) -> Optional[str]:
    src = repo_dir / name
    dest = wallpaper_dir / name
    if dry_run:
        logger.info("Would copy %s -> %s", src, dest)
        return str(dest)
    if not src.is_file():
        return None
    wallpaper_dir.mkdir(parents=True, exist_ok=True)
    shutil.copy2(src, dest)
    return str(dest)
