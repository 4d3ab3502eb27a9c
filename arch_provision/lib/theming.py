from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Sequence

from .chroot import user_cmd

logger = logging.getLogger(__name__)

DEFAULT_GTK_THEME = "Catppuccin-Mocha-Standard-Sapphire-Dark"
DEFAULT_ICON_THEME = "Tela-dark"
FALLBACK_ICON_THEME = "Papirus-Dark"
DEFAULT_CURSOR_THEME = "Vimix-white-cursors"
FALLBACK_CURSOR_THEME = "Vimix-cursors"
SYSTEM_ICONS = Path("/usr/share/icons")


def detect_gtk_theme(home: Path, default: str = DEFAULT_GTK_THEME) -> str:
    """Prefer a Catppuccin Mocha theme actually present under ~/.local/share/themes."""

    themes = home / ".local/share/themes"
    if themes.is_dir():
        for candidate in sorted(themes.iterdir()):
            if candidate.is_dir() and "Catppuccin" in candidate.name and "Mocha" in candidate.name:
                return candidate.name
    return default


def _first_installed(candidates: Sequence[str], roots: Sequence[Path], default: str) -> str:
    for name in candidates:
        if any((root / name).is_dir() for root in roots):
            return name
    return default


def detect_icon_theme(home: Path, system_icons: Optional[Path] = None) -> str:
    """Tela from the assets repo, else Papirus (the yay fallback installs it system-wide)."""

    return _first_installed(
        (DEFAULT_ICON_THEME, FALLBACK_ICON_THEME),
        (home / ".local/share/icons", system_icons or SYSTEM_ICONS),
        DEFAULT_ICON_THEME,
    )


def detect_cursor_theme(home: Path, system_icons: Optional[Path] = None) -> str:
    return _first_installed(
        (DEFAULT_CURSOR_THEME, FALLBACK_CURSOR_THEME),
        (home / ".local/share/icons", system_icons or SYSTEM_ICONS),
        DEFAULT_CURSOR_THEME,
    )


def write_gtk_settings(home: Path, *, gtk_theme: str, icon_theme: str, cursor_theme: str, dry_run: bool = False) -> None:
    body = (
        "[Settings]\n"
        f"gtk-theme-name={gtk_theme}\n"
        f"gtk-icon-theme-name={icon_theme}\n"
        f"gtk-cursor-theme-name={cursor_theme}\n"
        "gtk-application-prefer-dark-theme=1\n"
    )
    for sub in ("gtk-3.0", "gtk-4.0"):
        path = home / ".config" / sub / "settings.ini"
        if dry_run:
            logger.info("Would write %s", path)
            continue
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(body, encoding="utf-8")


def write_default_cursor(home: Path, cursor_theme: str, *, dry_run: bool = False) -> None:
    path = home / ".icons/default/index.theme"
    if dry_run:
        logger.info("Would write %s", path)
        return
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        "[Icon Theme]\nName=Default\nComment=Default Cursor Theme\n" f"Inherits={cursor_theme}\n",
        encoding="utf-8",
    )


def apply_wallpaper(desktop_tag: str, home: Path, username: str, wallpaper: Optional[str], *, dry_run: bool = False) -> bool:
    """Point the chosen desktop at ``wallpaper``. False when nothing was applied."""

    if not wallpaper or not (dry_run or Path(wallpaper).is_file()):
        return False

    if desktop_tag == "gnome":
        for key in ("picture-uri", "picture-uri-dark"):
            user_cmd(
                username,
                ["gsettings", "set", "org.gnome.desktop.background", key, f"file://{wallpaper}"],
                check=False,
                dry_run=dry_run,
            )
        return True

    if desktop_tag == "xfce":
        path = home / ".config/autostart/wallpaper.desktop"
        body = (
            "[Desktop Entry]\nType=Application\nName=Set Wallpaper\n"
            f'Exec=feh --bg-scale "{wallpaper}"\n'
            "Hidden=false\nNoDisplay=false\nX-GNOME-Autostart-enabled=true\n"
        )
    elif desktop_tag == "hyprland":
        path = home / ".config/hypr/hyprpaper.conf"
        body = f"preload = {wallpaper}\nwallpaper = ,{wallpaper}\nsplash = false\nipc = on\n"
    else:
        logger.info("No wallpaper integration for desktop %s", desktop_tag)
        return False

    if dry_run:
        logger.info("Would write %s", path)
        return True
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(body, encoding="utf-8")

    if desktop_tag == "hyprland":
        conf = home / ".config/hypr/hyprland.conf"
        existing = conf.read_text(encoding="utf-8") if conf.exists() else ""
        if "exec-once = hyprpaper" not in existing:
            with conf.open("a", encoding="utf-8") as f:
                f.write("exec-once = hyprpaper\n")
    return True
