from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional, Tuple

from .errors import StateIntegrityError


@dataclass(frozen=True)
class DesktopProfile:
    label: str
    packages: Tuple[str, ...]
    login_manager: Optional[str]


class Desktop(enum.Enum):
    """Selectable desktops; persisted by tag (``desktop=hyprland``)."""

    GNOME = "gnome"
    PLASMA = "plasma"
    XFCE = "xfce"
    I3 = "i3"
    OPENBOX = "openbox"
    NIRI = "niri"
    HYPRLAND = "hyprland"
    MINIMAL = "minimal"

    @property
    def tag(self) -> str:
        return self.value

    @property
    def profile(self) -> DesktopProfile:
        return PROFILES[self]

    @classmethod
    def from_tag(cls, tag: str) -> "Desktop":
        try:
            return cls(tag)
        except ValueError:
            raise StateIntegrityError(f"Unknown desktop tag in state: {tag!r}") from None


PROFILES = {
    Desktop.GNOME: DesktopProfile("GNOME (with GDM)", ("gnome", "gnome-extra"), "gdm"),
    Desktop.PLASMA: DesktopProfile("KDE Plasma (with SDDM)", ("plasma", "kde-applications", "sddm"), "sddm"),
    Desktop.XFCE: DesktopProfile(
        "XFCE (with LightDM)",
        ("xfce4", "xfce4-goodies", "lightdm", "lightdm-gtk-greeter"),
        "lightdm",
    ),
    Desktop.I3: DesktopProfile(
        "i3 (with LightDM)",
        ("i3-wm", "i3status", "i3lock", "dmenu", "xorg-server", "xorg-xinit", "lightdm", "lightdm-gtk-greeter"),
        "lightdm",
    ),
    Desktop.OPENBOX: DesktopProfile(
        "OpenBox (minimal, with LightDM)",
        (
            "openbox",
            "xorg-server",
            "xorg-xinit",
            "pcmanfm",
            "lxappearance",
            "tint2",
            "feh",
            "xterm",
            "lightdm",
            "lightdm-gtk-greeter",
        ),
        "lightdm",
    ),
    Desktop.NIRI: DesktopProfile(
        "Niri (Wayland compositor with SDDM)",
        ("niri", "foot", "wofi", "waybar", "sddm"),
        "sddm",
    ),
    Desktop.HYPRLAND: DesktopProfile(
        "Hyprland (Wayland compositor with SDDM)",
        (
            "hyprland",
            "kitty",
            "wofi",
            "waybar",
            "hyprpaper",
            "hypridle",
            "hyprlock",
            "sddm",
            "xdg-desktop-portal-hyprland",
            "polkit-kde-agent",
            "qt5-wayland",
            "qt6-wayland",
            "thunar",
            "pipewire",
            "wireplumber",
            "pipewire-pulse",
            "pipewire-alsa",
        ),
        "sddm",
    ),
    Desktop.MINIMAL: DesktopProfile("Minimal (no desktop environment)", (), None),
}
