from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from .lib.env import PATHS

DEFAULT_BASE_PACKAGES = [
    "base",
    "linux",
    "linux-firmware",
    "base-devel",
    "grub",
    "efibootmgr",
    "networkmanager",
    "nano",
]
DEFAULT_ADDITIONAL_PACKAGES = ["git", "wget", "curl", "firefox"]
DEFAULT_ASSETS_REPO = "https://github.com/Arialo/Arch-install-script-2.git"
DEFAULT_FALLBACK_THEME_PACKAGES = ["catppuccin-gtk-theme-mocha", "vimix-cursor-theme", "papirus-icon-theme"]


def _str_list(value: Any, default: List[str]) -> List[str]:
    if value is None:
        return list(default)
    if isinstance(value, str):
        return value.split()
    return [str(v).strip() for v in value if str(v).strip()]


@dataclass(frozen=True)
class ProvisionConfig:
    raw: Dict[str, Any] = field(default_factory=dict)

    def _section(self, name: str) -> Dict[str, Any]:
        return self.raw.get(name) or {}

    @property
    def dry_run(self) -> bool:
        return bool(self.raw.get("dry_run", False))

    @property
    def target_root(self) -> str:
        return str(self._section("paths").get("target_root") or PATHS.target_root)

    @property
    def install_state(self) -> str:
        return str(self._section("paths").get("install_state") or PATHS.install_state)

    @property
    def post_install_state(self) -> str:
        return str(self._section("paths").get("post_install_state") or PATHS.post_install_state)

    @property
    def handoff_state(self) -> str:
        """Absolute path of the handed-off install state, as seen from the installed system."""
        return str(self._section("paths").get("handoff_state") or PATHS.handoff_state)

    @property
    def base_packages(self) -> List[str]:
        return _str_list(self._section("packages").get("base"), DEFAULT_BASE_PACKAGES)

    @property
    def additional_packages(self) -> List[str]:
        return _str_list(self._section("packages").get("additional"), DEFAULT_ADDITIONAL_PACKAGES)

    @property
    def timezone(self) -> str:
        return str(self._section("system").get("timezone") or "UTC")

    @property
    def locale(self) -> str:
        return str(self._section("system").get("locale") or "en_US.UTF-8")

    @property
    def hostname(self) -> str:
        return str(self._section("system").get("hostname") or "archlinux")

    @property
    def user_groups(self) -> str:
        return str(self._section("system").get("user_groups") or "wheel,audio,video,optical,storage")

    @property
    def assets_repo_url(self) -> str:
        return str(self._section("assets").get("repo_url") or DEFAULT_ASSETS_REPO)

    @property
    def fallback_theme_packages(self) -> List[str]:
        return _str_list(self._section("assets").get("fallback_theme_packages"), DEFAULT_FALLBACK_THEME_PACKAGES)

    def with_overrides(self, **top_level: Any) -> "ProvisionConfig":
        raw = dict(self.raw)
        raw.update({k: v for k, v in top_level.items() if v is not None})
        return ProvisionConfig(raw=raw)


def load_config(path: Optional[str]) -> ProvisionConfig:
    """Load YAML configuration; a missing path means defaults."""

    if not path:
        return ProvisionConfig()

    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(path)

    if p.suffix.lower() not in {".yaml", ".yml"}:
        raise ValueError("provisioning config must be YAML")

    try:
        import yaml  # type: ignore
    except Exception as e:
        raise RuntimeError("PyYAML is required to read the provisioning config") from e

    raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"{path} must contain a mapping/object")

    return ProvisionConfig(raw=raw)
