"""Post install: desktop environment, themes and AUR helper on the installed system."""

from __future__ import annotations

import random
from typing import Optional

from ...pipeline import Workflow
from .common import ASSETS_CHECKOUT, WALLPAPER_CHECKOUT, XDG_DIRS, desktop_of, home_dir, timezone_error
from .step_10_post_user_config import PostUserConfigStep
from .step_15_user_check import UserCheckStep
from .step_20_timezone_config import TimezoneConfigStep
from .step_25_hostname_config import HostnameConfigStep
from .step_30_de_selection import DeSelectionStep
from .step_35_aur_selection import AurSelectionStep
from .step_40_de_install import DeInstallStep
from .step_45_login_manager import LoginManagerStep
from .step_50_additional_packages import AdditionalPackagesStep
from .step_55_home_permissions import HomePermissionsStep
from .step_60_yay_install import YayInstallStep
from .step_65_librewolf_install import LibrewolfInstallStep
from .step_70_theme_install import ThemeInstallStep
from .step_75_wallpaper_download import WallpaperDownloadStep
from .step_80_theme_config import ThemeConfigStep
from .step_90_final_update import FinalUpdateStep

__all__ = [
    "PostUserConfigStep",
    "UserCheckStep",
    "TimezoneConfigStep",
    "HostnameConfigStep",
    "DeSelectionStep",
    "AurSelectionStep",
    "DeInstallStep",
    "LoginManagerStep",
    "AdditionalPackagesStep",
    "HomePermissionsStep",
    "YayInstallStep",
    "LibrewolfInstallStep",
    "ThemeInstallStep",
    "WallpaperDownloadStep",
    "ThemeConfigStep",
    "FinalUpdateStep",
    "ASSETS_CHECKOUT",
    "WALLPAPER_CHECKOUT",
    "XDG_DIRS",
    "desktop_of",
    "home_dir",
    "timezone_error",
    "post_install_workflow",
]


def post_install_workflow(rng: Optional[random.Random] = None) -> Workflow:
    return Workflow(
        name="post-install",
        steps=[
            PostUserConfigStep(),
            UserCheckStep(),
            TimezoneConfigStep(),
            HostnameConfigStep(rng),
            DeSelectionStep(),
            AurSelectionStep(),
            DeInstallStep(),
            LoginManagerStep(),
            AdditionalPackagesStep(),
            HomePermissionsStep(),
            YayInstallStep(),
            LibrewolfInstallStep(),
            ThemeInstallStep(),
            WallpaperDownloadStep(),
            ThemeConfigStep(),
            FinalUpdateStep(),
        ],
    )
