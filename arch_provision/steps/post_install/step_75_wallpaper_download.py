from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Optional

from ...context import WorkflowContext
from ...lib.assets import chown_tree, clone_repo, fetch_wallpaper
from ...pipeline import BaseStep, Criticality
from .common import WALLPAPER_CHECKOUT, home_dir, remove_checkout

logger = logging.getLogger(__name__)


class WallpaperDownloadStep(BaseStep):
    step_id = "wallpaper_download"
    requires = ("username",)
    criticality = Criticality.SOFT

    def run(self, ctx: WorkflowContext) -> Optional[Dict[str, str]]:
        username = ctx.require("username")
        wallpaper_dir = home_dir(username) / ".local/share/wallpapers"
        clone_repo(ctx.config.assets_repo_url, WALLPAPER_CHECKOUT, username=username, dry_run=ctx.dry_run)
        try:
            wallpaper = fetch_wallpaper(Path(WALLPAPER_CHECKOUT), wallpaper_dir, dry_run=ctx.dry_run)
        finally:
            remove_checkout(WALLPAPER_CHECKOUT, ctx.dry_run)

        if wallpaper is None:
            logger.warning("Wallpaper not found in assets repository")
            return None
        chown_tree(str(wallpaper_dir), username, dry_run=ctx.dry_run)
        return {"crane_wallpaper": wallpaper}
