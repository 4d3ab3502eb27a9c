from __future__ import annotations

import logging
from pathlib import Path

from ...context import WorkflowContext
from ...errors import CommandError, ProvisionError
from ...lib.assets import chown_tree, clone_repo, install_theme_assets
from ...lib.command import command_exists
from ...lib.pacman import yay_install
from ...pipeline import BaseStep, Criticality
from .common import ASSETS_CHECKOUT, home_dir, remove_checkout

logger = logging.getLogger(__name__)


class ThemeInstallStep(BaseStep):
    step_id = "theme_install"
    requires = ("username",)
    criticality = Criticality.SOFT

    def run(self, ctx: WorkflowContext) -> None:
        username = ctx.require("username")
        home = home_dir(username)
        try:
            clone_repo(ctx.config.assets_repo_url, ASSETS_CHECKOUT, username=username, dry_run=ctx.dry_run)
        except CommandError as e:
            if not command_exists("yay"):
                raise ProvisionError("Assets repository unavailable and yay missing; themes not installed") from e
            logger.warning("Assets repository unavailable (%s); falling back to yay", e)
            yay_install(username, ctx.config.fallback_theme_packages, dry_run=ctx.dry_run)
            return

        try:
            installed = install_theme_assets(Path(ASSETS_CHECKOUT), home, dry_run=ctx.dry_run)
            chown_tree(str(home / ".local"), username, dry_run=ctx.dry_run)
        finally:
            remove_checkout(ASSETS_CHECKOUT, ctx.dry_run)
        logger.info("Theme assets installed: %s", ", ".join(installed) or "none")
