from __future__ import annotations

import logging

from ...context import WorkflowContext
from ...lib.assets import chown_tree
from ...lib.theming import (
    apply_wallpaper,
    detect_cursor_theme,
    detect_gtk_theme,
    detect_icon_theme,
    write_default_cursor,
    write_gtk_settings,
)
from ...pipeline import BaseStep, Criticality
from .common import desktop_of, home_dir

logger = logging.getLogger(__name__)


class ThemeConfigStep(BaseStep):
    step_id = "theme_config"
    requires = ("username", "desktop")
    criticality = Criticality.SOFT

    def run(self, ctx: WorkflowContext) -> None:
        username = ctx.require("username")
        home = home_dir(username)
        gtk_theme = detect_gtk_theme(home)
        icon_theme = detect_icon_theme(home)
        cursor_theme = detect_cursor_theme(home)
        logger.info("Using GTK theme %s, icons %s, cursor %s", gtk_theme, icon_theme, cursor_theme)

        write_gtk_settings(
            home,
            gtk_theme=gtk_theme,
            icon_theme=icon_theme,
            cursor_theme=cursor_theme,
            dry_run=ctx.dry_run,
        )
        write_default_cursor(home, cursor_theme, dry_run=ctx.dry_run)
        apply_wallpaper(desktop_of(ctx).tag, home, username, ctx.get("crane_wallpaper"), dry_run=ctx.dry_run)
        for sub in (".config", ".icons"):
            chown_tree(str(home / sub), username, dry_run=ctx.dry_run)
