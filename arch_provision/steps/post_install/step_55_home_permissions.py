from __future__ import annotations

from ...context import WorkflowContext
from ...lib.assets import chown_tree
from ...lib.chroot import user_cmd
from ...lib.command import run_cmd
from ...pipeline import BaseStep, Criticality
from .common import XDG_DIRS, home_dir


class HomePermissionsStep(BaseStep):
    step_id = "home_permissions"
    requires = ("username",)
    criticality = Criticality.SOFT

    def run(self, ctx: WorkflowContext) -> None:
        username = ctx.require("username")
        home = home_dir(username)
        chown_tree(str(home), username, dry_run=ctx.dry_run)
        run_cmd(["chmod", "755", str(home)], dry_run=ctx.dry_run)
        dirs = [str(home / d) for d in (*XDG_DIRS, ".config", ".local/share", ".cache")]
        user_cmd(username, ["mkdir", "-p", *dirs], dry_run=ctx.dry_run)
