from __future__ import annotations

from ...context import WorkflowContext
from ...lib.pacman import pacman_install
from ...pipeline import BaseStep
from .common import desktop_of


class DeInstallStep(BaseStep):
    step_id = "de_install"
    requires = ("desktop",)

    def applies(self, ctx: WorkflowContext) -> bool:
        return bool(desktop_of(ctx).profile.packages)

    def run(self, ctx: WorkflowContext) -> None:
        pacman_install(desktop_of(ctx).profile.packages, dry_run=ctx.dry_run)
