from __future__ import annotations

from ...context import WorkflowContext
from ...lib.pacman import install_yay
from ...pipeline import BaseStep, Criticality


class YayInstallStep(BaseStep):
    step_id = "yay_install"
    requires = ("username", "INSTALL_YAY")
    criticality = Criticality.SOFT

    def applies(self, ctx: WorkflowContext) -> bool:
        return ctx.get("INSTALL_YAY") == "true"

    def run(self, ctx: WorkflowContext) -> None:
        install_yay(ctx.require("username"), dry_run=ctx.dry_run)
