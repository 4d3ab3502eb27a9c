from __future__ import annotations

from ...context import WorkflowContext
from ...lib.command import command_exists
from ...lib.pacman import yay_install
from ...pipeline import BaseStep, Criticality


class LibrewolfInstallStep(BaseStep):
    step_id = "librewolf_install"
    requires = ("username",)
    criticality = Criticality.SOFT

    def applies(self, ctx: WorkflowContext) -> bool:
        return command_exists("yay")

    def run(self, ctx: WorkflowContext) -> None:
        yay_install(ctx.require("username"), ["librewolf-bin"], dry_run=ctx.dry_run)
