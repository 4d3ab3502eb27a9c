from __future__ import annotations

from ...context import WorkflowContext
from ...lib.pacman import pacman_install
from ...pipeline import BaseStep


class AdditionalPackagesStep(BaseStep):
    step_id = "additional_packages"

    def run(self, ctx: WorkflowContext) -> None:
        pacman_install(ctx.config.additional_packages, dry_run=ctx.dry_run)
