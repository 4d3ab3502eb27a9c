from __future__ import annotations

from ...context import WorkflowContext
from ...lib.pacman import pacstrap
from ...pipeline import BaseStep


class BasePackagesStep(BaseStep):
    step_id = "base_packages"

    def run(self, ctx: WorkflowContext) -> None:
        pacstrap(ctx.config.target_root, ctx.config.base_packages, dry_run=ctx.dry_run)
