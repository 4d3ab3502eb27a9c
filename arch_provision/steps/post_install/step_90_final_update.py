from __future__ import annotations

from ...context import WorkflowContext
from ...lib.pacman import pacman_upgrade
from ...pipeline import BaseStep


class FinalUpdateStep(BaseStep):
    step_id = "final_update"

    def run(self, ctx: WorkflowContext) -> None:
        pacman_upgrade(dry_run=ctx.dry_run)
