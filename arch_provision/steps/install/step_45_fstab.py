from __future__ import annotations

from ...context import WorkflowContext
from ...lib.storage import generate_fstab
from ...pipeline import BaseStep


class FstabStep(BaseStep):
    step_id = "fstab"

    def run(self, ctx: WorkflowContext) -> None:
        generate_fstab(ctx.config.target_root, dry_run=ctx.dry_run)
