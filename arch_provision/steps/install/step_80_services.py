from __future__ import annotations

from ...context import WorkflowContext
from ...lib.system import enable_service
from ...pipeline import BaseStep


class ServicesStep(BaseStep):
    step_id = "services"

    def run(self, ctx: WorkflowContext) -> None:
        enable_service("NetworkManager", target_root=ctx.config.target_root, dry_run=ctx.dry_run)
