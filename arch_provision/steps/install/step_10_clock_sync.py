from __future__ import annotations

from ...context import WorkflowContext
from ...lib.system import enable_ntp
from ...pipeline import BaseStep, Criticality


class ClockSyncStep(BaseStep):
    step_id = "clock_sync"
    criticality = Criticality.SOFT

    def run(self, ctx: WorkflowContext) -> None:
        enable_ntp(dry_run=ctx.dry_run)
