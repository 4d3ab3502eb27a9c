from __future__ import annotations

from ...context import WorkflowContext
from ...lib.storage import partition_drive
from ...pipeline import BaseStep
from .common import SIZE_KEYS, partition_plan


class PartitioningStep(BaseStep):
    step_id = "partitioning"
    requires = ("DRIVE", *SIZE_KEYS)

    def run(self, ctx: WorkflowContext) -> None:
        partition_drive(partition_plan(ctx), dry_run=ctx.dry_run)
