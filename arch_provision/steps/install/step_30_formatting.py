from __future__ import annotations

from ...context import WorkflowContext
from ...lib.storage import PartitionPlan, format_partitions
from ...pipeline import BaseStep


class FormattingStep(BaseStep):
    step_id = "formatting"
    requires = ("DRIVE",)

    def run(self, ctx: WorkflowContext) -> None:
        format_partitions(PartitionPlan(drive=ctx.require("DRIVE")), dry_run=ctx.dry_run)
