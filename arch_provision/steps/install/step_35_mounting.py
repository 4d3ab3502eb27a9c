from __future__ import annotations

from ...context import WorkflowContext
from ...lib.storage import PartitionPlan, mount_partitions
from ...pipeline import BaseStep


class MountingStep(BaseStep):
    step_id = "mounting"
    requires = ("DRIVE",)
    # Mounts do not survive a reboot of the live ISO; redo every run.
    tracked = False

    def run(self, ctx: WorkflowContext) -> None:
        mount_partitions(PartitionPlan(drive=ctx.require("DRIVE")), ctx.config.target_root, dry_run=ctx.dry_run)
