from __future__ import annotations

from ...context import WorkflowContext
from ...lib.system import install_grub
from ...pipeline import BaseStep


class BootloaderStep(BaseStep):
    step_id = "bootloader"

    def run(self, ctx: WorkflowContext) -> None:
        install_grub(ctx.config.target_root, dry_run=ctx.dry_run)
