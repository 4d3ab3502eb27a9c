from __future__ import annotations

import logging
from typing import Dict

from ...context import WorkflowContext
from ...errors import UserAbort
from ...lib.block import list_disks
from ...pipeline import BaseStep
from ...prompts import Prompter, ask_until_valid
from .common import drive_error, normalize_drive

logger = logging.getLogger(__name__)


class DriveSelectionStep(BaseStep):
    step_id = "drive_selection"
    provides = ("DRIVE",)

    def collect(self, ctx: WorkflowContext, prompter: Prompter) -> Dict[str, str]:
        for disk in list_disks():
            logger.info("Available drive: %s (%s)", disk.name, disk.size)

        drive = normalize_drive(
            ask_until_valid(prompter, "Enter the drive to install to (e.g., sda, nvme0n1)", drive_error)
        )
        if not prompter.confirm(f"This will COMPLETELY WIPE /dev/{drive}. Are you sure you want to continue?"):
            raise UserAbort("Installation cancelled")
        return {"DRIVE": drive}

    def run(self, ctx: WorkflowContext) -> None:
        logger.info("Installing to /dev/%s", ctx.require("DRIVE"))
