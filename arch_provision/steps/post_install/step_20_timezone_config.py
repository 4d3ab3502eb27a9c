from __future__ import annotations

import logging
from typing import Dict

from ...context import WorkflowContext
from ...lib.system import set_timezone
from ...pipeline import BaseStep
from ...prompts import Prompter, ask_until_valid
from .common import timezone_error

logger = logging.getLogger(__name__)


class TimezoneConfigStep(BaseStep):
    step_id = "timezone_config"
    provides = ("timezone",)

    def collect(self, ctx: WorkflowContext, prompter: Prompter) -> Dict[str, str]:
        return {
            "timezone": ask_until_valid(
                prompter,
                "Enter your timezone, e.g. Europe/London (or press Enter to keep current)",
                timezone_error,
            )
        }

    def run(self, ctx: WorkflowContext) -> None:
        timezone = ctx.require("timezone")
        if not timezone:
            logger.info("Keeping current timezone")
            return
        set_timezone(timezone, dry_run=ctx.dry_run)
        logger.info("Timezone set to %s", timezone)
