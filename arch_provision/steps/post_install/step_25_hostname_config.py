from __future__ import annotations

import logging
import random
from typing import Dict, Optional

from ...context import WorkflowContext
from ...hostnames import generate_hostname, hostname_error
from ...lib.system import current_hostname, set_hostname
from ...pipeline import BaseStep
from ...prompts import Prompter

logger = logging.getLogger(__name__)


class HostnameConfigStep(BaseStep):
    step_id = "hostname_config"
    provides = ("new_hostname",)

    OPTIONS = (
        "Use this hostname",
        "Generate another (reroll)",
        "Enter custom hostname",
        "Keep current hostname",
    )

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self.rng = rng or random.Random()

    def collect(self, ctx: WorkflowContext, prompter: Prompter) -> Dict[str, str]:
        logger.info("Current hostname: %s", current_hostname())
        while True:
            suggestion = generate_hostname(self.rng)
            choice = prompter.choose(f"Hostname suggestion: {suggestion}", self.OPTIONS)
            if choice == 0:
                return {"new_hostname": suggestion}
            if choice == 1:
                continue
            if choice == 3:
                return {"new_hostname": ""}

            custom = prompter.ask("Enter custom hostname").strip()
            error = hostname_error(custom)
            if error is None:
                return {"new_hostname": custom}
            logger.warning("%s", error)

    def run(self, ctx: WorkflowContext) -> None:
        hostname = ctx.require("new_hostname")
        if not hostname:
            logger.info("Keeping current hostname")
            return
        set_hostname(hostname, dry_run=ctx.dry_run)
        logger.info("Hostname set to %s", hostname)
