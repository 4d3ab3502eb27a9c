from __future__ import annotations

from ...context import WorkflowContext
from ...lib.system import configure_base_system
from ...pipeline import BaseStep


class SystemConfigStep(BaseStep):
    step_id = "system_config"

    def run(self, ctx: WorkflowContext) -> None:
        cfg = ctx.config
        configure_base_system(
            cfg.target_root,
            timezone=cfg.timezone,
            locale=cfg.locale,
            hostname=cfg.hostname,
            dry_run=ctx.dry_run,
        )
