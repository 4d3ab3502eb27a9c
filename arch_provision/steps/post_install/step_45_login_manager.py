from __future__ import annotations

from ...context import WorkflowContext
from ...lib.system import enable_service
from ...pipeline import BaseStep
from .common import desktop_of


class LoginManagerStep(BaseStep):
    step_id = "login_manager"
    requires = ("desktop",)

    def applies(self, ctx: WorkflowContext) -> bool:
        return desktop_of(ctx).profile.login_manager is not None

    def run(self, ctx: WorkflowContext) -> None:
        service = desktop_of(ctx).profile.login_manager
        enable_service(str(service), dry_run=ctx.dry_run)
