from __future__ import annotations

import logging

from ...context import WorkflowContext
from ...lib.system import create_user, enable_wheel_sudo, set_password, target_user_exists
from ...pipeline import BaseStep, SecretParam

logger = logging.getLogger(__name__)


class AccountsStep(BaseStep):
    step_id = "accounts"
    requires = ("username",)
    secrets = (
        SecretParam("root_password", "Enter root password"),
        SecretParam("user_password", "Enter password for {username}"),
    )

    def run(self, ctx: WorkflowContext) -> None:
        root = ctx.config.target_root
        username = ctx.require("username")

        set_password(root, "root", ctx.secret("root_password"), dry_run=ctx.dry_run)
        if target_user_exists(root, username):
            logger.info("User %s already exists in target", username)
        else:
            create_user(root, username, ctx.config.user_groups, dry_run=ctx.dry_run)
        set_password(root, username, ctx.secret("user_password"), dry_run=ctx.dry_run)
        enable_wheel_sudo(root, dry_run=ctx.dry_run)
