from __future__ import annotations

import logging

from ...context import WorkflowContext
from ...errors import ProvisionError
from ...lib.system import user_exists
from ...pipeline import BaseStep

logger = logging.getLogger(__name__)


class UserCheckStep(BaseStep):
    step_id = "user_check"
    requires = ("username",)
    # The account may have been removed since the last run.
    tracked = False

    def run(self, ctx: WorkflowContext) -> None:
        username = ctx.require("username")
        if not user_exists(username):
            raise ProvisionError(f"User {username} does not exist!")
        logger.info("Configuring for user %s", username)
