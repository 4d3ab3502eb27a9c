from __future__ import annotations

from typing import Dict, Optional

from ...context import WorkflowContext
from ...lib.system import user_exists
from ...pipeline import BaseStep
from ...prompts import Prompter, ask_until_valid


class PostUserConfigStep(BaseStep):
    step_id = "post_user_config"
    provides = ("username",)

    def collect(self, ctx: WorkflowContext, prompter: Prompter) -> Dict[str, str]:
        def _error(answer: str) -> Optional[str]:
            if answer and user_exists(answer):
                return None
            return f"User {answer!r} does not exist!"

        return {
            "username": ask_until_valid(
                prompter,
                "Enter the username that was created during installation",
                _error,
                default=ctx.get("username"),
            )
        }
