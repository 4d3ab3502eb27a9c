from __future__ import annotations

from typing import Dict

from ...context import WorkflowContext
from ...pipeline import BaseStep
from ...prompts import Prompter, ask_until_valid
from .common import username_error


class UserSelectionStep(BaseStep):
    step_id = "user_selection"
    provides = ("username",)

    def collect(self, ctx: WorkflowContext, prompter: Prompter) -> Dict[str, str]:
        return {
            "username": ask_until_valid(
                prompter, "Enter username for main user", username_error, default=ctx.get("username")
            )
        }
