from __future__ import annotations

from typing import Dict

from ...context import WorkflowContext
from ...pipeline import BaseStep
from ...prompts import Prompter


class AurSelectionStep(BaseStep):
    step_id = "aur_selection"
    provides = ("INSTALL_YAY",)

    def collect(self, ctx: WorkflowContext, prompter: Prompter) -> Dict[str, str]:
        wanted = prompter.confirm("Install yay AUR helper? (installation may fail on dependency issues)")
        return {"INSTALL_YAY": "true" if wanted else "false"}
