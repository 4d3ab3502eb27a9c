from __future__ import annotations

from typing import Dict

from ...context import WorkflowContext
from ...desktops import Desktop
from ...pipeline import BaseStep
from ...prompts import Prompter


class DeSelectionStep(BaseStep):
    step_id = "de_selection"
    provides = ("desktop",)

    def collect(self, ctx: WorkflowContext, prompter: Prompter) -> Dict[str, str]:
        desktops = list(Desktop)
        idx = prompter.choose("Select desktop environment", [d.profile.label for d in desktops])
        return {"desktop": desktops[idx].tag}
