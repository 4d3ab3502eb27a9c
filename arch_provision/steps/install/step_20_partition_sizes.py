from __future__ import annotations

import logging
from typing import Dict

from ...context import WorkflowContext
from ...pipeline import BaseStep
from ...prompts import Prompter, ask_until_valid
from .common import SIZE_KEYS, size_error

logger = logging.getLogger(__name__)


class PartitionSizesStep(BaseStep):
    step_id = "partition_sizes"
    provides = SIZE_KEYS

    def collect(self, ctx: WorkflowContext, prompter: Prompter) -> Dict[str, str]:
        logger.info("Recommended sizes: EFI 512M, root 30G-50G, swap 2G-8G, home = rest")
        return {
            "EFI_SIZE": ask_until_valid(prompter, "EFI partition size (e.g., 512M)", size_error),
            "ROOT_SIZE": ask_until_valid(prompter, "Root partition size (e.g., 40G)", size_error),
            "SWAP_SIZE": ask_until_valid(prompter, "Swap partition size (e.g., 4G)", size_error),
            "HOME_SIZE": ask_until_valid(
                prompter,
                "Home partition size ('rest' for remaining space, or e.g. 100G)",
                lambda a: size_error(a, allow_rest=True),
                default="rest",
            ),
        }
