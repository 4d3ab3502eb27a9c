"""Carry install state across the chroot boundary.

The install workflow runs on the live ISO against a filesystem mounted at the
target root; post-install runs later from inside that filesystem. Copying the
state file into the target lets post-install reuse facts (username, drive)
already established. Everything here is best-effort: a failed copy only costs
re-prompting.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import List

from .config import ProvisionConfig

logger = logging.getLogger(__name__)


def target_path(target_root: str, absolute: str) -> Path:
    return Path(target_root) / absolute.lstrip("/")


def handoff_state(source: str, target_root: str, dest: str, *, dry_run: bool = False) -> bool:
    """Copy ``source`` to ``dest`` (an absolute path inside target_root)."""

    out = target_path(target_root, dest)
    if dry_run:
        logger.info("Would hand off state %s -> %s", source, out)
        return True
    try:
        out.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(source, out)
    except OSError as e:
        logger.warning("State handoff %s -> %s failed (%s); post-install will start fresh", source, out, e)
        return False
    logger.info("Handed off state %s -> %s", source, out)
    return True


def inherit_candidates(cfg: ProvisionConfig) -> List[str]:
    """Where post-install looks for an install store, in priority order."""

    # Same boot (or inside arch-chroot) first, then the copy made by the handoff.
    return [cfg.install_state, cfg.handoff_state]
