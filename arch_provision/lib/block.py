from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List

from .command import run_cmd

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Disk:
    name: str
    size: str


def list_disks() -> List[Disk]:
    """Whole disks as reported by lsblk (partitions and loop devices excluded)."""

    r = run_cmd(["lsblk", "-d", "-n", "-o", "NAME,SIZE,TYPE"], check=False)
    disks: List[Disk] = []
    for line in (r.stdout or "").splitlines():
        parts = line.split()
        if len(parts) == 3 and parts[2] == "disk":
            disks.append(Disk(name=parts[0], size=parts[1]))
    return disks


def drive_exists(drive: str) -> bool:
    return Path("/dev", drive).is_block_device()


def partition_path(drive: str, n: int) -> str:
    # nvme/mmcblk devices use p suffix
    dev = f"/dev/{drive}"
    if drive.endswith(tuple("0123456789")):
        return f"{dev}p{n}"
    return f"{dev}{n}"
