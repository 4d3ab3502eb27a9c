from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from pathlib import Path

from .block import partition_path
from .command import run_cmd

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PartitionPlan:
    drive: str
    efi_size: str = "512M"
    root_size: str = "40G"
    swap_size: str = "4G"
    home_size: str = "rest"  # "rest" = remaining space

    @property
    def efi_part(self) -> str:
        return partition_path(self.drive, 1)

    @property
    def root_part(self) -> str:
        return partition_path(self.drive, 2)

    @property
    def swap_part(self) -> str:
        return partition_path(self.drive, 3)

    @property
    def home_part(self) -> str:
        return partition_path(self.drive, 4)


def partition_drive(plan: PartitionPlan, *, dry_run: bool = False) -> None:
    """Create the GPT layout.

    Layout:
    - 1: EFI System (ef00)
    - 2: Linux Root (8300)
    - 3: Linux Swap (8200)
    - 4: Linux Home (8300), remaining space when home_size == "rest"
    """

    disk = f"/dev/{plan.drive}"
    logger.info("Partitioning %s (efi=%s root=%s swap=%s home=%s)", disk, plan.efi_size, plan.root_size, plan.swap_size, plan.home_size)

    run_cmd(["sgdisk", "--zap-all", disk], dry_run=dry_run)
    run_cmd(
        [
            "sgdisk",
            "--clear",
            f"--new=1:0:+{plan.efi_size}",
            "--typecode=1:ef00",
            "--change-name=1:EFI System",
            f"--new=2:0:+{plan.root_size}",
            "--typecode=2:8300",
            "--change-name=2:Linux Root",
            f"--new=3:0:+{plan.swap_size}",
            "--typecode=3:8200",
            "--change-name=3:Linux Swap",
            disk,
        ],
        dry_run=dry_run,
    )

    home_end = "0" if plan.home_size == "rest" else f"+{plan.home_size}"
    run_cmd(
        ["sgdisk", f"--new=4:0:{home_end}", "--typecode=4:8300", "--change-name=4:Linux Home", disk],
        dry_run=dry_run,
    )

    # Inform kernel
    run_cmd(["partprobe", disk], dry_run=dry_run)
    if not dry_run:
        time.sleep(2)


def format_partitions(plan: PartitionPlan, *, dry_run: bool = False) -> None:
    run_cmd(["mkfs.fat", "-F32", plan.efi_part], dry_run=dry_run)
    run_cmd(["mkfs.ext4", "-F", plan.root_part], dry_run=dry_run)
    run_cmd(["mkswap", plan.swap_part], dry_run=dry_run)
    run_cmd(["mkfs.ext4", "-F", plan.home_part], dry_run=dry_run)


def _is_mounted(path: str) -> bool:
    r = run_cmd(["findmnt", "-n", "--mountpoint", path], check=False)
    return r.returncode == 0


def mount_partitions(plan: PartitionPlan, target_root: str, *, dry_run: bool = False) -> None:
    """Mount root, EFI and home under target_root and enable swap.

    Each mountpoint is checked on its own, so a run that failed after mounting
    the root picks up the remaining mounts instead of skipping them.
    """

    mounts = [
        (plan.root_part, target_root),
        (plan.efi_part, f"{target_root}/boot/efi"),
        (plan.home_part, f"{target_root}/home"),
    ]
    for device, mountpoint in mounts:
        if not dry_run and _is_mounted(mountpoint):
            logger.info("%s already mounted", mountpoint)
            continue
        run_cmd(["mkdir", "-p", mountpoint], dry_run=dry_run)
        run_cmd(["mount", device, mountpoint], dry_run=dry_run)

    # Swap may already be active from a previous attempt.
    run_cmd(["swapon", plan.swap_part], check=False, dry_run=dry_run)


def generate_fstab(target_root: str, *, dry_run: bool = False) -> None:
    r = run_cmd(["genfstab", "-U", target_root], dry_run=dry_run)
    if dry_run:
        return
    fstab = Path(target_root) / "etc/fstab"
    with fstab.open("a", encoding="utf-8") as f:
        f.write(r.stdout)
    logger.info("Wrote %s", fstab)
