"""Base install: live ISO -> partitioned, bootable system under the target root."""

from __future__ import annotations

from ...pipeline import Workflow
from .common import SIZE_KEYS, drive_error, partition_plan, size_error, username_error
from .step_10_clock_sync import ClockSyncStep
from .step_15_drive_selection import DriveSelectionStep
from .step_20_partition_sizes import PartitionSizesStep
from .step_25_partitioning import PartitioningStep
from .step_30_formatting import FormattingStep
from .step_35_mounting import MountingStep
from .step_40_base_packages import BasePackagesStep
from .step_45_fstab import FstabStep
from .step_50_system_config import SystemConfigStep
from .step_55_user_selection import UserSelectionStep
from .step_60_accounts import AccountsStep
from .step_70_bootloader import BootloaderStep
from .step_80_services import ServicesStep

__all__ = [
    "ClockSyncStep",
    "DriveSelectionStep",
    "PartitionSizesStep",
    "PartitioningStep",
    "FormattingStep",
    "MountingStep",
    "BasePackagesStep",
    "FstabStep",
    "SystemConfigStep",
    "UserSelectionStep",
    "AccountsStep",
    "BootloaderStep",
    "ServicesStep",
    "SIZE_KEYS",
    "drive_error",
    "partition_plan",
    "size_error",
    "username_error",
    "install_workflow",
]


def install_workflow() -> Workflow:
    return Workflow(
        name="install",
        steps=[
            ClockSyncStep(),
            DriveSelectionStep(),
            PartitionSizesStep(),
            PartitioningStep(),
            FormattingStep(),
            MountingStep(),
            BasePackagesStep(),
            FstabStep(),
            SystemConfigStep(),
            UserSelectionStep(),
            AccountsStep(),
            BootloaderStep(),
            ServicesStep(),
        ],
    )
