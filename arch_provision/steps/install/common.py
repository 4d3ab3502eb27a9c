"""Validation helpers shared by the install steps."""

from __future__ import annotations

import re
from typing import Optional

from ...context import WorkflowContext
from ...lib.block import drive_exists
from ...lib.storage import PartitionPlan

SIZE_KEYS = ("EFI_SIZE", "ROOT_SIZE", "SWAP_SIZE", "HOME_SIZE")

_SIZE_RE = re.compile(r"^[0-9]+[KMGT]$")
_USERNAME_RE = re.compile(r"^[a-z_][a-z0-9_-]*$")


def normalize_drive(answer: str) -> str:
    answer = answer.strip()
    return answer[len("/dev/"):] if answer.startswith("/dev/") else answer


def drive_error(answer: str) -> Optional[str]:
    drive = normalize_drive(answer)
    if not drive:
        return "A drive is required"
    if not drive_exists(drive):
        return f"Drive /dev/{drive} does not exist!"
    return None


def size_error(answer: str, *, allow_rest: bool = False) -> Optional[str]:
    if allow_rest and answer == "rest":
        return None
    if _SIZE_RE.match(answer):
        return None
    hint = " or 'rest'" if allow_rest else ""
    return f"Invalid size {answer!r}; use a number with K/M/G/T (e.g. 512M, 40G){hint}"


def username_error(answer: str) -> Optional[str]:
    if _USERNAME_RE.match(answer) and len(answer) <= 32:
        return None
    return f"Invalid username {answer!r}; use lowercase letters, digits, '_' or '-'"


def partition_plan(ctx: WorkflowContext) -> PartitionPlan:
    return PartitionPlan(
        drive=ctx.require("DRIVE"),
        efi_size=ctx.require("EFI_SIZE"),
        root_size=ctx.require("ROOT_SIZE"),
        swap_size=ctx.require("SWAP_SIZE"),
        home_size=ctx.require("HOME_SIZE"),
    )
