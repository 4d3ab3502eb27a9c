from __future__ import annotations

from typing import Sequence


class ProvisionError(RuntimeError):
    """Base class for provisioning failures."""


class CommandError(ProvisionError):
    def __init__(self, argv: Sequence[str], returncode: int, stderr: str = "") -> None:
        self.argv = list(argv)
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(f"Command failed ({returncode}): {' '.join(self.argv)}\n{stderr}".rstrip())


class StateIntegrityError(ProvisionError):
    """Persisted state contradicts itself (e.g. step marked complete, value missing)."""


class UserAbort(ProvisionError):
    """The operator declined to continue."""


class WorkflowAborted(ProvisionError):
    def __init__(self, step_id: str, reason: str) -> None:
        self.step_id = step_id
        super().__init__(f"Step {step_id} failed: {reason}")
