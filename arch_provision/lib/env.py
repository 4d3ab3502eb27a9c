from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Paths:
    target_root: str = "/mnt"
    install_state: str = "/tmp/arch-install-state"
    post_install_state: str = "/tmp/arch-post-install-state"
    # Where the install state lands inside the target, relative to its root.
    handoff_state: str = "/var/lib/arch-provision/arch-install-state"
    log_default: str = "/var/log/arch-provision.log"


PATHS = Paths()
