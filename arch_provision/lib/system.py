from __future__ import annotations

import logging
import pwd
import re
from pathlib import Path

from .chroot import chroot_cmd
from .command import run_cmd

logger = logging.getLogger(__name__)


# --- target root (install phase) ---------------------------------------------


def configure_base_system(
    target_root: str,
    *,
    timezone: str,
    locale: str,
    hostname: str,
    dry_run: bool = False,
) -> None:
    """Timezone, locale, hostname and /etc/hosts inside the target."""

    root = Path(target_root)
    chroot_cmd(target_root, ["ln", "-sf", f"/usr/share/zoneinfo/{timezone}", "/etc/localtime"], dry_run=dry_run)
    chroot_cmd(target_root, ["hwclock", "--systohc"], dry_run=dry_run)

    if dry_run:
        logger.info("Would write locale/hostname/hosts under %s", target_root)
    else:
        (root / "etc/locale.gen").write_text(f"{locale} UTF-8\n", encoding="utf-8")
        (root / "etc/locale.conf").write_text(f"LANG={locale}\n", encoding="utf-8")
        (root / "etc/hostname").write_text(f"{hostname}\n", encoding="utf-8")
        (root / "etc/hosts").write_text(
            "127.0.0.1\tlocalhost\n"
            "::1\t\tlocalhost\n"
            f"127.0.1.1\t{hostname}.localdomain\t{hostname}\n",
            encoding="utf-8",
        )
    chroot_cmd(target_root, ["locale-gen"], dry_run=dry_run)


def set_password(target_root: str, account: str, password: str, *, dry_run: bool = False) -> None:
    # Via stdin: run_cmd logs argv only.
    chroot_cmd(target_root, ["chpasswd"], input_text=f"{account}:{password}\n", dry_run=dry_run)


def target_user_exists(target_root: str, username: str) -> bool:
    passwd = Path(target_root) / "etc/passwd"
    try:
        lines = passwd.read_text(encoding="utf-8").splitlines()
    except OSError:
        return False
    return any(line.split(":", 1)[0] == username for line in lines)


def create_user(target_root: str, username: str, groups: str, *, dry_run: bool = False) -> None:
    chroot_cmd(target_root, ["useradd", "-m", "-G", groups, "-s", "/bin/bash", username], dry_run=dry_run)


def enable_wheel_sudo(target_root: str, *, dry_run: bool = False) -> None:
    path = Path(target_root) / "etc/sudoers.d/10-wheel"
    if dry_run:
        logger.info("Would write %s", path)
        return
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("%wheel ALL=(ALL) ALL\n", encoding="utf-8")
    path.chmod(0o440)


def install_grub(target_root: str, *, dry_run: bool = False) -> None:
    chroot_cmd(
        target_root,
        ["grub-install", "--target=x86_64-efi", "--efi-directory=/boot/efi", "--bootloader-id=GRUB"],
        dry_run=dry_run,
    )
    chroot_cmd(target_root, ["grub-mkconfig", "-o", "/boot/grub/grub.cfg"], dry_run=dry_run)


def enable_service(service: str, *, target_root: str | None = None, dry_run: bool = False) -> None:
    if target_root:
        chroot_cmd(target_root, ["systemctl", "enable", service], dry_run=dry_run)
    else:
        run_cmd(["systemctl", "enable", service], dry_run=dry_run)


# --- running system (post-install phase) -------------------------------------


def user_exists(username: str) -> bool:
    try:
        pwd.getpwnam(username)
    except KeyError:
        return False
    return True


def current_hostname() -> str:
    try:
        return Path("/etc/hostname").read_text(encoding="utf-8").strip() or "archlinux"
    except OSError:
        return "archlinux"


def set_timezone(timezone: str, *, dry_run: bool = False) -> None:
    run_cmd(["timedatectl", "set-timezone", timezone], dry_run=dry_run)


def enable_ntp(*, dry_run: bool = False) -> None:
    run_cmd(["timedatectl", "set-ntp", "true"], dry_run=dry_run)


def set_hostname(hostname: str, *, hosts_path: str = "/etc/hosts", dry_run: bool = False) -> None:
    run_cmd(["hostnamectl", "set-hostname", hostname], dry_run=dry_run)
    if dry_run:
        return
    Path("/etc/hostname").write_text(f"{hostname}\n", encoding="utf-8")

    hosts = Path(hosts_path)
    line = f"127.0.1.1\t{hostname}.localdomain\t{hostname}"
    text = hosts.read_text(encoding="utf-8") if hosts.exists() else ""
    if re.search(r"^127\.0\.1\.1.*$", text, flags=re.MULTILINE):
        text = re.sub(r"^127\.0\.1\.1.*$", line, text, flags=re.MULTILINE)
    else:
        text = text + ("" if text.endswith("\n") or not text else "\n") + line + "\n"
    hosts.write_text(text, encoding="utf-8")
