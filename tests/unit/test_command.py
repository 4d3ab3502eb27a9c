from __future__ import annotations

import logging
from types import SimpleNamespace

import pytest

from arch_provision.errors import CommandError
from arch_provision.lib import command
from arch_provision.lib.chroot import chroot_cmd, user_cmd
from arch_provision.lib.command import run_cmd


def test_dry_run_logs_without_executing(monkeypatch, caplog) -> None:
    def explode(*args, **kwargs):
        raise AssertionError("executed during dry run")

    monkeypatch.setattr(command.subprocess, "run", explode)
    caplog.set_level(logging.INFO)

    r = run_cmd(["sgdisk", "--zap-all", "/dev/sda"], dry_run=True)

    assert r.returncode == 0
    assert "CMD sgdisk --zap-all /dev/sda" in caplog.text


def test_failure_raises_command_error(monkeypatch) -> None:
    monkeypatch.setattr(
        command.subprocess,
        "run",
        lambda argv, **kw: SimpleNamespace(returncode=3, stdout="", stderr="no such device"),
    )

    with pytest.raises(CommandError) as exc:
        run_cmd(["mkfs.ext4", "/dev/nope"])

    assert exc.value.returncode == 3
    assert exc.value.argv == ["mkfs.ext4", "/dev/nope"]
    assert "no such device" in str(exc.value)


def test_unchecked_failure_returns_result(monkeypatch) -> None:
    monkeypatch.setattr(
        command.subprocess,
        "run",
        lambda argv, **kw: SimpleNamespace(returncode=1, stdout=None, stderr=None),
    )

    r = run_cmd(["findmnt", "-n", "/mnt"], check=False)

    assert r.returncode == 1
    assert r.stdout == ""


def test_stdin_is_passed_but_never_logged(monkeypatch, caplog) -> None:
    seen = {}

    def fake_run(argv, **kw):
        seen.update(kw)
        return SimpleNamespace(returncode=0, stdout="", stderr="")

    monkeypatch.setattr(command.subprocess, "run", fake_run)
    caplog.set_level(logging.DEBUG)

    chroot_cmd("/mnt", ["chpasswd"], input_text="root:s3cret\n")

    assert seen["input"] == "root:s3cret\n"
    assert "s3cret" not in caplog.text
    assert "CMD arch-chroot /mnt chpasswd" in caplog.text


def test_user_cmd_wraps_with_sudo(monkeypatch) -> None:
    seen = []
    monkeypatch.setattr(
        command.subprocess,
        "run",
        lambda argv, **kw: seen.append(argv) or SimpleNamespace(returncode=0, stdout="", stderr=""),
    )

    user_cmd("alice", ["yay", "-S", "librewolf-bin"])

    assert seen == [["sudo", "-u", "alice", "yay", "-S", "librewolf-bin"]]


def test_real_process_roundtrip() -> None:
    r = run_cmd(["sh", "-c", "echo hello"])
    assert r.stdout.strip() == "hello"
    with pytest.raises(CommandError):
        run_cmd(["sh", "-c", "exit 4"])
