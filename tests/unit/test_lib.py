"""Host-side helpers with the command runner replaced."""

from __future__ import annotations

import zipfile
from pathlib import Path

import pytest

from arch_provision.lib import assets, storage, system, theming
from arch_provision.lib.block import partition_path
from arch_provision.lib.command import CmdResult
from arch_provision.lib.storage import PartitionPlan


def _ok(stdout: str = "", returncode: int = 0):
    def _run(argv, **kw):
        return CmdResult(argv=list(argv), returncode=returncode, stdout=stdout, stderr="")

    return _run


@pytest.mark.parametrize(
    "drive,expected",
    [("sda", "/dev/sda2"), ("vdb", "/dev/vdb2"), ("nvme0n1", "/dev/nvme0n1p2"), ("mmcblk0", "/dev/mmcblk0p2")],
)
def test_partition_path(drive: str, expected: str) -> None:
    assert partition_path(drive, 2) == expected


def test_partition_drive_layout(monkeypatch, recorder) -> None:
    monkeypatch.setattr(storage, "run_cmd", recorder.fake("run_cmd"))

    storage.partition_drive(PartitionPlan("sda", home_size="100G"), dry_run=True)

    argvs = [args[0] for _, args, _ in recorder.calls]
    assert argvs[0] == ["sgdisk", "--zap-all", "/dev/sda"]
    assert "--new=1:0:+512M" in argvs[1] and "--new=3:0:+4G" in argvs[1]
    assert argvs[2][1] == "--new=4:0:+100G"
    assert argvs[3] == ["partprobe", "/dev/sda"]


def test_home_rest_uses_remaining_space(monkeypatch, recorder) -> None:
    monkeypatch.setattr(storage, "run_cmd", recorder.fake("run_cmd"))

    storage.partition_drive(PartitionPlan("nvme0n1"), dry_run=True)

    assert recorder.calls[2][1][0][1] == "--new=4:0:0"


def _fake_mounts(calls, mounted):
    def fake(argv, **kw):
        argv = list(argv)
        calls.append(argv)
        rc = 1 if argv[0] == "findmnt" and argv[-1] not in mounted else 0
        return CmdResult(argv=argv, returncode=rc, stdout="", stderr="")

    return fake


def test_fully_mounted_target_only_reenables_swap(monkeypatch) -> None:
    calls = []
    monkeypatch.setattr(storage, "run_cmd", _fake_mounts(calls, {"/mnt", "/mnt/boot/efi", "/mnt/home"}))

    storage.mount_partitions(PartitionPlan("sda"), "/mnt")

    assert [c[0] for c in calls] == ["findmnt", "findmnt", "findmnt", "swapon"]


def test_partial_mount_from_failed_run_is_completed(monkeypatch) -> None:
    calls = []
    monkeypatch.setattr(storage, "run_cmd", _fake_mounts(calls, {"/mnt"}))

    storage.mount_partitions(PartitionPlan("sda"), "/mnt")

    mounts = [c for c in calls if c[0] == "mount"]
    assert mounts == [["mount", "/dev/sda1", "/mnt/boot/efi"], ["mount", "/dev/sda4", "/mnt/home"]]
    assert calls[-1] == ["swapon", "/dev/sda3"]


def test_mount_order(monkeypatch) -> None:
    calls = []
    monkeypatch.setattr(storage, "run_cmd", _fake_mounts(calls, set()))

    storage.mount_partitions(PartitionPlan("sda"), "/mnt")

    assert [c[0] for c in calls] == ["findmnt", "mkdir", "mount"] * 3 + ["swapon"]
    assert calls[0] == ["findmnt", "-n", "--mountpoint", "/mnt"]
    assert calls[2] == ["mount", "/dev/sda2", "/mnt"]


def test_generate_fstab_appends(tmp_path: Path, monkeypatch) -> None:
    (tmp_path / "etc").mkdir()
    fstab = tmp_path / "etc/fstab"
    fstab.write_text("# static\n", encoding="utf-8")
    monkeypatch.setattr(storage, "run_cmd", _ok("UUID=abc / ext4 rw 0 1\n"))

    storage.generate_fstab(str(tmp_path))

    assert fstab.read_text(encoding="utf-8") == "# static\nUUID=abc / ext4 rw 0 1\n"


def test_configure_base_system_writes_target_files(tmp_path: Path, monkeypatch, recorder) -> None:
    (tmp_path / "etc").mkdir()
    monkeypatch.setattr(system, "chroot_cmd", recorder.fake("chroot_cmd"))

    system.configure_base_system(str(tmp_path), timezone="Europe/London", locale="en_GB.UTF-8", hostname="box")

    assert (tmp_path / "etc/hostname").read_text(encoding="utf-8") == "box\n"
    assert (tmp_path / "etc/locale.conf").read_text(encoding="utf-8") == "LANG=en_GB.UTF-8\n"
    assert "127.0.1.1\tbox.localdomain\tbox" in (tmp_path / "etc/hosts").read_text(encoding="utf-8")
    argvs = [args[1] for _, args, _ in recorder.calls]
    assert argvs[0] == ["ln", "-sf", "/usr/share/zoneinfo/Europe/London", "/etc/localtime"]
    assert argvs[-1] == ["locale-gen"]


def test_set_password_goes_through_stdin(monkeypatch, recorder) -> None:
    monkeypatch.setattr(system, "chroot_cmd", recorder.fake("chroot_cmd"))

    system.set_password("/mnt", "alice", "pw")

    _, args, kwargs = recorder.calls[0]
    assert args == ("/mnt", ["chpasswd"])
    assert kwargs["input_text"] == "alice:pw\n"


def test_target_user_exists(tmp_path: Path) -> None:
    assert system.target_user_exists(str(tmp_path), "alice") is False
    (tmp_path / "etc").mkdir()
    (tmp_path / "etc/passwd").write_text("root:x:0:0::/root:/bin/bash\nalice:x:1000:1000::/home/alice:/bin/bash\n")

    assert system.target_user_exists(str(tmp_path), "alice") is True
    assert system.target_user_exists(str(tmp_path), "ali") is False


def test_wheel_sudo_drop_in(tmp_path: Path) -> None:
    system.enable_wheel_sudo(str(tmp_path))

    path = tmp_path / "etc/sudoers.d/10-wheel"
    assert path.read_text(encoding="utf-8") == "%wheel ALL=(ALL) ALL\n"
    assert path.stat().st_mode & 0o777 == 0o440


def test_install_theme_assets(tmp_path: Path) -> None:
    repo = tmp_path / "repo"
    repo.mkdir()
    with zipfile.ZipFile(repo / "Catppuccin-gtk-main.zip", "w") as z:
        z.writestr("Catppuccin-gtk-main/themes/Catppuccin-Mocha-Standard-Blue-Dark/index.theme", "[Desktop Entry]\n")
    (repo / "colors").mkdir()
    (repo / "colors/Mocha.colors").write_text("[General]\n")
    home = tmp_path / "home"

    installed = assets.install_theme_assets(repo, home)

    assert installed == ["gtk", "color-schemes"]
    theme = home / ".local/share/themes/Catppuccin-Mocha-Standard-Blue-Dark"
    assert (theme / "index.theme").is_file()
    assert (home / ".local/share/color-schemes/Mocha.colors").is_file()
    assert theming.detect_gtk_theme(home) == "Catppuccin-Mocha-Standard-Blue-Dark"


def test_fetch_wallpaper(tmp_path: Path) -> None:
    repo = tmp_path / "repo"
    repo.mkdir()
    dest = tmp_path / "wallpapers"

    assert assets.fetch_wallpaper(repo, dest) is None

    (repo / "crane.png").write_bytes(b"\x89PNG")
    assert assets.fetch_wallpaper(repo, dest) == str(dest / "crane.png")
    assert (dest / "crane.png").read_bytes() == b"\x89PNG"


def test_hyprland_wallpaper_config(tmp_path: Path) -> None:
    wallpaper = tmp_path / "crane.png"
    wallpaper.write_bytes(b"\x89PNG")
    home = tmp_path / "home"

    assert theming.apply_wallpaper("hyprland", home, "alice", str(wallpaper)) is True
    assert theming.apply_wallpaper("hyprland", home, "alice", str(wallpaper)) is True

    assert f"wallpaper = ,{wallpaper}" in (home / ".config/hypr/hyprpaper.conf").read_text(encoding="utf-8")
    assert (home / ".config/hypr/hyprland.conf").read_text(encoding="utf-8").count("exec-once = hyprpaper") == 1


def test_wallpaper_missing_or_unsupported(tmp_path: Path) -> None:
    assert theming.apply_wallpaper("hyprland", tmp_path, "alice", None) is False
    assert theming.apply_wallpaper("hyprland", tmp_path, "alice", str(tmp_path / "nope.png")) is False

    wallpaper = tmp_path / "crane.png"
    wallpaper.write_bytes(b"\x89PNG")
    assert theming.apply_wallpaper("openbox", tmp_path, "alice", str(wallpaper)) is False


def test_icon_and_cursor_themes_prefer_assets_repo(tmp_path: Path) -> None:
    home = tmp_path / "home"
    system_icons = tmp_path / "usr-share-icons"
    for name in ("Tela-dark", "Papirus-Dark", "Vimix-white-cursors", "Vimix-cursors"):
        (home / ".local/share/icons" / name).mkdir(parents=True)

    assert theming.detect_icon_theme(home, system_icons) == "Tela-dark"
    assert theming.detect_cursor_theme(home, system_icons) == "Vimix-white-cursors"


def test_icon_theme_falls_back_to_system_papirus(tmp_path: Path) -> None:
    home = tmp_path / "home"
    system_icons = tmp_path / "usr-share-icons"
    (system_icons / "Papirus-Dark").mkdir(parents=True)

    assert theming.detect_icon_theme(home, system_icons) == "Papirus-Dark"


def test_cursor_theme_falls_back_to_plain_vimix(tmp_path: Path) -> None:
    home = tmp_path / "home"
    (home / ".local/share/icons/Vimix-cursors").mkdir(parents=True)

    assert theming.detect_cursor_theme(home, tmp_path / "none") == "Vimix-cursors"


def test_nothing_installed_keeps_defaults(tmp_path: Path) -> None:
    assert theming.detect_icon_theme(tmp_path, tmp_path / "none") == "Tela-dark"
    assert theming.detect_cursor_theme(tmp_path, tmp_path / "none") == "Vimix-white-cursors"
