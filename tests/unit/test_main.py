from __future__ import annotations

from pathlib import Path

import pytest

from arch_provision import main
from arch_provision.errors import ProvisionError, StateIntegrityError, UserAbort, WorkflowAborted
from arch_provision.state_store import StateStore


def _raises(exc: BaseException):
    def _fn() -> None:
        raise exc

    return _fn


@pytest.mark.parametrize(
    "exc,code",
    [
        (UserAbort("declined"), 0),
        (WorkflowAborted("formatting", "mkfs failed"), 1),
        (ProvisionError("not root"), 1),
        (StateIntegrityError("DRIVE missing"), 2),
        (KeyboardInterrupt(), 130),
    ],
)
def test_exit_codes(exc: BaseException, code: int) -> None:
    assert main._guarded(_raises(exc)) == code


def test_success_exits_zero() -> None:
    assert main._guarded(lambda: None) == 0


def test_unexpected_errors_propagate() -> None:
    with pytest.raises(ZeroDivisionError):
        main._guarded(lambda: 1 / 0)


def test_cli_dry_run_passes_options_through(monkeypatch, tmp_path: Path) -> None:
    seen = {}
    monkeypatch.setattr(main, "configure_logging", lambda **kw: kw.get("log_path"))
    monkeypatch.setattr(main, "run_install", lambda **kw: seen.update(kw))

    code = main.main_install(
        ["--dry-run", "--stop-after", "formatting", "--state", str(tmp_path / "s"), "--log", str(tmp_path / "l")]
    )

    assert code == 0
    assert seen["cfg"].dry_run is True
    assert seen["stop_after"] == "formatting"
    assert seen["state_path"] == str(tmp_path / "s")
    assert seen["force"] is False


def test_dry_run_leaves_state_file_untouched(tmp_path: Path) -> None:
    state = tmp_path / "arch-install-state"
    state.write_text("DRIVE=sda\ndrive_selection=completed\n", encoding="utf-8")

    store = main._open_store(str(state), dry_run=True)
    store.mark_step_complete("partitioning")

    assert store.is_step_complete("drive_selection")
    assert store.is_step_complete("partitioning")
    assert state.read_text(encoding="utf-8") == "DRIVE=sda\ndrive_selection=completed\n"


def test_dry_run_store_still_inherits(tmp_path: Path) -> None:
    source = tmp_path / "arch-install-state"
    source.write_text("username=alice\n", encoding="utf-8")
    target = tmp_path / "arch-post-install-state"

    store = main._open_store(str(target), dry_run=True, inherit_from=(str(source),))

    assert store.get_value("username") == "alice"
    assert not target.exists()


def test_install_hands_off_state(monkeypatch, config, log_path) -> None:
    state = Path(config.install_state)
    state.write_text("username=alice\n", encoding="utf-8")
    monkeypatch.setattr(main, "install_workflow", lambda: main.Workflow(name="install", steps=[]))

    main.run_install(cfg=config, log_path=log_path, prompter=object())

    handed = Path(config.target_root) / config.handoff_state.lstrip("/")
    assert StateStore.open(handed).get_value("username") == "alice"


def test_declining_outside_live_iso_is_an_error(tmp_path: Path, scripted) -> None:
    cmdline = tmp_path / "cmdline"
    cmdline.write_text("BOOT_IMAGE=/vmlinuz-linux root=/dev/sda2 rw\n", encoding="utf-8")
    prompter = scripted(confirms=[False])

    with pytest.raises(ProvisionError) as exc:
        main._check_live_environment(prompter, str(cmdline))

    assert not isinstance(exc.value, UserAbort)
    assert main._guarded(lambda: main._check_live_environment(scripted(confirms=[False]), str(cmdline))) == 1


def test_live_iso_needs_no_confirmation(tmp_path: Path, scripted) -> None:
    cmdline = tmp_path / "cmdline"
    cmdline.write_text("initrd=archiso.img archisobasedir=arch\n", encoding="utf-8")

    main._check_live_environment(scripted(), str(cmdline))


def test_unknown_stop_after_is_rejected_by_the_parser(capsys) -> None:
    with pytest.raises(SystemExit) as exc:
        main.main_install(["--dry-run", "--stop-after", "formating"])

    assert exc.value.code == 2
    assert "formating" in capsys.readouterr().err


def test_post_install_stop_after_accepts_its_own_steps(monkeypatch) -> None:
    seen = {}
    monkeypatch.setattr(main, "configure_logging", lambda **kw: kw.get("log_path"))
    monkeypatch.setattr(main, "_check_arch_system", lambda: None)
    monkeypatch.setattr(main, "run_post_install", lambda **kw: seen.update(kw))

    assert main.main_post_install(["--dry-run", "--stop-after", "de_install"]) == 0
    assert seen["stop_after"] == "de_install"
    with pytest.raises(SystemExit):
        main.main_post_install(["--dry-run", "--stop-after", "formatting"])
