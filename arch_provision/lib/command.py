from __future__ import annotations

import logging
import os
import shlex
import shutil
import subprocess
from dataclasses import dataclass
from typing import Mapping, Optional, Sequence

from ..errors import CommandError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CmdResult:
    argv: list[str]
    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0


def format_argv(argv: Sequence[str]) -> str:
    return " ".join(shlex.quote(a) for a in argv)


def run_cmd(
    argv: Sequence[str],
    *,
    check: bool = True,
    env: Optional[Mapping[str, str]] = None,
    cwd: Optional[str] = None,
    input_text: Optional[str] = None,
    capture: bool = True,
    dry_run: bool = False,
) -> CmdResult:
    """Run an external command; every host mutation goes through here.

    - The argv is logged as ``CMD ...``; stdin never is (passwords travel there).
    - ``capture=False`` lets pacman/makepkg progress reach the terminal.
    - ``dry_run`` logs and reports success without executing.
    """

    args = list(argv)
    logger.info("CMD %s", format_argv(args))
    if dry_run:
        return CmdResult(argv=args, returncode=0, stdout="", stderr="")

    pipe = subprocess.PIPE if capture else None
    proc = subprocess.run(
        args,
        input=input_text,
        text=True,
        stdout=pipe,
        stderr=pipe,
        cwd=cwd,
        env={**os.environ, **env} if env else None,
    )
    result = CmdResult(argv=args, returncode=proc.returncode, stdout=proc.stdout or "", stderr=proc.stderr or "")

    for stream, text in (("STDOUT", result.stdout), ("STDERR", result.stderr)):
        if text.strip():
            logger.debug("%s %s", stream, text.strip())

    if check and not result.ok:
        raise CommandError(args, result.returncode, result.stderr)
    return result


def command_exists(name: str) -> bool:
    return shutil.which(name) is not None
