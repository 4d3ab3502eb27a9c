from __future__ import annotations

import getpass
import logging
from typing import Callable, Optional, Protocol, Sequence

from .errors import UserAbort

logger = logging.getLogger(__name__)

# Returns an error message for invalid input, None when the input is acceptable.
Validator = Callable[[str], Optional[str]]


class Prompter(Protocol):
    """Interactive input. Implementations must not log what is typed."""

    def ask(self, question: str, default: Optional[str] = None) -> str:
        ...

    def ask_secret(self, question: str) -> str:
        ...

    def confirm(self, question: str, default: bool = False) -> bool:
        ...

    def choose(self, question: str, options: Sequence[str]) -> int:
        ...


def _read(prompt: str, *, secret: bool = False) -> str:
    try:
        return getpass.getpass(prompt) if secret else input(prompt)
    except EOFError:
        raise UserAbort("Input closed; stopping") from None


class ConsolePrompter:
    def ask(self, question: str, default: Optional[str] = None) -> str:
        suffix = f" [{default}]" if default else ""
        answer = _read(f"{question}{suffix}: ").strip()
        return answer or (default or "")

    def ask_secret(self, question: str) -> str:
        return _read(f"{question}: ", secret=True)

    def confirm(self, question: str, default: bool = False) -> bool:
        hint = "Y/n" if default else "y/N"
        answer = _read(f"{question} ({hint}): ").strip().lower()
        if not answer:
            return default
        return answer in {"y", "yes"}

    def choose(self, question: str, options: Sequence[str]) -> int:
        for i, label in enumerate(options, start=1):
            print(f"  {i}) {label}")
        while True:
            answer = _read(f"{question} (1-{len(options)}): ").strip()
            if answer.isdigit() and 1 <= int(answer) <= len(options):
                return int(answer) - 1
            logger.warning("Invalid selection %r; choose 1-%d", answer, len(options))


def ask_until_valid(
    prompter: Prompter,
    question: str,
    validate: Validator,
    *,
    default: Optional[str] = None,
) -> str:
    """Re-prompt until ``validate`` accepts the answer. No retry limit."""

    while True:
        answer = prompter.ask(question, default=default)
        error = validate(answer)
        if error is None:
            return answer
        logger.warning("%s", error)


def ask_confirmed_secret(prompter: Prompter, question: str) -> str:
    """Ask twice until both entries match and are non-empty."""

    while True:
        first = prompter.ask_secret(question)
        if not first:
            logger.warning("Empty value not allowed. Please try again.")
            continue
        second = prompter.ask_secret(f"Confirm {question[:1].lower()}{question[1:]}")
        if first == second:
            return first
        logger.warning("Entries do not match. Please try again.")
