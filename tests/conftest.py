"""Test configuration and fixtures."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, List, Optional, Sequence

import pytest

from arch_provision.config import ProvisionConfig


class ScriptedPrompter:
    """Prompter fake fed from queues; running out of answers fails the test."""

    def __init__(
        self,
        answers: Sequence[str] = (),
        secrets: Sequence[str] = (),
        confirms: Sequence[bool] = (),
        choices: Sequence[int] = (),
    ) -> None:
        self.answers: List[str] = list(answers)
        self.secret_answers: List[str] = list(secrets)
        self.confirms: List[bool] = list(confirms)
        self.choices: List[int] = list(choices)
        self.questions: List[str] = []

    def _pop(self, queue: List[Any], question: str) -> Any:
        self.questions.append(question)
        if not queue:
            raise AssertionError(f"Unexpected prompt: {question!r}")
        return queue.pop(0)

    def ask(self, question: str, default: Optional[str] = None) -> str:
        answer = self._pop(self.answers, question)
        return answer or (default or "")

    def ask_secret(self, question: str) -> str:
        return self._pop(self.secret_answers, question)

    def confirm(self, question: str, default: bool = False) -> bool:
        return self._pop(self.confirms, question)

    def choose(self, question: str, options: Sequence[str]) -> int:
        return self._pop(self.choices, question)

    def exhausted(self) -> bool:
        return not (self.answers or self.secret_answers or self.confirms or self.choices)


class CallRecorder:
    """Stands in for external operations; records (name, args, kwargs)."""

    def __init__(self) -> None:
        self.calls: List[tuple] = []

    def fake(self, name: str, result: Any = None):
        def _fake(*args: Any, **kwargs: Any) -> Any:
            self.calls.append((name, args, kwargs))
            return result

        return _fake

    def names(self) -> List[str]:
        return [c[0] for c in self.calls]

    def args_of(self, name: str) -> tuple:
        for n, args, _ in self.calls:
            if n == name:
                return args
        raise AssertionError(f"{name} was not called")


@pytest.fixture
def scripted():
    """Provide the ScriptedPrompter class (build one per test with its answers)."""
    return ScriptedPrompter


@pytest.fixture
def recorder() -> CallRecorder:
    return CallRecorder()


@pytest.fixture
def config(tmp_path: Path) -> ProvisionConfig:
    """Provide a config whose paths all live under tmp_path."""
    return ProvisionConfig(
        raw={
            "paths": {
                "target_root": str(tmp_path / "mnt"),
                "install_state": str(tmp_path / "arch-install-state"),
                "post_install_state": str(tmp_path / "arch-post-install-state"),
                "handoff_state": str(tmp_path / "handoff" / "arch-install-state"),
            }
        }
    )


@pytest.fixture
def log_path(tmp_path: Path) -> str:
    return str(tmp_path / "arch-provision.log")


@pytest.fixture
def patch_steps(monkeypatch: pytest.MonkeyPatch):
    """Replace a name in every module of a step package that imports it."""

    def _patch(package, name: str, value: Any) -> None:
        prefix = package.__name__ + "."
        modules = [
            module
            for mod_name, module in list(sys.modules.items())
            if module is not None
            and (mod_name == package.__name__ or mod_name.startswith(prefix))
            and hasattr(module, name)
        ]
        assert modules, f"{name} is not used by {package.__name__}"
        for module in modules:
            monkeypatch.setattr(module, name, value)

    return _patch
