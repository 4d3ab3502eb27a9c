from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Protocol, Sequence, Tuple

from .context import WorkflowContext
from .errors import StateIntegrityError, UserAbort, WorkflowAborted
from .prompts import Prompter, ask_confirmed_secret
from .state_store import StateStore

logger = logging.getLogger(__name__)


class Criticality(enum.Enum):
    FATAL = "fatal"  # destructive; failure halts the workflow
    SOFT = "soft"  # additive/cosmetic; failure is reported and skipped


class StepOutcome(enum.Enum):
    RAN = "ran"
    SKIPPED = "skipped"
    NOT_APPLICABLE = "not_applicable"
    FAILED = "failed"


@dataclass(frozen=True)
class SecretParam:
    name: str
    prompt: str  # may reference captured values, e.g. "Password for {username}"


class Step(Protocol):
    """A single resumable step."""

    step_id: str
    provides: Tuple[str, ...]
    requires: Tuple[str, ...]
    secrets: Tuple[SecretParam, ...]
    criticality: Criticality
    tracked: bool

    def applies(self, ctx: WorkflowContext) -> bool:
        ...

    def collect(self, ctx: WorkflowContext, prompter: Prompter) -> Dict[str, str]:
        ...

    def run(self, ctx: WorkflowContext) -> Optional[Dict[str, str]]:
        ...


class BaseStep:
    """Defaults for the Step protocol; subclasses override what they need."""

    step_id = ""
    provides: Tuple[str, ...] = ()
    requires: Tuple[str, ...] = ()
    secrets: Tuple[SecretParam, ...] = ()
    criticality = Criticality.FATAL
    # Untracked steps never write a completion marker and run every time.
    tracked = True

    def applies(self, ctx: WorkflowContext) -> bool:
        return True

    def collect(self, ctx: WorkflowContext, prompter: Prompter) -> Dict[str, str]:
        return {}

    def run(self, ctx: WorkflowContext) -> Optional[Dict[str, str]]:
        return None


@dataclass(frozen=True)
class StepResult:
    step_id: str
    outcome: StepOutcome
    context: WorkflowContext
    error: Optional[BaseException] = None


@dataclass(frozen=True)
class Workflow:
    name: str
    steps: Sequence[Step]
    # Keys that may be read without an earlier step providing them.
    inherited: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        seen_ids: set[str] = set()
        known: set[str] = set(self.inherited)
        for step in self.steps:
            if not step.step_id:
                raise ValueError(f"{self.name}: step without step_id: {step!r}")
            if step.step_id in seen_ids:
                raise ValueError(f"{self.name}: duplicate step_id {step.step_id}")
            seen_ids.add(step.step_id)
            known.update(step.provides)
            missing = [k for k in step.requires if k not in known]
            if missing:
                raise ValueError(
                    f"{self.name}: step {step.step_id} reads {', '.join(missing)} "
                    "before any earlier step captures it"
                )

    def step_ids(self) -> List[str]:
        return [s.step_id for s in self.steps]


@dataclass
class WorkflowResult:
    context: WorkflowContext
    ran_steps: List[str] = field(default_factory=list)
    skipped_steps: List[str] = field(default_factory=list)
    not_applicable_steps: List[str] = field(default_factory=list)
    soft_failures: Dict[str, str] = field(default_factory=dict)


def _secret_names(step: Step) -> set[str]:
    return {s.name for s in step.secrets}


class StepRunner:
    """Decides, per step, whether to execute, skip, or re-collect inputs."""

    def __init__(self, store: StateStore, prompter: Prompter, *, force: bool = False) -> None:
        self.store = store
        self.prompter = prompter
        self.force = force

    def _collect_secrets(self, step: Step, ctx: WorkflowContext) -> Dict[str, str]:
        out: Dict[str, str] = {}
        for param in step.secrets:
            question = param.prompt.format_map(dict(ctx.values))
            out[param.name] = ask_confirmed_secret(self.prompter, question)
        return out

    def _persist(self, step: Step, values: Mapping[str, str]) -> None:
        secret = _secret_names(step)
        for key, value in values.items():
            if key in secret:
                raise ValueError(f"Refusing to persist secret {key!r} for step {step.step_id}")
            self.store.set_value(key, value)

    def _check_captured(self, step: Step, keys: Sequence[str], lookup) -> None:
        secret = _secret_names(step)
        missing = [k for k in keys if k not in secret and lookup(k) is None]
        if missing:
            raise StateIntegrityError(
                f"Step {step.step_id}: missing persisted value(s) {', '.join(missing)}; "
                "the state file is inconsistent"
            )

    def run_step(self, step: Step, ctx: WorkflowContext) -> StepResult:
        if not step.applies(ctx):
            logger.info("Step %s not applicable", step.step_id)
            return StepResult(step.step_id, StepOutcome.NOT_APPLICABLE, ctx)

        if step.tracked and not self.force and self.store.is_step_complete(step.step_id):
            self._check_captured(step, (*step.provides, *step.requires), self.store.get_value)
            ctx = ctx.with_secrets(self._collect_secrets(step, ctx))
            logger.info("Skipping step %s (already completed)", step.step_id)
            return StepResult(step.step_id, StepOutcome.SKIPPED, ctx)

        self._check_captured(step, step.requires, ctx.get)
        secrets = self._collect_secrets(step, ctx)
        collected = step.collect(ctx, self.prompter)
        self._persist(step, collected)
        ctx = ctx.with_values(collected).with_secrets(secrets)
        self._check_captured(step, step.provides, ctx.get)

        logger.info("Running step %s", step.step_id)
        try:
            produced = step.run(ctx) or {}
        except (StateIntegrityError, UserAbort):
            raise
        except Exception as e:
            return StepResult(step.step_id, StepOutcome.FAILED, ctx, error=e)

        self._persist(step, produced)
        ctx = ctx.with_values(produced)
        if step.tracked:
            self.store.mark_step_complete(step.step_id)
        return StepResult(step.step_id, StepOutcome.RAN, ctx)


def run_workflow(
    workflow: Workflow,
    *,
    store: StateStore,
    prompter: Prompter,
    ctx: WorkflowContext,
    force: bool = False,
    stop_after: Optional[str] = None,
) -> WorkflowResult:
    """Run steps in order with resume/idempotency semantics."""

    if stop_after is not None and stop_after not in workflow.step_ids():
        raise ValueError(f"Unknown step for stop_after: {stop_after}")

    runner = StepRunner(store, prompter, force=force)
    result = WorkflowResult(context=ctx)

    for step in workflow.steps:
        step_result = runner.run_step(step, result.context)
        result.context = step_result.context

        if step_result.outcome is StepOutcome.RAN:
            result.ran_steps.append(step.step_id)
        elif step_result.outcome is StepOutcome.SKIPPED:
            result.skipped_steps.append(step.step_id)
        elif step_result.outcome is StepOutcome.NOT_APPLICABLE:
            result.not_applicable_steps.append(step.step_id)
        else:
            err = step_result.error
            if step.criticality is Criticality.FATAL:
                logger.error("Step %s failed: %s", step.step_id, err)
                raise WorkflowAborted(step.step_id, str(err)) from err
            logger.warning("Step %s failed (continuing): %s", step.step_id, err)
            result.soft_failures[step.step_id] = str(err)

        if stop_after is not None and step.step_id == stop_after:
            logger.info("Stopping after %s", stop_after)
            break

    logger.info(
        "Workflow %s finished: ran=%s skipped=%s soft_failures=%s",
        workflow.name,
        ",".join(result.ran_steps) or "-",
        ",".join(result.skipped_steps) or "-",
        ",".join(result.soft_failures) or "-",
    )
    return result
