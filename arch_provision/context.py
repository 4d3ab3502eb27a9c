from __future__ import annotations

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Mapping, Optional

from .config import ProvisionConfig
from .errors import StateIntegrityError
from .state_store import StateStore


def _frozen(data: Mapping[str, str]) -> Mapping[str, str]:
    return MappingProxyType(dict(data))


@dataclass(frozen=True)
class WorkflowContext:
    """Everything a step may read: config, persisted values, in-memory secrets.

    Steps never mutate the context; the runner derives a new one after each
    step and writes persisted values back to the store itself.
    """

    config: ProvisionConfig = field(default_factory=ProvisionConfig)
    values: Mapping[str, str] = field(default_factory=lambda: _frozen({}))
    secrets: Mapping[str, str] = field(default_factory=lambda: _frozen({}), repr=False)

    @classmethod
    def from_store(cls, store: StateStore, config: Optional[ProvisionConfig] = None) -> "WorkflowContext":
        return cls(config=config or ProvisionConfig(), values=_frozen(store.values()))

    @property
    def dry_run(self) -> bool:
        return self.config.dry_run

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self.values.get(key, default)

    def require(self, key: str) -> str:
        try:
            return self.values[key]
        except KeyError:
            raise StateIntegrityError(f"Required value {key!r} has not been captured") from None

    def secret(self, key: str) -> str:
        try:
            return self.secrets[key]
        except KeyError:
            raise StateIntegrityError(f"Secret {key!r} was not collected") from None

    def with_values(self, new: Mapping[str, str]) -> "WorkflowContext":
        if not new:
            return self
        return replace(self, values=_frozen({**self.values, **new}))

    def with_secrets(self, new: Mapping[str, str]) -> "WorkflowContext":
        if not new:
            return self
        return replace(self, secrets=_frozen({**self.secrets, **new}))
