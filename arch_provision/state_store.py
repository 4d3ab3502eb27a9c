from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Protocol, Tuple

logger = logging.getLogger(__name__)

COMPLETED = "completed"

Record = Tuple[str, str]


def _check_record(key: str, value: str) -> None:
    if not key or "=" in key or "\n" in key:
        raise ValueError(f"Invalid state key: {key!r}")
    if "\n" in value:
        raise ValueError(f"State value for {key} must be a single line")


def parse_records(text: str, *, source: str = "<state>") -> List[Record]:
    """Parse ``key=value`` lines, skipping (and logging) anything unparsable."""

    records: List[Record] = []
    for lineno, line in enumerate(text.splitlines(), start=1):
        if not line.strip():
            continue
        key, sep, value = line.partition("=")
        if not sep or not key or key != key.strip():
            logger.warning("Ignoring malformed state line %s:%d: %r", source, lineno, line)
            continue
        records.append((key, value))
    return records


class StateBackend(Protocol):
    def exists(self) -> bool:
        ...

    def load(self) -> List[Record]:
        ...

    def append(self, key: str, value: str) -> None:
        ...

    def replace_with(self, records: Iterable[Record]) -> None:
        ...


class FlatFileBackend:
    """Append-only newline-delimited ``key=value`` file."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = Path(path)

    def __repr__(self) -> str:
        return f"FlatFileBackend({str(self.path)!r})"

    def exists(self) -> bool:
        try:
            return self.path.is_file() and self.path.stat().st_size > 0
        except OSError:
            return False

    def load(self) -> List[Record]:
        if not self.path.exists():
            return []
        try:
            text = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            # Unreadable state means "nothing completed", never a hard failure.
            logger.warning("State file %s unreadable (%s); treating as empty", self.path, e)
            return []
        return parse_records(text, source=str(self.path))

    def _ends_mid_line(self) -> bool:
        try:
            with self.path.open("rb") as f:
                f.seek(0, os.SEEK_END)
                if f.tell() == 0:
                    return False
                f.seek(-1, os.SEEK_END)
                return f.read(1) != b"\n"
        except FileNotFoundError:
            return False

    def append(self, key: str, value: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        # A hand-edited or torn last line must not swallow the new record.
        lead = "\n" if self._ends_mid_line() else ""
        with self.path.open("a", encoding="utf-8") as f:
            f.write(f"{lead}{key}={value}\n")
            f.flush()

    def replace_with(self, records: Iterable[Record]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text("".join(f"{k}={v}\n" for k, v in records), encoding="utf-8")


class MemoryBackend:
    def __init__(self, records: Optional[Iterable[Record]] = None) -> None:
        self.records: List[Record] = list(records or [])

    def exists(self) -> bool:
        return bool(self.records)

    def load(self) -> List[Record]:
        return list(self.records)

    def append(self, key: str, value: str) -> None:
        self.records.append((key, value))

    def replace_with(self, records: Iterable[Record]) -> None:
        self.records = list(records)


class StateStore:
    """Append-only log of step completion markers and captured values.

    A record whose value is exactly ``completed`` is a completion marker for
    the step named by its key; every other record is a data entry. Lookups
    are last-write-wins. The log is never compacted.
    """

    def __init__(self, backend: StateBackend) -> None:
        self.backend = backend
        self._records: List[Record] = backend.load()

    @classmethod
    def open(
        cls,
        path: str | os.PathLike[str],
        *,
        inherit_from: Iterable[str | os.PathLike[str]] = (),
    ) -> "StateStore":
        store = cls(FlatFileBackend(path))
        for candidate in inherit_from:
            source = FlatFileBackend(candidate)
            if source.path.resolve() == store.backend.path.resolve():
                continue
            if store.inherit_from(source):
                break
        return store

    def inherit_from(self, source: StateBackend) -> bool:
        """Seed this store from ``source`` if we have no data of our own yet."""

        if self.backend.exists() or not source.exists():
            return False
        records = source.load()
        try:
            self.backend.replace_with(records)
        except OSError as e:
            logger.warning("Could not inherit state from %r: %s", source, e)
            return False
        self._records = records
        logger.info("Inherited %d state records from %r", len(records), source)
        return True

    def is_step_complete(self, name: str) -> bool:
        return (name, COMPLETED) in self._records

    def mark_step_complete(self, name: str) -> None:
        self._append(name, COMPLETED)

    def get_value(self, key: str) -> Optional[str]:
        for k, v in reversed(self._records):
            if k == key and v != COMPLETED:
                return v
        return None

    def has(self, key: str) -> bool:
        return self.get_value(key) is not None

    def set_value(self, key: str, value: str) -> None:
        if value == COMPLETED:
            raise ValueError(f"{COMPLETED!r} is reserved for completion markers ({key})")
        self._append(key, value)

    def values(self) -> Dict[str, str]:
        out: Dict[str, str] = {}
        for k, v in self._records:
            if v != COMPLETED:
                out[k] = v
        return out

    def completed_steps(self) -> List[str]:
        seen: List[str] = []
        for k, v in self._records:
            if v == COMPLETED and k not in seen:
                seen.append(k)
        return seen

    def _append(self, key: str, value: str) -> None:
        _check_record(key, value)
        self.backend.append(key, value)
        self._records.append((key, value))
