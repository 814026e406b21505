"""Core domain models for recorded metric data."""

import inspect
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

Scalar = int | float | bool

_SNAPSHOT_ATTRS = frozenset({"coerce", "fields", "owner", "binds_self"})


@dataclass(frozen=True)
class Snapshot:
    """Immutable shallow copy of a structured sample.

    A value_of method defined on the sample's class is re-bound to the
    snapshot, so it reads the copied fields rather than the live object.

    Attributes:
        coerce: The coercion function captured at record time.
        fields: Read-only view of the object's own fields at record time.
        owner: Class of the sample, used to resolve its other attributes.
        binds_self: True if coerce takes the snapshot as its first argument.
    """

    coerce: Callable[..., Any]
    fields: Mapping[str, Any]
    owner: type | None = None
    binds_self: bool = False

    def value_of(self) -> Any:
        """Invoke the captured coercion method."""
        if self.binds_self:
            return self.coerce(self)
        return self.coerce()

    def __getattr__(self, name: str) -> Any:
        # Only reached for names that are not dataclass fields or methods.
        if name in _SNAPSHOT_ATTRS:
            raise AttributeError(name)
        try:
            return self.fields[name]
        except KeyError:
            pass
        if self.owner is not None:
            try:
                attr = inspect.getattr_static(self.owner, name)
            except AttributeError:
                pass
            else:
                if hasattr(attr, "__get__"):
                    return attr.__get__(self, self.owner)
                return attr
        raise AttributeError(f"snapshot has no field {name!r}")

    def __getitem__(self, key: str) -> Any:
        return self.fields[key]


@dataclass(frozen=True)
class Sample:
    """A single recorded data point.

    Attributes:
        when: Unix timestamp in seconds.
        value: The coerced scalar value.
        raw: The caller's input, or a Snapshot of it for structured input.
    """

    when: float
    value: Scalar
    raw: Scalar | Snapshot
