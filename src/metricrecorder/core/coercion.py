"""Sample classification, snapshotting and timestamp resolution."""

import math
import numbers
import time
from collections.abc import Mapping
from datetime import datetime
from types import MappingProxyType
from typing import Any

from metricrecorder.core.errors import (
    InvalidTimestampError,
    MissingCoercionError,
    UnsupportedValueTypeError,
)
from metricrecorder.core.models import Scalar, Snapshot

COERCION_METHOD = "value_of"

# Inputs that can never carry a coercion method of their own.
_NON_STRUCTURED = (str, bytes, bytearray, numbers.Number, type(None))


def is_scalar(value: Any) -> bool:
    """Return True if value is storable as-is (a real number or boolean)."""
    return isinstance(value, numbers.Real)


def is_structured(value: Any) -> bool:
    """Return True if value must be reduced through its coercion method."""
    return not isinstance(value, _NON_STRUCTURED)


def _find_coercion(sample: Any) -> Any:
    if isinstance(sample, Mapping):
        method = sample.get(COERCION_METHOD)
    else:
        method = getattr(sample, COERCION_METHOD, None)
    if not callable(method):
        raise MissingCoercionError(sample)
    return method


def _slot_fields(sample: Any) -> dict[str, Any]:
    fields: dict[str, Any] = {}
    for klass in type(sample).__mro__:
        slots = vars(klass).get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for name in slots:
            if name not in ("__dict__", "__weakref__") and hasattr(sample, name):
                fields.setdefault(name, getattr(sample, name))
    return fields


def _own_fields(sample: Any) -> dict[str, Any]:
    if isinstance(sample, Mapping):
        fields = dict(sample)
    else:
        fields = _slot_fields(sample)
        fields.update(getattr(sample, "__dict__", {}))
    fields.pop(COERCION_METHOD, None)
    return fields


def snapshot(sample: Any) -> Snapshot:
    """Take an immutable shallow copy of a structured sample.

    A value_of bound to the sample itself is unbound and later invoked on
    the snapshot, so coercion never reaches back into the caller's object.

    Args:
        sample: A mapping or object providing a value_of method.

    Returns:
        Snapshot holding the coercion method and the sample's own fields.

    Raises:
        MissingCoercionError: If the sample has no callable value_of.
    """
    method = _find_coercion(sample)
    fields = MappingProxyType(_own_fields(sample))
    if getattr(method, "__self__", None) is sample:
        return Snapshot(
            coerce=method.__func__,
            fields=fields,
            owner=type(sample),
            binds_self=True,
        )
    return Snapshot(coerce=method, fields=fields)


def coerce_sample(sample: Any) -> tuple[Scalar, Scalar | Snapshot]:
    """Reduce a sample to its storable (value, raw) pair.

    Only the type of the coerced result is checked, so an object whose
    value_of returns different types across calls is accepted whenever the
    current result is a number or boolean. A Snapshot is already immutable
    and is stored as given.

    Args:
        sample: A number, a boolean, or a structured object with value_of.

    Returns:
        Tuple of (value, raw). For scalar input both are the input itself.

    Raises:
        MissingCoercionError: Structured sample without value_of.
        UnsupportedValueTypeError: Sample does not evaluate to a number or bool.
    """
    raw: Any = sample
    value: Any = sample
    if is_structured(sample):
        raw = sample if isinstance(sample, Snapshot) else snapshot(sample)
        value = raw.value_of()
    if not is_scalar(value):
        raise UnsupportedValueTypeError(value)
    return value, raw


def resolve_when(when: Any = None) -> float:
    """Resolve an optional explicit timestamp to Unix seconds.

    Args:
        when: None for the current time, a finite Unix timestamp, or a
            datetime.

    Returns:
        Unix timestamp in seconds.

    Raises:
        InvalidTimestampError: If when is not a point in time.
    """
    if when is None:
        return time.time()
    if isinstance(when, datetime):
        return when.timestamp()
    if isinstance(when, (int, float)) and not isinstance(when, bool):
        try:
            seconds = float(when)
        except OverflowError:
            raise InvalidTimestampError(when) from None
        if math.isfinite(seconds):
            return seconds
    raise InvalidTimestampError(when)
