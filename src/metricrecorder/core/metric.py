"""Metric container and mix-in composition.

Per-instance sample history lives in a module-private registry keyed by
object identity, so it is reachable only through record(), recorded() and
value_of(). Membership in that registry is what makes an object a metric.
"""

import operator
import types
import weakref
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from typing import Any, TypeVar

from metricrecorder.adapters.logging import get_logger
from metricrecorder.core.coercion import coerce_sample, resolve_when, snapshot
from metricrecorder.core.errors import MetricNotInitializedError, ValidationError
from metricrecorder.core.models import Sample, Scalar, Snapshot

logger = get_logger(__name__)

T = TypeVar("T")


@dataclass
class _MetricState:
    samples: list[Sample] = field(default_factory=list)


_states: dict[int, _MetricState] = {}


def init(instance: Any) -> None:
    """Initialize metric internals for an instance.

    Called by Metric.__init__ and by the constructors of classes that gain
    metric behavior through mix(). Calling it again on an initialized
    instance keeps the existing history.

    Args:
        instance: Object that will hold a sample history. Must support weak
            references; its history is released when it is collected.

    Raises:
        TypeError: If the instance cannot be weakly referenced.
    """
    key = id(instance)
    if key in _states:
        return
    try:
        weakref.finalize(instance, _states.pop, key, None)
    except TypeError as exc:
        raise TypeError(
            f"cannot initialize {type(instance).__name__} as a metric; "
            f"it does not support weak references"
        ) from exc
    _states[key] = _MetricState()
    logger.debug("Initialized metric state for %s", type(instance).__name__)


def is_metric(value: Any) -> bool:
    """Return True if value was initialized through init()."""
    return id(value) in _states


def _state(instance: Any) -> _MetricState:
    try:
        return _states[id(instance)]
    except KeyError:
        raise MetricNotInitializedError(instance) from None


def _latest(instance: Any) -> Scalar | None:
    samples = _state(instance).samples
    return samples[-1].value if samples else None


def _operand(value: Any) -> Any:
    return _latest(value) if is_metric(value) else value


def _freeze_metric(metric: Any) -> Snapshot:
    # A metric coerces through its private history, which a copy cannot
    # reach, so the snapshot keeps the value current at record time.
    value = _latest(metric)
    frozen = snapshot(metric)
    fields = {
        name: attr
        for name, attr in frozen.fields.items()
        if name not in _INSTANCE_OPERATIONS
    }
    return replace(
        frozen,
        coerce=lambda: value,
        fields=types.MappingProxyType(fields),
        binds_self=False,
    )


def _scalar_op(
    op: Callable[[Any, Any], Any], reflected: bool = False
) -> Callable[[Any, Any], Any]:
    def method(self: Any, other: Any) -> Any:
        if reflected:
            return op(_operand(other), _latest(self))
        return op(_latest(self), _operand(other))

    return method


class Metric:
    """Resource metric holding an append-only history of samples.

    Example:
        ```python
        from metricrecorder import Metric

        cpu = Metric()
        cpu.record(45.2)
        cpu.record(51.0)
        float(cpu)  # 51.0
        ```
    """

    def __init__(self) -> None:
        init(self)

    init = staticmethod(init)
    is_metric = staticmethod(is_metric)

    @staticmethod
    def mix(target: T) -> T:
        """Mix Metric operations into a class or an object; see mix()."""
        return mix(target)

    def record(self, sample: Any, when: Any = None) -> None:
        """Record a sample.

        Args:
            sample: A number, a boolean, or an object (or mapping) providing a
                value_of method that evaluates to a number or boolean.
            when: Unix timestamp or datetime; defaults to the current time.

        Raises:
            MissingCoercionError: Object sample without value_of.
            UnsupportedValueTypeError: Sample is not a number or boolean.
            InvalidTimestampError: when is not a point in time.
        """
        state = _state(self)
        try:
            timestamp = resolve_when(when)
            if is_metric(sample):
                sample = _freeze_metric(sample)
            value, raw = coerce_sample(sample)
        except ValidationError as exc:
            logger.debug("Rejected sample: %s", exc)
            raise
        state.samples.append(Sample(when=timestamp, value=value, raw=raw))

    def recorded(self) -> list[Sample]:
        """Return all recorded samples in insertion order.

        The list is a copy; modifying it does not affect the metric.
        """
        return list(_state(self).samples)

    def value_of(self) -> Scalar | None:
        """Return the most recent sample value, or None if nothing is recorded."""
        return _latest(self)

    def __float__(self) -> float:
        value = _latest(self)
        if value is None:
            raise TypeError("metric has no recorded value")
        return float(value)

    def __int__(self) -> int:
        value = _latest(self)
        if value is None:
            raise TypeError("metric has no recorded value")
        return int(value)

    def __bool__(self) -> bool:
        # Hosts of a mixed class stay truthy until they are initialized.
        if not is_metric(self):
            return True
        return bool(_latest(self))

    __lt__ = _scalar_op(operator.lt)
    __le__ = _scalar_op(operator.le)
    __gt__ = _scalar_op(operator.gt)
    __ge__ = _scalar_op(operator.ge)
    __add__ = _scalar_op(operator.add)
    __radd__ = _scalar_op(operator.add, reflected=True)
    __sub__ = _scalar_op(operator.sub)
    __rsub__ = _scalar_op(operator.sub, reflected=True)
    __mul__ = _scalar_op(operator.mul)
    __rmul__ = _scalar_op(operator.mul, reflected=True)
    __truediv__ = _scalar_op(operator.truediv)
    __rtruediv__ = _scalar_op(operator.truediv, reflected=True)

    # __eq__ and __hash__ stay identity based so metrics work as dict keys.

    def __repr__(self) -> str:
        if not is_metric(self):
            return f"<uninitialized {type(self).__name__}>"
        return (
            f"{type(self).__name__}(samples={len(_state(self).samples)}, "
            f"value={_latest(self)!r})"
        )


_INSTANCE_OPERATIONS = ("record", "recorded", "value_of")

_SCALAR_PROTOCOL = (
    "__float__",
    "__int__",
    "__bool__",
    "__lt__",
    "__le__",
    "__gt__",
    "__ge__",
    "__add__",
    "__radd__",
    "__sub__",
    "__rsub__",
    "__mul__",
    "__rmul__",
    "__truediv__",
    "__rtruediv__",
)


def _defines(cls: type, name: str) -> bool:
    return any(name in vars(klass) for klass in cls.__mro__ if klass is not object)


def mix(target: T) -> T:
    """Mix Metric operations into a class or an object.

    A class receives record(), recorded() and value_of(), replacing any
    same-named methods (last mix-in wins). It also receives the scalar
    protocol (float(), int(), bool(), comparisons, arithmetic), except for
    special methods the class already defines itself or inherits, which
    keep the host's behavior.

    A plain object receives the three operations bound to itself; Python
    resolves special methods on the type, so the scalar protocol needs a
    class target. The object must support weak references before init()
    can accept it, so types.SimpleNamespace and classes with __slots__ but
    no __weakref__ slot cannot host a metric.

    Instances still need init() before use, usually from their __init__.

    Args:
        target: Class or object to extend.

    Returns:
        The target, so mix can be used as a class decorator.
    """
    if isinstance(target, type):
        for name in _INSTANCE_OPERATIONS:
            setattr(target, name, Metric.__dict__[name])
        for name in _SCALAR_PROTOCOL:
            if not _defines(target, name):
                setattr(target, name, Metric.__dict__[name])
    else:
        for name in _INSTANCE_OPERATIONS:
            setattr(target, name, types.MethodType(Metric.__dict__[name], target))
    return target
