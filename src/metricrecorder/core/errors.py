"""Exceptions raised by metric operations."""

from typing import Any


class ValidationError(TypeError):
    """A sample or timestamp was rejected by Metric.record()."""


class MissingCoercionError(ValidationError):
    """A structured sample does not provide a callable value_of method."""

    def __init__(self, sample: Any) -> None:
        self.sample = sample
        super().__init__(
            f"invalid sample; object must provide a value_of method "
            f"(got {type(sample).__name__})"
        )


class UnsupportedValueTypeError(ValidationError):
    """A sample evaluated to something other than a number or boolean."""

    def __init__(self, value: Any) -> None:
        self.value = value
        super().__init__(f"unexpected {type(value).__name__} value")


class InvalidTimestampError(ValidationError):
    """The explicit timestamp passed to record() is not a point in time."""

    def __init__(self, when: Any) -> None:
        self.when = when
        super().__init__(
            f"invalid timestamp; expected float, int or datetime "
            f"(got {type(when).__name__})"
        )


class MetricNotInitializedError(TypeError):
    """A metric operation was called on an object that was never initialized."""

    def __init__(self, instance: Any) -> None:
        super().__init__(
            f"{type(instance).__name__} object is not an initialized metric; "
            f"call init() first"
        )
