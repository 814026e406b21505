"""Port interface for objects exposing metric operations.

MetricPort is a structural protocol for type checking hosts that gain metric
behavior through mix(). An isinstance() check against it only inspects method
names; use is_metric() to test for an initialized metric.
"""

from typing import Any, Protocol, runtime_checkable

from metricrecorder.core.models import Sample, Scalar


@runtime_checkable
class MetricPort(Protocol):
    """Protocol for the record/recorded/value_of operations."""

    def record(self, sample: Any, when: Any = None) -> None:
        """Record a sample, optionally at an explicit time."""
        ...

    def recorded(self) -> list[Sample]:
        """Return recorded samples in insertion order."""
        ...

    def value_of(self) -> Scalar | None:
        """Return the most recent value, or None."""
        ...
