"""metricrecorder - in-memory recording of timestamped metric samples."""

from metricrecorder.adapters.logging import get_logger, install_null_handler
from metricrecorder.core.coercion import COERCION_METHOD
from metricrecorder.core.errors import (
    InvalidTimestampError,
    MetricNotInitializedError,
    MissingCoercionError,
    UnsupportedValueTypeError,
    ValidationError,
)
from metricrecorder.core.metric import Metric, init, is_metric, mix
from metricrecorder.core.models import Sample, Snapshot
from metricrecorder.core.ports import MetricPort

install_null_handler()

__all__ = [
    "COERCION_METHOD",
    "InvalidTimestampError",
    "Metric",
    "MetricNotInitializedError",
    "MetricPort",
    "MissingCoercionError",
    "Sample",
    "Snapshot",
    "UnsupportedValueTypeError",
    "ValidationError",
    "get_logger",
    "init",
    "is_metric",
    "mix",
]
