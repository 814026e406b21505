"""BDD step definitions for metric recording features."""

from dataclasses import dataclass
from types import SimpleNamespace
from typing import Any

import pytest
from pytest_bdd import given, parsers, then, when

from metricrecorder import Metric, ValidationError, init, is_metric, mix


@dataclass
class RecordingScenarioContext:
    """Mutable state shared between the steps of one scenario."""

    metric: Metric | None = None
    host: Any = None
    sample: Any = None
    error: ValidationError | None = None


def _parse_scalar(text: str) -> int | float | bool:
    if text in ("true", "false"):
        return text == "true"
    return float(text) if "." in text else int(text)


def _record(ctx: RecordingScenarioContext, sample: Any, when: Any = None) -> None:
    assert ctx.metric is not None
    try:
        ctx.metric.record(sample, when=when)
    except ValidationError as exc:
        ctx.error = exc


@pytest.fixture
def ctx() -> RecordingScenarioContext:
    """Fresh scenario context for each test."""
    return RecordingScenarioContext()


# === Recording Steps ===
@given("an empty metric")
def step_empty_metric(ctx: RecordingScenarioContext) -> None:
    ctx.metric = Metric()


@when(parsers.re(r"I record (?P<value>-?\d+(?:\.\d+)?|true|false)$"))
def step_record_scalar(ctx: RecordingScenarioContext, value: str) -> None:
    _record(ctx, _parse_scalar(value))


@when(parsers.re(r"I record (?P<value>-?\d+) at (?P<moment>\d+)$"))
def step_record_at(ctx: RecordingScenarioContext, value: str, moment: str) -> None:
    _record(ctx, int(value), when=float(moment))


@when("I record an object without value_of")
def step_record_without_coercion(ctx: RecordingScenarioContext) -> None:
    _record(ctx, SimpleNamespace(tag="a"))


@when(parsers.parse('I record an object whose value_of returns "{text}"'))
def step_record_string_coercion(ctx: RecordingScenarioContext, text: str) -> None:
    _record(ctx, SimpleNamespace(value_of=lambda: text))


@when(parsers.parse('I record an object with value {value:d} and tag "{tag}"'))
def step_record_tagged(ctx: RecordingScenarioContext, value: int, tag: str) -> None:
    ctx.sample = SimpleNamespace(value_of=lambda: value, tag=tag)
    _record(ctx, ctx.sample)


@when(parsers.parse('the original object\'s tag is changed to "{tag}"'))
def step_mutate_original(ctx: RecordingScenarioContext, tag: str) -> None:
    ctx.sample.tag = tag


@then(parsers.parse("the current value is {value:d}"))
def step_current_value(ctx: RecordingScenarioContext, value: int) -> None:
    assert ctx.metric is not None
    assert ctx.metric.value_of() == value


@then("the metric has no current value")
def step_no_current_value(ctx: RecordingScenarioContext) -> None:
    assert ctx.metric is not None
    assert ctx.metric.value_of() is None


@then(parsers.parse("{count:d} samples are recorded"))
def step_sample_count(ctx: RecordingScenarioContext, count: int) -> None:
    assert ctx.metric is not None
    assert len(ctx.metric.recorded()) == count


@then(parsers.parse("the recorded values are {values}"))
def step_recorded_values(ctx: RecordingScenarioContext, values: str) -> None:
    assert ctx.metric is not None
    expected = [_parse_scalar(v.strip()) for v in values.split(",")]
    assert [s.value for s in ctx.metric.recorded()] == expected


@then(parsers.parse("the recorded timestamps are {values}"))
def step_recorded_timestamps(ctx: RecordingScenarioContext, values: str) -> None:
    assert ctx.metric is not None
    expected = [float(v) for v in values.split(",")]
    assert [s.when for s in ctx.metric.recorded()] == expected


@then(parsers.re(r"an? (?P<error_name>\w+) is raised$"))
def step_error_raised(ctx: RecordingScenarioContext, error_name: str) -> None:
    assert ctx.error is not None
    assert type(ctx.error).__name__ == error_name


@then(parsers.parse('the recorded tag is "{tag}"'))
def step_recorded_tag(ctx: RecordingScenarioContext, tag: str) -> None:
    assert ctx.metric is not None
    assert ctx.metric.recorded()[-1].raw.tag == tag


# === Mixing Steps ===
@given("a host object")
def step_host_object(ctx: RecordingScenarioContext) -> None:
    class Host:
        pass

    ctx.host = Host()


@given("an object defining record, recorded and value_of itself")
def step_lookalike(ctx: RecordingScenarioContext) -> None:
    class LookAlike:
        def record(self, sample: Any, when: Any = None) -> None:
            pass

        def recorded(self) -> list[Any]:
            return []

        def value_of(self) -> None:
            return None

    ctx.host = LookAlike()


@when("metric behavior is mixed into the host")
def step_mix_host(ctx: RecordingScenarioContext) -> None:
    mix(ctx.host)


@when("the host is initialized as a metric")
def step_init_host(ctx: RecordingScenarioContext) -> None:
    init(ctx.host)


@when(parsers.parse("the host records {value:d}"))
def step_host_records(ctx: RecordingScenarioContext, value: int) -> None:
    ctx.host.record(value)


@then("the host is a metric")
def step_host_is_metric(ctx: RecordingScenarioContext) -> None:
    assert is_metric(ctx.host)


@then(parsers.parse("the host's current value is {value:d}"))
def step_host_value(ctx: RecordingScenarioContext, value: int) -> None:
    assert ctx.host.value_of() == value


@then("the object is not a metric")
def step_not_metric(ctx: RecordingScenarioContext) -> None:
    assert not is_metric(ctx.host)
