"""Record system CPU and memory usage into metrics.

Run with psutil installed:

    python examples/system_metrics.py
"""

import time

from metricrecorder import Metric, get_logger, init, mix

logger = get_logger(__name__)

try:
    import psutil
except ImportError:
    psutil = None  # type: ignore[assignment]


@mix
class MemoryGauge:
    """Host class that gains metric behavior through mix()."""

    def __init__(self, label: str) -> None:
        self.label = label
        init(self)


class MemoryReading:
    """Structured sample: reduces to percent used, keeps the raw figures."""

    def __init__(self, used: int, total: int) -> None:
        self.used = used
        self.total = total

    def value_of(self) -> float:
        return 100.0 * self.used / self.total


def collect(cpu: Metric, memory: MemoryGauge, rounds: int = 5) -> None:
    """Sample CPU and memory usage once per second."""
    for _ in range(rounds):
        cpu.record(psutil.cpu_percent(interval=None))
        mem = psutil.virtual_memory()
        memory.record(MemoryReading(used=mem.used, total=mem.total))
        time.sleep(1)


def main() -> None:
    if psutil is None:
        logger.warning("psutil is not installed; nothing to collect")
        return

    cpu = Metric()
    memory = MemoryGauge("system")
    collect(cpu, memory)

    for sample in memory.recorded():
        print(f"{sample.when:.0f} memory {sample.value:.1f}% of {sample.raw.total}")
    print(f"latest cpu {float(cpu):.1f}%, alert={cpu > 90}")


if __name__ == "__main__":
    main()
