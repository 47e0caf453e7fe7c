"""Benchmark descriptors and the caller-owned registry that orders them."""

from typing import Any, Callable, Iterator

from tickbench.bench.counter import IterationCounter
from tickbench.bench.result import BenchmarkResult
from tickbench.timer.clock import ClockSource, perf_counter_clock

Workload = Callable[[IterationCounter], None]


class Benchmark:
    """A named workload plus the fields the runner accumulates for it.

    Args:
        name: Identifier used in reports.
        fn: Workload taking an ``IterationCounter``.
        clock: Clock the workload is timed with.
        arg: Opaque payload exposed to the workload as ``counter.arg``.
    """

    __slots__ = (
        "name",
        "fn",
        "clock",
        "arg",
        "elapsed_ns",
        "elapsed_err",
        "iters_total",
        "iters_complete",
    )

    def __init__(
        self,
        name: str,
        fn: Workload,
        clock: ClockSource,
        arg: Any = None,
    ) -> None:
        if not callable(fn):
            raise TypeError(f"Invalid workload for {name!r}; expected a callable")
        self.name = name
        self.fn = fn
        self.clock = clock
        self.arg = arg
        self.reset()

    def reset(self) -> None:
        self.elapsed_ns = 0.0
        self.elapsed_err = 0.0
        self.iters_total = 0
        self.iters_complete = 0

    @property
    def per_iter(self) -> float:
        if self.iters_complete == 0:
            return 0.0
        return self.elapsed_ns / self.iters_complete

    def result(self, round_index: int = 0) -> BenchmarkResult:
        return BenchmarkResult(
            name=self.name,
            iters_total=self.iters_total,
            iters_complete=self.iters_complete,
            elapsed_ns=float(self.elapsed_ns),
            elapsed_err=float(self.elapsed_err),
            round_index=round_index,
        )

    def __repr__(self) -> str:
        return f"Benchmark(name={self.name!r}, clock={self.clock.name!r})"


class BenchmarkRegistry:
    """Ordered, append-only collection of benchmarks.

    Benchmarks run in registration order. Once a suite starts the registry
    is sealed and further registration raises ``RuntimeError``.

    Args:
        clock: Clock given to benchmarks registered without one.
            Defaults to a fresh ``perf_counter`` clock.
    """

    def __init__(self, clock: ClockSource | None = None) -> None:
        self._clock = clock if clock is not None else perf_counter_clock()
        self._benchmarks: list[Benchmark] = []
        self._names: set[str] = set()
        self._sealed = False

    @property
    def clock(self) -> ClockSource:
        return self._clock

    @property
    def sealed(self) -> bool:
        return self._sealed

    def seal(self) -> None:
        self._sealed = True

    def register(
        self,
        fn: Workload,
        name: str | None = None,
        arg: Any = None,
        clock: ClockSource | None = None,
    ) -> Benchmark:
        """Append a benchmark.

        Raises:
            RuntimeError: If the registry is sealed.
            ValueError: If the name is already taken.
        """
        if self._sealed:
            raise RuntimeError("Cannot register benchmarks after the suite has started")
        name = name if name is not None else fn.__name__
        if name in self._names:
            raise ValueError(f"Duplicate benchmark name {name!r}")

        bench = Benchmark(
            name=name,
            fn=fn,
            clock=clock if clock is not None else self._clock,
            arg=arg,
        )
        self._benchmarks.append(bench)
        self._names.add(name)
        return bench

    def bench(
        self,
        name: str | None = None,
        arg: Any = None,
        clock: ClockSource | None = None,
    ) -> Callable[[Workload], Workload]:
        """Decorator form of ``register``; returns the workload unchanged."""

        def decorator(fn: Workload) -> Workload:
            self.register(fn, name=name, arg=arg, clock=clock)
            return fn

        return decorator

    def get(self, name: str) -> Benchmark | None:
        for bench in self._benchmarks:
            if bench.name == name:
                return bench
        return None

    def __iter__(self) -> Iterator[Benchmark]:
        return iter(self._benchmarks)

    def __len__(self) -> int:
        return len(self._benchmarks)

    def __getitem__(self, index: int) -> Benchmark:
        return self._benchmarks[index]
