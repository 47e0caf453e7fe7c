"""Microbenchmarks of a few builtin container operations.

Usage:
    python benchmarks/bench_builtins.py
    python benchmarks/bench_builtins.py -t -e -r 3 --json results.json
"""

from collections import deque

import numpy as np

from tickbench import BenchmarkRegistry
from tickbench.bench.cli import main

registry = BenchmarkRegistry()


@registry.bench("dict-get", arg={"bid": 1.0, "ask": 1.5})
def dict_get(counter):
    quotes = counter.arg
    while counter.step():
        quotes.get("bid")


@registry.bench("list-append", arg=[])
def list_append(counter):
    values = counter.arg
    values.clear()
    append = values.append
    while counter.step():
        append(1.0)


@registry.bench("deque-rotate", arg=deque(range(64)))
def deque_rotate(counter):
    window = counter.arg
    while counter.step():
        window.rotate(1)


@registry.bench("np-scalar-add", arg=np.float64(1.5))
def np_scalar_add(counter):
    x = counter.arg
    while counter.step():
        x + x


@registry.bench("np-sum-64", arg=np.arange(64, dtype=np.float64))
def np_sum_64(counter):
    values = counter.arg
    while counter.step():
        values.sum()


@registry.bench("batched-str-join", arg=["a"] * 16)
def batched_str_join(counter):
    # Four joins per step; iteration counts are in joins.
    parts = counter.arg
    join = "".join
    while counter.step(4):
        join(parts)
        join(parts)
        join(parts)
        join(parts)


if __name__ == "__main__":
    raise SystemExit(main(registry, description="Builtin container microbenchmarks"))
