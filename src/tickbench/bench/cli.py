"""Command-line driver for a benchmark registry.

A benchmark script builds a registry and hands it to ``main``::

    registry = BenchmarkRegistry()

    @registry.bench("dict-get", arg={"a": 1})
    def dict_get(counter):
        d = counter.arg
        while counter.step():
            d.get("a")

    if __name__ == "__main__":
        raise SystemExit(main(registry))
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import TextIO

from tickbench.bench.config import RunnerConfig
from tickbench.bench.errors import BenchmarkError
from tickbench.bench.registry import Benchmark, BenchmarkRegistry
from tickbench.bench.reporting import BenchmarkReporter, suite_to_json
from tickbench.bench.runner import BenchmarkRunner
from tickbench.logging import Logger, LoggerConfig, LogLevel


def _positive_int(value: str) -> int:
    number = int(value, 0)
    if number <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive integer but got {value}")
    return number


class BenchmarkCLI:
    """Builder for benchmark command-line interfaces.

    Provides the common benchmark switches pre-configured; scripts may add
    their own arguments to ``parser`` before calling ``parse``.

    Args:
        description: Benchmark description for --help.
    """

    def __init__(self, description: str) -> None:
        self.parser = argparse.ArgumentParser(description=description)
        self._add_common_args()

    def _add_common_args(self) -> None:
        """Add the switches every benchmark driver understands."""
        self.parser.add_argument(
            "--runs",
            "-r",
            type=_positive_int,
            default=1,
            help="Number of runs for each benchmark (default: 1)",
        )
        self.parser.add_argument(
            "--print-timers",
            "-t",
            action="store_true",
            help="Print timers information",
        )
        self.parser.add_argument(
            "--print-empty",
            "-e",
            action="store_true",
            help="Print empty loop information",
        )
        self.parser.add_argument(
            "--json",
            type=Path,
            default=None,
            help="Also write the suite result as JSON to this path",
        )
        self.parser.add_argument(
            "--verbose",
            "-v",
            action="store_true",
            help="Log calibration and escalation details",
        )

    def parse(self, argv: list[str] | None = None) -> argparse.Namespace:
        """Parse command-line arguments.

        Returns:
            Parsed arguments namespace.
        """
        return self.parser.parse_args(argv)


def runner_config_from_args(args: argparse.Namespace) -> RunnerConfig:
    return RunnerConfig(
        num_runs=args.runs,
        print_timers=args.print_timers,
        print_empty_loop_baseline=args.print_empty,
    )


def main(
    registry: BenchmarkRegistry,
    argv: list[str] | None = None,
    description: str = "Run microbenchmarks",
    baseline: Benchmark | None = None,
    stream: TextIO | None = None,
) -> int:
    """Parse ``argv``, run the registry and print results to ``stream``.

    ``baseline`` replaces the default empty loop on the registry clock;
    ``stream`` defaults to stderr.

    Returns:
        Process exit code: 0 on success, 1 when a benchmark error occurred.
    """
    args = BenchmarkCLI(description).parse(argv)
    config = runner_config_from_args(args)
    logger = Logger(
        name="tickbench",
        config=LoggerConfig(base_level=LogLevel.DEBUG if args.verbose else LogLevel.WARNING),
    )
    runner = BenchmarkRunner(config=config, logger=logger)
    reporter = BenchmarkReporter(
        stream=stream,
        print_timers=config.print_timers,
        print_empty_loop_baseline=config.print_empty_loop_baseline,
    )

    try:
        suite = runner.run_suite(registry, baseline=baseline, observer=reporter)
    except BenchmarkError as exc:
        logger.error(f"{type(exc).__name__}: {exc}")
        return 1
    finally:
        logger.shutdown()

    if args.json is not None:
        args.json.write_bytes(suite_to_json(suite))
    return 0
