"""Tests for the benchmark command-line driver."""

import io

import pytest

from tickbench.bench import Benchmark, BenchmarkRegistry
from tickbench.bench.cli import BenchmarkCLI, main, runner_config_from_args
from tickbench.bench.reporting import suite_from_json
from tickbench.timer import Calibrator, SimulatedClock


@pytest.fixture
def simulated_registry(frozen_clock, make_workload):
    registry = BenchmarkRegistry(clock=frozen_clock)
    registry.register(make_workload(frozen_clock, 400), name="work")
    baseline = Benchmark("empty-loop", make_workload(frozen_clock, 100), frozen_clock)
    return registry, baseline


class TestBenchmarkCLI:
    """Argument parsing."""

    def test_defaults(self):
        args = BenchmarkCLI("bench").parse([])
        assert args.runs == 1
        assert not args.print_timers
        assert not args.print_empty
        assert args.json is None
        assert not args.verbose

    def test_short_switches(self):
        args = BenchmarkCLI("bench").parse(["-r", "3", "-t", "-e", "-v"])
        config = runner_config_from_args(args)
        assert config.num_runs == 3
        assert config.print_timers
        assert config.print_empty_loop_baseline

    def test_runs_accepts_hex(self):
        assert BenchmarkCLI("bench").parse(["--runs", "0x10"]).runs == 16

    @pytest.mark.parametrize("value", ["0", "-2", "many"])
    def test_invalid_runs(self, value):
        with pytest.raises(SystemExit):
            BenchmarkCLI("bench").parse(["-r", value])


class TestMain:
    """End-to-end runs through ``main``."""

    def test_success_prints_and_exports(self, simulated_registry, tmp_path):
        registry, baseline = simulated_registry
        stream = io.StringIO()
        out = tmp_path / "suite.json"

        code = main(
            registry,
            ["-t", "-e", "-r", "2", "--json", str(out)],
            baseline=baseline,
            stream=stream,
        )
        assert code == 0

        lines = stream.getvalue().splitlines()
        assert sum(line.startswith("[t] ") for line in lines) == 3
        assert sum("work" in line for line in lines) == 2
        assert any("empty-loop" in line for line in lines)

        suite = suite_from_json(out.read_bytes())
        assert suite.num_rounds == 2
        assert [r.name for r in suite.results] == ["work", "work"]
        assert suite.results[0].per_iter == pytest.approx(300.0)

    def test_calibration_failure_returns_one(self, monkeypatch, capsys, make_workload):
        monkeypatch.setattr(Calibrator, "calibrate", lambda self, clock: False)
        clock = SimulatedClock(step_ns=0)
        registry = BenchmarkRegistry(clock=clock)
        registry.register(make_workload(clock, 400), name="work")

        assert main(registry, [], stream=io.StringIO()) == 1
        assert "CalibrationError" in capsys.readouterr().err
