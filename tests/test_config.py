"""
SweepConfig overrides and stopping condition.
"""
from pathlib import Path

import pytest

from alphabet_sweep.config import SweepConfig
from alphabet_sweep.search import SearchState


def test_from_overrides_ignores_none():
    config = SweepConfig.from_overrides(output_dir=Path("out"), seed=None)
    assert config.output_dir == Path("out")
    assert config.seed is None
    assert config.stats_dir == Path("out") / "stats"
    assert config.report_path == Path("out") / "stats" / "sweep_report.json"


def test_ensure_dirs(tmp_path):
    config = SweepConfig(output_dir=tmp_path / "o")
    config.ensure_dirs()
    assert config.stats_dir.is_dir()
    assert config.plots_dir.is_dir()


def test_stop_condition_requires_a_limit():
    config = SweepConfig(max_iterations=None)
    with pytest.raises(ValueError):
        config.stop_condition()


def test_stop_condition_combines_limits():
    config = SweepConfig(max_iterations=10, target_score=4)
    stop = config.stop_condition()
    state = SearchState.start(range(26))
    assert not stop(state)
    state.global_best_score = 4
    assert stop(state)
