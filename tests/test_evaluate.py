import csv

import pytest

from wavearena.evaluate import evaluate_autopilot, compare_with_random


def test_autopilot_evaluation_writes_csv(tmp_path):
    path = tmp_path / "runs" / "autopilot.csv"
    summary = evaluate_autopilot(n_episodes=2, max_steps=600, seed=0, csv_path=str(path), verbose=0)
    assert summary["mean_wave"] >= 1
    assert 0.0 <= summary["survival_rate"] <= 1.0

    with open(path) as f:
        rows = list(csv.DictReader(f))
    assert len(rows) == 2
    assert rows[0]["seed"] == "0"


def test_melee_profile_has_no_autopilot():
    with pytest.raises(ValueError):
        evaluate_autopilot(profile="melee", n_episodes=1, max_steps=10, verbose=0)


def test_random_baseline_runs():
    summary = compare_with_random(n_episodes=1, max_steps=200, seed=0, verbose=0)
    assert summary["mean_ticks"] <= 200
