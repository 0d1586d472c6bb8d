import logging

from putt_config import DEFAULT_CONFIG
from putt_env import PuttingEnv
from evaluate_putts import evaluate_random_putts, main, plot_trajectory


def test_random_putts_statistics():
    env = PuttingEnv(config=dict(DEFAULT_CONFIG, window_width=432), max_shots=3)

    results = evaluate_random_putts(env, num_episodes=4, seed=1)

    assert 0.0 <= results["success_rate"] <= 1.0
    assert results["avg_min_distance"] >= 0
    assert set(results) == {"success_rate", "avg_reward", "avg_shots", "avg_min_distance"}


def test_plot_trajectory_writes_image(tmp_path):
    env = PuttingEnv()
    env.reset(seed=0)
    env.step(3)
    path = tmp_path / "path.png"

    plot_trajectory(env, str(path))

    assert path.exists()
    assert path.stat().st_size > 0


def test_main_runs_headless(tmp_path, capsys):
    plot = tmp_path / "last.png"

    results = main(["--episodes", "2", "--seed", "4", "--plot", str(plot)])

    out = capsys.readouterr().out
    assert "Evaluation Results" in out
    assert plot.exists()
    assert "success_rate" in results

    logging.getLogger("putting").handlers.clear()
