import argparse
import time

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.patches import Circle
import numpy as np
from tqdm import tqdm

from putt_config import load_config
from putt_env import PuttingEnv
from putt_logging import setup_logging


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description='Play random putts on the putting green and report statistics')
    parser.add_argument('--episodes', type=int, default=20, help='Number of episodes to play')
    parser.add_argument('--seed', type=int, default=None, help='Random seed')
    parser.add_argument('--render', action='store_true', help='Render the environment')
    parser.add_argument('--delay', type=float, default=0.0, help='Delay between putts when rendering (seconds)')
    parser.add_argument('--plot', type=str, default=None, help='Save the last episode trajectory to this image')
    parser.add_argument('--config', type=str, default=None, help='Path to a JSON config file')
    parser.add_argument('--log-level', type=str, default='WARNING', help='Logging level')
    return parser.parse_args(argv)


def plot_trajectory(env, path):
    """
    Plot the ball path of the current episode over the field, with the hole.
    """
    points = np.array(env.trajectory)
    state = env.state

    fig, ax = plt.subplots(figsize=(5, 7.5))
    ax.set_facecolor((45 / 255, 138 / 255, 78 / 255))
    ax.plot(points[:, 0], points[:, 1], color='white', linewidth=1)
    ax.scatter(points[0, 0], points[0, 1], color='blue', s=20, label='Start')

    hole = Circle((state.hole.x, state.hole.y), state.hole.radius, fill=True, color='black')
    ax.add_patch(hole)

    # Field coordinates grow downwards
    ax.set_xlim(0, state.width)
    ax.set_ylim(state.height, 0)
    ax.set_aspect('equal')
    ax.set_title(f"Ball path ({state.strokes} putts)")
    ax.set_xlabel('X position')
    ax.set_ylabel('Y position')
    ax.legend()

    plt.tight_layout()
    plt.savefig(path)
    plt.close(fig)


def evaluate_random_putts(env, num_episodes=20, seed=None, render=False, delay=0.0):
    """
    Play episodes with uniformly random putts and return summary statistics.
    """
    rewards = []
    successes = 0
    shots_to_hole = []
    min_distances = []

    env.action_space.seed(seed)
    for episode in tqdm(range(num_episodes)):
        obs, info = env.reset(seed=None if seed is None else seed + episode)
        done = False
        episode_reward = 0.0
        min_distance = info["distance_to_hole"]

        while not done:
            action = env.action_space.sample()
            obs, reward, terminated, truncated, info = env.step(action)
            done = terminated or truncated

            episode_reward += reward
            min_distance = min(min_distance, info["distance_to_hole"])

            if render:
                time.sleep(delay)

        rewards.append(episode_reward)
        min_distances.append(min_distance)
        if info["in_hole"]:
            successes += 1
            shots_to_hole.append(info["shots"])

    return {
        "success_rate": successes / num_episodes,
        "avg_reward": sum(rewards) / num_episodes,
        "avg_shots": sum(shots_to_hole) / successes if successes > 0 else float('inf'),
        "avg_min_distance": sum(min_distances) / num_episodes,
    }


def main(argv=None):
    args = parse_args(argv)
    setup_logging(args.log_level)

    render_mode = "human" if args.render else None
    env = PuttingEnv(render_mode=render_mode, config=load_config(args.config))

    try:
        print(f"\nPlaying {args.episodes} episodes of random putts...")
        results = evaluate_random_putts(env, num_episodes=args.episodes, seed=args.seed,
                                        render=args.render, delay=args.delay)

        print("\n===== Evaluation Results =====")
        print(f"Success rate: {results['success_rate']:.2f}")
        print(f"Average reward: {results['avg_reward']:.2f}")
        if results['success_rate'] > 0:
            print(f"Average shots for success: {results['avg_shots']:.2f}")
        print(f"Average minimum distance to hole: {results['avg_min_distance']:.2f}")

        if args.plot:
            plot_trajectory(env, args.plot)
            print(f"Trajectory saved to {args.plot}")
    finally:
        env.close()

    return results


if __name__ == "__main__":
    main()
