"""
Performance Benchmark
=====================

Measures headless tick throughput and frame rendering cost.

Usage:
    python -m tools.benchmark_speed [--ticks N] [--jump-prob P] [--quick]
"""

from __future__ import annotations

import argparse
import sys
import time
import numpy as np

from flappy_arcade.flappy_core.config_loader import load_config
from flappy_arcade.flappy_core.game import CoreGame
from flappy_arcade.flappy_core.render_solid import SolidRenderer


def _drive(game: CoreGame, rng: np.random.Generator, jump_prob: float) -> bool:
    """
    Advance one frame with random flaps.

    Returns:
        True if the session terminated this frame.
    """
    if rng.random() < jump_prob:
        game.jump()
    result = game.tick()
    if result.terminated:
        game.restart()
        return True
    return False


def benchmark_core_game(
    num_ticks: int = 10000,
    jump_prob: float = 0.06,
    seed: int = 42
) -> dict:
    """
    Benchmark raw CoreGame tick performance.

    Args:
        num_ticks: Number of ticks to run.
        jump_prob: Chance of a flap on each tick.
        seed: Random seed for gaps and flaps.

    Returns:
        Dict with timing results.
    """
    config = load_config()
    game = CoreGame(config=config, seed=seed)
    rng = np.random.default_rng(seed)

    # Warmup
    game.start()
    for _ in range(100):
        _drive(game, rng, jump_prob)

    # Benchmark
    game = CoreGame(config=config, seed=seed)
    game.start()
    sessions = 1
    scores = []
    start = time.perf_counter()

    for _ in range(num_ticks):
        score = game.score
        if _drive(game, rng, jump_prob):
            scores.append(score)
            sessions += 1

    elapsed = time.perf_counter() - start

    return {
        "mode": "core_game",
        "num_ticks": num_ticks,
        "sessions": sessions,
        "mean_score": float(np.mean(scores)) if scores else 0.0,
        "elapsed_seconds": elapsed,
        "ticks_per_second": num_ticks / elapsed,
        "ms_per_tick": (elapsed * 1000) / num_ticks
    }


def benchmark_render(
    num_frames: int = 500,
    jump_prob: float = 0.06,
    seed: int = 42
) -> dict:
    """Benchmark tick plus SolidRenderer frame generation."""
    config = load_config()
    game = CoreGame(config=config, seed=seed)
    renderer = SolidRenderer(config)
    rng = np.random.default_rng(seed)

    game.start()
    start = time.perf_counter()

    for _ in range(num_frames):
        _drive(game, rng, jump_prob)
        renderer.render(game.snapshot())

    elapsed = time.perf_counter() - start

    return {
        "mode": "tick_and_render",
        "num_ticks": num_frames,
        "sessions": 0,
        "mean_score": 0.0,
        "elapsed_seconds": elapsed,
        "ticks_per_second": num_frames / elapsed,
        "ms_per_tick": (elapsed * 1000) / num_frames
    }


def run_all_benchmarks(ticks: int = 10000, jump_prob: float = 0.06) -> list:
    """Run comprehensive benchmarks."""
    results = []

    print("=" * 60)
    print("FLAPPY ARCADE PERFORMANCE BENCHMARK")
    print("=" * 60)
    print()

    print("Benchmarking CoreGame (headless)...")
    result = benchmark_core_game(num_ticks=ticks, jump_prob=jump_prob)
    results.append(result)
    print(f"  Ticks/sec: {result['ticks_per_second']:.1f}")
    print(f"  ms/tick:   {result['ms_per_tick']:.4f}")
    print(f"  Sessions:  {result['sessions']} (mean score {result['mean_score']:.2f})")
    print()

    print("Benchmarking CoreGame + SolidRenderer...")
    result = benchmark_render(num_frames=max(ticks // 20, 1), jump_prob=jump_prob)
    results.append(result)
    print(f"  Frames/sec: {result['ticks_per_second']:.1f}")
    print(f"  ms/frame:   {result['ms_per_tick']:.3f}")
    print()

    print("=" * 60)
    print("SUMMARY")
    print("=" * 60)
    print()
    print(f"{'Mode':<20} {'Ticks':>8} {'Ticks/s':>12} {'ms/tick':>10}")
    print("-" * 52)

    for r in results:
        print(f"{r['mode']:<20} {r['num_ticks']:>8} {r['ticks_per_second']:>12.1f} {r['ms_per_tick']:>10.4f}")

    return results


def main():
    parser = argparse.ArgumentParser(description="Benchmark Flappy Arcade performance")
    parser.add_argument("--ticks", type=int, default=10000, help="Ticks per benchmark")
    parser.add_argument("--jump-prob", type=float, default=0.06, help="Flap probability per tick")
    parser.add_argument("--quick", action="store_true", help="Quick benchmark (fewer ticks)")

    args = parser.parse_args()

    ticks = 1000 if args.quick else args.ticks

    run_all_benchmarks(ticks=ticks, jump_prob=args.jump_prob)

    return 0


if __name__ == "__main__":
    sys.exit(main())
