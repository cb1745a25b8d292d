import sys
import os
import time

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from maze_quest.algo.kruskal import RandomizedKruskal
from maze_quest.core.complexity import MazeStats
from maze_quest.core.grid import Difficulty

def benchmark_size(width: int, height: int, runs: int = 3):
    print(f"\n--- Benchmarking {width}x{height} ({width*height:,} cells) ---")
    print(f"{'DIFFICULTY':<10} | {'TIME (s)':<10} | {'UNIONS':<8} | {'WALLS':<8} | {'DEAD ENDS %':<11} | {'REACHABLE %':<11}")
    print("-" * 75)

    for difficulty in Difficulty:
        total_time = 0.0
        for seed in range(runs):
            gen = RandomizedKruskal(width, height, difficulty, seed=seed)
            t0 = time.time()
            gen.run_all()
            total_time += time.time() - t0

        # Shape of the last run
        stats = MazeStats.calculate(gen.maze)
        print(f"{str(difficulty):<10} | {total_time / runs:<10.4f} | {gen.step_count:<8} | "
              f"{stats['walls']:<8} | {stats['dead_end_percent']:<11.1f} | {stats['reachable_percent']:<11.1f}")

def run_suite():
    sizes = [
        (10, 10),
        (50, 50),
        (100, 100),
        (250, 250),
    ]

    for w, h in sizes:
        benchmark_size(w, h)

if __name__ == "__main__":
    run_suite()
