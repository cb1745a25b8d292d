import argparse
import logging
import os
import shutil
import sys
from typing import List, Tuple

# Ensure project root is in path so we can import 'maze_quest' package
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from maze_quest.core.errors import DifficultyParseError, MazeError
from maze_quest.core.grid import Difficulty, Direction

MOVE_CODES = {'l': Direction.LEFT, 'r': Direction.RIGHT, 'u': Direction.UP, 'd': Direction.DOWN}


def setup_logging(verbose: bool):
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )


def positive_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got '{text}'")
    if value <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return value


def difficulty_arg(text: str) -> Difficulty:
    try:
        return Difficulty.parse(text)
    except DifficultyParseError as e:
        raise argparse.ArgumentTypeError(str(e))


def parse_moves(script: str) -> List[Direction]:
    """
    Reads a move script: single letters (L/R/U/D) or full
    direction names, separated by whitespace or commas or run together.
    """
    moves = []
    for token in script.replace(',', ' ').split():
        name = token.lower()
        if name in ('left', 'right', 'up', 'down'):
            moves.append(Direction(name))
            continue
        for ch in name:
            if ch not in MOVE_CODES:
                raise ValueError(f"Unknown move '{ch}' in '{token}'")
            moves.append(MOVE_CODES[ch])
    return moves


def terminal_board_size():
    """Largest maze whose text board fits the terminal, at least 5x5."""
    cols, rows = shutil.get_terminal_size()
    return max(5, cols // 4), max(5, (rows // 2) - 1)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Maze Quest: generate and walk random mazes")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Generate Command
    gen_parser = subparsers.add_parser("generate", help="Generate a maze and print it")
    gen_parser.add_argument("--width", type=positive_int, help="Maze Width (default: fit terminal)")
    gen_parser.add_argument("--height", type=positive_int, help="Maze Height (default: fit terminal)")
    gen_parser.add_argument("--difficulty", type=difficulty_arg, default=Difficulty.HARD, help="normal or hard")
    gen_parser.add_argument("--seed", type=int, default=None, help="Random Seed")
    gen_parser.add_argument("--cell-width", type=int, default=4, help="Board columns per cell")
    gen_parser.add_argument("--cell-height", type=int, default=2, help="Board rows per cell")
    gen_parser.add_argument("--out", type=str, help="Save the maze as a snapshot file")
    gen_parser.add_argument("--quiet", action="store_true", help="Do not print the board")

    # Play Command
    play_parser = subparsers.add_parser("play", help="Play in a window")
    play_parser.add_argument("--width", type=positive_int, default=20, help="Maze Width")
    play_parser.add_argument("--height", type=positive_int, default=15, help="Maze Height")
    play_parser.add_argument("--difficulty", type=difficulty_arg, default=Difficulty.HARD, help="normal or hard")
    play_parser.add_argument("--seed", type=int, default=None, help="Random Seed")
    play_parser.add_argument("--restore", type=str, help="Resume a saved snapshot")
    play_parser.add_argument("--save-path", type=str, default="maze_quest.save", help="Where F5 saves the game")
    play_parser.add_argument("--record", action="store_true", help="Record gameplay video")

    # Replay Command
    replay_parser = subparsers.add_parser("replay", help="Apply a move script to a maze")
    replay_parser.add_argument("moves", help="Move script, e.g. 'RDRDRDDR' or 'right,down'")
    replay_parser.add_argument("--restore", type=str, help="Snapshot to start from (default: new maze)")
    replay_parser.add_argument("--width", type=positive_int, default=10, help="Maze Width")
    replay_parser.add_argument("--height", type=positive_int, default=10, help="Maze Height")
    replay_parser.add_argument("--difficulty", type=difficulty_arg, default=Difficulty.HARD, help="normal or hard")
    replay_parser.add_argument("--seed", type=int, default=None, help="Random Seed")
    replay_parser.add_argument("--out", type=str, help="Save the resulting session")

    # Stats Command
    stats_parser = subparsers.add_parser("stats", help="Show statistics of a saved maze")
    stats_parser.add_argument("input_file", help="Path to snapshot file")

    return parser


def cell_size_from_meta(meta) -> Tuple[int, int]:
    """Cell size a saved game was played with, 4x2 when it was never stored."""
    size = meta.get("cell_width", 4), meta.get("cell_height", 2)
    if not all(isinstance(v, int) and v >= 2 for v in size):
        raise ValueError(f"Invalid cell size in snapshot: {size[0]}x{size[1]}")
    return size


def load_or_generate(args, logger):
    from maze_quest.core.grid import MazeGraph
    from maze_quest.io.serializer import SnapshotSerializer

    if getattr(args, "restore", None):
        logger.info(f"Restoring {args.restore}...")
        maze, navigator, meta = SnapshotSerializer.load(args.restore)
        logger.info(f"Loaded {maze.width}x{maze.height} maze. Meta: {meta}")
        return maze, navigator, meta

    logger.info(f"Generating {args.width}x{args.height} {args.difficulty} maze...")
    maze = MazeGraph.generate(args.width, args.height, args.difficulty, seed=args.seed)
    return maze, maze.navigator(), {"seed": args.seed}


def run_command(args, logger):
    if args.command == "generate":
        from maze_quest.core.complexity import MazeStats
        from maze_quest.core.grid import MazeGraph
        from maze_quest.viz.board import render_text

        tw, th = terminal_board_size()
        width = args.width or tw
        height = args.height or th
        logger.info(f"Generating {width}x{height} {args.difficulty} maze...")
        maze = MazeGraph.generate(width, height, args.difficulty, seed=args.seed)

        if not args.quiet:
            print(render_text(maze, maze.locator(args.cell_width, args.cell_height)))
        logger.debug(f"Stats: {MazeStats.calculate(maze)}")

        if args.out:
            logger.info(f"Saving maze to {args.out}...")
            from maze_quest.io.serializer import SnapshotSerializer
            meta = {"seed": args.seed}
            SnapshotSerializer.save(maze, maze.navigator(), args.out, meta=meta)
            logger.info("Save complete.")

    elif args.command == "play":
        from maze_quest.viz.renderer import Renderer
        from maze_quest.viz.recorder import default_recording_path

        maze, navigator, meta = load_or_generate(args, logger)
        cell_width, cell_height = cell_size_from_meta(meta)

        record_path = None
        if args.record:
            record_path = default_recording_path(f"play_{maze.width}x{maze.height}")
            logger.info(f"Recording video to {record_path}")

        renderer = Renderer(maze, navigator=navigator, seed=meta.get("seed"),
                            cell_width=cell_width, cell_height=cell_height,
                            record_path=record_path, save_path=args.save_path)

        renderer.init_window()
        renderer.run_loop()

    elif args.command == "replay":
        moves = parse_moves(args.moves)
        maze, navigator, meta = load_or_generate(args, logger)

        completed = navigator.moves(moves)
        logger.info(f"Applied {len(completed)} of {len(moves)} moves")
        print(f"Position: ({navigator.position.x}, {navigator.position.y})")
        print(f"Completed: {' '.join(d.value for d in completed)}")
        print("Exit reached!" if navigator.is_exit() else "Exit not reached.")

        if args.out:
            from maze_quest.io.serializer import SnapshotSerializer
            SnapshotSerializer.save(maze, navigator, args.out, meta=meta)
            logger.info(f"Saved session to {args.out}")

    elif args.command == "stats":
        from maze_quest.core.complexity import MazeStats
        from maze_quest.io.serializer import SnapshotSerializer

        maze, navigator, meta = SnapshotSerializer.load(args.input_file)
        stats = MazeStats.calculate(maze)
        print(f"{'STAT':<20} | {'VALUE':<10}")
        print("-" * 33)
        for name, value in stats.items():
            if isinstance(value, float):
                value = f"{value:.1f}"
            print(f"{name:<20} | {value:<10}")


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)
    logger = logging.getLogger("maze_quest")

    if args.command is None:
        parser.print_help()
        return

    logger.info(f"Running command: {args.command}")
    try:
        run_command(args, logger)
    except (MazeError, ValueError, OSError) as e:
        logger.error(f"{args.command} failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
