from maze_quest.core.grid import MazeGraph


class MazeStats:
    @staticmethod
    def calculate(maze: MazeGraph):
        """
        Shape summary of a maze, counted from the open sides of each cell:
        dead ends have one exit, corridors two, intersections three or more.
        Cells with no exits at all are sealed pockets.
        """
        from maze_quest.algo.solvers import reachable_cells

        dead_ends = 0
        corridors = 0
        intersections = 0
        sealed = 0

        for c in range(maze.size):
            exits = len(maze.movements(maze.cell_to_pos(c)))
            if exits == 0: sealed += 1
            elif exits == 1: dead_ends += 1
            elif exits == 2: corridors += 1
            else: intersections += 1

        total = maze.size
        candidates = len(MazeGraph.candidate_walls(maze.width, maze.height))
        reachable = reachable_cells(maze)
        return {
            "walls": len(maze.walls),
            "removed_walls": candidates - len(maze.walls),
            "dead_ends": dead_ends,
            "corridors": corridors,
            "intersections": intersections,
            "sealed": sealed,
            "reachable": reachable,
            "dead_end_percent": (dead_ends / total) * 100 if total > 0 else 0,
            "reachable_percent": (reachable / total) * 100 if total > 0 else 0,
        }

    @staticmethod
    def is_perfect(maze: MazeGraph) -> bool:
        """True when every cell is reachable and no passage forms a loop."""
        stats = MazeStats.calculate(maze)
        return stats["reachable"] == maze.size and stats["removed_walls"] == maze.size - 1
