from typing import List

from maze_quest.core.geometry import Locator
from maze_quest.core.grid import Direction, MazeGraph

# Junction glyph keyed by its neighbours: up, left, down, right
CORNERS = {
    "    ": ' ',
    "│   ": '╵',
    "  │ ": '╷',
    "│ │ ": '│',
    " ─  ": '╴',
    "   ─": '╶',
    " ─ ─": '─',
    "  │─": '┌',
    "│  ─": '└',
    " ─│ ": '┐',
    "│─  ": '┘',
    "│─│ ": '┤',
    "│ │─": '├',
    " ─│─": '┬',
    "│─│─": '┼',
    "│─ ─": '┴',
}


def draw_board(maze: MazeGraph, locator: Locator = None) -> List[List[str]]:
    """
    Returns the maze as a row-major matrix of box-drawing characters.
    Every wall between two cells is drawn; boundaries that movements()
    reports as open are blanked and the junctions around them re-drawn.
    """
    if locator is None:
        locator = maze.locator()
    cw, ch = locator.cell_width, locator.cell_height
    bw = maze.width * cw + 1
    bh = maze.height * ch + 1
    board = [[' '] * bw for _ in range(bh)]

    def row(r: List[str], start: str, end: str, join: str, pad: str):
        r[0] = start
        for c in range(maze.width):
            for k in range(1, cw):
                r[c * cw + k] = pad
            if c < maze.width - 1:
                r[(c + 1) * cw] = join
        r[bw - 1] = end

    # Full grid
    row(board[0], '┌', '┐', '┬', '─')
    for i in range(maze.height):
        base = i * ch
        for k in range(1, ch):
            row(board[base + k], '│', '│', '│', ' ')
        row(board[base + ch], '├', '┤', '┼', '─')
    row(board[bh - 1], '└', '┘', '┴', '─')

    # Knock out open boundaries
    for c in range(maze.size):
        p = maze.cell_to_pos(c)
        box = locator.cell_box(p)
        moves = maze.movements(p)
        if Direction.LEFT in moves:
            for rw in range(box.top, box.bottom + 1):
                board[rw][box.left] = ' '
        if Direction.RIGHT in moves:
            for rw in range(box.top, box.bottom + 1):
                board[rw][box.right] = ' '
        if Direction.UP in moves:
            for cl in range(box.left, box.right + 1):
                board[box.top][cl] = ' '
        if Direction.DOWN in moves:
            for cl in range(box.left, box.right + 1):
                board[box.bottom][cl] = ' '

    # Fix junctions
    for i in range(0, bh, ch):
        for j in range(0, bw, cw):
            if board[i][j] != ' ':
                continue
            up = board[i - 1][j] if i > 0 else ' '
            left = board[i][j - 1] if j > 0 else ' '
            down = board[i + 1][j] if i < bh - 1 else ' '
            right = board[i][j + 1] if j < bw - 1 else ' '
            board[i][j] = CORNERS.get(up + left + down + right, '*')

    return board


def render_text(maze: MazeGraph, locator: Locator = None) -> str:
    return "\n".join("".join(r) for r in draw_board(maze, locator))
