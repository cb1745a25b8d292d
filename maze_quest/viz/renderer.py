import logging

import pygame

from maze_quest.core.grid import Direction, MazeGraph
from maze_quest.core.navigator import Navigator
from maze_quest.viz.recorder import VideoRecorder

logger = logging.getLogger(__name__)

KEY_BINDINGS = {
    pygame.K_LEFT: Direction.LEFT, pygame.K_a: Direction.LEFT, pygame.K_h: Direction.LEFT,
    pygame.K_DOWN: Direction.DOWN, pygame.K_s: Direction.DOWN, pygame.K_j: Direction.DOWN,
    pygame.K_UP: Direction.UP, pygame.K_w: Direction.UP, pygame.K_k: Direction.UP,
    pygame.K_RIGHT: Direction.RIGHT, pygame.K_d: Direction.RIGHT, pygame.K_l: Direction.RIGHT,
}


class Renderer:
    COLOR_BG = (10, 10, 10)
    COLOR_WALL = (200, 200, 200)
    COLOR_PATH = (60, 100, 160)  # Blue tint
    COLOR_PLAYER = (255, 215, 0)  # Gold
    COLOR_EXIT = (80, 200, 120)
    COLOR_TEXT = (255, 255, 255)

    HUD_HEIGHT = 70

    def __init__(self, maze: MazeGraph, navigator: Navigator = None, seed=None,
                 cell_width=4, cell_height=2, width=1280, height=720,
                 record_path=None, save_path="maze_quest.save"):
        self.seed = seed
        self.cell_width = cell_width
        self.cell_height = cell_height
        self.screen_width = width
        self.screen_height = height
        self.save_path = save_path
        self.set_maze(maze, navigator)

        self.recorder = VideoRecorder(active=record_path is not None, output_file=record_path)
        self.show_path = False

        self.scale = 1.0  # Pixels per board unit
        self.offset_x = 0.0
        self.offset_y = 0.0

        self.font = None
        self.running = True
        self.clock = None
        self.surface = None

    def set_maze(self, maze: MazeGraph, navigator: Navigator = None):
        self.maze = maze
        self.navigator = navigator if navigator is not None else maze.navigator()
        self.locator = maze.locator(self.cell_width, self.cell_height)

    def new_game(self):
        logger.info(f"Generating {self.maze.width}x{self.maze.height} {self.maze.difficulty} maze...")
        # A fixed seed would just rebuild the same maze
        maze = MazeGraph.generate(self.maze.width, self.maze.height, self.maze.difficulty)
        self.set_maze(maze)
        self.fit_to_screen()

    def save(self):
        from maze_quest.io.serializer import SnapshotSerializer
        meta = {"seed": self.seed, "cell_width": self.cell_width, "cell_height": self.cell_height}
        SnapshotSerializer.save(self.maze, self.navigator, self.save_path, meta=meta, compress=True)
        logger.info(f"Saved game to {self.save_path}")

    def fit_to_screen(self):
        """Scale and centre the board in the area above the HUD."""
        padding = 40
        board_w, board_h = self.locator.dimensions()
        available_w = self.screen_width - (padding * 2)
        available_h = self.screen_height - self.HUD_HEIGHT - (padding * 2)

        self.scale = max(1.0, min(available_w / board_w, available_h / board_h))

        self.offset_x = (self.screen_width - board_w * self.scale) / 2
        self.offset_y = self.HUD_HEIGHT + (self.screen_height - self.HUD_HEIGHT - board_h * self.scale) / 2

    def init_window(self):
        pygame.init()
        pygame.display.set_caption(f"Maze Quest - {self.maze.width}x{self.maze.height}")
        self.surface = pygame.display.set_mode((self.screen_width, self.screen_height), pygame.RESIZABLE)
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("Consolas", 16)
        self.fit_to_screen()

    def board_to_screen(self, bx, by):
        return int(bx * self.scale + self.offset_x), int(by * self.scale + self.offset_y)

    def handle_key(self, key):
        if key in KEY_BINDINGS:
            self.navigator.move(KEY_BINDINGS[key])
        elif key == pygame.K_r:
            self.navigator.reset()
        elif key == pygame.K_p:
            self.show_path = not self.show_path
        elif key == pygame.K_n:
            self.new_game()
        elif key == pygame.K_F5:
            self.save()
        elif key in (pygame.K_q, pygame.K_ESCAPE):
            self.running = False

    def handle_input(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.VIDEORESIZE:
                self.screen_width, self.screen_height = event.w, event.h
                self.fit_to_screen()
            elif event.type == pygame.KEYDOWN:
                self.handle_key(event.key)

    def draw_maze(self):
        self.surface.fill(self.COLOR_BG)
        maze = self.maze

        for c in range(maze.size):
            p = maze.cell_to_pos(c)
            box = self.locator.cell_box(p)
            moves = maze.movements(p)
            left, top = self.board_to_screen(box.left, box.top)
            right, bottom = self.board_to_screen(box.right, box.bottom)

            # Shared edges are drawn once, from the cell above / to the left
            if Direction.DOWN not in moves:
                pygame.draw.line(self.surface, self.COLOR_WALL, (left, bottom), (right, bottom), 2)
            if Direction.RIGHT not in moves:
                pygame.draw.line(self.surface, self.COLOR_WALL, (right, top), (right, bottom), 2)
            if p.y == 0 and Direction.UP not in moves:
                pygame.draw.line(self.surface, self.COLOR_WALL, (left, top), (right, top), 2)
            if p.x == 0 and Direction.LEFT not in moves:
                pygame.draw.line(self.surface, self.COLOR_WALL, (left, top), (left, bottom), 2)

        ex, ey = self.board_to_screen(*self.locator.exit())
        radius = max(3, int(self.scale * min(self.cell_width, self.cell_height) / 3))
        pygame.draw.circle(self.surface, self.COLOR_EXIT, (ex, ey), radius)
        lbl = self.font.render("Exit", True, self.COLOR_EXIT)
        self.surface.blit(lbl, (ex - lbl.get_width() // 2, ey + radius))

    def draw_path(self):
        if not (self.show_path or self.navigator.is_exit()):
            return
        points = [self.board_to_screen(*self.locator.locate(p)) for p, _ in self.navigator.history]
        if len(points) > 1:
            width = max(2, int(self.scale))
            pygame.draw.lines(self.surface, self.COLOR_PATH, False, points, width)

    def draw_player(self):
        px, py = self.board_to_screen(*self.locator.locate(self.navigator))
        radius = max(3, int(self.scale * min(self.cell_width, self.cell_height) / 3))
        pygame.draw.circle(self.surface, self.COLOR_PLAYER, (px, py), radius)

    def draw_hud(self):
        steps = len(self.navigator.history) - 1
        status = "Escaped!" if self.navigator.is_exit() else "Searching"
        info = [
            f"Size: {self.maze.width}x{self.maze.height}  Difficulty: {self.maze.difficulty}  Steps: {steps}  {status}",
            "arrows/wasd/hjkl: move, r: reset, p: path, n: new, F5: save, q: quit",
            "REC" if self.recorder.active else "",
        ]

        for i, text in enumerate(info):
            lbl = self.font.render(text, True, self.COLOR_TEXT)
            self.surface.blit(lbl, (10, 10 + i * 20))

    def run_loop(self):
        while self.running:
            self.handle_input()

            self.draw_maze()
            self.draw_path()
            self.draw_player()
            self.draw_hud()
            pygame.display.flip()

            if self.recorder.active:
                self.recorder.capture_frame(self.surface)

            self.clock.tick(60)

        self.recorder.stop()
        pygame.quit()
