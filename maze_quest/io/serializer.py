import io
import json
import struct
import zlib
from typing import Any, BinaryIO, Dict, Tuple

from maze_quest.core.grid import DIRECTIONS, Difficulty, MazeGraph, Position
from maze_quest.core.navigator import Navigator

NO_DIRECTION = 0xFF


class SnapshotSerializer:
    """
    Saves a game session (maze, difficulty, cursor position and move
    history) and restores it exactly.

    Format (little endian):
    - MAGIC (4 bytes)
    - VERSION (1 byte)
    - FLAGS (1 byte)
    - WIDTH (4 bytes)
    - HEIGHT (4 bytes)
    - META_LEN (2 bytes)
    - META_JSON (META_LEN bytes, always carries "difficulty")
    - DATA_LEN (4 bytes)
    - DATA (compressed or raw):
        WALL_COUNT (4) + WALL_COUNT * (A 4, B 4)
        POS_X (4) + POS_Y (4)
        HISTORY_LEN (4) + HISTORY_LEN * (X 4, Y 4, DIR 1)
    """
    MAGIC = b"MZQS"
    VERSION = 1

    # Flags
    FLAG_COMPRESSED = 1

    @staticmethod
    def save(maze: MazeGraph, navigator: Navigator, filepath: str,
             meta: Dict[str, Any] = None, compress=False):
        with open(filepath, "wb") as f:
            SnapshotSerializer.write(f, maze, navigator, meta=meta, compress=compress)

    @staticmethod
    def load(filepath: str) -> Tuple[MazeGraph, Navigator, Dict[str, Any]]:
        with open(filepath, "rb") as f:
            return SnapshotSerializer.read(f)

    @staticmethod
    def dumps(maze: MazeGraph, navigator: Navigator, meta: Dict[str, Any] = None,
              compress=False) -> bytes:
        buf = io.BytesIO()
        SnapshotSerializer.write(buf, maze, navigator, meta=meta, compress=compress)
        return buf.getvalue()

    @staticmethod
    def loads(blob: bytes) -> Tuple[MazeGraph, Navigator, Dict[str, Any]]:
        return SnapshotSerializer.read(io.BytesIO(blob))

    @staticmethod
    def write(f: BinaryIO, maze: MazeGraph, navigator: Navigator,
              meta: Dict[str, Any] = None, compress=False):
        if navigator.maze is not maze and navigator.maze != maze:
            raise ValueError("Navigator does not belong to this maze")

        meta = dict(meta or {})
        meta["difficulty"] = maze.difficulty.value

        flags = 0
        if compress:
            flags |= SnapshotSerializer.FLAG_COMPRESSED

        meta_bytes = json.dumps(meta).encode('utf-8')

        f.write(SnapshotSerializer.MAGIC)
        f.write(struct.pack("<B", SnapshotSerializer.VERSION))
        f.write(struct.pack("<B", flags))
        f.write(struct.pack("<II", maze.width, maze.height))
        f.write(struct.pack("<H", len(meta_bytes)))
        f.write(meta_bytes)

        data = SnapshotSerializer._pack_state(maze, navigator)
        if compress:
            data = zlib.compress(data)

        f.write(struct.pack("<I", len(data)))
        f.write(data)

    @staticmethod
    def read(f: BinaryIO) -> Tuple[MazeGraph, Navigator, Dict[str, Any]]:
        magic = f.read(4)
        if magic != SnapshotSerializer.MAGIC:
            raise ValueError("Invalid file format")

        try:
            version = struct.unpack("<B", f.read(1))[0]
            if version != SnapshotSerializer.VERSION:
                raise ValueError(f"Unsupported snapshot version {version}")
            flags = struct.unpack("<B", f.read(1))[0]
            width, height = struct.unpack("<II", f.read(8))
            if width <= 0 or height <= 0:
                raise ValueError(f"Invalid maze dimensions {width}x{height}")
            meta_len = struct.unpack("<H", f.read(2))[0]
            meta = json.loads(f.read(meta_len).decode('utf-8'))
            if not isinstance(meta, dict):
                raise ValueError("Snapshot metadata must be a JSON object")

            data_len = struct.unpack("<I", f.read(4))[0]
            data = f.read(data_len)
            if len(data) != data_len:
                raise ValueError("Truncated snapshot")
            if flags & SnapshotSerializer.FLAG_COMPRESSED:
                data = zlib.decompress(data)

            walls, position, history = SnapshotSerializer._unpack_state(data)
        except (struct.error, zlib.error, IndexError) as e:
            raise ValueError("Invalid file format") from e

        difficulty = Difficulty.parse(meta.get("difficulty", Difficulty.HARD.value))
        maze = MazeGraph.create(width, height, walls, difficulty)
        navigator = maze.navigator()
        navigator.restore(position, history)
        return maze, navigator, meta

    @staticmethod
    def _pack_state(maze: MazeGraph, navigator: Navigator) -> bytes:
        parts = [struct.pack("<I", len(maze.walls))]
        parts.extend(struct.pack("<II", a, b) for a, b in maze.walls)
        parts.append(struct.pack("<II", *navigator.position))

        history = navigator.history
        parts.append(struct.pack("<I", len(history)))
        for (x, y), d in history:
            code = NO_DIRECTION if d is None else DIRECTIONS.index(d)
            parts.append(struct.pack("<IIB", x, y, code))
        return b"".join(parts)

    @staticmethod
    def _unpack_state(data: bytes):
        offset = 0

        def take(fmt: str):
            nonlocal offset
            values = struct.unpack_from(fmt, data, offset)
            offset += struct.calcsize(fmt)
            return values

        wall_count = take("<I")[0]
        walls = [take("<II") for _ in range(wall_count)]
        position = Position(*take("<II"))

        history = []
        for _ in range(take("<I")[0]):
            x, y, code = take("<IIB")
            d = None if code == NO_DIRECTION else DIRECTIONS[code]
            history.append((Position(x, y), d))
        return walls, position, history
