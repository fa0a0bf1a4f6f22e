"""Game state and player movement on a validated map."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from solong.mapcheck import COLLECTIBLE, EXIT, FLOOR, PLAYER, WALL, GameMap

KEY_ESC = 65307
KEY_W = 119
KEY_A = 97
KEY_S = 115
KEY_D = 100


class Direction(Enum):
    """A step on the grid as an ``(dx, dy)`` offset."""

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]


_KEYS = {
    KEY_W: Direction.UP,
    KEY_S: Direction.DOWN,
    KEY_A: Direction.LEFT,
    KEY_D: Direction.RIGHT,
}


def key_to_direction(keysym: int) -> Direction | None:
    """Map a W/A/S/D key symbol to a direction, or None for any other key."""
    return _KEYS.get(keysym)


@dataclass(frozen=True)
class MoveResult:
    """What a move did.

    ``old`` and ``new`` are the player's positions before and after. When the
    move was blocked both are the same and ``moved`` is false.
    """

    moved: bool
    old: tuple[int, int]
    new: tuple[int, int]
    moves: int
    collected: bool = False
    exit_opened: bool = False
    won: bool = False


@dataclass
class Game:
    """A running game: the grid, the player and the counters."""

    grid: list[list[str]]
    player: tuple[int, int]
    exit: tuple[int, int]
    collectibles: int
    moves: int = 0
    facing_right: bool = True
    finished: bool = field(default=False)

    @classmethod
    def from_map(cls, game_map: GameMap) -> Game:
        """Start a game on a copy of a validated map."""
        return cls(
            grid=[list(row) for row in game_map.grid],
            player=game_map.player,
            exit=game_map.exit,
            collectibles=game_map.collectibles,
        )

    def _tile(self, x: int, y: int) -> str:
        if 0 <= y < len(self.grid) and 0 <= x < len(self.grid[y]):
            return self.grid[y][x]
        return WALL

    def move(self, direction: Direction) -> MoveResult:
        """Try to step the player one tile; walls and a closed exit block it."""
        old = self.player
        if self.finished:
            return MoveResult(False, old, old, self.moves)
        x, y = old[0] + direction.dx, old[1] + direction.dy
        target = self._tile(x, y)
        if target == WALL or (target == EXIT and self.collectibles != 0):
            return MoveResult(False, old, old, self.moves)

        self.grid[old[1]][old[0]] = FLOOR
        self.player = (x, y)
        if direction is Direction.LEFT:
            self.facing_right = False
        elif direction is Direction.RIGHT:
            self.facing_right = True

        if target == EXIT:
            self.moves += 1
            self.finished = True
            return MoveResult(True, old, self.player, self.moves, won=True)

        collected = target == COLLECTIBLE
        exit_opened = False
        if collected:
            self.collectibles -= 1
            exit_opened = self.collectibles == 0
        self.grid[y][x] = PLAYER
        self.moves += 1
        return MoveResult(
            True,
            old,
            self.player,
            self.moves,
            collected=collected,
            exit_opened=exit_opened,
        )

    def status_text(self) -> tuple[str, str]:
        """The two status lines: moves made and collectibles left."""
        return (f"Movimentos: {self.moves}", f"Coletaveis :{self.collectibles}")