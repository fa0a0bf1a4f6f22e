"""The playable game: window, textures, input handling and the command entry points."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Sequence

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pygame  # noqa: E402

from solong.game import KEY_ESC, Game, key_to_direction  # noqa: E402
from solong.mapcheck import (  # noqa: E402
    COLLECTIBLE,
    EXIT,
    FLOOR,
    PLAYER,
    WALL,
    MapError,
    check_extension,
    load_map,
)
from solong.xpm import XpmError, XpmImage, load_xpm  # noqa: E402

TILE_SIZE = 64
TEXTURE_DIR = Path("./assets/textures")
WINDOW_TITLE = "Game"
STATUS_COLOR = (0xFF, 0xFF, 0xFF)

_REQUIRED = ("wall", "floor", "player_right")
_FILES = {
    "wall": "wall.xpm",
    "floor": "floor.xpm",
    "player_right": "player_right.xpm",
    "player_left": "player_left.xpm",
    "collectible": "collectible.xpm",
    "exit": "exit.xpm",
    "exit_open": "exit1.xpm",
}
_TILE_NAMES = {
    WALL: "wall",
    FLOOR: "floor",
    COLLECTIBLE: "collectible",
    EXIT: "exit",
}


@dataclass(frozen=True)
class Textures:
    """The images the game draws; optional ones are None when they failed to load."""

    wall: XpmImage
    floor: XpmImage
    player_right: XpmImage
    collectible: XpmImage | None = None
    exit: XpmImage | None = None
    player_left: XpmImage | None = None
    exit_open: XpmImage | None = None

    def by_name(self) -> dict[str, XpmImage]:
        """The loaded images keyed by field name."""
        found = {f.name: getattr(self, f.name) for f in fields(self)}
        return {name: image for name, image in found.items() if image is not None}


def load_textures(directory: str | os.PathLike[str], bonus: bool = False) -> Textures:
    """Load the game textures from ``directory``.

    Wall, floor and right-facing player images are required, as is the
    left-facing player in the bonus game; a missing one raises XpmError.
    """
    base = Path(directory)
    wanted = ["wall", "floor", "player_right", "collectible", "exit"]
    required = set(_REQUIRED)
    if bonus:
        wanted += ["player_left", "exit_open"]
        required.add("player_left")
    images: dict[str, XpmImage] = {}
    for name in wanted:
        try:
            images[name] = load_xpm(base / _FILES[name])
        except XpmError:
            if name in required:
                raise
    return Textures(**images)


def tile_sprite(tile: str, facing_right: bool = True) -> str | None:
    """Name the texture drawn for a map tile, or None for a tile with no image."""
    if tile == PLAYER:
        return "player_right" if facing_right else "player_left"
    return _TILE_NAMES.get(tile)


def _surface(image: XpmImage) -> pygame.Surface:
    data = image.to_rgba_bytes()
    return pygame.image.frombuffer(data, (image.width, image.height), "RGBA").copy()


class _Screen:
    """Draws the game state onto the window."""

    def __init__(self, window: pygame.Surface, textures: Textures, bonus: bool):
        self.window = window
        self.bonus = bonus
        self.sprites = {name: _surface(img) for name, img in textures.by_name().items()}
        self.font = pygame.font.Font(None, 18) if bonus else None

    def blit(self, name: str | None, x: int, y: int) -> None:
        sprite = self.sprites.get(name) if name else None
        if sprite is not None:
            self.window.blit(sprite, (x * TILE_SIZE, y * TILE_SIZE))

    def render_map(self, game: Game) -> None:
        for y, row in enumerate(game.grid):
            for x, tile in enumerate(row):
                self.blit(tile_sprite(tile, True), x, y)

    def _text(self, text: str, x: int, baseline: int) -> None:
        surface = self.font.render(text, True, STATUS_COLOR)
        self.window.blit(surface, (x, baseline - self.font.get_ascent()))

    def render_status(self, game: Game) -> None:
        if self.font is None:
            return
        wall = self.sprites.get("wall")
        if wall is not None:
            self.window.blit(wall, (TILE_SIZE, 0))
        self._text("Movimentos: ", 10, 20)
        self._text(str(game.moves), 80, 20)
        self._text("Coletaveis :", 10, 40)
        self._text(str(game.collectibles), 85, 40)


def _keysym(key: int) -> int:
    return KEY_ESC if key == pygame.K_ESCAPE else key


def _play(game: Game, width: int, height: int, bonus: bool) -> int:
    window = pygame.display.set_mode((width * TILE_SIZE, height * TILE_SIZE))
    pygame.display.set_caption(WINDOW_TITLE)
    print("Welcome to So Long!")
    try:
        textures = load_textures(TEXTURE_DIR, bonus)
    except XpmError:
        print("Failed loading the images ...")
        return 1
    screen = _Screen(window, textures, bonus)
    screen.render_map(game)
    screen.render_status(game)
    pygame.display.flip()

    while True:
        event = pygame.event.wait()
        if event.type == pygame.QUIT:
            return 0
        if event.type != pygame.KEYDOWN:
            continue
        keysym = _keysym(event.key)
        if keysym == KEY_ESC:
            return 0
        direction = key_to_direction(keysym)
        if direction is None:
            continue
        result = game.move(direction)
        if not result.moved:
            continue
        screen.blit("floor", *result.old)
        if result.won:
            print(f"Player Moves: {result.moves}\nYou Win!")
            return 0
        if bonus and result.exit_opened:
            screen.blit("exit_open", *game.exit)
        facing = game.facing_right if bonus else True
        screen.blit(tile_sprite(PLAYER, facing), *result.new)
        screen.render_status(game)
        pygame.display.flip()
        print(f"Player Moves: {result.moves}")


def run(path: str | os.PathLike[str], bonus: bool = False) -> int:
    """Validate the map at ``path`` and play it in a window.

    An invalid map is reported on standard output and gives 0, as does a
    finished or closed game; failing to load the textures gives 1.
    """
    try:
        game_map = load_map(path)
    except MapError as exc:
        print(f"Error\n{exc}")
        return 0
    print(f"collectible: {game_map.collectibles}")
    game = Game.from_map(game_map)
    pygame.init()
    try:
        return _play(game, game_map.width, game_map.height, bonus)
    finally:
        pygame.quit()


def _fail(message: str) -> int:
    sys.stdout.write(f"ERROR:{message}")
    sys.stdout.flush()
    return 1


def _launch(argv: Sequence[str] | None, bonus: bool) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 1:
        return _fail("Error\nInvalid Number of Arguments")
    if not check_extension(args[0]):
        return _fail("Error\nInvalid file extension")
    return run(args[0], bonus)


def main(argv: Sequence[str] | None = None) -> int:
    """Play the standard game on the map named by the single argument."""
    return _launch(argv, bonus=False)


def bonus_main(argv: Sequence[str] | None = None) -> int:
    """Play the bonus game, with status text and a left-facing player."""
    return _launch(argv, bonus=True)