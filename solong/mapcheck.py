"""Loading and validating ``.ber`` map files.

A map is a rectangle of tiles: ``1`` wall, ``0`` floor, ``C`` collectible,
``E`` exit and ``P`` player. It must be closed by walls, hold exactly one
player, exactly one exit and at least one collectible, and the player must be
able to reach every collectible and the exit.
"""

from __future__ import annotations

import re
from collections import Counter
from dataclasses import dataclass
from os import PathLike
from typing import Iterable, Sequence

WALL = "1"
FLOOR = "0"
COLLECTIBLE = "C"
EXIT = "E"
PLAYER = "P"

_ALLOWED = frozenset("10CEP\n")
_EXTENSION = ".ber"
_LINES = re.compile(r"[^\n]*\n|[^\n]+\Z")


class MapError(ValueError):
    """Raised when a map file is missing or does not describe a playable map."""


@dataclass
class GameMap:
    """A validated map; ``grid`` rows are indexed ``grid[y][x]``."""

    grid: list[list[str]]
    width: int
    height: int
    player: tuple[int, int]
    exit: tuple[int, int]
    collectibles: int


def check_extension(path: str | PathLike[str]) -> bool:
    """Tell whether the first ``.ber`` run in the path ends the name exactly."""
    name = str(path)
    pos = 0
    while pos < len(name):
        matched = 0
        while (
            pos < len(name)
            and matched < len(_EXTENSION)
            and name[pos] == _EXTENSION[matched]
        ):
            pos += 1
            matched += 1
            at_end = pos == len(name)
            done = matched == len(_EXTENSION)
            if at_end and done:
                return True
            if at_end != done:
                return False
        pos += 1
    return False


def read_map(path: str | PathLike[str]) -> list[str]:
    """Read the map file into lines, each keeping its trailing newline."""
    try:
        with open(path, "rb") as handle:
            text = handle.read().decode("latin-1")
    except OSError as exc:
        raise MapError("Invalid map") from exc
    lines = _LINES.findall(text)
    if any(line.rstrip("\n") == "" for line in lines):
        raise MapError("Invalid map")
    return lines


def _check_objects(lines: Sequence[str]) -> Counter[str]:
    counts: Counter[str] = Counter()
    for line in lines:
        if not set(line) <= _ALLOWED:
            raise MapError("Invalid object in map")
        counts.update(line)
    return counts


def _check_rectangular(lines: Sequence[str]) -> None:
    # Every row but the last carries a newline; the last row must not.
    if len(lines) < 2:
        raise MapError("Map isn't rectangular")
    width = len(lines[0])
    if any(len(line) != width for line in lines[1:-1]) or len(lines[-1]) != width - 1:
        raise MapError("Map isn't rectangular")


def _closed_by_walls(rows: Sequence[str], width: int) -> bool:
    edges = rows[0][:width] + rows[-1][:width]
    sides = "".join(row[0] + row[width - 1] for row in rows)
    return all(tile == WALL for tile in edges + sides)


def _find(rows: Sequence[str], tile: str) -> tuple[int, int]:
    found = (0, 0)
    for y, row in enumerate(rows):
        for x, char in enumerate(row):
            if char == tile:
                found = (x, y)
    return found


def flood_fill(grid: Sequence[Sequence[str]], start: tuple[int, int]) -> tuple[int, int]:
    """Walk from ``start`` through non-wall tiles.

    Returns how many collectibles and how many exits were reached. Exits are
    counted but not walked through.
    """
    collectibles = exits = 0
    seen: set[tuple[int, int]] = set()
    stack = [start]
    while stack:
        x, y = stack.pop()
        if (x, y) in seen or not 0 <= y < len(grid) or not 0 <= x < len(grid[y]):
            continue
        tile = grid[y][x]
        if tile == WALL:
            continue
        seen.add((x, y))
        if tile == COLLECTIBLE:
            collectibles += 1
        if tile == EXIT:
            exits += 1
            continue
        stack.extend(((x + 1, y), (x - 1, y), (x, y + 1), (x, y - 1)))
    return collectibles, exits


def validate_map(lines: Iterable[str]) -> GameMap:
    """Check raw map lines and build a :class:`GameMap` from them."""
    lines = list(lines)
    counts = _check_objects(lines)
    _check_rectangular(lines)
    rows = [line[:-1] if line.endswith("\n") else line for line in lines]
    width = len(rows[-1])
    if counts[COLLECTIBLE] < 1:
        raise MapError("No collectibles")
    if counts[EXIT] != 1:
        raise MapError("No exit or many exits")
    if counts[PLAYER] != 1:
        raise MapError("No player or many players")
    if not _closed_by_walls(rows, width):
        raise MapError("Map isn't surrounded by walls")
    player = _find(rows, PLAYER)
    exit_pos = _find(rows, EXIT)
    reached, exits = flood_fill(rows, player)
    if exits != 1 or reached != counts[COLLECTIBLE]:
        raise MapError("Invalid Path")
    return GameMap(
        grid=[list(row) for row in rows],
        width=width,
        height=len(rows),
        player=player,
        exit=exit_pos,
        collectibles=counts[COLLECTIBLE],
    )


def load_map(path: str | PathLike[str]) -> GameMap:
    """Read and validate a map file."""
    return validate_map(read_map(path))