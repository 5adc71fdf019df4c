"""Sizes of the screen, tiles and interface."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class GameData:
    """Dimensions of game elements, in tiles and pixels."""

    screen_width: int = 80
    screen_height: int = 60
    tile_width: int = 16
    tile_height: int = 16
    ui_height: int = 10