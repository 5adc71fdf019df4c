"""Text rendering of the map, HUD and message log, and the terminal front end."""

from __future__ import annotations

import argparse
import sys
import time
from typing import Any, Optional, Sequence

from tower.components import Position
from tower.game.player import Key, PlayerInput
from tower.level import TileType
from tower.turnstate import TurnState
from tower.world import ORC_IMAGE, PLAYER_IMAGE, SKELETON_IMAGE

PLAYER_GLYPH = "@"
ORC_GLYPH = "o"
SKELETON_GLYPH = "s"
UNKNOWN_GLYPH = "?"
WALL_GLYPH = "#"
FLOOR_GLYPH = "."
REMEMBERED_WALL_GLYPH = "%"
REMEMBERED_FLOOR_GLYPH = ","
UNSEEN_GLYPH = " "

_IMAGE_GLYPHS = {
    PLAYER_IMAGE: PLAYER_GLYPH,
    ORC_IMAGE: ORC_GLYPH,
    SKELETON_IMAGE: SKELETON_GLYPH,
}

_COMMANDS = {
    "w": Key.UP,
    "up": Key.UP,
    "s": Key.DOWN,
    "down": Key.DOWN,
    "a": Key.LEFT,
    "left": Key.LEFT,
    "d": Key.RIGHT,
    "right": Key.RIGHT,
    "q": Key.Q,
    "wait": Key.Q,
}

_HELP = (
    "Unknown command. Use w/a/s/d (or up/down/left/right) to move, "
    "prefix with '.' to run, q to wait, quit to leave."
)


def render_level(game: Any) -> list[str]:
    """Draw the current level and visible entities as rows of text."""
    level = game.map.current_level
    view = level.player_visible

    def cell(x: int, y: int) -> str:
        tile = level.tiles[level.index_of(x, y)]
        wall = tile.tile_type == TileType.WALL
        if view.is_visible(x, y):
            tile.is_revealed = True
            return WALL_GLYPH if wall else FLOOR_GLYPH
        if tile.is_revealed:
            return REMEMBERED_WALL_GLYPH if wall else REMEMBERED_FLOOR_GLYPH
        return UNSEEN_GLYPH

    grid = [[cell(x, y) for x in range(level.width)] for y in range(level.height)]

    world = game.world
    for entity in world.query_renderables():
        pos: Position = world.get_position(entity)
        if not view.is_visible(pos.x, pos.y):
            continue
        if 0 <= pos.y < len(grid) and 0 <= pos.x < len(grid[pos.y]):
            image = world.get_renderable(entity).image
            grid[pos.y][pos.x] = _IMAGE_GLYPHS.get(image, UNKNOWN_GLYPH)

    return ["".join(row) for row in grid]


def render_hud(game: Any) -> list[str]:
    """Return the player's statistics, one line each."""
    world = game.world
    lines = []
    for player in world.query_players():
        health = world.get_health(player)
        armor = world.get_armor(player)
        weapon = world.get_melee_weapon(player)
        lines += [
            f"Health: {health.current_health} / {health.max_health}",
            f"Armor Class: {armor.armor_class}",
            f"Defense: {armor.defense}",
            f"Damage: {weapon.minimum_damage} - {weapon.maximum_damage}",
            f"To Hit Bonus: {weapon.to_hit_bonus}",
        ]
    return lines


def render_log(game: Any) -> list[str]:
    """Return the message log, latest first; the last shown log stays until replaced."""
    ui = game.systems.ui
    if ui is not None:
        current = ui.message_texts()
        if current:
            game.last_log = current
    return [message.rstrip("\n") for message in game.last_log if message]


def _render_screen(game: Any) -> str:
    return "\n".join([*render_level(game), "", *render_log(game), "", *render_hud(game)])


def _parse_command(command: str) -> Optional[PlayerInput]:
    run = command.startswith(".")
    key = _COMMANDS.get(command[1:] if run else command)
    if key is None or (run and key is Key.Q):
        return None
    return PlayerInput.of(key, held={Key.PERIOD} if run else ())


def _advance(game: Any, player_input: PlayerInput) -> None:
    game.update(player_input)
    while game.turn != TurnState.GAME_OVER:
        if game.turn == TurnState.PROCESSING_MONSTER_TURN:
            game.update()
            continue
        auto = game.auto_move_state
        if auto is None or not auto.active:
            return
        time.sleep(auto.move_cooldown)
        game.update(PlayerInput())


def _player_dead(game: Any) -> bool:
    world = game.world
    return any(world.get_health(p).current_health <= 0 for p in world.query_players())


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Play the game in the terminal, reading one command per line."""
    from tower.game.engine import Game

    parser = argparse.ArgumentParser(prog="tower", description="Explore the tower and fight.")
    parser.parse_args(argv)

    game = Game()
    game.update(PlayerInput())
    while True:
        print(_render_screen(game))
        if game.turn == TurnState.GAME_OVER or _player_dead(game):
            print("Game Over!")
            return 0
        try:
            line = input("> ")
        except EOFError:
            return 0
        command = line.strip().lower()
        if command in ("quit", "exit"):
            return 0
        player_input = _parse_command(command)
        if player_input is None:
            print(_HELP)
            continue
        _advance(game, player_input)


if __name__ == "__main__":
    sys.exit(main())