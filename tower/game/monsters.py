"""Monster behaviour: chase the player on sight and attack when adjacent."""

from __future__ import annotations

from typing import Any

from tower.astar import AStar
from tower.components import Position
from tower.level import FieldOfView

VISION_RADIUS = 8


def update_monsters(game: Any) -> None:
    """Give every monster that can see the player one step or one attack."""
    level = game.map.current_level
    world = game.world

    player_position = Position()
    for player in world.query_players():
        pos = world.get_position(player)
        player_position = Position(pos.x, pos.y)

    for monster in world.query_monsters():
        pos = world.get_position(monster)
        sight = FieldOfView()
        sight.compute(level, pos.x, pos.y, VISION_RADIUS)
        if not sight.is_visible(player_position.x, player_position.y):
            continue

        if pos.manhattan_distance(player_position) == 1:
            game.systems.combat.process_attack(pos, player_position)
            continue

        path = AStar().get_path(level, pos, player_position)
        if len(path) > 1:
            step = path[1]
            next_tile = level.tile_at(step.x, step.y)
            if not next_tile.blocked:
                level.tile_at(pos.x, pos.y).blocked = False
                pos.x, pos.y = step.x, step.y
                next_tile.blocked = True