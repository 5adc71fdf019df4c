"""Melee attacks resolved directly on entity components."""

from __future__ import annotations

from typing import Any, Optional

from tower.components import Position
from tower.dice import dice_roll, random_between
from tower.turnstate import TurnState
from tower.world import Entity, World

PLAYER_NAME = "Player"
TO_HIT_DIE = 10


def _find_combatants(
    world: World, attacker_position: Position, defender_position: Position
) -> tuple[Optional[Entity], Optional[Entity]]:
    attacker: Optional[Entity] = None
    defender: Optional[Entity] = None
    for entity in (*world.query_players(), *world.query_monsters()):
        pos = world.get_position(entity)
        if pos == attacker_position:
            attacker = entity
        elif pos == defender_position:
            defender = entity
    return attacker, defender


def attack_system(game: Any, attacker_position: Position, defender_position: Position) -> None:
    """Let the entity at one position attack the entity at another."""
    world = game.world
    attacker, defender = _find_combatants(world, attacker_position, defender_position)
    if attacker is None or defender is None:
        return

    defender_armor = world.get_armor(defender)
    defender_health = world.get_health(defender)
    defender_name = world.get_name(defender).label
    defender_message = world.get_user_message(defender)

    weapon = world.get_melee_weapon(attacker)
    attacker_name = world.get_name(attacker).label
    attacker_message = world.get_user_message(attacker)

    if world.get_health(attacker).current_health <= 0:
        return

    to_hit_roll = dice_roll(TO_HIT_DIE)
    if to_hit_roll + weapon.to_hit_bonus <= defender_armor.armor_class:
        attacker_message.attack_message = (
            f"{attacker_name} swings {weapon.name} at {defender_name} and misses.\n"
        )
        return

    damage_roll = random_between(weapon.minimum_damage, weapon.maximum_damage)
    damage_done = max(damage_roll - defender_armor.defense, 0)
    defender_health.current_health -= damage_done
    attacker_message.attack_message = (
        f"{attacker_name} swings {weapon.name} at {defender_name} "
        f"and hits for {damage_done} health.\n"
    )

    if defender_health.current_health > 0:
        return

    defender_message.dead_message = f"{defender_name} has died!\n"
    if defender_name == PLAYER_NAME:
        defender_message.game_state_message = "Game Over!\n"
        game_state = getattr(game.systems, "game_state", None)
        if game_state is not None:
            game_state.trigger_game_over("player_death")
        else:
            game.turn = TurnState.GAME_OVER
    else:
        level = game.map.current_level
        pos = world.get_position(defender)
        level.tile_at(pos.x, pos.y).blocked = False
        world.dispose_entity(defender)