"""Combat: rolling to hit, dealing damage and handling deaths."""

from __future__ import annotations

from typing import Any, Optional, TypeVar

from tower.bus import EventBus
from tower.components import Position
from tower.dice import dice_roll, random_between
from tower.events import (
    AttackEvent,
    DamageEvent,
    DeathEvent,
    EventType,
    MessageEvent,
)
from tower.world import Entity, World

PLAYER_NAME = "Player"
TO_HIT_DIE = 10

E = TypeVar("E")


def _expect(event: Any, kind: type[E]) -> E:
    if not isinstance(event, kind):
        raise TypeError(f"expected {kind.__name__}, got {type(event).__name__}")
    return event


class CombatSystem:
    """Turns attacks into hit rolls, damage, messages and deaths."""

    def __init__(self, world: World, event_bus: EventBus) -> None:
        self.world = world
        self.event_bus = event_bus

    def register_handlers(self) -> None:
        """Subscribe to attack and damage events."""
        self.event_bus.subscribe(EventType.ATTACK, self.handle_attack)
        self.event_bus.subscribe(EventType.DAMAGE, self.handle_damage)

    def handle_attack(self, event: AttackEvent) -> None:
        """Report a hit or miss and, on a hit, publish the damage dealt."""
        attack = _expect(event, AttackEvent)
        world = self.world
        defender_armor = world.get_armor(attack.defender)
        weapon = world.get_melee_weapon(attack.attacker)
        attacker_name = world.get_name(attack.attacker).label
        defender_name = world.get_name(attack.defender).label

        if world.get_health(attack.attacker).current_health <= 0:
            return

        if attack.hit:
            damage_roll = random_between(weapon.minimum_damage, weapon.maximum_damage)
            damage_done = max(damage_roll - defender_armor.defense, 0)
            text = (
                f"{attacker_name} swings {weapon.name} at {defender_name} "
                f"and hits for {damage_done} health.\n"
            )
            self.event_bus.publish(MessageEvent(message=text, message_type="attack"))
            self.event_bus.publish(
                DamageEvent(
                    target=attack.defender,
                    damage_amount=damage_done,
                    damage_source=weapon.name,
                    is_fatal=False,
                )
            )
        else:
            text = f"{attacker_name} swings {weapon.name} at {defender_name} and misses.\n"
            self.event_bus.publish(MessageEvent(message=text, message_type="attack"))

    def handle_damage(self, event: DamageEvent) -> None:
        """Subtract damage from the target's health and handle its death."""
        damage = _expect(event, DamageEvent)
        world = self.world
        health = world.get_health(damage.target)
        health.current_health -= damage.damage_amount
        if health.current_health > 0:
            return

        position = world.get_position(damage.target)
        name = world.get_name(damage.target).label
        is_player = name == PLAYER_NAME

        self.event_bus.publish(MessageEvent(message=f"{name} has died!\n", message_type="death"))
        if is_player:
            self.event_bus.publish(MessageEvent(message="Game Over!\n", message_type="gamestate"))
        else:
            world.dispose_entity(damage.target)

        self.event_bus.publish(
            DeathEvent(entity=damage.target, position=position, is_player=is_player)
        )

    def _entity_at(self, position: Position, candidates: list[Entity]) -> Optional[Entity]:
        found = None
        for entity in candidates:
            pos = self.world.get_position(entity)
            if pos.x == position.x and pos.y == position.y:
                found = entity
        return found

    def process_attack(self, attacker_pos: Position, defender_pos: Position) -> None:
        """Roll to hit between the entities at two positions and publish the attack."""
        attacker: Optional[Entity] = None
        defender: Optional[Entity] = None
        for group in (self.world.query_players(), self.world.query_monsters()):
            attacker = self._entity_at(attacker_pos, group) or attacker
            defender = self._entity_at(defender_pos, group) or defender

        if attacker is None or defender is None:
            return

        to_hit_roll = dice_roll(TO_HIT_DIE)
        weapon = self.world.get_melee_weapon(attacker)
        armor = self.world.get_armor(defender)
        hit = to_hit_roll + weapon.to_hit_bonus > armor.armor_class

        self.event_bus.publish(
            AttackEvent(
                attacker=attacker,
                defender=defender,
                attacker_pos=attacker_pos,
                defender_pos=defender_pos,
                to_hit_roll=to_hit_roll,
                hit=hit,
            )
        )