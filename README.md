# tower

A small turn-based dungeon crawler played in the terminal. Each level is
carved out of solid rock as a chain of rectangular rooms joined by tunnels.
The player starts in the first room, and every other room holds an orc or a
skeleton. Monsters that can see the player chase it along a shortest path and
strike when they stand next to it. Fights are decided by a d10 roll plus the
weapon's to-hit bonus against the defender's armour class, and damage is
reduced by the defender's armour defence, never below zero.

## Installing

```
pip install .
```

The package has no runtime dependencies beyond the standard library.

## Playing

```
tower
```

The screen is printed as text after every command, and one command is read
per line:

| Command               | Effect                                   |
|-----------------------|------------------------------------------|
| `w` or `up`           | step up                                  |
| `s` or `down`         | step down                                |
| `a` or `left`         | step left                                |
| `d` or `right`        | step right                               |
| `q` or `wait`         | wait a turn                              |
| `.` before a direction (e.g. `.d`) | keep walking that way       |
| `quit` or `exit`      | leave the game                           |

Stepping into a monster attacks it. A run (`.` plus a direction) takes a
step about every 0.12 seconds and stops at a wall, when a monster comes into
view, or at a junction or room (more than two free floor tiles around the
player); running into a monster attacks it and ends the run. End of input
also leaves the game.

On the map, `@` is the player, `o` an orc and `s` a skeleton. Visible walls
and floor are drawn as `#` and `.`; tiles seen earlier but out of sight now
are drawn as `%` and `,`; unexplored tiles are blank. Under the map come the
message log, latest message first, and the player's health, armour class,
defence, damage range and to-hit bonus. When the player dies the game prints
`Game Over!` and ends.

## What it does not do

There is no graphical window: entities carry only the names of image files
(`assets/player.png` and the like) as handles, and nothing is loaded or drawn
from them. Input is line by line, not key by key. There is one generated
level per game, and nothing is saved between games.

## Using the pieces

The game is built from small modules that can be used on their own.

Dice and geometry:

```python
from tower.dice import dice_roll, random_between, random_int
from tower.rect import Rect

dice_roll(10)            # 1..10
random_int(10)           # 0..9; raises ValueError for num <= 0
random_between(3, 7)     # 3..7 inclusive

room = Rect.from_size(0, 0, 10, 10)
room.center()                                  # (5, 5)
room.intersects(Rect.from_size(5, 0, 5, 5))    # True: touching edges count
```

Components are plain dataclasses in `tower.components` (`Position`,
`Health`, `MeleeWeapon`, `Armor`, `Name`, `UserMessage` and others):

```python
from tower.components import Position

Position(0, 0).manhattan_distance(Position(3, 4))   # 7
```

Levels and pathfinding:

```python
from tower.astar import AStar
from tower.level import new_level

level = new_level()                  # 80 x 50 tiles, rooms in level.rooms
start = level.rooms[0].center()
level.player_visible.compute(level, *start, 8)
level.player_visible.is_visible(*start)   # True
```

`AStar().get_path(level, start, end)` takes two `Position`s and returns the
list of positions from start to end, both included, moving in the four
cardinal directions around walls, or an empty list when there is no path.

The world: `tower.world.new_game_world(level)` places the player and the
monsters and returns a `World`, whose `query_players()`,
`query_monsters()`, `query_renderables()` and `query_messengers()` return
entities and whose `get_*` methods return their components. It raises
`ValueError` for a level without rooms.

Events: `tower.bus.EventBus` delivers a published event to every handler
subscribed to its `EventType`, in the order they subscribed. The event
classes live in `tower.events`. The systems in `tower.systems` react to
each other through the bus: `CombatSystem` turns attacks into hit rolls,
damage and deaths; `GameStateSystem` tracks the turn state and counter and
ends the game when the player dies; `UISystem` keeps the last ten messages;
`MapBridge` frees a dead monster's tile. `MapSystem` keeps tile blocking in
step with move and death events for any object with `block_tile`,
`unblock_tile` and `is_blocked`; `SystemRegistry` creates every other system
but leaves `map` unset.

Turn flow: `tower.turnstate.next_state` gives the state that follows a
`TurnState`, and `tower.game.engine.Game.update(player_input)` advances the
game by one tick, where `player_input` is a `tower.game.player.PlayerInput`
such as `PlayerInput.of(Key.RIGHT)`. `tower.game.display.render_level`,
`render_log` and `render_hud` return the screen as lists of text lines.

## Running the tests

```
pip install .[test]
pytest
```