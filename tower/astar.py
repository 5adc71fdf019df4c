"""A* path finding over the walkable tiles of a level."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from tower.components import Position
from tower.level import Level, TileType


@dataclass
class _Node:
    parent: Optional[_Node]
    position: Position
    g: int = 0
    h: int = 0
    f: int = 0

    @property
    def key(self) -> tuple[int, int]:
        return self.position.x, self.position.y


class AStar:
    """Finds paths moving in the four cardinal directions, around walls."""

    def get_path(self, level: Level, start: Position, end: Position) -> list[Position]:
        """Return the path from start to end, both included, or [] if none exists."""
        goal = (end.x, end.y)
        open_list = [_Node(None, Position(start.x, start.y))]
        closed: set[tuple[int, int]] = set()

        while open_list:
            current_index = 0
            for index, item in enumerate(open_list):
                if item.f < open_list[current_index].f:
                    current_index = index
            current = open_list.pop(current_index)
            closed.add(current.key)

            if current.key == goal:
                path = []
                node: Optional[_Node] = current
                while node is not None:
                    path.append(Position(node.position.x, node.position.y))
                    node = node.parent
                path.reverse()
                return path

            for edge in self._neighbours(level, current):
                if edge.key in closed:
                    continue
                edge.g = current.g + 1
                edge.h = edge.position.manhattan_distance(end)
                edge.f = edge.g + edge.h
                if any(n.key == edge.key for n in open_list) and any(
                    edge.g > n.g for n in open_list
                ):
                    continue
                open_list.append(edge)

        return []

    @staticmethod
    def _neighbours(level: Level, node: _Node) -> list[_Node]:
        x, y = node.position.x, node.position.y
        result = []
        for nx, ny in ((x, y - 1), (x, y + 1), (x - 1, y), (x + 1, y)):
            if not (0 <= nx < level.width and 0 <= ny < level.height):
                continue
            index = level.index_of(nx, ny)
            if index >= len(level.tiles):
                continue
            if level.tiles[index].tile_type != TileType.WALL:
                result.append(_Node(node, Position(nx, ny)))
        return result