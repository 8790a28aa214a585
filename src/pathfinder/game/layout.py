"""Automatic map placement for the room graph."""

from collections import deque
from collections.abc import Mapping

import structlog
from sqlalchemy import select, update

from pathfinder.config import get_settings
from pathfinder.database import GameDatabase
from pathfinder.database import models
from pathfinder.database.models import Direction

logger = structlog.get_logger(__name__)

Adjacency = Mapping[int, Mapping[Direction, int | None]]


def compute_layout(adjacency: Adjacency, start_room_id: int = 1) -> dict[int, tuple[int, int]]:
    """
    Place rooms on an integer grid by breadth-first search from a start room.

    The start room sits at (0, 0). Neighbors are placed one step away in
    their direction (north is y - 1, south y + 1, east x + 1, west x - 1),
    visiting directions in north, south, east, west order. When the target
    cell is taken the x coordinate is bumped by 1, 2, ... until a free cell
    is found. The bump is along x for every direction, including north and
    south.

    Rooms not reachable from the start room are left out of the result.

    Args:
        adjacency: Neighbor ids per room and direction
        start_room_id: Room placed at the origin

    Returns:
        Grid position per reachable room id
    """
    if start_room_id not in adjacency:
        return {}

    positions: dict[int, tuple[int, int]] = {start_room_id: (0, 0)}
    occupied: set[tuple[int, int]] = {(0, 0)}
    visited: set[int] = {start_room_id}
    queue = deque([start_room_id])

    while queue:
        room_id = queue.popleft()
        x, y = positions[room_id]

        for direction in Direction:
            neighbor_id = adjacency[room_id].get(direction)
            if neighbor_id is None or neighbor_id in visited or neighbor_id not in adjacency:
                continue

            dx, dy = direction.offset
            target_x, target_y = x + dx, y + dy
            probe = 1
            while (target_x, target_y) in occupied:
                target_x = x + dx + probe
                probe += 1

            positions[neighbor_id] = (target_x, target_y)
            occupied.add((target_x, target_y))
            visited.add(neighbor_id)
            queue.append(neighbor_id)

    return positions


def load_adjacency(database: GameDatabase) -> dict[int, dict[Direction, int | None]]:
    """Read every room's neighbor ids from the store."""
    with database.session() as session:
        rooms = session.scalars(select(models.Room).order_by(models.Room.id))
        return {
            room.id: {direction: room.get_neighbor(direction) for direction in Direction}
            for room in rooms
        }


def auto_layout(
    database: GameDatabase,
    start_room_id: int = 1,
    scale: int | None = None,
) -> dict[int, tuple[int, int]]:
    """
    Recompute and store map coordinates for every room reachable from the start room.

    Grid positions are multiplied by scale before they are written. Rooms
    that cannot be reached keep their coordinates. An empty store, or one
    without the start room, is left unchanged.

    Args:
        database: Open store to lay out
        start_room_id: Room placed at the origin
        scale: Grid spacing, defaults to the configured layout scale

    Returns:
        The stored coordinates per placed room id
    """
    if scale is None:
        scale = get_settings().layout_scale

    adjacency = load_adjacency(database)
    grid = compute_layout(adjacency, start_room_id)
    if not grid:
        logger.info("layout_skipped", start_room_id=start_room_id, rooms=len(adjacency))
        return {}

    placed = {room_id: (x * scale, y * scale) for room_id, (x, y) in grid.items()}

    with database.session() as session:
        for room_id, (graph_x, graph_y) in placed.items():
            session.execute(
                update(models.Room)
                .where(models.Room.id == room_id)
                .values(graph_x=graph_x, graph_y=graph_y)
            )

    logger.info(
        "layout_applied",
        placed=len(placed),
        unreachable=len(adjacency) - len(placed),
        scale=scale,
    )
    return placed
