"""Starter world written into every new adventure store."""

import structlog
from sqlalchemy.orm import Session

from .models import (
    DEFAULT_METADATA,
    GAME_STATE_ID,
    GameMetadata,
    GameState,
    InitialItemLocation,
    Item,
    ItemLocation,
    Room,
)
from .models.base import unix_now

logger = structlog.get_logger(__name__)

STARTER_METADATA = {
    **DEFAULT_METADATA,
    "title": "Cave Adventure",
    "author": "Pathfinder",
}


def create_starter_content(session: Session) -> None:
    """
    Populate an empty store with a two-room world.

    A dark cave (room 1) opens south onto a mountain path (room 2), where a
    stone and a stick lie. The game starts in the cave.

    Args:
        session: Session bound to a store whose schema was just created
    """
    cave = Room(
        id=1,
        name="Dark Cave",
        description=(
            "You are in a dark, damp cave. The walls glisten with moisture. "
            "A narrow passage leads south."
        ),
        graph_x=0,
        graph_y=0,
    )
    path = Room(
        id=2,
        name="Mountain Path",
        description=(
            "You stand on a narrow mountain path. The cave entrance is to the north. "
            "Steep cliffs drop away on either side."
        ),
        graph_x=0,
        graph_y=100,
    )
    session.add_all([cave, path])
    session.flush()

    # Link after both rows exist so the foreign keys resolve
    cave.south_room_id = path.id
    path.north_room_id = cave.id

    stone = Item(
        id=1,
        name="Stone",
        description="A smooth, palm-sized stone.",
        room_description="A smooth stone lies on the ground.",
        can_take=True,
        can_use=False,
    )
    stick = Item(
        id=2,
        name="Stick",
        description="A sturdy wooden stick, good for poking things.",
        room_description="A wooden stick rests against a rock.",
        can_take=True,
        can_use=False,
    )
    session.add_all([stone, stick])
    session.flush()

    for item in (stone, stick):
        session.add(ItemLocation(item_id=item.id, room_id=path.id))
        session.add(InitialItemLocation(item_id=item.id, room_id=path.id))

    session.add(GameState(id=GAME_STATE_ID, current_room_id=cave.id, start_time=unix_now()))
    session.add_all(GameMetadata(key=key, value=value) for key, value in STARTER_METADATA.items())
    session.flush()

    logger.info("starter_content_created", rooms=2, items=2)
