"""Connection index: entities linked by attending the same event.

Rebuilt from scratch on every call; never patched incrementally.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from spirit_mosaic.data.entities import Connection, Entity

logger = logging.getLogger(__name__)


def rebuild_connections(entities: Sequence[Entity]) -> int:
    """Recompute every entity's `connections` list. Returns the number of linked pairs.

    Two entities are connected when they share an event with identical
    (category, month, name). Each peer appears once per entity, carrying
    all the event keys the pair has in common.
    """
    by_key: dict[tuple[str, int, str], list[str]] = {}
    for entity in entities:
        for event in entity.events:
            ids = by_key.setdefault(event.key, [])
            if entity.id not in ids:
                ids.append(entity.id)

    shared: dict[tuple[str, str], list[tuple[str, int, str]]] = {}
    for key, ids in by_key.items():
        if len(ids) < 2:
            continue
        for i in range(len(ids)):
            for j in range(i + 1, len(ids)):
                pair = (ids[i], ids[j]) if ids[i] < ids[j] else (ids[j], ids[i])
                shared.setdefault(pair, []).append(key)

    peers: dict[str, list[Connection]] = {entity.id: [] for entity in entities}
    for (a, b), keys in shared.items():
        event_keys = tuple(keys)
        peers[a].append(Connection(entity_id=b, event_keys=event_keys))
        peers[b].append(Connection(entity_id=a, event_keys=event_keys))

    for entity in entities:
        entity.connections = peers[entity.id]

    logger.debug("Rebuilt connections: %d linked pairs", len(shared))
    return len(shared)


def connection_pairs(
    entities: Sequence[Entity],
) -> list[tuple[str, str, Connection]]:
    """Each undirected connection once, restricted to the given entities."""
    visible = {entity.id for entity in entities}
    seen: set[tuple[str, str]] = set()
    pairs: list[tuple[str, str, Connection]] = []
    for entity in entities:
        for conn in entity.connections:
            if conn.entity_id not in visible:
                continue
            key = tuple(sorted((entity.id, conn.entity_id)))
            if key in seen:
                continue
            seen.add(key)
            pairs.append((entity.id, conn.entity_id, conn))
    return pairs
