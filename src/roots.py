"""Choosing the root person(s) of a family network."""

import logging

import networkx as nx

from graph import levels_from, parents_of
from models import Person

logger = logging.getLogger(__name__)


def _birth_key(G: nx.MultiDiGraph, person_id: str) -> tuple[int, str, str]:
    # Known birth dates sort first; ISO dates compare correctly as strings
    birth_date = G.nodes[person_id].get("birth_date")
    return (0 if birth_date else 1, birth_date or "", person_id)


def canonical_root(G: nx.MultiDiGraph, start_id: str) -> Person | None:
    """
    The highest-generation person in start_id's family network.

    Picks the lowest level from `levels_from`, breaking ties by earliest birth
    date (unknown dates last) and then by id. Returns None only for an unknown
    start id; an isolated person is their own root.
    """
    if start_id not in G:
        return None

    levels = levels_from(G, start_id)
    if not levels:
        return G.nodes[start_id]["person"]

    top = min(levels.values())
    candidates = [pid for pid, level in levels.items() if level == top]
    root_id = min(candidates, key=lambda pid: _birth_key(G, pid))
    logger.debug(f"Root of {start_id} is {root_id} (level {top}, {len(candidates)} candidates)")
    return G.nodes[root_id]["person"]


def top_level_ancestors(G: nx.MultiDiGraph, network_ids) -> list[Person]:
    """Everyone in the network with no recorded parent, ordered by birth date."""
    tops = [pid for pid in network_ids if pid in G and not parents_of(G, pid)]
    tops.sort(key=lambda pid: _birth_key(G, pid))
    return [G.nodes[pid]["person"] for pid in tops]
